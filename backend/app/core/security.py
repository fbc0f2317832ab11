"""Upload filename and identifier guards."""

from __future__ import annotations

import re

_HASH_RE = re.compile(r"^(0x)?[0-9a-fA-F]{16,128}$")


def is_safe_filename(name: str) -> bool:
    # Reject anything that could escape the upload scope
    if not name or name.startswith("."):
        return False
    return not any(x in name for x in ("..", "\\", "/", "\x00"))


def is_content_hash(value: str) -> bool:
    """Blob store hashes are hex strings, optionally 0x-prefixed."""
    return bool(_HASH_RE.match(value or ""))
