"""Text canonicalization for report identifiers.

Two forms are produced from the same input:

- ``normalize`` -> comparison key: lowercase, accents folded, only ``[a-z0-9]``.
- ``slugify``   -> display identifier: lowercase, accents folded, hyphenated.
"""

from __future__ import annotations

import re
import unicodedata
from typing import Optional

_NON_KEY_RE = re.compile(r"[^a-z0-9]+")


def _fold(text: str) -> str:
    # NFD splits accents into combining marks; the ascii pass drops them
    decomposed = unicodedata.normalize("NFD", text.lower())
    return decomposed.encode("ascii", "ignore").decode("ascii")


def normalize(text: Optional[str]) -> str:
    if not text:
        return ""
    return _NON_KEY_RE.sub("", _fold(str(text)))


def slugify(text: Optional[str]) -> str:
    if not text:
        return ""
    return _NON_KEY_RE.sub("-", _fold(str(text))).strip("-")
