"""Markdown explanation index: normalized file stem -> file path."""

from __future__ import annotations

import os
import threading
from typing import Dict

from app.core.logging import get_logger
from app.matching.normalizer import normalize

logger = get_logger("matching.doc_index")

MARKDOWN_EXT = ".md"


def build_index(directory: str) -> Dict[str, str]:
    """Scan ``directory`` (non-recursive) for markdown documents.

    A missing directory yields an empty mapping. Any other listing failure is
    logged and also yields an empty mapping. When two files normalize to the
    same key the one scanned last wins.
    """
    index: Dict[str, str] = {}
    try:
        names = sorted(os.listdir(directory))
    except FileNotFoundError:
        logger.info(f"Explanation directory not found: {directory}")
        return index
    except OSError as e:
        logger.error(f"Failed to list explanation directory {directory}: {e}")
        return index

    for name in names:
        if not name.lower().endswith(MARKDOWN_EXT):
            continue
        key = normalize(name[: -len(MARKDOWN_EXT)])
        if not key:
            continue
        index[key] = os.path.join(directory, name)
    return index


class DocumentIndex:
    """Process-wide holder for the explanation index.

    The directory is scanned on the first ``get_or_init`` call and never again;
    documents added afterwards are not picked up until restart.
    """

    def __init__(self, directory: str):
        self.directory = directory
        self._entries: Dict[str, str] = {}
        self._built = False
        self._lock = threading.Lock()

    @property
    def built(self) -> bool:
        return self._built

    def get_or_init(self) -> Dict[str, str]:
        if self._built:
            return self._entries
        with self._lock:
            if not self._built:
                self._entries = build_index(self.directory)
                self._built = True
                logger.info(
                    f"Indexed {len(self._entries)} explanation documents",
                    extra={"count": len(self._entries)},
                )
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)
