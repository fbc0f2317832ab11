"""Bug dataset persistence — JSON file on disk with an in-memory fast path."""

from __future__ import annotations

import json
import os
import threading
from typing import Any, List

from app.core.logging import get_logger

logger = get_logger("services.bug_store")


class BugStore:
    def __init__(self, path: str):
        self.path = path
        self._bugs: List[Any] = []
        self._lock = threading.Lock()

    def replace(self, bugs: List[Any]) -> int:
        """Write a new dataset to disk, then swap it in memory."""
        bugs = list(bugs)
        with self._lock:
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            tmp_path = f"{self.path}.tmp"
            try:
                with open(tmp_path, "w", encoding="utf-8") as f:
                    json.dump(bugs, f, indent=2)
                os.replace(tmp_path, self.path)
            except (OSError, TypeError, ValueError):
                if os.path.exists(tmp_path):
                    os.remove(tmp_path)
                raise
            self._bugs = bugs
        logger.info(f"Stored {len(bugs)} bugs", extra={"count": len(bugs)})
        return len(bugs)

    def all(self) -> List[Any]:
        """Current dataset; reloads from disk while the memory copy is empty."""
        if self._bugs:
            return self._bugs
        with self._lock:
            if not self._bugs:
                self._bugs = self._read()
        return self._bugs

    def _read(self) -> List[Any]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return []
        except (OSError, ValueError) as e:
            logger.error(f"Failed to read bug dataset {self.path}: {e}")
            return []
        if not isinstance(data, list):
            logger.warning(f"Bug dataset {self.path} is not a JSON array; ignoring it")
            return []
        return data
