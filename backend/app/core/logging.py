"""Structured JSON logging for the service."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

LOGGER_NAME = "bugvault"

_EXTRA_FIELDS = ("request_id", "slug", "content_hash", "count", "score", "duration_ms")


class JSONFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in _EXTRA_FIELDS:
            if hasattr(record, name):
                log_entry[name] = getattr(record, name)
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry)


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach the JSON handler to the service logger (once)."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    if not any(getattr(h, "_bugvault", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(JSONFormatter())
        handler._bugvault = True
        logger.addHandler(handler)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Child logger under the service namespace, e.g. ``bugvault.matching``."""
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
