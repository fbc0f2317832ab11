"""Process-wide catalog of enriched report records.

Populated once from a JSON array on disk. Each record gets a guaranteed slug
and its explanation document path; records are not touched again afterwards.
"""

from __future__ import annotations

import json
import threading
from typing import Any, List, Optional

from pydantic import ValidationError

from app.core.logging import get_logger
from app.matching.candidates import derive_slug
from app.matching.normalizer import normalize
from app.matching.resolver import ReportResolver
from app.models.report_model import ReportMatch, ReportRecord

logger = get_logger("services.report_cache")

# Owned by the resolver; upstream values are discarded before validation
DERIVED_FIELDS = ("explanationPath", "explanation_path", "hasExplanation", "has_explanation")


def read_records_source(path: str) -> List[Any]:
    """Raw report objects from ``path``; missing, unreadable or non-array -> []."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        logger.info(f"Report source not found: {path}")
        return []
    except (OSError, ValueError) as e:
        logger.error(f"Failed to read report source {path}: {e}")
        return []

    if not isinstance(data, list):
        logger.warning(f"Report source {path} is not a JSON array; ignoring it")
        return []
    return data


class ReportCache:
    def __init__(self, source_path: str, resolver: ReportResolver):
        self.source_path = source_path
        self.resolver = resolver
        self._reports: List[ReportRecord] = []
        self._lock = threading.Lock()

    def ensure_loaded(self) -> List[ReportRecord]:
        """Populate on first use. An empty result is retried on the next call."""
        if self._reports:
            return self._reports
        with self._lock:
            if not self._reports:
                self._reports = self._load()
        return self._reports

    def _load(self) -> List[ReportRecord]:
        enriched: List[ReportRecord] = []
        for position, raw in enumerate(read_records_source(self.source_path), start=1):
            if not isinstance(raw, dict):
                logger.warning(f"Skipping report #{position}: expected an object")
                continue
            try:
                fields = {k: v for k, v in raw.items() if k not in DERIVED_FIELDS}
                report = ReportRecord.model_validate(fields)
            except ValidationError as e:
                logger.warning(f"Skipping report #{position}: {e.error_count()} invalid fields")
                continue

            slug = derive_slug(report, position)
            path = self.resolver.resolve_explanation_path(report, slug=slug)
            enriched.append(
                report.model_copy(
                    update={"slug": slug, "explanation_path": path, "has_explanation": path is not None}
                )
            )

        if enriched:
            with_docs = sum(1 for r in enriched if r.has_explanation)
            logger.info(
                f"Loaded {len(enriched)} reports ({with_docs} with explanations)",
                extra={"count": len(enriched)},
            )
        return enriched

    def __len__(self) -> int:
        return len(self._reports)

    # ── Lookups ──────────────────────────────────────────────────────────────

    def find_best_match(self, query: str) -> Optional[ReportMatch]:
        return self.resolver.find_best_report_match(query, self.ensure_loaded())

    def find_by_slug(self, identifier: str) -> Optional[ReportRecord]:
        """Exact slug first, then slug equality after normalization."""
        reports = self.ensure_loaded()
        for report in reports:
            if report.slug == identifier:
                return report
        key = normalize(identifier)
        if not key:
            return None
        for report in reports:
            if normalize(report.slug) == key:
                return report
        return None
