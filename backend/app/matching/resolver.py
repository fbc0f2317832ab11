"""Report resolution: report -> explanation document, query -> report.

Both lookups are linear scans (candidates x index keys, reports x fields).
Catalogs are small; no secondary index is kept.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from app.core.logging import get_logger
from app.matching.candidates import candidates_for, derive_slug
from app.matching.distance import similarity
from app.matching.doc_index import DocumentIndex
from app.matching.normalizer import normalize
from app.models.report_model import ReportMatch, ReportRecord

logger = get_logger("matching.resolver")

PATH_MATCH_THRESHOLD = 0.6
QUERY_MATCH_THRESHOLD = 0.45

QUERY_FIELDS = ("title", "github_repo", "url")


class ReportResolver:
    """Maps reports to explanation documents and free-text queries to reports."""

    def __init__(
        self,
        index: DocumentIndex,
        path_threshold: float = PATH_MATCH_THRESHOLD,
        query_threshold: float = QUERY_MATCH_THRESHOLD,
    ):
        self.index = index
        self.path_threshold = path_threshold
        self.query_threshold = query_threshold

    # ── Report -> explanation document ───────────────────────────────────────

    def resolve_explanation_path(
        self, report: ReportRecord, slug: Optional[str] = None, position: int = 1
    ) -> Optional[str]:
        entries = self.index.get_or_init()
        if not entries:
            return None

        if slug is None:
            slug = derive_slug(report, position)
        keys = [normalize(c) for c in candidates_for(report, slug)]
        keys = [k for k in keys if k]

        # First exact hit in candidate order, not necessarily the best one
        for key in keys:
            if key in entries:
                return entries[key]

        best_path, best_score = None, -1.0
        for key in keys:
            for doc_key, path in entries.items():
                score = similarity(key, doc_key)
                if score > best_score:
                    best_path, best_score = path, score

        if best_path is not None and best_score >= self.path_threshold:
            logger.debug(f"Fuzzy explanation match for {slug}: {best_path} ({best_score:.3f})")
            return best_path
        return None

    # ── Free-text query -> report ────────────────────────────────────────────

    def find_best_report_match(
        self, query: str, reports: Iterable[ReportRecord]
    ) -> Optional[ReportMatch]:
        needle = normalize(query)
        if not needle:
            return None

        best: Optional[Tuple[ReportRecord, float]] = None
        for report in reports:
            for candidate in _comparison_keys(report):
                score = score_query(needle, candidate)
                if best is None or score > best[1]:
                    best = (report, score)

        if best is None or best[1] < self.query_threshold:
            return None
        return ReportMatch(report=best[0], score=best[1])


def _comparison_keys(report: ReportRecord) -> List[str]:
    keys = [normalize(getattr(report, name)) for name in QUERY_FIELDS]
    return [k for k in keys if k]


def score_query(needle: str, candidate: str) -> float:
    """Substring hits score by coverage (len(needle) / len(candidate)).

    The ratio exceeds 1.0 when the candidate is the shorter side. Everything
    else falls back to edit-distance similarity.
    """
    if needle in candidate or candidate in needle:
        return len(needle) / len(candidate)
    return similarity(needle, candidate)
