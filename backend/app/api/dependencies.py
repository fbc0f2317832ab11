"""
Shared API dependencies/state.

This module centralizes the process-wide stores and catalog singletons so
route modules can stay thin and consistent.
"""

from __future__ import annotations

from app.core.config import settings
from app.matching.doc_index import DocumentIndex
from app.matching.resolver import ReportResolver
from app.services.blob_store import BlobStoreError, create_blob_store
from app.services.bug_store import BugStore
from app.services.report_cache import ReportCache

__all__ = [
    "BlobStoreError",
    "blob_store",
    "bug_store",
    "document_index",
    "report_cache",
    "resolver",
    "settings",
]


# ── Singletons ────────────────────────────────────────────────────────────────
document_index = DocumentIndex(settings.explanations_dir)
resolver = ReportResolver(
    document_index,
    path_threshold=settings.path_threshold,
    query_threshold=settings.query_threshold,
)
report_cache = ReportCache(settings.reports_path, resolver)
bug_store = BugStore(settings.bugs_path)
blob_store = create_blob_store(settings)
