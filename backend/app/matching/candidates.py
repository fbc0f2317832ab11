"""Candidate identifying strings for a report record."""

from __future__ import annotations

import os
import re
from typing import List, Optional
from urllib.parse import unquote, urlparse

from app.matching.normalizer import slugify
from app.models.report_model import ReportRecord

_PATH_SEP_RE = re.compile(r"[\\/]")


def derive_slug(report: ReportRecord, position: int) -> str:
    """Slug from the record, else title -> github_repo -> url, else ``report-<n>``.

    ``position`` is 1-based. Fallback slugs are not deduplicated.
    """
    if report.slug and report.slug.strip():
        return report.slug.strip()
    for source in (report.title, report.github_repo, report.url):
        slug = slugify(source)
        if slug:
            return slug
    return f"report-{position}"


def _last_segment(path: str) -> str:
    parts = [p for p in _PATH_SEP_RE.split(path) if p]
    return parts[-1] if parts else ""


def _url_variants(url: str) -> List[str]:
    try:
        parsed = urlparse(url.strip())
    except ValueError:
        return []
    if not parsed.scheme or not parsed.netloc:
        return []

    segment = unquote(_last_segment(parsed.path))
    if not segment:
        return []
    variants = [segment]
    stem, ext = os.path.splitext(segment)
    if ext and stem:
        variants.append(stem)
    return variants


def candidates_for(report: ReportRecord, slug: Optional[str] = None) -> List[str]:
    """Raw (un-normalized) strings that may name ``report``, in discovery order."""
    found: List[str] = []

    def add(value: Optional[str]) -> None:
        if value and value not in found:
            found.append(value)

    add(slug)
    add(report.title)

    if report.github_repo:
        add(report.github_repo)
        if _PATH_SEP_RE.search(report.github_repo):
            add(_last_segment(report.github_repo))

    if report.url:
        add(report.url)
        for variant in _url_variants(report.url):
            add(variant)

    return found
