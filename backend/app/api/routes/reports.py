"""Report catalog routes: listing, free-text match, explanation documents."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from app.api import dependencies as deps
from app.core.logging import get_logger
from app.models.report_model import ExplanationResponse

router = APIRouter()
logger = get_logger("api.reports")


@router.get("/reports")
async def list_reports():
    reports = deps.report_cache.ensure_loaded()
    return {"total": len(reports), "reports": [r.to_public() for r in reports]}


@router.get("/reports/match")
async def match_report(q: str = Query(..., min_length=1)):
    match = deps.report_cache.find_best_match(q)
    if match is None:
        raise HTTPException(status_code=404, detail="No matching report")
    return match.to_public()


@router.get("/reports/{identifier}/explanation", response_model=ExplanationResponse)
def get_explanation(identifier: str):
    """Resolve a report by slug (exact, then normalized), then by free-text match."""
    score: Optional[float] = None
    report = deps.report_cache.find_by_slug(identifier)
    if report is None:
        match = deps.report_cache.find_best_match(identifier)
        if match is None:
            raise HTTPException(status_code=404, detail="No matching report")
        report, score = match.report, round(match.score, 4)

    if not report.explanation_path:
        raise HTTPException(status_code=404, detail=f"No explanation found for {report.slug}")

    try:
        with open(report.explanation_path, "r", encoding="utf-8") as f:
            markdown = f.read()
    except OSError as e:
        logger.error(f"Failed to read explanation {report.explanation_path}: {e}", extra={"slug": report.slug})
        raise HTTPException(status_code=500, detail="Explanation could not be read.")

    return ExplanationResponse(
        slug=report.slug,
        title=report.title,
        path=report.explanation_path,
        score=score,
        markdown=markdown,
    )
