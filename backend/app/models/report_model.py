"""Report catalog models."""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ReportRecord(BaseModel):
    """One audited project's findings summary.

    Known identifying fields are typed; anything else the records source carries
    is kept in ``model_extra`` and written back out on serialization.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    slug: Optional[str] = None
    title: Optional[str] = None
    github_repo: Optional[str] = None
    url: Optional[str] = None

    explanation_path: Optional[str] = Field(default=None, alias="explanationPath")
    has_explanation: bool = Field(default=False, alias="hasExplanation")

    @field_validator("slug", "title", "github_repo", "url", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        return value if isinstance(value, str) else str(value)

    def to_public(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class ReportMatch(BaseModel):
    report: ReportRecord
    score: float

    def to_public(self) -> Dict[str, Any]:
        return {"report": self.report.to_public(), "score": round(self.score, 4)}


class ExplanationResponse(BaseModel):
    slug: str
    title: Optional[str] = None
    path: str
    score: Optional[float] = None
    markdown: str
