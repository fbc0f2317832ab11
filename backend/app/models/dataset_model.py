"""Bug dataset response models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class UploadSummary(BaseModel):
    success: bool = True
    message: str = "File uploaded successfully"
    count: int
    content_hash: Optional[str] = None
    blob_error: Optional[str] = None
