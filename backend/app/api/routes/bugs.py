"""Bug dataset routes: upload, list, fetch from the blob store."""

from __future__ import annotations

import json
from typing import Optional

from fastapi import APIRouter, File, HTTPException, UploadFile
from fastapi.responses import JSONResponse

from app.api import dependencies as deps
from app.core.logging import get_logger
from app.core.security import is_safe_filename
from app.models.dataset_model import UploadSummary

router = APIRouter()
logger = get_logger("api.bugs")


@router.post("/upload", response_model=UploadSummary, response_model_exclude_none=True)
async def upload_bugs(file: Optional[UploadFile] = File(None)):
    """
    Upload a JSON array of bug reports.

    - Replaces the current dataset and writes it to the data directory
    - Pushes the raw file to the blob store when one is configured
    - Blob store failures are reported in ``blob_error``; the local upload still succeeds
    """
    if file is None or not file.filename:
        raise HTTPException(status_code=400, detail="No file uploaded")
    if not is_safe_filename(file.filename):
        raise HTTPException(status_code=400, detail="Invalid filename.")

    content = await file.read()
    if len(content) > deps.settings.max_upload_bytes:
        raise HTTPException(
            status_code=400,
            detail=f"File too large. Maximum size is {deps.settings.max_upload_mb}MB.",
        )

    try:
        bugs = json.loads(content)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid JSON: {e}")
    if not isinstance(bugs, list):
        raise HTTPException(status_code=400, detail="JSON must be an array")

    try:
        count = deps.bug_store.replace(bugs)
    except OSError as e:
        logger.exception("Failed to persist uploaded bugs")
        raise HTTPException(status_code=500, detail=f"Upload error: {e}")

    summary = UploadSummary(count=count)
    if deps.blob_store is not None:
        try:
            summary.content_hash = deps.blob_store.upload(content, file.filename)
            logger.info(f"Pushed {file.filename} to blob store", extra={"content_hash": summary.content_hash})
        except deps.BlobStoreError as e:
            logger.error(f"Blob store upload failed for {file.filename}: {e}")
            summary.blob_error = str(e)
    return summary


@router.get("/bugs")
async def list_bugs():
    return JSONResponse(content=deps.bug_store.all())


@router.get("/datasets/{content_hash}")
async def download_dataset(content_hash: str):
    """Fetch a previously uploaded dataset from the blob store by content hash."""
    if deps.blob_store is None:
        raise HTTPException(status_code=503, detail="Blob store is not configured.")
    try:
        data = deps.blob_store.download(content_hash)
    except deps.BlobStoreError as e:
        logger.error(f"Blob store download failed: {e}", extra={"content_hash": content_hash})
        raise HTTPException(status_code=502, detail=str(e))

    try:
        return JSONResponse(content=json.loads(data))
    except ValueError:
        raise HTTPException(status_code=422, detail="Stored dataset is not valid JSON.")
