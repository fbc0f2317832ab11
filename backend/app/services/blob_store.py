"""Content-addressed blob storage for uploaded bug datasets.

Uploads are pushed once; failures surface as ``BlobStoreError`` and are never
retried here.
"""

from __future__ import annotations

import hashlib
import os
from typing import Optional

import requests

from app.core.config import Settings
from app.core.logging import get_logger
from app.core.security import is_content_hash

logger = get_logger("services.blob_store")


class BlobStoreError(Exception):
    """Upload or download against the blob store failed."""


class BlobStore:
    name = "abstract"

    def upload(self, data: bytes, filename: str) -> str:
        raise NotImplementedError

    def download(self, content_hash: str) -> bytes:
        raise NotImplementedError


class HttpBlobStore(BlobStore):
    """Client for a storage gateway exposing ``/upload`` and ``/download/{hash}``."""

    name = "http"

    def __init__(self, base_url: str, timeout: float = 30.0, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def upload(self, data: bytes, filename: str) -> str:
        try:
            resp = self.session.post(
                f"{self.base_url}/upload",
                files={"file": (filename, data, "application/json")},
                timeout=self.timeout,
            )
            resp.raise_for_status()
            body = resp.json()
        except (requests.RequestException, ValueError) as e:
            raise BlobStoreError(f"Upload failed: {e}") from e

        content_hash = body.get("root_hash") if isinstance(body, dict) else None
        if not content_hash:
            raise BlobStoreError("Upload response did not include a root_hash")
        return content_hash

    def download(self, content_hash: str) -> bytes:
        if not is_content_hash(content_hash):
            raise BlobStoreError(f"Invalid content hash: {content_hash}")
        try:
            resp = self.session.get(f"{self.base_url}/download/{content_hash}", timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as e:
            raise BlobStoreError(f"Download failed: {e}") from e
        return resp.content


class LocalBlobStore(BlobStore):
    """Directory of blobs named by the SHA-256 of their bytes."""

    name = "local"

    def __init__(self, root: str):
        self.root = root

    def _path(self, content_hash: str) -> str:
        return os.path.join(self.root, content_hash)

    def upload(self, data: bytes, filename: str) -> str:
        content_hash = hashlib.sha256(data).hexdigest()
        try:
            os.makedirs(self.root, exist_ok=True)
            with open(self._path(content_hash), "wb") as f:
                f.write(data)
        except OSError as e:
            raise BlobStoreError(f"Upload failed: {e}") from e
        return content_hash

    def download(self, content_hash: str) -> bytes:
        if not is_content_hash(content_hash):
            raise BlobStoreError(f"Invalid content hash: {content_hash}")
        content_hash = content_hash.lower()
        try:
            with open(self._path(content_hash), "rb") as f:
                data = f.read()
        except OSError as e:
            raise BlobStoreError(f"Download failed: {e}") from e
        if hashlib.sha256(data).hexdigest() != content_hash:
            raise BlobStoreError(f"Content hash mismatch for {content_hash}")
        return data


def create_blob_store(config: Settings) -> Optional[BlobStore]:
    if config.blob_store_url:
        logger.info(f"Using HTTP blob store at {config.blob_store_url}")
        return HttpBlobStore(config.blob_store_url, timeout=config.blob_timeout)
    if config.blob_store_dir:
        logger.info(f"Using local blob store at {config.blob_store_dir}")
        return LocalBlobStore(config.blob_store_dir)
    return None
