"""Application configuration."""

from __future__ import annotations

from dataclasses import dataclass
import os


def _data_dir() -> str:
    return os.getenv("BUGVAULT_DATA_DIR", "data")


@dataclass(frozen=True)
class Settings:
    app_name: str = "Bug Report Vault"
    version: str = "1.0.0"
    api_prefix: str = "/api"
    cors_allow_origins: str = os.getenv("BUGVAULT_CORS_ORIGINS", "*")
    log_level: str = os.getenv("BUGVAULT_LOG_LEVEL", "INFO")
    port: int = int(os.getenv("PORT", "3000"))

    # Local storage
    data_dir: str = _data_dir()
    reports_path: str = os.getenv("BUGVAULT_REPORTS_PATH", os.path.join(_data_dir(), "reports.json"))
    explanations_dir: str = os.getenv("BUGVAULT_EXPLANATIONS_DIR", os.path.join(_data_dir(), "explanations"))
    static_dir: str = os.getenv("BUGVAULT_STATIC_DIR", "public")
    max_upload_mb: int = int(os.getenv("BUGVAULT_MAX_UPLOAD_MB", "10"))

    # Blob store (URL wins over local dir; neither = disabled)
    blob_store_url: str = os.getenv("BUGVAULT_BLOB_STORE_URL", "")
    blob_store_dir: str = os.getenv("BUGVAULT_BLOB_STORE_DIR", "")
    blob_timeout: float = float(os.getenv("BUGVAULT_BLOB_TIMEOUT", "30"))

    # Matching thresholds
    path_threshold: float = float(os.getenv("BUGVAULT_PATH_THRESHOLD", "0.6"))
    query_threshold: float = float(os.getenv("BUGVAULT_QUERY_THRESHOLD", "0.45"))

    @property
    def bugs_path(self) -> str:
        return os.path.join(self.data_dir, "bugs.json")

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024

    @property
    def cors_origins(self) -> list:
        return [o.strip() for o in self.cors_allow_origins.split(",") if o.strip()]


settings = Settings()
