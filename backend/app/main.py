"""
Bug Report Vault — FastAPI Main Application
"""
import os
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app.api import dependencies as deps
from app.api.router import api_router
from app.core.config import settings
from app.core.logging import configure_logging

logger = configure_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Warm the report catalog on startup."""
    logger.info(f"{settings.app_name} v{settings.version} starting...")
    reports = deps.report_cache.ensure_loaded()
    logger.info(
        f"Report catalog ready: {len(reports)} reports, {len(deps.document_index)} explanation documents",
        extra={"count": len(reports)},
    )
    yield
    logger.info("Shutting down...")


app = FastAPI(
    title=settings.app_name,
    description="Bug report dataset storage and audit report explanation lookup",
    version=settings.version,
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes
app.include_router(api_router, prefix=settings.api_prefix)


@app.get("/health")
async def health():
    return {
        "status": "ok",
        "version": settings.version,
        "reports": len(deps.report_cache),
        "documents": len(deps.document_index),
        "blob_store": deps.blob_store.name if deps.blob_store else None,
    }


@app.get("/api")
async def root():
    return {
        "name": settings.app_name,
        "version": settings.version,
        "docs": "/docs",
        "health": "/health",
    }


# Static frontend last so it never shadows API routes
if os.path.isdir(settings.static_dir):
    app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")


def run():
    """Console entry point."""
    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    run()
