"""API router composition.

All REST endpoints live under `/api/*`.
"""

from fastapi import APIRouter

from app.api.routes.bugs import router as bugs_router
from app.api.routes.reports import router as reports_router


api_router = APIRouter()

api_router.include_router(bugs_router, tags=["bugs"])
api_router.include_router(reports_router, tags=["reports"])
