"""
moto_market.api.routers.health

Health and readiness endpoints.

Responsibilities:
- Provide liveness probe (`/healthz`).
- Provide readiness probe (`/api/health`) with DB connectivity validation.
"""

from __future__ import annotations

from datetime import UTC, datetime

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_503_SERVICE_UNAVAILABLE

from moto_market.api.deps import db_session, settings_from_app
from moto_market.observability.logging import get_logger
from moto_market.settings import Settings

log = get_logger(__name__)

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/api/health")
async def health(
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_from_app),
):
    timestamp = datetime.now(tz=UTC).isoformat()
    try:
        await session.execute(text("SELECT 1"))
    except SQLAlchemyError:
        log.exception("health_db_unreachable")
        return JSONResponse(
            status_code=HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "unhealthy",
                "error": "Database connection failed",
                "timestamp": timestamp,
            },
        )
    return {
        "status": "healthy",
        "timestamp": timestamp,
        "service": settings.service_name,
        "database": "connected",
        "environment": settings.env,
    }
