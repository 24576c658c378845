"""
moto_market.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for settings, DB sessions and the upload registry.
- Encapsulate app.state access patterns.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from moto_market.auth.service import TokenService
from moto_market.settings import Settings
from moto_market.uploads.registry import UploadRegistry


def settings_from_app(request: Request) -> Settings:
    return request.app.state.settings  # type: ignore[attr-defined]


def sessionmaker_from_app(request: Request) -> async_sessionmaker[AsyncSession]:
    # The sessionmaker is created on app startup in `moto_market.api.app.create_app`.
    return request.app.state.sessionmaker  # type: ignore[attr-defined]


def token_service_from_app(request: Request) -> TokenService:
    return request.app.state.token_service  # type: ignore[attr-defined]


def upload_registry_from_app(request: Request) -> UploadRegistry:
    return request.app.state.upload_registry  # type: ignore[attr-defined]


async def db_session(
    session_factory: async_sessionmaker[AsyncSession] = Depends(sessionmaker_from_app),
) -> AsyncIterator[AsyncSession]:
    # Request-scoped DB session. Routers commit explicitly.
    async with session_factory() as session:
        yield session
