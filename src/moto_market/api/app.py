"""
moto_market.api.app

FastAPI app factory for the marketplace service.

Responsibilities:
- Build the FastAPI application and register routers, middleware and error handlers.
- Own the process-scoped collaborators: DB engine/session factory, token service,
  access gate and upload registry.
- Provide a single composition root where cross-cutting concerns live.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from moto_market import __version__
from moto_market.api.errors import register_exception_handlers
from moto_market.api.middleware import SecurityHeadersMiddleware
from moto_market.api.routers.admin import router as admin_router
from moto_market.api.routers.backup import router as backup_router
from moto_market.api.routers.health import router as health_router
from moto_market.api.routers.inquiries import router as inquiries_router
from moto_market.api.routers.motorcycles import router as motorcycles_router
from moto_market.api.routers.testimonials import router as testimonials_router
from moto_market.api.routers.uploads import router as uploads_router
from moto_market.auth.gate import AccessGate
from moto_market.auth.service import TokenService
from moto_market.db.init_db import init_db, seed_admin, seed_demo_data
from moto_market.db.repositories.admins import DbPrincipalStore
from moto_market.db.session import create_engine, create_sessionmaker
from moto_market.observability.logging import configure_logging, get_logger
from moto_market.observability.middleware import RequestContextMiddleware
from moto_market.settings import Settings
from moto_market.uploads.registry import UploadRegistry

log = get_logger(__name__)


def create_app(*, settings: Settings, upload_registry: UploadRegistry | None = None) -> FastAPI:
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        engine = create_engine(settings)
        sessionmaker = create_sessionmaker(engine)
        app.state.engine = engine
        app.state.sessionmaker = sessionmaker
        if settings.env in ("dev", "test"):
            # Dev/test convenience: create tables automatically. Prod uses Alembic migrations.
            await init_db(engine)
        await seed_admin(sessionmaker, settings)
        if settings.seed_demo_data:
            await seed_demo_data(sessionmaker)

        token_service = TokenService.from_settings(
            store=DbPrincipalStore(sessionmaker), settings=settings
        )
        app.state.token_service = token_service
        app.state.access_gate = AccessGate(token_service)
        try:
            yield
        finally:
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="Moto Market API",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    # Lives as long as the app object; uploads vanish when the process exits.
    app.state.upload_registry = upload_registry or UploadRegistry()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    register_exception_handlers(app, settings=settings)
    app.include_router(health_router, tags=["health"])
    app.include_router(admin_router)
    app.include_router(motorcycles_router)
    app.include_router(testimonials_router)
    app.include_router(inquiries_router)
    app.include_router(uploads_router)
    app.include_router(backup_router)

    return app


# --- Module Notes -----------------------------------------------------------
# Business logic stays in the auth core, the upload registry and the services layer;
# this file only wires them together.
