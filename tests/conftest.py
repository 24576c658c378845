"""
tests.conftest

Shared fixtures.

Responsibilities:
- Build test settings backed by a per-test SQLite file.
- Drive the FastAPI app in-process (lifespan entered explicitly) through httpx.
- Provide an in-memory principal store for unit-testing the token service.
"""

from __future__ import annotations

import uuid
from collections.abc import AsyncIterator

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI

from moto_market.api.app import create_app
from moto_market.auth.jwt import JwtConfig
from moto_market.auth.models import AdminPrincipal
from moto_market.auth.passwords import hash_password
from moto_market.settings import Settings

TEST_SECRET = "test-signing-secret-with-enough-entropy-0123456789"
ADMIN_PASSWORD = "correct-secret"


class InMemoryPrincipalStore:
    def __init__(self) -> None:
        self.principals: dict[uuid.UUID, AdminPrincipal] = {}
        self.reads = 0

    def add(self, username: str, password: str) -> AdminPrincipal:
        principal = AdminPrincipal(
            id=uuid.uuid4(),
            username=username,
            password_hash=hash_password(password, rounds=4),
        )
        self.principals[principal.id] = principal
        return principal

    def remove(self, principal_id: uuid.UUID) -> None:
        del self.principals[principal_id]

    async def find_by_username(self, username: str) -> AdminPrincipal | None:
        self.reads += 1
        return next((p for p in self.principals.values() if p.username == username), None)

    async def find_by_id(self, principal_id: uuid.UUID) -> AdminPrincipal | None:
        self.reads += 1
        return self.principals.get(principal_id)


@pytest.fixture
def jwt_cfg() -> JwtConfig:
    return JwtConfig(
        alg="HS256",
        issuer="moto-market",
        audience="moto-market-admin",
        secret=TEST_SECRET,
    )


@pytest.fixture
def store() -> InMemoryPrincipalStore:
    return InMemoryPrincipalStore()


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        env="test",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        jwt_secret=TEST_SECRET,
        bcrypt_rounds=4,
        admin_username="admin",
        admin_password=ADMIN_PASSWORD,
        max_upload_bytes=1024,
        log_level="WARNING",
    )


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    return create_app(settings=settings)


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    # httpx ASGITransport does not run the lifespan; enter it explicitly.
    async with app.router.lifespan_context(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
            yield c


@pytest_asyncio.fixture
async def admin_headers(client: httpx.AsyncClient) -> dict[str, str]:
    r = await client.post(
        "/api/admin/login", json={"username": "admin", "password": ADMIN_PASSWORD}
    )
    assert r.status_code == 200, r.text
    return {"Authorization": f"Bearer {r.json()['token']}"}
