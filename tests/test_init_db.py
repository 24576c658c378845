"""
tests.test_init_db

Bootstrap helpers: admin seeding, demo data, and the provisioning CLI coroutine.
"""

from __future__ import annotations

import pytest

from moto_market.admin_cli import create_admin
from moto_market.auth.passwords import verify_password
from moto_market.db.init_db import init_db, seed_admin, seed_demo_data
from moto_market.db.repositories.admins import AdminRepo, DbPrincipalStore
from moto_market.db.repositories.motorcycles import MotorcycleRepo
from moto_market.db.session import create_engine, create_sessionmaker
from moto_market.settings import Settings


@pytest.mark.asyncio
async def test_seed_admin_is_idempotent(settings: Settings) -> None:
    engine = create_engine(settings)
    try:
        await init_db(engine)
        sessionmaker = create_sessionmaker(engine)

        assert await seed_admin(sessionmaker, settings) is True
        assert await seed_admin(sessionmaker, settings) is False

        principal = await DbPrincipalStore(sessionmaker).find_by_username("admin")
        assert principal is not None
        assert verify_password("correct-secret", principal.password_hash)
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_seed_demo_data_fills_empty_tables_once(settings: Settings) -> None:
    engine = create_engine(settings)
    try:
        await init_db(engine)
        sessionmaker = create_sessionmaker(engine)

        await seed_demo_data(sessionmaker)
        await seed_demo_data(sessionmaker)

        async with sessionmaker() as session:
            motorcycles = await MotorcycleRepo(session).list_featured()
        assert len(motorcycles) == 3
        assert all(len(m.images) == 1 and m.images[0].is_primary for m in motorcycles)
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_create_admin_provisions_once(settings: Settings) -> None:
    assert await create_admin(settings, "ops", "ops-password") is True
    assert await create_admin(settings, "ops", "ops-password") is False

    engine = create_engine(settings)
    try:
        async with create_sessionmaker(engine)() as session:
            user = await AdminRepo(session).get_by_username("ops")
        assert user is not None
        assert user.password_hash != "ops-password"
    finally:
        await engine.dispose()
