"""
moto_market.db.repositories.admins

Repository for `AdminUser` rows, plus the principal store the token service reads from.

Responsibilities:
- Look up admins by username / id and provision new ones.
- Adapt ORM rows into read-only `AdminPrincipal` values for the auth core.
"""

from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from moto_market.auth.models import AdminPrincipal
from moto_market.db.models import AdminUser


def _to_principal(user: AdminUser) -> AdminPrincipal:
    return AdminPrincipal(id=user.id, username=user.username, password_hash=user.password_hash)


class AdminRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, admin_id: uuid.UUID) -> AdminUser | None:
        return await self._session.get(AdminUser, admin_id)

    async def get_by_username(self, username: str) -> AdminUser | None:
        stmt = select(AdminUser).where(AdminUser.username == username)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def create(self, *, username: str, password_hash: str) -> AdminUser:
        user = AdminUser(username=username, password_hash=password_hash)
        self._session.add(user)
        await self._session.flush()
        return user

    async def delete(self, admin_id: uuid.UUID) -> bool:
        user = await self._session.get(AdminUser, admin_id)
        if user is None:
            return False
        await self._session.delete(user)
        await self._session.flush()
        return True


class DbPrincipalStore:
    """
    `PrincipalStore` backed by the database. Each read runs in its own short session,
    so the token service can be built once at startup and shared across requests.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def find_by_username(self, username: str) -> AdminPrincipal | None:
        async with self._session_factory() as session:
            user = await AdminRepo(session).get_by_username(username)
            return _to_principal(user) if user is not None else None

    async def find_by_id(self, principal_id: uuid.UUID) -> AdminPrincipal | None:
        async with self._session_factory() as session:
            user = await AdminRepo(session).get(principal_id)
            return _to_principal(user) if user is not None else None
