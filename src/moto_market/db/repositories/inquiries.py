"""
moto_market.db.repositories.inquiries

Repository for `Inquiry` entities (append-only from the public side).
"""

from __future__ import annotations

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from moto_market.db.models import Inquiry


class InquiryRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self,
        *,
        name: str,
        phone: str,
        model: str | None = None,
        year: str | None = None,
        details: str | None = None,
    ) -> Inquiry:
        inquiry = Inquiry(name=name, phone=phone, model=model, year=year, details=details)
        self._session.add(inquiry)
        await self._session.flush()
        return inquiry

    async def list_recent(self, *, limit: int = 200) -> list[Inquiry]:
        stmt = select(Inquiry).order_by(desc(Inquiry.created_at)).limit(limit)
        return list((await self._session.execute(stmt)).scalars().all())

    async def list_all(self) -> list[Inquiry]:
        stmt = select(Inquiry).order_by(Inquiry.created_at)
        return list((await self._session.execute(stmt)).scalars().all())
