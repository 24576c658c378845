"""
moto_market.db.repositories.testimonials

Testimonial persistence.

Responsibilities:
- List testimonials newest first for the public page, oldest first for backups.
- Create with defaults for missing fields; partial updates; delete.
"""

from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from moto_market.db.models import Testimonial

TESTIMONIAL_DEFAULTS: dict[str, Any] = {
    "name": "New Customer",
    "location": "Location",
    "text": "",
    "color": "blue",
}


class TestimonialRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_recent(self) -> list[Testimonial]:
        stmt = select(Testimonial).order_by(desc(Testimonial.created_at))
        return list((await self._session.execute(stmt)).scalars().all())

    async def list_all(self) -> list[Testimonial]:
        stmt = select(Testimonial).order_by(Testimonial.created_at)
        return list((await self._session.execute(stmt)).scalars().all())

    async def create(self, **fields: Any) -> Testimonial:
        values = {k: v if fields.get(k) is None else fields[k] for k, v in TESTIMONIAL_DEFAULTS.items()}
        item = Testimonial(**values)
        self._session.add(item)
        await self._session.flush()
        return item

    async def update(self, testimonial_id: uuid.UUID, **changes: Any) -> Testimonial | None:
        item = await self._session.get(Testimonial, testimonial_id, with_for_update=True)
        if item is None:
            return None
        for key, value in changes.items():
            if value is not None and key in TESTIMONIAL_DEFAULTS:
                setattr(item, key, value)
        await self._session.flush()
        await self._session.refresh(item)
        return item

    async def delete(self, testimonial_id: uuid.UUID) -> bool:
        item = await self._session.get(Testimonial, testimonial_id)
        if item is None:
            return False
        await self._session.delete(item)
        await self._session.flush()
        return True


# --- Module Notes -----------------------------------------------------------
# Fields passed as None fall back to TESTIMONIAL_DEFAULTS on create and are left
# untouched on update.
