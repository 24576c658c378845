"""
moto_market.db.repositories.motorcycles

Repository for `Motorcycle` and `MotorcycleImage` entities.

Responsibilities:
- List/fetch motorcycles with their images.
- Create, partially update and delete motorcycles.
- Attach image rows that reference registered uploads.
"""

from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from moto_market.db.models import Motorcycle, MotorcycleImage

MOTORCYCLE_DEFAULTS: dict[str, Any] = {
    "name": "New Motorcycle",
    "price": "KSh 0",
    "description": "",
    "year": "2024",
    "mileage": "0 km",
    "location": "Embu",
    "featured": True,
}


class MotorcycleRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_featured(self) -> list[Motorcycle]:
        stmt = (
            select(Motorcycle)
            .where(Motorcycle.featured.is_(True))
            .order_by(desc(Motorcycle.created_at))
        )
        return list((await self._session.execute(stmt)).scalars().all())

    async def list_all(self) -> list[Motorcycle]:
        stmt = select(Motorcycle).order_by(Motorcycle.created_at)
        return list((await self._session.execute(stmt)).scalars().all())

    async def get(self, motorcycle_id: uuid.UUID) -> Motorcycle | None:
        return await self._session.get(Motorcycle, motorcycle_id)

    async def create(self, **fields: Any) -> Motorcycle:
        values = {k: v if fields.get(k) is None else fields[k] for k, v in MOTORCYCLE_DEFAULTS.items()}
        moto = Motorcycle(**values, images=[])
        self._session.add(moto)
        await self._session.flush()
        return moto

    async def update(self, motorcycle_id: uuid.UUID, **changes: Any) -> Motorcycle | None:
        moto = await self._session.get(Motorcycle, motorcycle_id, with_for_update=True)
        if moto is None:
            return None
        # Partial update: absent/None fields keep their stored value.
        for key, value in changes.items():
            if value is not None and key in MOTORCYCLE_DEFAULTS:
                setattr(moto, key, value)
        await self._session.flush()
        await self._session.refresh(moto)
        return moto

    async def delete(self, motorcycle_id: uuid.UUID) -> bool:
        moto = await self._session.get(Motorcycle, motorcycle_id)
        if moto is None:
            return False
        await self._session.delete(moto)
        await self._session.flush()
        return True

    async def count_images(self, motorcycle_id: uuid.UUID) -> int:
        stmt = select(func.count(MotorcycleImage.id)).where(
            MotorcycleImage.motorcycle_id == motorcycle_id
        )
        return int((await self._session.execute(stmt)).scalar_one())

    async def add_image(
        self,
        *,
        motorcycle_id: uuid.UUID,
        image_url: str,
        image_name: str | None,
        size: int | None,
        is_primary: bool,
        upload_id: str | None = None,
    ) -> MotorcycleImage:
        image = MotorcycleImage(
            motorcycle_id=motorcycle_id,
            upload_id=upload_id,
            image_url=image_url,
            image_name=image_name,
            size=size,
            is_primary=is_primary,
        )
        self._session.add(image)
        await self._session.flush()
        return image
