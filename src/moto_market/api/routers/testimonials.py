"""
moto_market.api.routers.testimonials

Testimonial endpoints: public listing, admin create/update/delete.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_201_CREATED, HTTP_404_NOT_FOUND

from moto_market.api.deps import db_session
from moto_market.api.routers.motorcycles import DeleteResponse
from moto_market.auth.deps import require_admin
from moto_market.db.repositories.testimonials import TestimonialRepo

router = APIRouter(prefix="/api/testimonials", tags=["testimonials"])


class TestimonialOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    location: str | None = None
    text: str
    color: str
    created_at: datetime
    updated_at: datetime


class TestimonialWrite(BaseModel):
    name: str | None = Field(default=None, max_length=255)
    location: str | None = Field(default=None, max_length=100)
    text: str | None = None
    color: str | None = Field(default=None, max_length=50)


@router.get("", response_model=list[TestimonialOut])
async def list_testimonials(session: AsyncSession = Depends(db_session)) -> list[TestimonialOut]:
    items = await TestimonialRepo(session).list_recent()
    return [TestimonialOut.model_validate(t) for t in items]


@router.post(
    "",
    response_model=TestimonialOut,
    status_code=HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_testimonial(
    body: TestimonialWrite,
    session: AsyncSession = Depends(db_session),
) -> TestimonialOut:
    item = await TestimonialRepo(session).create(**body.model_dump())
    await session.commit()
    return TestimonialOut.model_validate(item)


@router.put(
    "/{testimonial_id}",
    response_model=TestimonialOut,
    dependencies=[Depends(require_admin)],
)
async def update_testimonial(
    testimonial_id: uuid.UUID,
    body: TestimonialWrite,
    session: AsyncSession = Depends(db_session),
) -> TestimonialOut:
    item = await TestimonialRepo(session).update(testimonial_id, **body.model_dump())
    if item is None:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Testimonial not found")
    await session.commit()
    return TestimonialOut.model_validate(item)


@router.delete(
    "/{testimonial_id}",
    response_model=DeleteResponse,
    dependencies=[Depends(require_admin)],
)
async def delete_testimonial(
    testimonial_id: uuid.UUID,
    session: AsyncSession = Depends(db_session),
) -> DeleteResponse:
    if not await TestimonialRepo(session).delete(testimonial_id):
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Testimonial not found")
    await session.commit()
    return DeleteResponse(message="Testimonial deleted")
