"""
moto_market.api.routers.motorcycles

Motorcycle listing endpoints.

Responsibilities:
- Public reads: featured listing and single motorcycle, each with images.
- Admin writes: create, partial update, delete.
- Admin image intake: multipart upload registered and attached per file.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_201_CREATED, HTTP_400_BAD_REQUEST, HTTP_404_NOT_FOUND

from moto_market.api.deps import db_session, settings_from_app, upload_registry_from_app
from moto_market.auth.deps import require_admin
from moto_market.db.repositories.motorcycles import MotorcycleRepo
from moto_market.services.image_service import ImageService
from moto_market.settings import Settings
from moto_market.uploads.intake import read_upload
from moto_market.uploads.registry import UploadRegistry

router = APIRouter(prefix="/api/motorcycles", tags=["motorcycles"])


class MotorcycleImageOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    upload_id: str | None = None
    image_url: str
    image_name: str | None = None
    size: int | None = None
    is_primary: bool


class MotorcycleOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    price: str
    description: str | None = None
    year: str | None = None
    mileage: str | None = None
    location: str | None = None
    featured: bool
    created_at: datetime
    updated_at: datetime
    images: list[MotorcycleImageOut] = Field(default_factory=list)


class MotorcycleWrite(BaseModel):
    # Every field optional: create falls back to defaults, update keeps stored values.
    name: str | None = Field(default=None, max_length=255)
    price: str | None = Field(default=None, max_length=100)
    description: str | None = None
    year: str | None = Field(default=None, max_length=10)
    mileage: str | None = Field(default=None, max_length=50)
    location: str | None = Field(default=None, max_length=100)
    featured: bool | None = None


class DeleteResponse(BaseModel):
    success: bool = True
    message: str


class UploadFailureOut(BaseModel):
    filename: str
    reason: str


class ImageUploadResponse(BaseModel):
    images: list[MotorcycleImageOut]
    failures: list[UploadFailureOut] = Field(default_factory=list)


@router.get("", response_model=list[MotorcycleOut])
async def list_motorcycles(session: AsyncSession = Depends(db_session)) -> list[MotorcycleOut]:
    motorcycles = await MotorcycleRepo(session).list_featured()
    return [MotorcycleOut.model_validate(m) for m in motorcycles]


@router.get("/{motorcycle_id}", response_model=MotorcycleOut)
async def get_motorcycle(
    motorcycle_id: uuid.UUID,
    session: AsyncSession = Depends(db_session),
) -> MotorcycleOut:
    moto = await MotorcycleRepo(session).get(motorcycle_id)
    if moto is None:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Motorcycle not found")
    return MotorcycleOut.model_validate(moto)


@router.post(
    "",
    response_model=MotorcycleOut,
    status_code=HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_motorcycle(
    body: MotorcycleWrite,
    session: AsyncSession = Depends(db_session),
) -> MotorcycleOut:
    moto = await MotorcycleRepo(session).create(**body.model_dump())
    await session.commit()
    return MotorcycleOut.model_validate(moto)


@router.put(
    "/{motorcycle_id}",
    response_model=MotorcycleOut,
    dependencies=[Depends(require_admin)],
)
async def update_motorcycle(
    motorcycle_id: uuid.UUID,
    body: MotorcycleWrite,
    session: AsyncSession = Depends(db_session),
) -> MotorcycleOut:
    moto = await MotorcycleRepo(session).update(motorcycle_id, **body.model_dump())
    if moto is None:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Motorcycle not found")
    await session.commit()
    return MotorcycleOut.model_validate(moto)


@router.delete(
    "/{motorcycle_id}",
    response_model=DeleteResponse,
    dependencies=[Depends(require_admin)],
)
async def delete_motorcycle(
    motorcycle_id: uuid.UUID,
    session: AsyncSession = Depends(db_session),
) -> DeleteResponse:
    if not await MotorcycleRepo(session).delete(motorcycle_id):
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Motorcycle not found")
    await session.commit()
    return DeleteResponse(message="Motorcycle deleted")


@router.post(
    "/{motorcycle_id}/images",
    response_model=ImageUploadResponse,
    dependencies=[Depends(require_admin)],
)
async def upload_images(
    motorcycle_id: uuid.UUID,
    images: list[UploadFile] | None = File(default=None),
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_from_app),
    registry: UploadRegistry = Depends(upload_registry_from_app),
) -> ImageUploadResponse:
    if not images:
        raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail="No files uploaded")
    if await MotorcycleRepo(session).get(motorcycle_id) is None:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Motorcycle not found")

    payloads = [await read_upload(f, max_bytes=settings.max_upload_bytes) for f in images]
    svc = ImageService(
        registry=registry, max_upload_bytes=settings.max_upload_bytes, session=session
    )
    result = await svc.attach_images(motorcycle_id=motorcycle_id, payloads=payloads)
    return ImageUploadResponse(
        images=[MotorcycleImageOut.model_validate(i) for i in result.images],
        failures=[UploadFailureOut(filename=f.filename, reason=f.reason) for f in result.failures],
    )
