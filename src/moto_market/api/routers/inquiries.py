"""
moto_market.api.routers.inquiries

Visitor inquiry endpoints.

Responsibilities:
- Accept public inquiries as multipart forms, with optional photos.
- Register acceptable photos in the upload registry (best effort, per file).
- List inquiries for the admin.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from fastapi import APIRouter, Depends, File, Form, UploadFile
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_201_CREATED

from moto_market.api.deps import db_session, settings_from_app, upload_registry_from_app
from moto_market.api.routers.motorcycles import UploadFailureOut
from moto_market.auth.deps import require_admin
from moto_market.db.repositories.inquiries import InquiryRepo
from moto_market.services.image_service import ImageService
from moto_market.settings import Settings
from moto_market.uploads.intake import read_upload
from moto_market.uploads.registry import UploadRegistry

router = APIRouter(prefix="/api/inquiries", tags=["inquiries"])


class InquiryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    phone: str
    model: str | None = None
    year: str | None = None
    details: str | None = None
    created_at: datetime


class InquirySubmitted(BaseModel):
    success: bool = True
    message: str = "Inquiry submitted successfully"
    inquiry: InquiryOut
    photo_ids: list[str] = Field(default_factory=list)
    photo_failures: list[UploadFailureOut] = Field(default_factory=list)


@router.post("", response_model=InquirySubmitted, status_code=HTTP_201_CREATED)
async def submit_inquiry(
    name: str = Form(min_length=1, max_length=255),
    phone: str = Form(min_length=1, max_length=20),
    model: str | None = Form(default=None, max_length=255),
    year: str | None = Form(default=None, max_length=10),
    details: str | None = Form(default=None),
    photos: list[UploadFile] | None = File(default=None),
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_from_app),
    registry: UploadRegistry = Depends(upload_registry_from_app),
) -> InquirySubmitted:
    inquiry = await InquiryRepo(session).create(
        name=name, phone=phone, model=model, year=year, details=details
    )
    await session.commit()

    # Photos are only registered; nothing links them to the inquiry row.
    payloads = [await read_upload(f, max_bytes=settings.max_upload_bytes) for f in photos or []]
    result = ImageService(
        registry=registry, max_upload_bytes=settings.max_upload_bytes
    ).register_photos(payloads)

    return InquirySubmitted(
        inquiry=InquiryOut.model_validate(inquiry),
        photo_ids=[r.id for r in result.records],
        photo_failures=[
            UploadFailureOut(filename=f.filename, reason=f.reason) for f in result.failures
        ],
    )


@router.get("", response_model=list[InquiryOut], dependencies=[Depends(require_admin)])
async def list_inquiries(session: AsyncSession = Depends(db_session)) -> list[InquiryOut]:
    items = await InquiryRepo(session).list_recent()
    return [InquiryOut.model_validate(i) for i in items]
