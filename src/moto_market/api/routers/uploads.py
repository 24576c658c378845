"""
moto_market.api.routers.uploads

Admin inspection of the in-memory upload registry.

Responsibilities:
- Return metadata for a registered upload.
- Stream back the original bytes with their declared media type.
"""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel
from starlette.status import HTTP_404_NOT_FOUND

from moto_market.api.deps import upload_registry_from_app
from moto_market.auth.deps import require_admin
from moto_market.errors import UploadNotFound
from moto_market.uploads.registry import UploadRecord, UploadRegistry

router = APIRouter(
    prefix="/api/uploads",
    tags=["uploads"],
    dependencies=[Depends(require_admin)],
)


class UploadOut(BaseModel):
    id: str
    filename: str
    size: int
    media_type: str
    created_at: datetime


def _lookup(registry: UploadRegistry, upload_id: str) -> UploadRecord:
    try:
        return registry.lookup(upload_id)
    except UploadNotFound as e:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Upload not found") from e


@router.get("/{upload_id}", response_model=UploadOut)
async def get_upload(
    upload_id: str,
    registry: UploadRegistry = Depends(upload_registry_from_app),
) -> UploadOut:
    record = _lookup(registry, upload_id)
    return UploadOut(
        id=record.id,
        filename=record.filename,
        size=record.size,
        media_type=record.media_type,
        created_at=record.created_at,
    )


@router.get("/{upload_id}/content")
async def get_upload_content(
    upload_id: str,
    registry: UploadRegistry = Depends(upload_registry_from_app),
) -> Response:
    record = _lookup(registry, upload_id)
    return Response(content=record.content(), media_type=record.media_type)
