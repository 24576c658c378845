"""
moto_market.api.routers.backup

Admin data export.

Responsibilities:
- Dump motorcycles (with images), testimonials and inquiries in one JSON document.
"""

from __future__ import annotations

from datetime import UTC, datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from moto_market.api.deps import db_session
from moto_market.api.routers.inquiries import InquiryOut
from moto_market.api.routers.motorcycles import MotorcycleOut
from moto_market.api.routers.testimonials import TestimonialOut
from moto_market.auth.deps import require_admin
from moto_market.db.repositories.inquiries import InquiryRepo
from moto_market.db.repositories.motorcycles import MotorcycleRepo
from moto_market.db.repositories.testimonials import TestimonialRepo

router = APIRouter(prefix="/api/backup", tags=["backup"])


class BackupResponse(BaseModel):
    timestamp: datetime
    motorcycles: list[MotorcycleOut]
    testimonials: list[TestimonialOut]
    inquiries: list[InquiryOut]


@router.get("", response_model=BackupResponse, dependencies=[Depends(require_admin)])
async def backup(session: AsyncSession = Depends(db_session)) -> BackupResponse:
    # One session: the three reads run sequentially on the same connection.
    motorcycles = await MotorcycleRepo(session).list_all()
    testimonials = await TestimonialRepo(session).list_all()
    inquiries = await InquiryRepo(session).list_all()
    return BackupResponse(
        timestamp=datetime.now(tz=UTC),
        motorcycles=[MotorcycleOut.model_validate(m) for m in motorcycles],
        testimonials=[TestimonialOut.model_validate(t) for t in testimonials],
        inquiries=[InquiryOut.model_validate(i) for i in inquiries],
    )
