"""
moto_market.services.image_service

Image intake service (screening + registration + persistence).

Responsibilities:
- Run each incoming file through the ingestion checks and the upload registry.
- Persist accepted motorcycle images as rows referencing the registry record.
- Report failures per file; one bad file never aborts its siblings.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field

from sqlalchemy.ext.asyncio import AsyncSession

from moto_market.db.models import MotorcycleImage
from moto_market.db.repositories.motorcycles import MotorcycleRepo
from moto_market.errors import RegistrationFailed, UploadRejected
from moto_market.observability.logging import get_logger
from moto_market.uploads.intake import screen_upload
from moto_market.uploads.registry import UploadPayload, UploadRecord, UploadRegistry

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class UploadFailure:
    filename: str
    reason: str


@dataclass(slots=True)
class ImageBatchResult:
    images: list[MotorcycleImage] = field(default_factory=list)
    failures: list[UploadFailure] = field(default_factory=list)


@dataclass(slots=True)
class PhotoBatchResult:
    records: list[UploadRecord] = field(default_factory=list)
    failures: list[UploadFailure] = field(default_factory=list)


class ImageService:
    def __init__(
        self,
        *,
        registry: UploadRegistry,
        max_upload_bytes: int,
        session: AsyncSession | None = None,
    ) -> None:
        self._registry = registry
        self._max_upload_bytes = max_upload_bytes
        self._session = session

    def _accept(self, payload: UploadPayload) -> UploadRecord:
        screen_upload(payload, max_bytes=self._max_upload_bytes)
        return self._registry.register(payload)

    async def attach_images(
        self, *, motorcycle_id: uuid.UUID, payloads: list[UploadPayload]
    ) -> ImageBatchResult:
        if self._session is None:
            raise RuntimeError("attach_images requires a database session")

        motorcycles = MotorcycleRepo(self._session)
        result = ImageBatchResult()
        has_primary = await motorcycles.count_images(motorcycle_id) > 0

        for payload in payloads:
            try:
                record = self._accept(payload)
            except (UploadRejected, RegistrationFailed) as e:
                log.info("upload_skipped", filename=e.filename, reason=e.reason)
                result.failures.append(UploadFailure(filename=e.filename, reason=e.reason))
                continue

            image = await motorcycles.add_image(
                motorcycle_id=motorcycle_id,
                upload_id=record.id,
                image_url=record.data_url,
                image_name=record.filename,
                size=record.size,
                is_primary=not has_primary,
            )
            has_primary = True
            result.images.append(image)

        await self._session.commit()
        return result

    def register_photos(self, payloads: list[UploadPayload]) -> PhotoBatchResult:
        result = PhotoBatchResult()
        for payload in payloads:
            try:
                result.records.append(self._accept(payload))
            except (UploadRejected, RegistrationFailed) as e:
                log.info("upload_skipped", filename=e.filename, reason=e.reason)
                result.failures.append(UploadFailure(filename=e.filename, reason=e.reason))
        return result


# --- Module Notes -----------------------------------------------------------
# The first accepted image of a motorcycle becomes its primary image.
