"""
moto_market.uploads.intake

Ingestion boundary checks that run before anything reaches the registry.

Responsibilities:
- Convert framework upload objects into plain `UploadPayload`s.
- Reject payloads outside the accepted media class or over the size ceiling.
"""

from __future__ import annotations

from fastapi import UploadFile

from moto_market.errors import UploadRejected
from moto_market.uploads.registry import UploadPayload

IMAGE_PREFIX = "image/"


def screen_upload(
    payload: UploadPayload,
    *,
    max_bytes: int,
    accepted_prefix: str = IMAGE_PREFIX,
) -> UploadPayload:
    media_type = (payload.media_type or "").lower()
    if not media_type.startswith(accepted_prefix):
        raise UploadRejected(payload.filename, f"unsupported media type {media_type or 'unknown'}")
    if max(payload.size, len(payload.data)) > max_bytes:
        raise UploadRejected(payload.filename, f"file exceeds {max_bytes} bytes")
    if payload.size != len(payload.data):
        raise UploadRejected(payload.filename, "declared size does not match content")
    if payload.size == 0:
        raise UploadRejected(payload.filename, "empty file")
    return payload


async def read_upload(upload: UploadFile, *, max_bytes: int) -> UploadPayload:
    # Read one byte past the ceiling so oversize files are detectable without buffering them whole.
    data = await upload.read(max_bytes + 1)
    await upload.close()
    return UploadPayload(
        data=data,
        filename=upload.filename or "upload",
        media_type=upload.content_type or "application/octet-stream",
        size=upload.size if upload.size is not None else len(data),
    )
