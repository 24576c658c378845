"""
moto_market.uploads.registry

In-memory registry of uploaded payloads.

Responsibilities:
- Assign each payload a random 128-bit hex identifier.
- Wrap the bytes into a self-contained `data:` URL usable without a second fetch.
- Index records by identifier for the lifetime of the registry object.

The registry is volatile and non-authoritative: nothing is written to disk and there is
no eviction. Durable object storage would sit behind the same register/lookup contract.
"""

from __future__ import annotations

import base64
import binascii
import re
import secrets
import threading
from dataclasses import dataclass, field
from datetime import UTC, datetime

from moto_market.errors import RegistrationFailed, UploadNotFound
from moto_market.observability.logging import get_logger

log = get_logger(__name__)

ID_BYTES = 16
_MEDIA_TYPE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9!#$&^_.+-]*/[A-Za-z0-9][A-Za-z0-9!#$&^_.+-]*$")
_DATA_URL = re.compile(r"^data:(?P<media_type>[^;,]+);base64,(?P<body>.*)$", re.DOTALL)


@dataclass(frozen=True, slots=True)
class UploadPayload:
    data: bytes
    filename: str
    media_type: str
    size: int


@dataclass(frozen=True, slots=True)
class UploadRecord:
    id: str
    filename: str
    size: int
    media_type: str
    data_url: str
    created_at: datetime = field(default_factory=lambda: datetime.now(tz=UTC))

    def content(self) -> bytes:
        match = _DATA_URL.match(self.data_url)
        if match is None:
            raise ValueError("record does not hold a base64 data URL")
        return base64.b64decode(match.group("body"), validate=True)


def encode_data_url(data: bytes, media_type: str) -> str:
    if not _MEDIA_TYPE.match(media_type or ""):
        raise ValueError(f"invalid media type {media_type!r}")
    try:
        body = base64.b64encode(data).decode("ascii")
    except (TypeError, binascii.Error) as e:
        raise ValueError("payload is not bytes-like") from e
    return f"data:{media_type.lower()};base64,{body}"


class UploadRegistry:
    """
    Process-scoped store; construct once and pass it to whoever needs it.
    Only insertion is locked: records are immutable, so reads need no coordination.
    """

    def __init__(self) -> None:
        self._records: dict[str, UploadRecord] = {}
        self._lock = threading.Lock()

    def register(self, payload: UploadPayload) -> UploadRecord:
        try:
            data_url = encode_data_url(payload.data, payload.media_type)
        except ValueError as e:
            raise RegistrationFailed(payload.filename, str(e)) from e

        # 128 bits from the OS CSPRNG; collisions are not checked for.
        record = UploadRecord(
            id=secrets.token_hex(ID_BYTES),
            filename=payload.filename,
            size=payload.size,
            media_type=payload.media_type.lower(),
            data_url=data_url,
        )
        with self._lock:
            self._records[record.id] = record
        log.info(
            "upload_registered",
            upload_id=record.id,
            filename=record.filename,
            size=record.size,
            media_type=record.media_type,
        )
        return record

    def lookup(self, upload_id: str) -> UploadRecord:
        record = self._records.get(upload_id)
        if record is None:
            raise UploadNotFound(upload_id)
        return record

    def __contains__(self, upload_id: object) -> bool:
        return upload_id in self._records

    def __len__(self) -> int:
        return len(self._records)
