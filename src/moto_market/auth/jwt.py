"""
moto_market.auth.jwt

JWT issuing and validation helpers.

Responsibilities:
- Issue admin tokens carrying a fixed `type` discriminator.
- Decode and validate tokens with strict claim requirements (iss/aud/exp/iat/sub/type).

Note:
- HS256 with a shared secret; the secret comes from settings.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from jwt import PyJWTError

from moto_market.auth.models import IssuedToken

ADMIN_TOKEN_TYPE = "admin"


@dataclass(frozen=True, slots=True)
class JwtConfig:
    alg: str
    issuer: str
    audience: str
    secret: str


class JwtValidationError(Exception):
    pass


def issue_token(
    *,
    cfg: JwtConfig,
    subject: str,
    token_type: str = ADMIN_TOKEN_TYPE,
    ttl: timedelta = timedelta(hours=24),
    now: datetime | None = None,
) -> IssuedToken:
    issued_at = now or datetime.now(tz=UTC)
    exp = int((issued_at + ttl).timestamp())
    payload: dict[str, Any] = {
        "iss": cfg.issuer,
        "aud": cfg.audience,
        "sub": subject,
        "type": token_type,
        "iat": int(issued_at.timestamp()),
        "exp": exp,
    }
    token = jwt.encode(payload, cfg.secret, algorithm=cfg.alg)
    # Report the expiry exactly as encoded (whole seconds).
    return IssuedToken(token=token, expires_at=datetime.fromtimestamp(exp, tz=UTC))


def decode_and_validate(
    *,
    cfg: JwtConfig,
    token: str | None,
    expected_type: str = ADMIN_TOKEN_TYPE,
) -> dict[str, Any]:
    if not token or not isinstance(token, str):
        raise JwtValidationError("missing token")
    try:
        payload = jwt.decode(
            token,
            cfg.secret,
            algorithms=[cfg.alg],
            issuer=cfg.issuer,
            audience=cfg.audience,
            options={
                "require": ["exp", "iat", "iss", "aud", "sub", "type"],
            },
        )
    except PyJWTError as e:
        raise JwtValidationError(str(e)) from e

    if payload.get("type") != expected_type:
        raise JwtValidationError("unexpected token type")
    return payload


# --- Module Notes -----------------------------------------------------------
# Callers outside `auth.service` should not use these directly; the service collapses
# every JwtValidationError into a uniform InvalidToken.
