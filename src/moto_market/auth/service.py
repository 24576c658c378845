"""
moto_market.auth.service

Credential & token service.

Responsibilities:
- Check a username/secret pair against the stored bcrypt hash and issue a signed admin token.
- Validate a presented token (signature, claims, discriminator, expiry) and re-confirm
  that its subject still exists.

Both operations fail with a single coarse error each (InvalidCredentials / InvalidToken);
the precise cause is only ever logged.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Protocol

from moto_market.auth.jwt import (
    ADMIN_TOKEN_TYPE,
    JwtConfig,
    JwtValidationError,
    decode_and_validate,
    issue_token,
)
from moto_market.auth.models import AdminPrincipal, IssuedToken
from moto_market.auth.passwords import hash_password, verify_password
from moto_market.errors import InvalidCredentials, InvalidToken
from moto_market.observability.logging import get_logger
from moto_market.settings import Settings

log = get_logger(__name__)


class PrincipalStore(Protocol):
    async def find_by_username(self, username: str) -> AdminPrincipal | None: ...

    async def find_by_id(self, principal_id: uuid.UUID) -> AdminPrincipal | None: ...


def jwt_config(settings: Settings) -> JwtConfig:
    return JwtConfig(
        alg=settings.jwt_alg,
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
        secret=settings.jwt_secret,
    )


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


class TokenService:
    def __init__(
        self,
        *,
        store: PrincipalStore,
        cfg: JwtConfig,
        ttl: timedelta = timedelta(hours=24),
        bcrypt_rounds: int = 12,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._store = store
        self._cfg = cfg
        self._ttl = ttl
        self._clock = clock
        # Checked against when the username is unknown, so both failure paths pay for one bcrypt run.
        self._dummy_hash = hash_password(uuid.uuid4().hex, rounds=bcrypt_rounds)

    @classmethod
    def from_settings(cls, *, store: PrincipalStore, settings: Settings) -> TokenService:
        return cls(
            store=store,
            cfg=jwt_config(settings),
            ttl=timedelta(hours=settings.token_ttl_hours),
            bcrypt_rounds=settings.bcrypt_rounds,
        )

    async def authenticate(self, username: str, secret: str) -> IssuedToken:
        if not username or not secret:
            raise InvalidCredentials()

        principal = await self._store.find_by_username(username)
        if principal is None:
            verify_password(secret, self._dummy_hash)
            log.info("admin_login_failed")
            raise InvalidCredentials()

        if not verify_password(secret, principal.password_hash):
            log.info("admin_login_failed")
            raise InvalidCredentials()

        issued = issue_token(
            cfg=self._cfg,
            subject=str(principal.id),
            token_type=ADMIN_TOKEN_TYPE,
            ttl=self._ttl,
            now=self._clock(),
        )
        log.info("admin_login", admin_id=str(principal.id), expires_at=issued.expiry)
        return issued

    async def validate(self, token: str | None) -> uuid.UUID:
        try:
            payload = decode_and_validate(cfg=self._cfg, token=token, expected_type=ADMIN_TOKEN_TYPE)
        except JwtValidationError as e:
            log.debug("token_rejected", cause=str(e))
            raise InvalidToken() from None

        try:
            principal_id = uuid.UUID(str(payload["sub"]))
        except ValueError:
            log.debug("token_rejected", cause="subject is not a uuid")
            raise InvalidToken() from None

        # A deleted admin loses access on the next request, not at token expiry.
        if await self._store.find_by_id(principal_id) is None:
            log.debug("token_rejected", cause="subject no longer exists")
            raise InvalidToken()
        return principal_id


# --- Module Notes -----------------------------------------------------------
# `raise ... from None` keeps the JWT library's message out of the InvalidToken chain.
