"""
tests.test_token_service

Credential check and token lifecycle against an in-memory principal store.
"""

from __future__ import annotations

import uuid
from dataclasses import replace
from datetime import UTC, datetime, timedelta

import pytest

from moto_market.auth.jwt import JwtConfig, issue_token
from moto_market.auth.service import TokenService
from moto_market.errors import InvalidCredentials, InvalidToken


def _service(store, cfg: JwtConfig, **kwargs) -> TokenService:
    return TokenService(store=store, cfg=cfg, bcrypt_rounds=4, **kwargs)


@pytest.mark.asyncio
async def test_authenticate_then_validate_resolves_principal(store, jwt_cfg) -> None:
    admin = store.add("admin", "correct-secret")
    svc = _service(store, jwt_cfg)

    issued = await svc.authenticate("admin", "correct-secret")

    assert await svc.validate(issued.token) == admin.id


@pytest.mark.asyncio
async def test_token_expires_24_hours_after_login(store, jwt_cfg) -> None:
    store.add("admin", "correct-secret")
    now = datetime.now(tz=UTC).replace(microsecond=0)
    svc = _service(store, jwt_cfg, clock=lambda: now)

    issued = await svc.authenticate("admin", "correct-secret")

    assert issued.expires_at == now + timedelta(hours=24)
    datetime.fromisoformat(issued.expiry)


@pytest.mark.asyncio
async def test_each_login_signs_a_fresh_token(store, jwt_cfg) -> None:
    store.add("admin", "correct-secret")
    ticks = iter([datetime.now(tz=UTC), datetime.now(tz=UTC) + timedelta(seconds=5)])
    svc = _service(store, jwt_cfg, clock=lambda: next(ticks))

    first = await svc.authenticate("admin", "correct-secret")
    second = await svc.authenticate("admin", "correct-secret")

    assert first.token != second.token


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("username", "secret"),
    [
        ("admin", "wrong-secret"),
        ("nobody", "correct-secret"),
        ("", "correct-secret"),
        ("admin", ""),
    ],
)
async def test_bad_credentials_fail_identically(store, jwt_cfg, username, secret) -> None:
    store.add("admin", "correct-secret")
    svc = _service(store, jwt_cfg)

    with pytest.raises(InvalidCredentials) as exc:
        await svc.authenticate(username, secret)
    assert str(exc.value) == "Invalid credentials"


@pytest.mark.asyncio
async def test_authenticate_reads_store_once(store, jwt_cfg) -> None:
    store.add("admin", "correct-secret")
    svc = _service(store, jwt_cfg)

    await svc.authenticate("admin", "correct-secret")
    assert store.reads == 1


@pytest.mark.asyncio
async def test_expired_token_fails(store, jwt_cfg) -> None:
    store.add("admin", "correct-secret")
    past = datetime.now(tz=UTC) - timedelta(hours=25)
    issued = await _service(store, jwt_cfg, clock=lambda: past).authenticate(
        "admin", "correct-secret"
    )

    with pytest.raises(InvalidToken):
        await _service(store, jwt_cfg).validate(issued.token)


@pytest.mark.asyncio
async def test_token_from_other_secret_fails(store, jwt_cfg) -> None:
    admin = store.add("admin", "correct-secret")
    other = replace(jwt_cfg, secret="rotated-signing-secret-that-is-long-enough-00")
    token = issue_token(cfg=other, subject=str(admin.id)).token

    with pytest.raises(InvalidToken):
        await _service(store, jwt_cfg).validate(token)


@pytest.mark.asyncio
async def test_deleted_principal_loses_access(store, jwt_cfg) -> None:
    admin = store.add("admin", "correct-secret")
    svc = _service(store, jwt_cfg)
    issued = await svc.authenticate("admin", "correct-secret")
    assert await svc.validate(issued.token) == admin.id

    store.remove(admin.id)

    with pytest.raises(InvalidToken):
        await svc.validate(issued.token)


@pytest.mark.asyncio
async def test_non_admin_discriminator_fails(store, jwt_cfg) -> None:
    admin = store.add("admin", "correct-secret")
    token = issue_token(cfg=jwt_cfg, subject=str(admin.id), token_type="user").token

    with pytest.raises(InvalidToken):
        await _service(store, jwt_cfg).validate(token)


@pytest.mark.asyncio
async def test_non_uuid_subject_fails(store, jwt_cfg) -> None:
    token = issue_token(cfg=jwt_cfg, subject="not-a-uuid").token

    with pytest.raises(InvalidToken):
        await _service(store, jwt_cfg).validate(token)


@pytest.mark.asyncio
@pytest.mark.parametrize("token", [None, "", "garbage"])
async def test_malformed_token_fails_without_store_read(store, jwt_cfg, token) -> None:
    svc = _service(store, jwt_cfg)

    with pytest.raises(InvalidToken):
        await svc.validate(token)
    assert store.reads == 0


@pytest.mark.asyncio
async def test_unknown_subject_fails(store, jwt_cfg) -> None:
    token = issue_token(cfg=jwt_cfg, subject=str(uuid.uuid4())).token

    with pytest.raises(InvalidToken):
        await _service(store, jwt_cfg).validate(token)
