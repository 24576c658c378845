"""
tests.test_settings

Env-driven configuration and its startup guards.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from moto_market.settings import DEV_ADMIN_PASSWORD, DEV_JWT_SECRET, Settings


def test_prod_without_explicit_secret_is_rejected() -> None:
    with pytest.raises(ValidationError):
        Settings(env="prod")


@pytest.mark.parametrize("env", ["dev", "test", "prod"])
@pytest.mark.parametrize("secret", ["", "   "])
def test_blank_secret_is_rejected(env: str, secret: str) -> None:
    with pytest.raises(ValidationError):
        Settings(env=env, jwt_secret=secret, admin_password="pw")


def test_prod_with_explicit_secret_loads() -> None:
    s = Settings(env="prod", jwt_secret="a-real-production-secret-value-000000")
    assert s.token_ttl_hours == 24
    assert s.seed_admin_password() is None


def test_dev_falls_back_to_defaults() -> None:
    s = Settings(env="dev")
    assert s.jwt_secret == DEV_JWT_SECRET
    assert s.seed_admin_password() == DEV_ADMIN_PASSWORD
    assert s.max_upload_bytes == 5 * 1024 * 1024


def test_secrets_hidden_from_repr() -> None:
    s = Settings(env="dev", admin_password="hunter2-hunter2")
    assert DEV_JWT_SECRET not in repr(s)
    assert "hunter2-hunter2" not in repr(s)


def test_cors_origins_split() -> None:
    s = Settings(allowed_origins="https://a.example, https://b.example")
    assert s.cors_origins == ["https://a.example", "https://b.example"]
