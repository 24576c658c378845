"""
moto_market.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Hide secrets from repr/logging (JWT secret, admin password).
- Refuse a blank signing secret, and a prod configuration that still carries the
  development one.
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEV_JWT_SECRET = "moto-market-dev-secret-change-me-in-prod"
DEV_ADMIN_PASSWORD = "moto-market-dev-admin"


class Settings(BaseSettings):
    """
    Env-driven configuration (prefix `MOTO_`).
    Defaults are safe for local dev only; prod must provide its own secret.
    """

    model_config = SettingsConfigDict(env_prefix="MOTO_", case_sensitive=False)

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "moto-market"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 3000

    # Auth
    jwt_alg: str = "HS256"
    jwt_issuer: str = "moto-market"
    jwt_audience: str = "moto-market-admin"
    jwt_secret: str = Field(default=DEV_JWT_SECRET, min_length=1, repr=False)
    token_ttl_hours: int = Field(default=24, ge=1)
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)

    # Default admin seeded on first start (dev/test fall back to DEV_ADMIN_PASSWORD).
    admin_username: str = "admin"
    admin_password: str | None = Field(default=None, repr=False)

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./moto_market.db"
    seed_demo_data: bool = False

    # Uploads
    max_upload_bytes: int = Field(default=5 * 1024 * 1024, ge=1)

    # Comma-separated list, "*" for any origin.
    allowed_origins: str = "*"

    @model_validator(mode="after")
    def _require_usable_secret(self) -> Settings:
        if not self.jwt_secret.strip():
            raise ValueError("MOTO_JWT_SECRET must not be blank")
        if self.env == "prod" and self.jwt_secret == DEV_JWT_SECRET:
            raise ValueError("MOTO_JWT_SECRET must be set explicitly when env=prod")
        return self

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]

    def seed_admin_password(self) -> str | None:
        if self.admin_password:
            return self.admin_password
        if self.env in ("dev", "test"):
            return DEV_ADMIN_PASSWORD
        return None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# A ValidationError raised here on prod misconfiguration surfaces at process start,
# before the app is created.
