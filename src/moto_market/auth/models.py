"""
moto_market.auth.models

Auth domain models.

Responsibilities:
- Define the admin principal as seen by the auth core (read-only).
- Define the issued-token value and the gate's Admit/Reject decisions.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class AdminPrincipal:
    """
    An administrative user as stored in `admin_users`.
    """

    id: uuid.UUID
    username: str
    password_hash: str


@dataclass(frozen=True, slots=True)
class IssuedToken:
    token: str
    expires_at: datetime

    @property
    def expiry(self) -> str:
        return self.expires_at.isoformat()


@dataclass(frozen=True, slots=True)
class Admit:
    principal_id: uuid.UUID


@dataclass(frozen=True, slots=True)
class Reject:
    reason: str = "Unauthenticated"


Decision = Admit | Reject
