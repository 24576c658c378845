"""
moto_market.auth.passwords

Salted password hashing (bcrypt).

Responsibilities:
- Hash cleartext secrets for provisioning.
- Verify a secret against a stored hash without raising on malformed input.
"""

from __future__ import annotations

import bcrypt


def hash_password(password: str, *, rounds: int = 12) -> str:
    if not password:
        raise ValueError("password must not be empty")
    hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds))
    return hashed.decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    if not password or not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash, or a secret bcrypt refuses (over 72 bytes).
        return False
