"""
moto_market.errors

Domain error taxonomy.

Responsibilities:
- Define the exceptions raised by the auth core and the upload registry.
- Keep auth failures deliberately coarse: callers learn that a check failed, never which one.
"""

from __future__ import annotations


class MarketError(Exception):
    pass


class InvalidCredentials(MarketError):
    """Username/secret pair rejected. Never says which half was wrong."""

    def __init__(self) -> None:
        super().__init__("Invalid credentials")


class InvalidToken(MarketError):
    """Malformed, badly signed, expired, wrong type, or subject gone. All look the same."""

    def __init__(self) -> None:
        super().__init__("Invalid token")


class RegistrationFailed(MarketError):
    def __init__(self, filename: str, reason: str) -> None:
        super().__init__(f"{filename}: {reason}")
        self.filename = filename
        self.reason = reason


class UploadRejected(MarketError):
    def __init__(self, filename: str, reason: str) -> None:
        super().__init__(f"{filename}: {reason}")
        self.filename = filename
        self.reason = reason


class NotFound(MarketError):
    pass


class UploadNotFound(NotFound):
    def __init__(self, upload_id: str) -> None:
        super().__init__(f"Upload not found: {upload_id}")
        self.upload_id = upload_id


# --- Module Notes -----------------------------------------------------------
# Routers translate these into HTTPException; nothing here knows about HTTP.
