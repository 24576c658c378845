"""
moto_market.auth.gate

Request gate for privileged operations.

Responsibilities:
- Pull the bearer credential out of a header mapping.
- Delegate to `TokenService.validate` and turn the outcome into Admit/Reject.
"""

from __future__ import annotations

from collections.abc import Mapping

from fastapi.security.utils import get_authorization_scheme_param

from moto_market.auth.models import Admit, Decision, Reject
from moto_market.auth.service import TokenService
from moto_market.errors import InvalidToken

BEARER_SCHEME = "Bearer"


def extract_bearer(headers: Mapping[str, str]) -> str | None:
    # Plain dicts are accepted too, so the header name is matched by hand.
    authorization = next(
        (value for name, value in headers.items() if name.lower() == "authorization"), None
    )
    scheme, token = get_authorization_scheme_param(authorization)
    # Scheme match is exact: "bearer abc" is rejected.
    if scheme != BEARER_SCHEME or not token or any(ch.isspace() for ch in token):
        return None
    return token


class AccessGate:
    """
    Stateless: holds only the token service it delegates to.
    Every rejection carries the same reason regardless of what failed.
    """

    def __init__(self, token_service: TokenService) -> None:
        self._tokens = token_service

    async def authorize(self, headers: Mapping[str, str]) -> Decision:
        token = extract_bearer(headers)
        if token is None:
            return Reject()
        try:
            principal_id = await self._tokens.validate(token)
        except InvalidToken:
            return Reject()
        return Admit(principal_id=principal_id)
