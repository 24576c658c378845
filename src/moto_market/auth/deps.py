"""
moto_market.auth.deps

FastAPI dependency functions for authentication.

Responsibilities:
- Expose the process-wide AccessGate from app.state.
- Advertise the bearer scheme in the OpenAPI document.
- Convert a gate decision into either the admin id or a uniform 401.
"""

from __future__ import annotations

import uuid

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from starlette.status import HTTP_401_UNAUTHORIZED

from moto_market.auth.gate import AccessGate
from moto_market.auth.models import Decision, Reject

_bearer = HTTPBearer(auto_error=False)


def gate_from_app(request: Request) -> AccessGate:
    # Created on app startup in `moto_market.api.app.create_app`.
    return request.app.state.access_gate  # type: ignore[attr-defined]


async def require_admin(
    request: Request,
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    gate: AccessGate = Depends(gate_from_app),
) -> uuid.UUID:
    # `creds` is None for a missing or non-bearer header; the gate has the final say
    # and applies the stricter checks (exact scheme, single token).
    if creds is None:
        decision: Decision = Reject()
    else:
        decision = await gate.authorize(request.headers)
    if isinstance(decision, Reject):
        raise HTTPException(
            status_code=HTTP_401_UNAUTHORIZED,
            detail=decision.reason,
            headers={"WWW-Authenticate": "Bearer"},
        )
    request.state.admin_id = decision.principal_id
    return decision.principal_id


# --- Module Notes -----------------------------------------------------------
# Every create/update/delete route depends on `require_admin`; public reads do not.
# `_bearer` never errors on its own (auto_error=False) so every rejection keeps the
# same 401 body.
