"""
moto_market.api.routers.admin

Admin login and token verification endpoints.

Responsibilities:
- Exchange username/password for a signed admin token.
- Let a client check whether a stored token is still usable.
"""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from starlette.status import HTTP_401_UNAUTHORIZED

from moto_market.api.deps import token_service_from_app
from moto_market.auth.service import TokenService
from moto_market.errors import InvalidCredentials, InvalidToken

router = APIRouter(prefix="/api/admin", tags=["admin"])


class LoginRequest(BaseModel):
    username: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=1, max_length=256)


class LoginResponse(BaseModel):
    success: bool = True
    token: str
    expiry: str


class VerifyRequest(BaseModel):
    token: str = Field(min_length=1)


class VerifyResponse(BaseModel):
    valid: bool
    user_id: uuid.UUID | None = None


@router.post("/login", response_model=LoginResponse)
async def login(
    body: LoginRequest,
    tokens: TokenService = Depends(token_service_from_app),
) -> LoginResponse:
    try:
        issued = await tokens.authenticate(body.username, body.password)
    except InvalidCredentials as e:
        # Same answer for unknown user and wrong password.
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail=str(e)) from e
    return LoginResponse(token=issued.token, expiry=issued.expiry)


@router.post("/verify", response_model=VerifyResponse)
async def verify(
    body: VerifyRequest,
    tokens: TokenService = Depends(token_service_from_app),
) -> VerifyResponse:
    try:
        admin_id = await tokens.validate(body.token)
    except InvalidToken:
        return VerifyResponse(valid=False)
    return VerifyResponse(valid=True, user_id=admin_id)
