"""
moto_market.api.errors

Exception handlers for failures no route translated itself.

Responsibilities:
- Log unhandled exceptions with their traceback.
- Answer them with a JSON 500 body instead of a plain-text page.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR

from moto_market.observability.logging import get_logger
from moto_market.settings import Settings

log = get_logger(__name__)


def register_exception_handlers(app: FastAPI, *, settings: Settings) -> None:
    expose_message = settings.env == "dev"

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
        log.exception("unhandled_error", error_type=type(exc).__name__)
        content: dict[str, str] = {"detail": "Internal server error"}
        if expose_message:
            content["message"] = str(exc)
        return JSONResponse(status_code=HTTP_500_INTERNAL_SERVER_ERROR, content=content)


# --- Module Notes -----------------------------------------------------------
# HTTPException and request validation errors keep FastAPI's own JSON handlers, so
# unknown paths already answer `{"detail": "Not Found"}`.
