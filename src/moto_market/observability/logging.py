"""
moto_market.observability.logging

Structured logging setup.

Responsibilities:
- Render every event as one JSON line on stdout, stamped with the service name.
- Scrub credential-bearing fields before rendering.
- Keep third-party access logs from duplicating the request middleware's line.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

REDACTED = "[redacted]"

# Event keys whose values must never reach a log sink.
SENSITIVE_KEYS = frozenset(
    {"password", "password_hash", "secret", "jwt_secret", "token", "authorization"}
)

# Handled by RequestContextMiddleware ("request" events) or too chatty at INFO.
_QUIET_LOGGERS = {"uvicorn.access": logging.WARNING, "aiosqlite": logging.WARNING}


def configure_logging(*, service_name: str, level: str) -> None:
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )
    for name, quiet_level in _QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            _add_service_name(service_name),
            redact_secrets,
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def _add_service_name(service_name: str):
    def processor(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("service", service_name)
        return event_dict

    return processor


def redact_secrets(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    for key in SENSITIVE_KEYS.intersection(event_dict):
        event_dict[key] = REDACTED
    return event_dict


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
