"""
tests.test_logging

Log-event scrubbing and logger setup.
"""

from __future__ import annotations

import logging

from moto_market.observability.logging import REDACTED, configure_logging, redact_secrets


def test_credential_fields_are_redacted() -> None:
    event = redact_secrets(
        None,
        "info",
        {"event": "admin_login", "username": "admin", "password": "hunter2", "token": "abc"},
    )

    assert event == {
        "event": "admin_login",
        "username": "admin",
        "password": REDACTED,
        "token": REDACTED,
    }


def test_configure_quiets_duplicate_access_log() -> None:
    configure_logging(service_name="moto-market", level="WARNING")

    assert logging.getLogger("uvicorn.access").level == logging.WARNING
