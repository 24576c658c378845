"""
moto_market.api.__main__

Entrypoint for running the FastAPI application via `python -m moto_market.api`.

Responsibilities:
- Load settings (a prod config without a signing secret fails here).
- Create the app.
- Start uvicorn with structlog-compatible logging config.
"""

from __future__ import annotations

import uvicorn

from moto_market.api.app import create_app
from moto_market.settings import get_settings


def main() -> None:
    settings = get_settings()
    app = create_app(settings=settings)

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,  # structlog
    )


if __name__ == "__main__":
    main()
