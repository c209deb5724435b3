"""
Process entry point.

Usage:
    python -m src.tasky_api

Serves the application with uvicorn on HOST:PORT. The lifespan is required
("on"), so a failed database connection or index creation makes uvicorn exit
with a non-zero status before the socket accepts traffic.
"""
from __future__ import annotations

import uvicorn

from .logging_config import setup_logging
from .main import create_app
from .settings import get_settings


def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level)
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        lifespan="on",
        log_config=None,
    )


if __name__ == "__main__":
    main()
