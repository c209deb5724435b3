"""Logging setup for the Tasky API.

setup_logging() is called once from the application lifespan. uvicorn keeps
its own access/error loggers; everything under the ``src.tasky_api`` namespace
propagates to the root handler configured here.
"""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


# PUBLIC_INTERFACE
def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger with a single stream handler on stderr."""
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        resolved = logging.INFO

    root = logging.getLogger()
    root.setLevel(resolved)
    # Re-running setup (tests create many apps) must not stack handlers.
    for handler in root.handlers:
        if getattr(handler, "_tasky", False):
            handler.setLevel(resolved)
            return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.setLevel(resolved)
    handler._tasky = True  # type: ignore[attr-defined]
    root.addHandler(handler)
