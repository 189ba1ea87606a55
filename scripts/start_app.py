#!/usr/bin/env python3
"""Serve the forum API under uvicorn, reporting startup failures to Logfire."""

import sys

import logfire
import uvicorn

from forum.config import Settings
from forum.util.logging import setup_logging
from forum.util.observability import configure_logfire


def main() -> int:
    settings = Settings()

    # Before importing the app, so container construction errors are traced
    setup_logging(settings)
    configure_logfire(settings)

    logfire.info(
        "Starting forum API",
        host=settings.host,
        port=settings.port,
        isolation_level=settings.database.isolation_level,
        max_conflict_retries=settings.cascade.max_conflict_retries,
    )
    try:
        uvicorn.run(
            "forum.interface.api.app:app",
            host=settings.host,
            port=settings.port,
            log_level="debug" if settings.debug else "info",
        )
    except Exception as e:
        logfire.error(
            "Forum API failed to start",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise
    return 0


if __name__ == "__main__":
    sys.exit(main())
