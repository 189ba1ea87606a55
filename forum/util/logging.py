"""Standard-library logging setup for third-party output."""

import logging
import sys

from forum.config import Settings

# Libraries whose chatter logfire already covers
QUIET_LOGGERS = ("sqlalchemy.engine", "asyncio")


def setup_logging(settings: Settings) -> None:
    """Route uvicorn, SQLAlchemy and alembic logs to stdout.

    Application code logs through logfire; this only sets levels and the
    line format for libraries that use the logging module.

    Args:
        settings: Application settings
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        stream=sys.stdout,
        force=True,
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger("forum").setLevel(level)

    logging.getLogger(__name__).info(
        "Logging configured for %s at %s",
        settings.environment,
        logging.getLevelName(level),
    )
