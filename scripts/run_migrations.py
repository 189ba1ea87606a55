#!/usr/bin/env python3
"""Upgrade the forum schema, reporting failures to Logfire.

Usage: run_migrations.py [REVISION]   (defaults to "head")
"""

import sys
import logfire
from alembic import command
from alembic.config import Config

from forum.config import Settings
from forum.util.logging import setup_logging
from forum.util.observability import configure_logfire


def main(argv: list[str]) -> int:
    """Upgrade to the requested revision against DATABASE__URL."""
    settings = Settings()
    revision = argv[1] if len(argv) > 1 else "head"

    setup_logging(settings)
    configure_logfire(settings)

    alembic_cfg = Config("alembic.ini")
    # configparser interpolation: escape percent-encoded characters in the URL
    alembic_cfg.set_main_option(
        "sqlalchemy.url", settings.database_url.replace("%", "%%")
    )

    with logfire.span("migrations.upgrade", revision=revision):
        try:
            command.upgrade(alembic_cfg, revision)
        except Exception as e:
            logfire.error(
                "Database migration failed",
                revision=revision,
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            # Fail the deploy rather than start on a half-migrated schema
            raise

    logfire.info("Database migrations completed", revision=revision)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
