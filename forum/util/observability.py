"""Logfire setup for the forum backend.

Application code logs and traces through logfire directly:

    with logfire.span("cascade_service.delete_user", user_id=str(user_id)):
        ...
        logfire.info("Cascade committed", **result.model_dump(mode="json"))

This module configures the exporter once per process and attaches the
FastAPI and SQLAlchemy integrations, so a cascade's statements appear
nested under its request and service spans.
"""

from typing import Any

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from forum.config import Settings


def _should_send(settings: Settings) -> bool:
    # Explicit setting wins; otherwise send only when a token is configured
    if settings.observability.send_to_logfire is not None:
        return settings.observability.send_to_logfire
    return bool(settings.observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for the process.

    Set OBSERVABILITY__LOGFIRE_TOKEN to export to Logfire cloud, or
    OBSERVABILITY__SEND_TO_LOGFIRE to force either way. Without both, spans
    and logs go to the console only.

    Args:
        settings: Application settings
    """
    send_to_logfire = _should_send(settings)

    options: dict[str, Any] = {
        "service_name": "forum-backend",
        "service_version": settings.git_sha,
        "environment": settings.environment,
        "send_to_logfire": send_to_logfire,
        "console": logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    }
    if settings.observability.logfire_token:
        options["token"] = settings.observability.logfire_token

    logfire.configure(**options)

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        isolation_level=settings.database.isolation_level,
        max_conflict_retries=settings.cascade.max_conflict_retries,
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request, tagging spans with the route's path parameters.

    Args:
        app: FastAPI application instance
    """

    def _request_attributes(request, attributes):
        # DELETE /users/{user_id} spans carry user_id, and so on
        result = {**attributes, "method": request.method, "path": request.url.path}
        result.update(getattr(request, "path_params", None) or {})
        return result

    logfire.instrument_fastapi(app, request_attributes_mapper=_request_attributes)


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace every statement issued through the engine.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)
