"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI

from forum.interface.api.routes import comments, follows, health, users, votes
from forum.util.di.container import create_container, setup_di
from forum.util.observability import instrument_fastapi

ROUTERS = (health, comments, users, votes, follows)


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Build the forum API around a DI container.

    Logfire is configured by the caller (scripts/start_app.py in
    production) before the app is built.

    Args:
        container: Container serving requests; tests pass one built on
            the in-memory store, otherwise the production container
    """
    forum_app = FastAPI(
        title="Forum API",
        description="Cascading deletion of users and comments, votes and follows",
        version="0.1.0",
    )
    instrument_fastapi(forum_app)
    setup_di(forum_app, container or create_container())

    for module in ROUTERS:
        forum_app.include_router(module.router)

    return forum_app


# Imported by uvicorn as forum.interface.api.app:app
app = create_app()
