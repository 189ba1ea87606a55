"""Production DI container."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from forum.util.di import PROVIDERS, get_provider


def create_container() -> AsyncContainer:
    """Build the production container: real settings, services and Postgres.

    FastapiProvider makes the current ``Request`` available to REQUEST-scoped
    providers.
    """
    providers = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    return make_async_container(*providers, FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Serve ``FromDishka`` route dependencies from ``container``.

    Args:
        app: FastAPI application
        container: Production or test container
    """
    setup_dishka(container, app)
