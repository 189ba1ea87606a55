"""Dependency injection for the forum backend.

``PROVIDERS`` lists one entry per component. Concrete providers are used
as they are; a mockable component is listed by its base class and
resolved to the production or the mock subclass by ``get_provider``.
"""

from typing import Type

from forum.util.di.application import ProdApplicationProvider
from forum.util.di.base import Component, ProviderBase
from forum.util.di.core import ProdConfigProvider
from forum.util.di.domain import ProdDomainProvider
from forum.util.di.infrastructure import PersistenceProvider, ProdPersistenceProvider

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    # Mockable: production Postgres or the in-memory store
    PersistenceProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Resolve a ``PROVIDERS`` entry to the class to instantiate.

    Args:
        base: Entry of ``PROVIDERS``
        use_mock: Pick the mock subclass of a mockable component

    Returns:
        ``base`` itself for concrete providers, otherwise the subclass
        whose ``__is_mock__`` equals ``use_mock``

    Raises:
        ValueError: If a mockable component lacks the requested variant
    """
    variants = base.__subclasses__()
    if not variants:
        return base

    for variant in variants:
        if variant.__is_mock__ == use_mock:
            return variant

    kind = "mock" if use_mock else "production"
    component = base.__mock_component__ or base.__name__
    raise ValueError(f"No {kind} provider for {component}")


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "PersistenceProvider",
    "ProdPersistenceProvider",
]
