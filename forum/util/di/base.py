"""Base classes for dependency injection providers."""

from typing import ClassVar, Literal

from dishka import Provider

# Components with a test double; the test container swaps them unless unmocked
Component = Literal["persistence"]


class ProviderBase(Provider):
    """Base for every forum provider.

    Mockable components declare an abstract base carrying
    ``__mock_component__`` with one production and one mock subclass;
    ``get_provider`` picks between them by ``__is_mock__``.

    Attributes:
        __mock_component__: Component this provider implements, or None
            for providers that are never mocked
        __is_mock__: Whether this subclass is the test double
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
