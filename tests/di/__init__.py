"""Test doubles for mockable DI components."""

from .container import build_test_container
from .persistence import MockPersistenceProvider

__all__ = [
    "build_test_container",
    "MockPersistenceProvider",
]
