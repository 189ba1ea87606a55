"""Infrastructure providers.

The production subclass is imported here so that ``get_provider`` finds it
through ``PersistenceProvider.__subclasses__()``; the mock one lives in the
test package.
"""

from .persistence import PersistenceProvider, ProdPersistenceProvider

__all__ = [
    "PersistenceProvider",
    "ProdPersistenceProvider",
]
