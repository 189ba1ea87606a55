"""Base service class for domain services."""


class Service:
    """Base class for forum domain services.

    Services own the rules that span several tables: which rows depend on
    which, and in what order they may be written or removed. Repositories
    stay single-table.
    """
