"""Domain layer errors.

Callers decide what to do next from the error type alone:

- ``NotFoundError`` / ``ConflictError`` / ``ValidationError``: nothing
  happened, retry only with corrected input.
- ``TransientError`` (``TransactionConflictError``, ``CascadeTimeoutError``):
  nothing happened, the same request may succeed if retried.
- ``InternalError``: something is wrong with the store; nothing was applied.
"""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ConflictError(DomainError):
    """Raised when a resource already exists (e.g. a duplicate vote)."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} already exists: {identifier}")


class TransientError(DomainError):
    """Base for failures that may succeed when retried unchanged."""

    pass


class TransactionConflictError(TransientError):
    """A concurrent transaction invalidated this transaction's view."""

    def __init__(self, message: str = "Concurrent modification conflict"):
        super().__init__(message)


class CascadeTimeoutError(TransientError):
    """A cascade exceeded its time limit and was rolled back."""

    def __init__(self, operation: str, timeout_seconds: float):
        self.operation = operation
        self.timeout_seconds = timeout_seconds
        super().__init__(
            f"{operation} exceeded {timeout_seconds}s and was rolled back"
        )


class InternalError(DomainError):
    """Unexpected storage failure. The operation was rolled back."""

    pass
