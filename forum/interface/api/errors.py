"""Translation of domain errors into HTTP errors."""

import logfire
from fastapi import HTTPException, status

from forum.domain.error import (
    ConflictError,
    DomainError,
    NotFoundError,
    TransientError,
    ValidationError,
)


def to_http_exception(error: DomainError) -> HTTPException:
    """Map a domain error onto the HTTP error returned to the client.

    Transient failures carry ``Retry-After`` so that clients retry the
    whole request; nothing was applied when any of these is raised.

    Args:
        error: Domain error raised by a use case

    Returns:
        HTTPException to raise in its place
    """
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
    if isinstance(error, ConflictError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(error))
    if isinstance(error, ValidationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))
    if isinstance(error, TransientError):
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(error),
            headers={"Retry-After": "1"},
        )

    logfire.error(
        "Request failed", error=str(error), error_type=type(error).__name__
    )
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Internal error, nothing was changed",
    )
