"""Follow use cases."""

from .record_follow import (
    RecordFollowRequest,
    RecordFollowResponse,
    RecordFollowUseCase,
)
from .remove_follow import (
    RemoveFollowRequest,
    RemoveFollowResponse,
    RemoveFollowUseCase,
)

__all__ = [
    "RecordFollowRequest",
    "RecordFollowResponse",
    "RecordFollowUseCase",
    "RemoveFollowRequest",
    "RemoveFollowResponse",
    "RemoveFollowUseCase",
]
