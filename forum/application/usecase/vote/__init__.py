"""Vote use cases."""

from .record_vote import RecordVoteRequest, RecordVoteResponse, RecordVoteUseCase
from .remove_vote import RemoveVoteRequest, RemoveVoteResponse, RemoveVoteUseCase

__all__ = [
    "RecordVoteRequest",
    "RecordVoteResponse",
    "RecordVoteUseCase",
    "RemoveVoteRequest",
    "RemoveVoteResponse",
    "RemoveVoteUseCase",
]
