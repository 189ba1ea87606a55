"""Record vote use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from forum.application.usecase.base import BaseUseCase
from forum.domain.service import VoteService
from forum.domain.value import UserId, VoteTargetType


class RecordVoteRequest(BaseModel):
    """Record vote request."""

    user_id: str  # UUID string
    target_type: VoteTargetType
    target_id: str  # UUID string
    value: int = 1  # 1 (upvote) or -1 (downvote)


class RecordVoteResponse(BaseModel):
    """Record vote response."""

    vote_id: str
    target_type: VoteTargetType
    target_id: str
    value: int
    created_at: datetime


class RecordVoteUseCase(BaseUseCase[RecordVoteRequest, RecordVoteResponse]):
    """Use case for voting on a post or comment."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize record vote use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: RecordVoteRequest) -> RecordVoteResponse:
        """Execute record vote flow.

        Args:
            request: Record vote request

        Returns:
            Record vote response with vote details

        Raises:
            ValidationError: If the vote value is not 1 or -1
            NotFoundError: If the user or the target does not exist
            ConflictError: If the user already voted on the target
        """
        user_id = UserId(UUID(request.user_id))
        target_id = UUID(request.target_id)

        vote = await self.vote_service.record(
            user_id, target_id, request.target_type, request.value
        )

        return RecordVoteResponse(
            vote_id=str(vote.id),
            target_type=vote.target_type,
            target_id=str(vote.target_id),
            value=int(vote.value),
            created_at=vote.created_at,
        )
