"""Remove vote use case."""

from uuid import UUID

from pydantic import BaseModel

from forum.application.usecase.base import BaseUseCase
from forum.domain.service import VoteService
from forum.domain.value import UserId, VoteTargetType


class RemoveVoteRequest(BaseModel):
    """Remove vote request."""

    user_id: str  # UUID string
    target_type: VoteTargetType
    target_id: str  # UUID string


class RemoveVoteResponse(BaseModel):
    """Remove vote response."""

    success: bool
    message: str


class RemoveVoteUseCase(BaseUseCase[RemoveVoteRequest, RemoveVoteResponse]):
    """Use case for removing a vote from a post or comment."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize remove vote use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: RemoveVoteRequest) -> RemoveVoteResponse:
        """Execute remove vote flow.

        Args:
            request: Remove vote request

        Returns:
            Remove vote response

        Raises:
            NotFoundError: If the user holds no vote on the target
        """
        user_id = UserId(UUID(request.user_id))
        target_id = UUID(request.target_id)

        await self.vote_service.remove(user_id, target_id, request.target_type)

        return RemoveVoteResponse(success=True, message="Vote removed successfully")
