"""Record follow use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from forum.application.usecase.base import BaseUseCase
from forum.domain.service import FollowService
from forum.domain.value import FollowTargetType, UserId


class RecordFollowRequest(BaseModel):
    """Record follow request."""

    user_id: str  # UUID string
    target_type: FollowTargetType
    target_id: str  # UUID string


class RecordFollowResponse(BaseModel):
    """Record follow response."""

    follow_id: str
    target_type: FollowTargetType
    target_id: str
    created_at: datetime


class RecordFollowUseCase(BaseUseCase[RecordFollowRequest, RecordFollowResponse]):
    """Use case for following a user or a community."""

    def __init__(self, follow_service: FollowService) -> None:
        """Initialize record follow use case.

        Args:
            follow_service: Follow domain service
        """
        self.follow_service = follow_service

    async def execute(self, request: RecordFollowRequest) -> RecordFollowResponse:
        """Execute record follow flow.

        Raises:
            ValidationError: If a user tries to follow themselves
            NotFoundError: If the user or the target does not exist
            ConflictError: If the user already follows the target
        """
        user_id = UserId(UUID(request.user_id))
        target_id = UUID(request.target_id)

        follow = await self.follow_service.record(
            user_id, target_id, request.target_type
        )

        return RecordFollowResponse(
            follow_id=str(follow.id),
            target_type=follow.target_type,
            target_id=str(follow.target_id),
            created_at=follow.created_at,
        )
