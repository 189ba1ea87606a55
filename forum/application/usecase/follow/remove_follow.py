"""Remove follow use case."""

from uuid import UUID

from pydantic import BaseModel

from forum.application.usecase.base import BaseUseCase
from forum.domain.service import FollowService
from forum.domain.value import FollowTargetType, UserId


class RemoveFollowRequest(BaseModel):
    """Remove follow request."""

    user_id: str  # UUID string
    target_type: FollowTargetType
    target_id: str  # UUID string


class RemoveFollowResponse(BaseModel):
    """Remove follow response."""

    success: bool
    message: str


class RemoveFollowUseCase(BaseUseCase[RemoveFollowRequest, RemoveFollowResponse]):
    """Use case for unfollowing a user or a community."""

    def __init__(self, follow_service: FollowService) -> None:
        self.follow_service = follow_service

    async def execute(self, request: RemoveFollowRequest) -> RemoveFollowResponse:
        """Execute remove follow flow.

        Raises:
            NotFoundError: If the user does not follow the target
        """
        user_id = UserId(UUID(request.user_id))
        target_id = UUID(request.target_id)

        await self.follow_service.remove(user_id, target_id, request.target_type)

        return RemoveFollowResponse(success=True, message="Unfollowed successfully")
