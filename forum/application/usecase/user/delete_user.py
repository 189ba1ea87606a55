"""Delete user use case."""

from uuid import UUID

from pydantic import BaseModel

from forum.application.usecase.base import BaseUseCase
from forum.domain.service import CascadeService
from forum.domain.value import UserId


class DeleteUserRequest(BaseModel):
    """Delete user request."""

    user_id: str  # UUID string


class DeleteUserResponse(BaseModel):
    """Delete user response."""

    user_id: str
    communities_deleted: int
    posts_deleted: int
    posts_detached: int  # Other users' posts left without a community
    comments_deleted: int
    votes_deleted: int
    follows_deleted: int
    attempts: int


class DeleteUserUseCase(BaseUseCase[DeleteUserRequest, DeleteUserResponse]):
    """Use case for deleting a user and everything that depends on them."""

    def __init__(self, cascade_service: CascadeService) -> None:
        """Initialize delete user use case.

        Args:
            cascade_service: Cascade deletion domain service
        """
        self.cascade_service = cascade_service

    async def execute(self, request: DeleteUserRequest) -> DeleteUserResponse:
        """Execute delete user flow.

        Args:
            request: Delete user request

        Returns:
            Counts of removed rows

        Raises:
            ValueError: If the user ID is not a UUID
            NotFoundError: If the user does not exist
            TransientError: If the deletion should be retried later
        """
        user_id = UserId(UUID(request.user_id))

        result = await self.cascade_service.delete_user(user_id)

        return DeleteUserResponse(
            user_id=str(result.root_id),
            communities_deleted=result.communities_deleted,
            posts_deleted=result.posts_deleted,
            posts_detached=result.posts_detached,
            comments_deleted=result.comments_deleted,
            votes_deleted=result.votes_deleted,
            follows_deleted=result.follows_deleted,
            attempts=result.attempts,
        )
