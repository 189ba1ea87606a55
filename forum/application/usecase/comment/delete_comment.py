"""Delete comment use case."""

from uuid import UUID

from pydantic import BaseModel

from forum.application.usecase.base import BaseUseCase
from forum.domain.service import CascadeService
from forum.domain.value import CommentId


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: str  # UUID string


class DeleteCommentResponse(BaseModel):
    """Delete comment response."""

    comment_id: str
    comments_deleted: int  # The comment itself plus every reply beneath it
    votes_deleted: int
    attempts: int


class DeleteCommentUseCase(BaseUseCase[DeleteCommentRequest, DeleteCommentResponse]):
    """Use case for deleting a comment together with its reply subtree."""

    def __init__(self, cascade_service: CascadeService) -> None:
        """Initialize delete comment use case.

        Args:
            cascade_service: Cascade deletion domain service
        """
        self.cascade_service = cascade_service

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Execute delete comment flow.

        Args:
            request: Delete comment request

        Returns:
            Counts of removed rows

        Raises:
            ValueError: If the comment ID is not a UUID
            NotFoundError: If the comment does not exist
            TransientError: If the deletion should be retried later
        """
        comment_id = CommentId(UUID(request.comment_id))

        result = await self.cascade_service.delete_comment(comment_id)

        return DeleteCommentResponse(
            comment_id=str(result.root_id),
            comments_deleted=result.comments_deleted,
            votes_deleted=result.votes_deleted,
            attempts=result.attempts,
        )
