"""Comment routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, status

from forum.application.usecase.comment import (
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
)
from forum.domain.error import DomainError
from forum.interface.api.errors import to_http_exception

router = APIRouter(prefix="/comments", tags=["comments"], route_class=DishkaRoute)


@router.delete("/{comment_id}", response_model=DeleteCommentResponse)
async def delete_comment(
    comment_id: str,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
) -> DeleteCommentResponse:
    """Delete a comment, every reply beneath it and all votes on them.

    Args:
        comment_id: Comment UUID
        delete_comment_use_case: Delete comment use case from DI

    Returns:
        Counts of removed rows

    Raises:
        HTTPException: 404 if the comment does not exist, 503 if the
            deletion should be retried
    """
    try:
        request = DeleteCommentRequest(comment_id=comment_id)
        return await delete_comment_use_case.execute(request)
    except DomainError as e:
        raise to_http_exception(e)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
