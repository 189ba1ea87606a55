"""User routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, status

from forum.application.usecase.user import (
    DeleteUserRequest,
    DeleteUserResponse,
    DeleteUserUseCase,
)
from forum.domain.error import DomainError
from forum.interface.api.errors import to_http_exception

router = APIRouter(prefix="/users", tags=["users"], route_class=DishkaRoute)


@router.delete("/{user_id}", response_model=DeleteUserResponse)
async def delete_user(
    user_id: str,
    delete_user_use_case: FromDishka[DeleteUserUseCase],
) -> DeleteUserResponse:
    """Delete a user account and everything that depends on it.

    Args:
        user_id: User UUID
        delete_user_use_case: Delete user use case from DI

    Returns:
        Counts of removed rows

    Raises:
        HTTPException: 404 if the user does not exist, 503 if the
            deletion should be retried
    """
    try:
        request = DeleteUserRequest(user_id=user_id)
        return await delete_user_use_case.execute(request)
    except DomainError as e:
        raise to_http_exception(e)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
