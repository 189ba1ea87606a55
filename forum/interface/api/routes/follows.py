"""Follow routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, status

from forum.application.usecase.follow import (
    RecordFollowRequest,
    RecordFollowResponse,
    RecordFollowUseCase,
    RemoveFollowRequest,
    RemoveFollowResponse,
    RemoveFollowUseCase,
)
from forum.domain.error import DomainError
from forum.interface.api.errors import to_http_exception

router = APIRouter(prefix="/follows", tags=["follows"], route_class=DishkaRoute)


@router.post(
    "", response_model=RecordFollowResponse, status_code=status.HTTP_201_CREATED
)
async def record_follow(
    request: RecordFollowRequest,
    record_follow_use_case: FromDishka[RecordFollowUseCase],
) -> RecordFollowResponse:
    """Follow a user or a community.

    Args:
        request: Follower and target
        record_follow_use_case: Record follow use case from DI

    Returns:
        Follow details

    Raises:
        HTTPException: 404 if the user or target does not exist, 409 if
            the user already follows the target
    """
    try:
        return await record_follow_use_case.execute(request)
    except DomainError as e:
        raise to_http_exception(e)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )


@router.delete("", response_model=RemoveFollowResponse)
async def remove_follow(
    request: RemoveFollowRequest,
    remove_follow_use_case: FromDishka[RemoveFollowUseCase],
) -> RemoveFollowResponse:
    """Unfollow a user or a community.

    Args:
        request: Follower and target
        remove_follow_use_case: Remove follow use case from DI

    Returns:
        Success status

    Raises:
        HTTPException: 404 if the user does not follow the target
    """
    try:
        return await remove_follow_use_case.execute(request)
    except DomainError as e:
        raise to_http_exception(e)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
