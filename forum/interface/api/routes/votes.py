"""Vote routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, status

from forum.application.usecase.vote import (
    RecordVoteRequest,
    RecordVoteResponse,
    RecordVoteUseCase,
    RemoveVoteRequest,
    RemoveVoteResponse,
    RemoveVoteUseCase,
)
from forum.domain.error import DomainError
from forum.interface.api.errors import to_http_exception

router = APIRouter(prefix="/votes", tags=["votes"], route_class=DishkaRoute)


@router.post(
    "", response_model=RecordVoteResponse, status_code=status.HTTP_201_CREATED
)
async def record_vote(
    request: RecordVoteRequest,
    record_vote_use_case: FromDishka[RecordVoteUseCase],
) -> RecordVoteResponse:
    """Vote on a post or comment.

    Args:
        request: Voter, target and vote value
        record_vote_use_case: Record vote use case from DI

    Returns:
        Vote details

    Raises:
        HTTPException: 404 if the user or target does not exist, 409 if
            the user already voted on the target
    """
    try:
        return await record_vote_use_case.execute(request)
    except DomainError as e:
        raise to_http_exception(e)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )


@router.delete("", response_model=RemoveVoteResponse)
async def remove_vote(
    request: RemoveVoteRequest,
    remove_vote_use_case: FromDishka[RemoveVoteUseCase],
) -> RemoveVoteResponse:
    """Remove a vote from a post or comment.

    Args:
        request: Voter and target
        remove_vote_use_case: Remove vote use case from DI

    Returns:
        Success status

    Raises:
        HTTPException: 404 if the user holds no vote on the target
    """
    try:
        return await remove_vote_use_case.execute(request)
    except DomainError as e:
        raise to_http_exception(e)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
