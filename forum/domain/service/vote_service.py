"""Vote domain service."""

from datetime import datetime
from typing import Any, Sequence
from uuid import UUID, uuid4

from forum.domain.error import ValidationError
from forum.domain.model.vote import Vote
from forum.domain.repository import UnitOfWork, VoteRepository
from forum.domain.value import (
    CommentId,
    PostId,
    UserId,
    VoteId,
    VoteTargetType,
    VoteValue,
)

from .reference_service import ReferenceService


class VoteService(ReferenceService[Vote, VoteTargetType]):
    """Domain service for votes on posts and comments."""

    resource = "Vote"

    def repository(self, uow: UnitOfWork) -> VoteRepository:
        return uow.votes

    async def target_exists(
        self, uow: UnitOfWork, target_type: VoteTargetType, target_id: UUID
    ) -> bool:
        if target_type == VoteTargetType.POST:
            return await uow.posts.exists(PostId(target_id), for_share=True)
        return await uow.comments.exists(CommentId(target_id), for_share=True)

    async def lock_targets(
        self,
        uow: UnitOfWork,
        target_type: VoteTargetType,
        target_ids: Sequence[UUID],
    ) -> None:
        if target_type == VoteTargetType.POST:
            await uow.posts.lock_for_delete([PostId(i) for i in target_ids])
        else:
            await uow.comments.lock_for_delete([CommentId(i) for i in target_ids])

    def build(
        self,
        user_id: UserId,
        target_id: UUID,
        target_type: VoteTargetType,
        value: Any = None,
    ) -> Vote:
        """Build a vote; ``value`` defaults to an upvote.

        Raises:
            ValidationError: If value is not +1 or -1
        """
        try:
            vote_value = VoteValue.UP if value is None else VoteValue(value)
        except ValueError:
            raise ValidationError(f"Vote value must be 1 or -1, got {value!r}")

        return Vote(
            id=VoteId(uuid4()),
            user_id=user_id,
            target_type=target_type,
            target_id=target_id,
            value=vote_value,
            created_at=datetime.now(),
        )
