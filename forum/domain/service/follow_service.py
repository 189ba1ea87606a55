"""Follow domain service."""

from datetime import datetime
from typing import Any, Sequence
from uuid import UUID, uuid4

from forum.domain.error import ValidationError
from forum.domain.model.follow import Follow
from forum.domain.repository import FollowRepository, UnitOfWork
from forum.domain.value import CommunityId, FollowId, FollowTargetType, UserId

from .reference_service import ReferenceService


class FollowService(ReferenceService[Follow, FollowTargetType]):
    """Domain service for users following users or communities."""

    resource = "Follow"

    def repository(self, uow: UnitOfWork) -> FollowRepository:
        return uow.follows

    async def target_exists(
        self, uow: UnitOfWork, target_type: FollowTargetType, target_id: UUID
    ) -> bool:
        if target_type == FollowTargetType.USER:
            return await uow.users.exists(UserId(target_id), for_share=True)
        return await uow.communities.exists(CommunityId(target_id), for_share=True)

    async def lock_targets(
        self,
        uow: UnitOfWork,
        target_type: FollowTargetType,
        target_ids: Sequence[UUID],
    ) -> None:
        if target_type == FollowTargetType.USER:
            await uow.users.lock_for_delete([UserId(i) for i in target_ids])
        else:
            await uow.communities.lock_for_delete(
                [CommunityId(i) for i in target_ids]
            )

    def build(
        self,
        user_id: UserId,
        target_id: UUID,
        target_type: FollowTargetType,
        value: Any = None,
    ) -> Follow:
        """Build a follow.

        Raises:
            ValidationError: If a user tries to follow themselves
        """
        if target_type == FollowTargetType.USER and target_id == user_id:
            raise ValidationError("Users cannot follow themselves")

        return Follow(
            id=FollowId(uuid4()),
            user_id=user_id,
            target_type=target_type,
            target_id=target_id,
            created_at=datetime.now(),
        )
