"""Follow entity."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import FollowId, FollowTargetType, UserId


class Follow(DomainModel):
    """A user following another user or a community.

    Like votes, follows reference their target polymorphically and carry
    no foreign key to it.
    """

    id: FollowId
    user_id: UserId
    target_type: FollowTargetType
    target_id: UUID  # UserId or CommunityId
    created_at: datetime = Field(default_factory=datetime.now)
