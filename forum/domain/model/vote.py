"""Vote entity.

Each user can cast one vote per item (post or comment).
"""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import UserId, VoteId, VoteTargetType, VoteValue


class Vote(DomainModel):
    """Vote entity.

    Business rules:
    - One vote per user per item (enforced by database unique constraint)
    - Polymorphic reference to the target (post or comment); there is no
      foreign key to the target, so votes are removed explicitly whenever
      their target is deleted
    """

    id: VoteId
    user_id: UserId
    target_type: VoteTargetType
    target_id: UUID  # PostId or CommentId (both are UUIDs)
    value: VoteValue = VoteValue.UP
    created_at: datetime = Field(default_factory=datetime.now)
