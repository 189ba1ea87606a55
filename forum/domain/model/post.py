"""Post aggregate root."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import CommunityId, PostId, UserId


class Post(DomainModel):
    """Post aggregate root.

    ``community_id`` is None for posts whose community was removed
    together with its creator; the post itself survives.
    """

    id: PostId
    author_id: UserId
    community_id: Optional[CommunityId] = None
    title: str = Field(min_length=1, max_length=300)
    content: Optional[str] = Field(default=None, max_length=40000)
    score: int = 0
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
