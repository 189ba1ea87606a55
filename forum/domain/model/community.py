"""Community entity."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import CommunityId, UserId


class Community(DomainModel):
    """A named space that posts are published in and users can follow.

    Owned by its creator; deleted together with the creator.
    """

    id: CommunityId
    creator_id: UserId
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=2000)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
