"""User aggregate root.

Users own posts, comments and communities, and are the subject of
votes and follows. Removing a user cascades through all of them.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import UserId, Username


class User(DomainModel):
    """User aggregate root."""

    id: UserId
    username: Username
    email: Optional[str] = None
    bio: Optional[str] = Field(default=None, max_length=500)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
