"""Domain value objects for the forum.

Value objects are immutable and defined by their values, not identity.
"""

import re
from enum import Enum

from pydantic import field_validator

from forum.domain.value.common import RootValueObject


class VoteTargetType(str, Enum):
    """Type of entity that can be voted on."""

    POST = "post"
    COMMENT = "comment"


class FollowTargetType(str, Enum):
    """Type of entity that can be followed."""

    USER = "user"
    COMMUNITY = "community"


class VoteValue(int, Enum):
    """Direction of a vote."""

    UP = 1
    DOWN = -1


class Username(RootValueObject[str]):
    """Public username.

    3-32 characters: letters, digits, underscores, dots and hyphens.
    """

    @field_validator("root")
    @classmethod
    def validate_username(cls, v: str) -> str:
        """Validate username format."""
        if not re.match(r"^[A-Za-z0-9_.-]{3,32}$", v):
            raise ValueError(
                "Username must be 3-32 characters of letters, digits, '_', '.' or '-'"
            )
        return v
