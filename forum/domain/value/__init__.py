"""Domain value objects for the forum."""

from forum.domain.value.identifiers import (
    CommentId,
    CommunityId,
    FollowId,
    PostId,
    UserId,
    VoteId,
)
from forum.domain.value.types import (
    FollowTargetType,
    Username,
    VoteTargetType,
    VoteValue,
)

__all__ = [
    # Identifiers
    "UserId",
    "CommunityId",
    "PostId",
    "CommentId",
    "VoteId",
    "FollowId",
    # Types
    "VoteTargetType",
    "FollowTargetType",
    "VoteValue",
    "Username",
]
