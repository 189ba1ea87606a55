"""Typed identifiers for forum entities.

All are UUIDs at runtime. Votes and follows store their target as a bare
UUID next to a target type, so only the subject side is typed there.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
CommunityId = NewType("CommunityId", UUID)
PostId = NewType("PostId", UUID)
CommentId = NewType("CommentId", UUID)
VoteId = NewType("VoteId", UUID)
FollowId = NewType("FollowId", UUID)
