"""Follow repository interface."""

from forum.domain.model.follow import Follow
from forum.domain.repository.reference import ReferenceRepository
from forum.domain.value import FollowTargetType


class FollowRepository(ReferenceRepository[Follow, FollowTargetType]):
    """Repository for Follow entity.

    Follows are unique per (user, target_type, target_id) and target users
    or communities.
    """
