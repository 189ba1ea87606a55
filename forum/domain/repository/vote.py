"""Vote repository interface."""

from forum.domain.model.vote import Vote
from forum.domain.repository.reference import ReferenceRepository
from forum.domain.value import VoteTargetType


class VoteRepository(ReferenceRepository[Vote, VoteTargetType]):
    """Repository for Vote entity.

    Votes are unique per (user, target_type, target_id) and target posts
    or comments.
    """
