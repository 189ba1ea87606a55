"""In-memory follow repository for testing."""

from forum.domain.model.follow import Follow
from forum.domain.repository.follow import FollowRepository

from .reference import InMemoryReferenceRepository


class InMemoryFollowRepository(InMemoryReferenceRepository[Follow], FollowRepository):
    """In-memory implementation of FollowRepository for testing."""

    table_name = "follows"
