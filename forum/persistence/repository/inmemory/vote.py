"""In-memory vote repository for testing."""

from forum.domain.model.vote import Vote
from forum.domain.repository.vote import VoteRepository

from .reference import InMemoryReferenceRepository


class InMemoryVoteRepository(InMemoryReferenceRepository[Vote], VoteRepository):
    """In-memory implementation of VoteRepository for testing."""

    table_name = "votes"
