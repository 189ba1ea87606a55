"""In-memory repository implementations for testing."""

from .comment import InMemoryCommentRepository
from .community import InMemoryCommunityRepository
from .database import InMemoryDatabase
from .follow import InMemoryFollowRepository
from .post import InMemoryPostRepository
from .transaction import InMemoryTransactionManager
from .user import InMemoryUserRepository
from .vote import InMemoryVoteRepository

__all__ = [
    "InMemoryDatabase",
    "InMemoryTransactionManager",
    "InMemoryCommentRepository",
    "InMemoryCommunityRepository",
    "InMemoryFollowRepository",
    "InMemoryPostRepository",
    "InMemoryUserRepository",
    "InMemoryVoteRepository",
]
