"""Repository interfaces for the forum domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from forum.domain.repository.comment import CommentRepository
from forum.domain.repository.community import CommunityRepository
from forum.domain.repository.follow import FollowRepository
from forum.domain.repository.post import PostRepository
from forum.domain.repository.reference import ReferenceRepository
from forum.domain.repository.transaction import TransactionManager, UnitOfWork
from forum.domain.repository.user import UserRepository
from forum.domain.repository.vote import VoteRepository

__all__ = [
    "UserRepository",
    "CommunityRepository",
    "PostRepository",
    "CommentRepository",
    "ReferenceRepository",
    "VoteRepository",
    "FollowRepository",
    "TransactionManager",
    "UnitOfWork",
]
