"""Unit of work and transaction manager interfaces.

Cascades must see and modify every table through one transaction. Instead
of relying on an ambient session, the transaction is an explicit object:
``TransactionManager.begin()`` opens it and yields a ``UnitOfWork`` whose
repositories are all bound to it.

Usage:
    async with transaction_manager.begin() as uow:
        post_ids = await uow.posts.find_ids_by_author(user_id)
        await uow.votes.delete_by_targets(VoteTargetType.POST, post_ids)
    # committed here; rolled back if the block raised
"""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass

from forum.domain.repository.comment import CommentRepository
from forum.domain.repository.community import CommunityRepository
from forum.domain.repository.follow import FollowRepository
from forum.domain.repository.post import PostRepository
from forum.domain.repository.user import UserRepository
from forum.domain.repository.vote import VoteRepository


@dataclass(frozen=True)
class UnitOfWork:
    """Repositories bound to a single open transaction."""

    users: UserRepository
    communities: CommunityRepository
    posts: PostRepository
    comments: CommentRepository
    votes: VoteRepository
    follows: FollowRepository


class TransactionManager(ABC):
    """Opens transactions against the store."""

    @abstractmethod
    def begin(self) -> AbstractAsyncContextManager[UnitOfWork]:
        """Open a transaction.

        The transaction commits when the block exits normally and rolls
        back when it raises (or is cancelled). Partial effects are never
        visible to other transactions.

        Raises:
            TransactionConflictError: If a concurrent transaction
                invalidated this one (on any statement or on commit)
            InternalError: On any other storage failure
        """
        pass
