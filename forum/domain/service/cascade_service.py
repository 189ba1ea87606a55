"""Cascade deletion domain service.

Removing a comment or a user has to remove every record whose existence
depends on it, across several tables, without ever leaving a dangling
reference behind. Votes and follows have no foreign key to their target,
so nothing in the store does this for us; each cascade below spells out
its dependency closure and deletes it in an order that keeps every
foreign key satisfied at each statement.

Each cascade runs in one transaction. On a transaction conflict the whole
cascade is retried with a freshly resolved dependency set; any other
failure rolls back and surfaces as a single error.
"""

import asyncio
from dataclasses import asdict, dataclass
from typing import Awaitable, Callable, Literal, Sequence
from uuid import UUID

import logfire

from forum.domain.error import (
    CascadeTimeoutError,
    DomainError,
    InternalError,
    NotFoundError,
    TransactionConflictError,
)
from forum.domain.model import CascadeResult
from forum.domain.repository import TransactionManager, UnitOfWork
from forum.domain.value import CommentId, FollowTargetType, UserId, VoteTargetType

from .base import Service
from .comment_tree import CommentTreeResolver
from .follow_service import FollowService
from .vote_service import VoteService


@dataclass
class _Tally:
    """Running counts for one cascade attempt."""

    users_deleted: int = 0
    communities_deleted: int = 0
    posts_deleted: int = 0
    posts_detached: int = 0
    comments_deleted: int = 0
    votes_deleted: int = 0
    follows_deleted: int = 0


CascadeStep = Callable[[UnitOfWork], Awaitable[_Tally]]


class CascadeService(Service):
    """Domain service for comment and user cascade deletion."""

    def __init__(
        self,
        transaction_manager: TransactionManager,
        comment_tree: CommentTreeResolver,
        vote_service: VoteService,
        follow_service: FollowService,
        max_conflict_retries: int = 1,
        timeout_seconds: float | None = None,
        revalidate: bool = False,
    ) -> None:
        """Initialize cascade service.

        Args:
            transaction_manager: Opens the transaction each cascade runs in
            comment_tree: Resolves comment subtrees
            vote_service: Bulk vote removal
            follow_service: Bulk follow removal
            max_conflict_retries: Extra attempts after a transaction conflict
            timeout_seconds: Time limit per attempt (None for no limit)
            revalidate: Re-query resolved id sets right before deleting them;
                required when the store's isolation level is weaker than
                repeatable read
        """
        self.transaction_manager = transaction_manager
        self.comment_tree = comment_tree
        self.vote_service = vote_service
        self.follow_service = follow_service
        self.max_conflict_retries = max_conflict_retries
        self.timeout_seconds = timeout_seconds
        self.revalidate = revalidate

    async def delete_comment(self, comment_id: CommentId) -> CascadeResult:
        """Delete a comment, its whole reply subtree and all votes on them.

        Args:
            comment_id: Comment to delete

        Returns:
            Counts of deleted rows

        Raises:
            NotFoundError: If the comment does not exist
            TransientError: If the cascade kept conflicting or timed out
            InternalError: On any other failure (nothing was deleted)
        """
        with logfire.span("cascade_service.delete_comment", comment_id=str(comment_id)):

            async def step(uow: UnitOfWork) -> _Tally:
                return await self._delete_comment(uow, comment_id)

            return await self._run("comment", comment_id, step)

    async def delete_user(self, user_id: UserId) -> CascadeResult:
        """Delete a user and everything the user owns or is referenced by.

        Removes the user's posts (with every comment on them), the user's
        comments elsewhere (with the replies beneath them), the user's
        communities, the user's votes and follows, and every vote or follow
        that pointed at any of the removed entities. Posts by other users
        in the removed communities are kept and detached.

        Args:
            user_id: User to delete

        Returns:
            Counts of deleted rows

        Raises:
            NotFoundError: If the user does not exist
            TransientError: If the cascade kept conflicting or timed out
            InternalError: On any other failure (nothing was deleted)
        """
        with logfire.span("cascade_service.delete_user", user_id=str(user_id)):

            async def step(uow: UnitOfWork) -> _Tally:
                return await self._delete_user(uow, user_id)

            return await self._run("user", user_id, step)

    async def _run(
        self,
        root_type: Literal["comment", "user"],
        root_id: UUID,
        step: CascadeStep,
    ) -> CascadeResult:
        """Run a cascade with retry-on-conflict and error translation."""
        attempts = 0
        while True:
            attempts += 1
            try:
                tally = await self._attempt(f"delete_{root_type}", step)
            except TransactionConflictError as e:
                if attempts > self.max_conflict_retries:
                    logfire.error(
                        "Cascade conflict persisted",
                        root_type=root_type,
                        root_id=str(root_id),
                        attempts=attempts,
                        error=str(e),
                    )
                    raise
                logfire.warn(
                    "Cascade conflict, retrying",
                    root_type=root_type,
                    root_id=str(root_id),
                    attempt=attempts,
                )
                continue
            except DomainError:
                raise
            except Exception as e:
                logfire.error(
                    "Cascade failed and was rolled back",
                    root_type=root_type,
                    root_id=str(root_id),
                    error=str(e),
                    error_type=type(e).__name__,
                )
                raise InternalError(f"Failed to delete {root_type} {root_id}") from e

            result = CascadeResult(
                root_type=root_type,
                root_id=root_id,
                attempts=attempts,
                **asdict(tally),
            )
            logfire.info("Cascade committed", **result.model_dump(mode="json"))
            return result

    async def _attempt(self, operation: str, step: CascadeStep) -> _Tally:
        """Run one cascade attempt in its own transaction."""

        async def in_transaction() -> _Tally:
            async with self.transaction_manager.begin() as uow:
                return await step(uow)

        if self.timeout_seconds is None:
            return await in_transaction()

        try:
            # Cancellation unwinds the transaction block, which rolls back
            return await asyncio.wait_for(in_transaction(), self.timeout_seconds)
        except asyncio.TimeoutError:
            logfire.warn(
                "Cascade timed out", operation=operation, timeout=self.timeout_seconds
            )
            raise CascadeTimeoutError(operation, self.timeout_seconds)

    async def _delete_comment(self, uow: UnitOfWork, comment_id: CommentId) -> _Tally:
        tally = _Tally()

        if await uow.comments.find_by_id(comment_id) is None:
            logfire.warn("Cascade root comment not found", comment_id=str(comment_id))
            raise NotFoundError("Comment", str(comment_id))

        descendants = await self.comment_tree.resolve_descendants(
            uow.comments, comment_id
        )
        if self.revalidate:
            await self._ensure_unchanged(
                "comment subtree",
                descendants,
                await self.comment_tree.resolve_descendants(uow.comments, comment_id),
            )

        tally.votes_deleted += await self.vote_service.remove_all_for_targets(
            uow, [comment_id, *descendants], VoteTargetType.COMMENT
        )
        tally.comments_deleted += await uow.comments.delete_by_ids(descendants)
        tally.comments_deleted += await uow.comments.delete_by_ids([comment_id])
        return tally

    async def _delete_user(self, uow: UnitOfWork, user_id: UserId) -> _Tally:
        tally = _Tally()

        if await uow.users.find_by_id(user_id) is None:
            logfire.warn("Cascade root user not found", user_id=str(user_id))
            raise NotFoundError("User", str(user_id))

        # The user's own votes and follows
        tally.votes_deleted += await self.vote_service.remove_all_for_subject(
            uow, user_id
        )
        tally.follows_deleted += await self.follow_service.remove_all_for_subject(
            uow, user_id
        )

        # The user's posts, every comment on them, and the votes on both
        post_ids = await uow.posts.find_ids_by_author(user_id)
        post_comment_ids = await uow.comments.find_ids_by_posts(post_ids)

        tally.votes_deleted += await self.vote_service.remove_all_for_targets(
            uow, post_ids, VoteTargetType.POST
        )
        tally.votes_deleted += await self.vote_service.remove_all_for_targets(
            uow, post_comment_ids, VoteTargetType.COMMENT
        )
        if self.revalidate:
            await self._ensure_unchanged(
                "comments on the user's posts",
                post_comment_ids,
                await uow.comments.find_ids_by_posts(post_ids),
            )
        tally.comments_deleted += await uow.comments.delete_by_posts(post_ids)

        # The user's comments on other posts, and the reply threads under
        # them, which would otherwise point at a missing parent
        authored_ids = await uow.comments.find_ids_by_author(user_id)
        reply_ids = await self.comment_tree.resolve_descendants_of_many(
            uow.comments, authored_ids
        )
        if self.revalidate:
            await self._ensure_unchanged(
                "replies to the user's comments",
                reply_ids,
                await self.comment_tree.resolve_descendants_of_many(
                    uow.comments, authored_ids
                ),
            )
        tally.votes_deleted += await self.vote_service.remove_all_for_targets(
            uow, [*authored_ids, *reply_ids], VoteTargetType.COMMENT
        )
        tally.comments_deleted += await uow.comments.delete_by_ids(reply_ids)
        tally.comments_deleted += await uow.comments.delete_by_author(user_id)

        tally.posts_deleted += await uow.posts.delete_by_author(user_id)

        # The user's communities: drop their followers, keep other users'
        # posts but detach them
        community_ids = await uow.communities.find_ids_by_creator(user_id)
        tally.follows_deleted += await self.follow_service.remove_all_for_targets(
            uow, community_ids, FollowTargetType.COMMUNITY
        )
        tally.posts_detached += await uow.posts.detach_from_communities(community_ids)
        tally.communities_deleted += await uow.communities.delete_by_creator(user_id)

        # Followers of the user, then the user
        tally.follows_deleted += await self.follow_service.remove_all_for_targets(
            uow, [user_id], FollowTargetType.USER
        )
        if await uow.users.delete(user_id):
            tally.users_deleted += 1

        return tally

    async def _ensure_unchanged(
        self, label: str, resolved: Sequence[UUID], current: Sequence[UUID]
    ) -> None:
        """Abort the attempt if a resolved id set moved under us."""
        if set(resolved) != set(current):
            logfire.warn(
                "Dependency set changed during cascade",
                dependency=label,
                resolved=len(resolved),
                current=len(current),
            )
            raise TransactionConflictError(f"{label} changed during cascade")
