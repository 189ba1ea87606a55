"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from forum.domain.model.comment import Comment
from forum.domain.value import CommentId, PostId, UserId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Besides point lookups this exposes the bulk id selections and
    delete-where-in-set operations that cascades are built from. Bulk
    methods treat an empty input sequence as a no-op.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def exists(self, comment_id: CommentId, for_share: bool = False) -> bool:
        """Check whether a comment exists.

        With ``for_share`` the row stays key-share locked until the
        transaction ends, so it cannot be deleted under a write that
        references it.
        """
        pass

    @abstractmethod
    async def lock_for_delete(self, comment_ids: Sequence[CommentId]) -> None:
        """Lock comments that are about to be deleted.

        Writers that key-share lock one of them wait for this transaction.
        """
        pass

    @abstractmethod
    async def find_by_post(self, post_id: PostId) -> List[Comment]:
        """Find all comments on a post, oldest first."""
        pass

    @abstractmethod
    async def find_ids_by_parents(
        self, parent_ids: Sequence[CommentId]
    ) -> List[CommentId]:
        """Find the IDs of the direct replies to any of the given comments.

        One query for the whole set, so tree traversal costs one round
        trip per level rather than one per node.

        Args:
            parent_ids: Parent comment IDs

        Returns:
            IDs of comments whose parent_id is in ``parent_ids``
        """
        pass

    @abstractmethod
    async def find_ids_by_posts(self, post_ids: Sequence[PostId]) -> List[CommentId]:
        """Find the IDs of all comments on any of the given posts."""
        pass

    @abstractmethod
    async def find_ids_by_author(self, author_id: UserId) -> List[CommentId]:
        """Find the IDs of all comments written by a user."""
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update)."""
        pass

    @abstractmethod
    async def delete_by_ids(self, comment_ids: Sequence[CommentId]) -> int:
        """Delete the given comments in one statement.

        The set may contain parents together with their replies; replies
        outside the set must already be gone.

        Returns:
            Number of comments deleted
        """
        pass

    @abstractmethod
    async def delete_by_posts(self, post_ids: Sequence[PostId]) -> int:
        """Delete every comment on the given posts.

        Returns:
            Number of comments deleted
        """
        pass

    @abstractmethod
    async def delete_by_author(self, author_id: UserId) -> int:
        """Delete every comment written by a user.

        Replies to those comments written by others must already be gone.

        Returns:
            Number of comments deleted
        """
        pass
