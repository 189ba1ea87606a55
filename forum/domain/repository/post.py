"""Post repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from forum.domain.model.post import Post
from forum.domain.value import CommunityId, PostId, UserId


class PostRepository(ABC):
    """Repository for Post aggregate.

    Defines the contract for post persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID.

        Args:
            post_id: The post's unique identifier

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def exists(self, post_id: PostId, for_share: bool = False) -> bool:
        """Check whether a post exists.

        With ``for_share`` the row stays key-share locked until the
        transaction ends, so it cannot be deleted under a write that
        references it.
        """
        pass

    @abstractmethod
    async def lock_for_delete(self, post_ids: Sequence[PostId]) -> None:
        """Lock posts that are about to be deleted.

        Writers that key-share lock one of them wait for this transaction.
        """
        pass

    @abstractmethod
    async def find_ids_by_author(self, author_id: UserId) -> List[PostId]:
        """Find the IDs of all posts written by a user.

        Args:
            author_id: The author's user ID

        Returns:
            List of post IDs
        """
        pass

    @abstractmethod
    async def save(self, post: Post) -> Post:
        """Save a post (create or update)."""
        pass

    @abstractmethod
    async def delete_by_author(self, author_id: UserId) -> int:
        """Delete all posts written by a user (bulk).

        Comments under the posts must already be gone.

        Args:
            author_id: The author's user ID

        Returns:
            Number of posts deleted
        """
        pass

    @abstractmethod
    async def detach_from_communities(
        self, community_ids: Sequence[CommunityId]
    ) -> int:
        """Clear ``community_id`` on every post in the given communities.

        Used before the communities themselves are removed. An empty
        sequence is a no-op.

        Args:
            community_ids: Communities about to be deleted

        Returns:
            Number of posts detached
        """
        pass
