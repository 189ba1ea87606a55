"""In-memory post repository for testing."""

from typing import Optional, Sequence

from forum.domain.model.post import Post
from forum.domain.repository.post import PostRepository
from forum.domain.value import CommunityId, PostId, UserId

from .database import InMemoryDatabase, foreign_key_violation


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self._db = database

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        return self._db.posts.get(post_id)

    async def exists(self, post_id: PostId, for_share: bool = False) -> bool:
        """Check whether a post exists."""
        return post_id in self._db.posts

    async def lock_for_delete(self, post_ids: Sequence[PostId]) -> None:
        """No-op: transactions on the store never overlap."""

    async def find_ids_by_author(self, author_id: UserId) -> list[PostId]:
        """Find the IDs of all posts written by a user."""
        return [p.id for p in self._db.posts.values() if p.author_id == author_id]

    async def save(self, post: Post) -> Post:
        """Save a post."""
        if post.author_id not in self._db.users:
            raise foreign_key_violation("posts.author_id")
        if post.community_id and post.community_id not in self._db.communities:
            raise foreign_key_violation("posts.community_id")
        self._db.posts[post.id] = post
        return post

    async def delete_by_author(self, author_id: UserId) -> int:
        """Delete all posts written by a user."""
        ids = await self.find_ids_by_author(author_id)
        self._db.check_posts_unreferenced(ids)
        for post_id in ids:
            del self._db.posts[post_id]
        return len(ids)

    async def detach_from_communities(
        self, community_ids: Sequence[CommunityId]
    ) -> int:
        """Clear ``community_id`` on every post in the given communities."""
        targets = set(community_ids)
        detached = 0
        for post in list(self._db.posts.values()):
            if post.community_id in targets:
                self._db.posts[post.id] = post.model_copy(update={"community_id": None})
                detached += 1
        return detached
