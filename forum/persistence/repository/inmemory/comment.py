"""In-memory comment repository for testing."""

from typing import Optional, Sequence

from forum.domain.model.comment import Comment
from forum.domain.repository.comment import CommentRepository
from forum.domain.value import CommentId, PostId, UserId

from .database import InMemoryDatabase, foreign_key_violation


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self._db = database

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._db.comments.get(comment_id)

    async def exists(self, comment_id: CommentId, for_share: bool = False) -> bool:
        """Check whether a comment exists."""
        return comment_id in self._db.comments

    async def lock_for_delete(self, comment_ids: Sequence[CommentId]) -> None:
        """No-op: transactions on the store never overlap."""

    async def find_by_post(self, post_id: PostId) -> list[Comment]:
        """Find all comments on a post, oldest first."""
        comments = [c for c in self._db.comments.values() if c.post_id == post_id]
        comments.sort(key=lambda c: c.created_at)
        return comments

    async def find_ids_by_parents(
        self, parent_ids: Sequence[CommentId]
    ) -> list[CommentId]:
        """Find the IDs of the direct replies to any of the given comments."""
        parents = set(parent_ids)
        return [c.id for c in self._db.comments.values() if c.parent_id in parents]

    async def find_ids_by_posts(self, post_ids: Sequence[PostId]) -> list[CommentId]:
        """Find the IDs of all comments on any of the given posts."""
        posts = set(post_ids)
        return [c.id for c in self._db.comments.values() if c.post_id in posts]

    async def find_ids_by_author(self, author_id: UserId) -> list[CommentId]:
        """Find the IDs of all comments written by a user."""
        return [c.id for c in self._db.comments.values() if c.author_id == author_id]

    async def save(self, comment: Comment) -> Comment:
        """Save a comment."""
        if comment.post_id not in self._db.posts:
            raise foreign_key_violation("comments.post_id")
        if comment.author_id not in self._db.users:
            raise foreign_key_violation("comments.author_id")
        if comment.parent_id and comment.parent_id not in self._db.comments:
            raise foreign_key_violation("comments.parent_id")
        self._db.comments[comment.id] = comment
        return comment

    async def delete_by_ids(self, comment_ids: Sequence[CommentId]) -> int:
        """Delete the given comments."""
        ids = [c for c in dict.fromkeys(comment_ids) if c in self._db.comments]
        return self._delete(ids)

    async def delete_by_posts(self, post_ids: Sequence[PostId]) -> int:
        """Delete every comment on the given posts."""
        return self._delete(await self.find_ids_by_posts(post_ids))

    async def delete_by_author(self, author_id: UserId) -> int:
        """Delete every comment written by a user."""
        return self._delete(await self.find_ids_by_author(author_id))

    def _delete(self, ids: list[CommentId]) -> int:
        self._db.check_comments_unreferenced(ids)
        for comment_id in ids:
            del self._db.comments[comment_id]
        return len(ids)
