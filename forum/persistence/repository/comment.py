"""PostgreSQL implementation of Comment repository."""

from typing import List, Optional, Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.model import Comment
from forum.domain.repository import CommentRepository
from forum.domain.value import CommentId, PostId, UserId
from forum.persistence.mappers import comment_to_dict, row_to_comment
from forum.persistence.repository.base import chunked, lock_rows, row_exists
from forum.persistence.tables import comments_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_comment(dict(row)) if row else None

    async def exists(self, comment_id: CommentId, for_share: bool = False) -> bool:
        """Check whether a comment exists."""
        return await row_exists(self.session, comments_table, comment_id, for_share)

    async def lock_for_delete(self, comment_ids: Sequence[CommentId]) -> None:
        """Lock comments that are about to be deleted."""
        await lock_rows(self.session, comments_table, comment_ids)

    async def find_by_post(self, post_id: PostId) -> List[Comment]:
        """Find all comments on a post, oldest first."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.post_id == post_id)
            .order_by(comments_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(dict(row)) for row in result.mappings().all()]

    async def find_ids_by_parents(
        self, parent_ids: Sequence[CommentId]
    ) -> List[CommentId]:
        """Find the IDs of the direct replies to any of the given comments."""
        if not parent_ids:
            return []

        stmt = select(comments_table.c.id).where(
            comments_table.c.parent_id.in_(parent_ids)
        )
        result = await self.session.execute(stmt)
        return [CommentId(row.id) for row in result.all()]

    async def find_ids_by_posts(self, post_ids: Sequence[PostId]) -> List[CommentId]:
        """Find the IDs of all comments on any of the given posts."""
        found: List[CommentId] = []
        for chunk in chunked(post_ids):
            stmt = select(comments_table.c.id).where(
                comments_table.c.post_id.in_(chunk)
            )
            result = await self.session.execute(stmt)
            found.extend(CommentId(row.id) for row in result.all())
        return found

    async def find_ids_by_author(self, author_id: UserId) -> List[CommentId]:
        """Find the IDs of all comments written by a user."""
        stmt = select(comments_table.c.id).where(
            comments_table.c.author_id == author_id
        )
        result = await self.session.execute(stmt)
        return [CommentId(row.id) for row in result.all()]

    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update)."""
        existing = await self.find_by_id(comment.id)

        comment_dict = comment_to_dict(comment)

        if existing:
            stmt = (
                comments_table.update()
                .where(comments_table.c.id == comment.id)
                .values(**comment_dict)
            )
            await self.session.execute(stmt)
        else:
            stmt = comments_table.insert().values(**comment_dict)
            await self.session.execute(stmt)

        await self.session.flush()
        return comment

    async def delete_by_ids(self, comment_ids: Sequence[CommentId]) -> int:
        """Delete the given comments.

        Postgres checks the self-referencing foreign key at the end of each
        statement, so a chunk holding parents and their replies deletes
        cleanly. Large sets are split into chunks deleted last-to-first:
        for ids in traversal order, replies always go before their parents.
        """
        if not comment_ids:
            return 0

        deleted = 0
        for chunk in reversed(list(chunked(comment_ids))):
            stmt = delete(comments_table).where(comments_table.c.id.in_(chunk))
            result = await self.session.execute(stmt)
            deleted += result.rowcount  # type: ignore[attr-defined]
        await self.session.flush()
        return deleted

    async def delete_by_posts(self, post_ids: Sequence[PostId]) -> int:
        """Delete every comment on the given posts."""
        deleted = 0
        for chunk in chunked(post_ids):
            # Replies and parents share a post, so each chunk is self-contained
            stmt = delete(comments_table).where(comments_table.c.post_id.in_(chunk))
            result = await self.session.execute(stmt)
            deleted += result.rowcount  # type: ignore[attr-defined]
        await self.session.flush()
        return deleted

    async def delete_by_author(self, author_id: UserId) -> int:
        """Delete every comment written by a user."""
        stmt = delete(comments_table).where(comments_table.c.author_id == author_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]
