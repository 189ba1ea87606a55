"""PostgreSQL implementation of Post repository."""

from typing import List, Optional, Sequence

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.model import Post
from forum.domain.repository import PostRepository
from forum.domain.value import CommunityId, PostId, UserId
from forum.persistence.mappers import post_to_dict, row_to_post
from forum.persistence.repository.base import chunked, lock_rows, row_exists
from forum.persistence.tables import posts_table


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        stmt = select(posts_table).where(posts_table.c.id == post_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_post(dict(row)) if row else None

    async def exists(self, post_id: PostId, for_share: bool = False) -> bool:
        """Check whether a post exists."""
        return await row_exists(self.session, posts_table, post_id, for_share)

    async def lock_for_delete(self, post_ids: Sequence[PostId]) -> None:
        """Lock posts that are about to be deleted."""
        await lock_rows(self.session, posts_table, post_ids)

    async def find_ids_by_author(self, author_id: UserId) -> List[PostId]:
        """Find the IDs of all posts written by a user."""
        stmt = select(posts_table.c.id).where(posts_table.c.author_id == author_id)
        result = await self.session.execute(stmt)
        return [PostId(row.id) for row in result.all()]

    async def save(self, post: Post) -> Post:
        """Save a post (create or update)."""
        existing = await self.find_by_id(post.id)

        post_dict = post_to_dict(post)

        if existing:
            stmt = (
                posts_table.update()
                .where(posts_table.c.id == post.id)
                .values(**post_dict)
            )
            await self.session.execute(stmt)
        else:
            stmt = posts_table.insert().values(**post_dict)
            await self.session.execute(stmt)

        await self.session.flush()
        return post

    async def delete_by_author(self, author_id: UserId) -> int:
        """Delete all posts written by a user."""
        stmt = delete(posts_table).where(posts_table.c.author_id == author_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]

    async def detach_from_communities(
        self, community_ids: Sequence[CommunityId]
    ) -> int:
        """Clear ``community_id`` on every post in the given communities."""
        detached = 0
        for chunk in chunked(community_ids):
            stmt = (
                update(posts_table)
                .where(posts_table.c.community_id.in_(chunk))
                .values(community_id=None)
            )
            result = await self.session.execute(stmt)
            detached += result.rowcount  # type: ignore[attr-defined]
        await self.session.flush()
        return detached
