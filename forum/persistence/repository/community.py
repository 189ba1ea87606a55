"""PostgreSQL implementation of Community repository."""

from typing import List, Optional, Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.model import Community
from forum.domain.repository import CommunityRepository
from forum.domain.value import CommunityId, UserId
from forum.persistence.mappers import community_to_dict, row_to_community
from forum.persistence.repository.base import lock_rows, row_exists
from forum.persistence.tables import communities_table


class PostgresCommunityRepository(CommunityRepository):
    """PostgreSQL implementation of CommunityRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, community_id: CommunityId) -> Optional[Community]:
        """Find a community by ID."""
        stmt = select(communities_table).where(communities_table.c.id == community_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_community(dict(row)) if row else None

    async def exists(self, community_id: CommunityId, for_share: bool = False) -> bool:
        """Check whether a community exists."""
        return await row_exists(
            self.session, communities_table, community_id, for_share
        )

    async def lock_for_delete(self, community_ids: Sequence[CommunityId]) -> None:
        """Lock communities that are about to be deleted."""
        await lock_rows(self.session, communities_table, community_ids)

    async def find_ids_by_creator(self, creator_id: UserId) -> List[CommunityId]:
        """Find the IDs of all communities created by a user."""
        stmt = select(communities_table.c.id).where(
            communities_table.c.creator_id == creator_id
        )
        result = await self.session.execute(stmt)
        return [CommunityId(row.id) for row in result.all()]

    async def save(self, community: Community) -> Community:
        """Save a community (create or update)."""
        existing = await self.find_by_id(community.id)

        community_dict = community_to_dict(community)

        if existing:
            stmt = (
                communities_table.update()
                .where(communities_table.c.id == community.id)
                .values(**community_dict)
            )
            await self.session.execute(stmt)
        else:
            stmt = communities_table.insert().values(**community_dict)
            await self.session.execute(stmt)

        await self.session.flush()
        return community

    async def delete_by_creator(self, creator_id: UserId) -> int:
        """Delete all communities created by a user."""
        stmt = delete(communities_table).where(
            communities_table.c.creator_id == creator_id
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]
