"""In-memory community repository for testing."""

from typing import Optional, Sequence

from forum.domain.model.community import Community
from forum.domain.repository.community import CommunityRepository
from forum.domain.value import CommunityId, UserId

from .database import InMemoryDatabase, foreign_key_violation


class InMemoryCommunityRepository(CommunityRepository):
    """In-memory implementation of CommunityRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self._db = database

    async def find_by_id(self, community_id: CommunityId) -> Optional[Community]:
        """Find a community by ID."""
        return self._db.communities.get(community_id)

    async def exists(self, community_id: CommunityId, for_share: bool = False) -> bool:
        """Check whether a community exists."""
        return community_id in self._db.communities

    async def lock_for_delete(self, community_ids: Sequence[CommunityId]) -> None:
        """No-op: transactions on the store never overlap."""

    async def find_ids_by_creator(self, creator_id: UserId) -> list[CommunityId]:
        """Find the IDs of all communities created by a user."""
        return [
            c.id for c in self._db.communities.values() if c.creator_id == creator_id
        ]

    async def save(self, community: Community) -> Community:
        """Save a community."""
        if community.creator_id not in self._db.users:
            raise foreign_key_violation("communities.creator_id")
        self._db.communities[community.id] = community
        return community

    async def delete_by_creator(self, creator_id: UserId) -> int:
        """Delete all communities created by a user."""
        ids = await self.find_ids_by_creator(creator_id)
        self._db.check_communities_unreferenced(ids)
        for community_id in ids:
            del self._db.communities[community_id]
        return len(ids)
