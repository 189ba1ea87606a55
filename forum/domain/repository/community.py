"""Community repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from forum.domain.model.community import Community
from forum.domain.value import CommunityId, UserId


class CommunityRepository(ABC):
    """Repository for Community entity."""

    @abstractmethod
    async def find_by_id(self, community_id: CommunityId) -> Optional[Community]:
        """Find a community by ID.

        Args:
            community_id: The community's unique identifier

        Returns:
            The community if found, None otherwise
        """
        pass

    @abstractmethod
    async def exists(self, community_id: CommunityId, for_share: bool = False) -> bool:
        """Check whether a community exists.

        With ``for_share`` the row stays key-share locked until the
        transaction ends, so it cannot be deleted under a write that
        references it.
        """
        pass

    @abstractmethod
    async def lock_for_delete(self, community_ids: Sequence[CommunityId]) -> None:
        """Lock communities that are about to be deleted.

        Writers that key-share lock one of them wait for this transaction.
        """
        pass

    @abstractmethod
    async def find_ids_by_creator(self, creator_id: UserId) -> List[CommunityId]:
        """Find the IDs of all communities created by a user.

        Args:
            creator_id: The creator's user ID

        Returns:
            List of community IDs
        """
        pass

    @abstractmethod
    async def save(self, community: Community) -> Community:
        """Save a community (create or update)."""
        pass

    @abstractmethod
    async def delete_by_creator(self, creator_id: UserId) -> int:
        """Delete all communities created by a user (bulk).

        Args:
            creator_id: The creator's user ID

        Returns:
            Number of communities deleted
        """
        pass
