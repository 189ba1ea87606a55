"""Repository interface shared by polymorphic references (votes, follows)."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Generic, List, Optional, Sequence, TypeVar
from uuid import UUID

from forum.domain.model.common import DomainModel
from forum.domain.value import UserId

R = TypeVar("R", bound=DomainModel)
T = TypeVar("T", bound=Enum)


class ReferenceRepository(ABC, Generic[R, T]):
    """Repository for references keyed by (user_id, target_type, target_id).

    ``R`` is the reference entity and ``T`` its target-type enum. The store
    enforces uniqueness of the key; it cannot enforce that the target
    exists, so callers check existence on write and remove references
    explicitly when targets are deleted.
    """

    @abstractmethod
    async def find(
        self, user_id: UserId, target_type: T, target_id: UUID
    ) -> Optional[R]:
        """Find the reference a user holds on a target.

        Args:
            user_id: The subject user's ID
            target_type: Type of the target
            target_id: ID of the target

        Returns:
            The reference if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_user(self, user_id: UserId) -> List[R]:
        """Find all references held by a user."""
        pass

    @abstractmethod
    async def find_by_target(self, target_type: T, target_id: UUID) -> List[R]:
        """Find all references pointing at a target."""
        pass

    @abstractmethod
    async def save(self, reference: R) -> R:
        """Save a new reference.

        Raises:
            IntegrityError: If the (user, target_type, target_id) key exists
        """
        pass

    @abstractmethod
    async def delete(self, user_id: UserId, target_type: T, target_id: UUID) -> bool:
        """Delete the reference a user holds on a target.

        Returns:
            True if a reference was deleted, False if none existed
        """
        pass

    @abstractmethod
    async def delete_by_targets(
        self, target_type: T, target_ids: Sequence[UUID]
    ) -> int:
        """Delete every reference pointing at any of the given targets.

        An empty sequence is a no-op.

        Returns:
            Number of references deleted
        """
        pass

    @abstractmethod
    async def delete_by_user(self, user_id: UserId) -> int:
        """Delete every reference held by a user.

        Returns:
            Number of references deleted
        """
        pass
