"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from forum.domain.model.user import User
from forum.domain.value import UserId


class UserRepository(ABC):
    """Repository for User aggregate.

    Defines the contract for user persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def exists(self, user_id: UserId, for_share: bool = False) -> bool:
        """Check whether a user exists.

        Args:
            user_id: The user's unique identifier
            for_share: Also key-share lock the row until the transaction
                ends, so the user cannot be deleted under the caller

        Returns:
            True if the user exists
        """
        pass

    @abstractmethod
    async def lock_for_delete(self, user_ids: Sequence[UserId]) -> None:
        """Lock users that are about to be deleted.

        Writers that key-share lock one of them wait for this transaction.
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: The user to save

        Returns:
            The saved user
        """
        pass

    @abstractmethod
    async def delete(self, user_id: UserId) -> bool:
        """Delete a user (hard delete).

        Every record referencing the user must already be gone.

        Args:
            user_id: The user ID to delete

        Returns:
            True if a user was deleted
        """
        pass
