"""In-memory user repository for testing."""

from typing import Optional, Sequence

from forum.domain.model.user import User
from forum.domain.repository.user import UserRepository
from forum.domain.value import UserId

from .database import InMemoryDatabase, unique_violation


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self._db = database

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._db.users.get(user_id)

    async def exists(self, user_id: UserId, for_share: bool = False) -> bool:
        """Check whether a user exists."""
        return user_id in self._db.users

    async def lock_for_delete(self, user_ids: Sequence[UserId]) -> None:
        """No-op: transactions on the store never overlap."""

    async def save(self, user: User) -> User:
        """Save a user.

        Raises:
            IntegrityError: If another user already has the username
        """
        for other in self._db.users.values():
            if other.id != user.id and other.username == user.username:
                raise unique_violation("Duplicate username")

        self._db.users[user.id] = user
        return user

    async def delete(self, user_id: UserId) -> bool:
        """Delete a user."""
        if user_id not in self._db.users:
            return False
        self._db.check_user_unreferenced([user_id])
        del self._db.users[user_id]
        return True
