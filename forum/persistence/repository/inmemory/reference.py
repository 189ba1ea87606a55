"""In-memory implementation shared by the reference repositories."""

from typing import Any, Generic, Optional, Sequence, TypeVar
from uuid import UUID

from forum.domain.model import Follow, Vote
from forum.domain.value import UserId

from .database import InMemoryDatabase, foreign_key_violation, unique_violation

R = TypeVar("R", Vote, Follow)


class InMemoryReferenceRepository(Generic[R]):
    """Reference rows in one table of an ``InMemoryDatabase``.

    Subclasses name the table and mix in the matching domain repository
    interface.
    """

    table_name: str

    def __init__(self, database: InMemoryDatabase) -> None:
        self._db = database

    @property
    def _rows(self) -> dict[Any, R]:
        # Looked up on every access: a rollback replaces the table dicts
        return getattr(self._db, self.table_name)

    def _matches(
        self, ref: R, user_id: UserId, target_type: Any, target_id: UUID
    ) -> bool:
        return (
            ref.user_id == user_id
            and ref.target_type == target_type
            and ref.target_id == target_id
        )

    async def find(
        self, user_id: UserId, target_type: Any, target_id: UUID
    ) -> Optional[R]:
        """Find the reference a user holds on a target."""
        for ref in self._rows.values():
            if self._matches(ref, user_id, target_type, target_id):
                return ref
        return None

    async def find_by_user(self, user_id: UserId) -> list[R]:
        """Find all references held by a user."""
        return [r for r in self._rows.values() if r.user_id == user_id]

    async def find_by_target(self, target_type: Any, target_id: UUID) -> list[R]:
        """Find all references pointing at a target."""
        return [
            r
            for r in self._rows.values()
            if r.target_type == target_type and r.target_id == target_id
        ]

    async def save(self, reference: R) -> R:
        """Save a new reference.

        Raises:
            IntegrityError: If the user does not exist (SQLSTATE 23503) or
                the (user, target_type, target_id) key exists (23505)
        """
        if reference.user_id not in self._db.users:
            raise foreign_key_violation(f"{self.table_name}.user_id")

        existing = await self.find(
            reference.user_id, reference.target_type, reference.target_id
        )
        if existing:
            raise unique_violation(f"Duplicate {self.table_name}")

        self._rows[reference.id] = reference
        return reference

    async def delete(self, user_id: UserId, target_type: Any, target_id: UUID) -> bool:
        """Delete the reference a user holds on a target."""
        existing = await self.find(user_id, target_type, target_id)
        if existing is None:
            return False
        del self._rows[existing.id]
        return True

    async def delete_by_targets(
        self, target_type: Any, target_ids: Sequence[UUID]
    ) -> int:
        """Delete every reference pointing at any of the given targets."""
        targets = set(target_ids)
        doomed = [
            r.id
            for r in self._rows.values()
            if r.target_type == target_type and r.target_id in targets
        ]
        for ref_id in doomed:
            del self._rows[ref_id]
        return len(doomed)

    async def delete_by_user(self, user_id: UserId) -> int:
        """Delete every reference held by a user."""
        doomed = [r.id for r in self._rows.values() if r.user_id == user_id]
        for ref_id in doomed:
            del self._rows[ref_id]
        return len(doomed)
