"""PostgreSQL implementation shared by the reference repositories."""

from typing import Any, Callable, Dict, Generic, List, Optional, Sequence, TypeVar
from uuid import UUID

from sqlalchemy import Table, and_, delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.model.common import DomainModel
from forum.domain.value import UserId
from forum.persistence.repository.base import chunked

R = TypeVar("R", bound=DomainModel)


class PostgresReferenceRepository(Generic[R]):
    """Queries over a (user_id, target_type, target_id) reference table.

    Subclasses bind the table and the row mappers (as staticmethods) and
    mix in the matching domain repository interface.
    """

    table: Table
    row_to_entity: Callable[[Dict[str, Any]], R]
    entity_to_dict: Callable[[R], Dict[str, Any]]

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    def _to_entity(self, row: Any) -> R:
        return self.row_to_entity(dict(row))

    async def find(
        self, user_id: UserId, target_type: Any, target_id: UUID
    ) -> Optional[R]:
        """Find the reference a user holds on a target."""
        stmt = select(self.table).where(
            and_(
                self.table.c.user_id == user_id,
                self.table.c.target_type == target_type.value,
                self.table.c.target_id == target_id,
            )
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return self._to_entity(row) if row else None

    async def find_by_user(self, user_id: UserId) -> List[R]:
        """Find all references held by a user."""
        stmt = select(self.table).where(self.table.c.user_id == user_id)
        result = await self.session.execute(stmt)
        return [self._to_entity(row) for row in result.mappings().all()]

    async def find_by_target(self, target_type: Any, target_id: UUID) -> List[R]:
        """Find all references pointing at a target."""
        stmt = select(self.table).where(
            and_(
                self.table.c.target_type == target_type.value,
                self.table.c.target_id == target_id,
            )
        )
        result = await self.session.execute(stmt)
        return [self._to_entity(row) for row in result.mappings().all()]

    async def save(self, reference: R) -> R:
        """Save a new reference.

        Raises:
            IntegrityError: If the (user, target_type, target_id) key exists
        """
        stmt = insert(self.table).values(**self.entity_to_dict(reference))
        await self.session.execute(stmt)
        await self.session.flush()
        return reference

    async def delete(self, user_id: UserId, target_type: Any, target_id: UUID) -> bool:
        """Delete the reference a user holds on a target."""
        stmt = delete(self.table).where(
            and_(
                self.table.c.user_id == user_id,
                self.table.c.target_type == target_type.value,
                self.table.c.target_id == target_id,
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def delete_by_targets(
        self, target_type: Any, target_ids: Sequence[UUID]
    ) -> int:
        """Delete every reference pointing at any of the given targets."""
        if not target_ids:
            return 0

        deleted = 0
        for chunk in chunked(target_ids):
            stmt = delete(self.table).where(
                and_(
                    self.table.c.target_type == target_type.value,
                    self.table.c.target_id.in_(chunk),
                )
            )
            result = await self.session.execute(stmt)
            deleted += result.rowcount  # type: ignore[attr-defined]
        await self.session.flush()
        return deleted

    async def delete_by_user(self, user_id: UserId) -> int:
        """Delete every reference held by a user."""
        stmt = delete(self.table).where(self.table.c.user_id == user_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]
