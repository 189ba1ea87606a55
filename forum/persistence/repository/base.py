"""Helpers shared by the PostgreSQL repositories."""

from typing import Any, Iterator, Sequence, TypeVar

from sqlalchemy import Table, exists, select
from sqlalchemy.ext.asyncio import AsyncSession

T = TypeVar("T")

# asyncpg caps a statement at 32767 bind parameters
MAX_BIND_PARAMS = 5000


def chunked(items: Sequence[T], size: int | None = None) -> Iterator[Sequence[T]]:
    """Split a sequence into consecutive slices of at most ``size`` items.

    ``size`` defaults to MAX_BIND_PARAMS, read at call time.
    """
    size = size or MAX_BIND_PARAMS
    for start in range(0, len(items), size):
        yield items[start : start + size]


async def row_exists(
    session: AsyncSession, table: Table, row_id: Any, for_share: bool = False
) -> bool:
    """Check a row exists by primary key, optionally holding FOR KEY SHARE."""
    if not for_share:
        stmt = select(exists().where(table.c.id == row_id))
        return bool(await session.scalar(stmt))

    # Blocks while a cascade holds FOR UPDATE on the row; once it commits
    # the row is gone (READ COMMITTED) or the read fails with 40001
    locked = (
        select(table.c.id)
        .where(table.c.id == row_id)
        .with_for_update(read=True, key_share=True)
    )
    return await session.scalar(locked) is not None


async def lock_rows(
    session: AsyncSession, table: Table, row_ids: Sequence[Any]
) -> None:
    """Take FOR UPDATE on every listed row, in primary key order."""
    ordered = sorted(set(row_ids), key=str)
    for chunk in chunked(ordered):
        stmt = (
            select(table.c.id)
            .where(table.c.id.in_(chunk))
            .order_by(table.c.id)
            .with_for_update()
        )
        await session.execute(stmt)
