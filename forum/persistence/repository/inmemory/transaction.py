"""In-memory transaction manager for testing."""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator

import logfire
from sqlalchemy.exc import SQLAlchemyError

from forum.domain.repository import TransactionManager, UnitOfWork
from forum.persistence.errors import sqlstate_of, translate_db_error

from .comment import InMemoryCommentRepository
from .community import InMemoryCommunityRepository
from .database import InMemoryDatabase
from .follow import InMemoryFollowRepository
from .post import InMemoryPostRepository
from .user import InMemoryUserRepository
from .vote import InMemoryVoteRepository


class InMemoryTransactionManager(TransactionManager):
    """Serializes transactions over an ``InMemoryDatabase``.

    One transaction runs at a time. Every table is snapshotted when the
    transaction opens and restored if the block raises or is cancelled,
    which gives the same all-or-nothing outcome as a database rollback.
    Constraint violations are translated exactly as for PostgreSQL.
    """

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database
        self._lock = asyncio.Lock()

    def _build_unit_of_work(self) -> UnitOfWork:
        """Bind a fresh set of repositories to the store."""
        return UnitOfWork(
            users=InMemoryUserRepository(self.database),
            communities=InMemoryCommunityRepository(self.database),
            posts=InMemoryPostRepository(self.database),
            comments=InMemoryCommentRepository(self.database),
            votes=InMemoryVoteRepository(self.database),
            follows=InMemoryFollowRepository(self.database),
        )

    @asynccontextmanager
    async def begin(self) -> AsyncIterator[UnitOfWork]:
        """Open a transaction and yield its unit of work."""
        async with self._lock:
            snapshot = self.database.snapshot()
            try:
                yield self._build_unit_of_work()
            except SQLAlchemyError as e:
                self.database.restore(snapshot)
                translated = translate_db_error(e)
                if translated is e:
                    raise
                logfire.warn(
                    "Transaction rolled back",
                    error_type=type(e).__name__,
                    sqlstate=sqlstate_of(e),
                    translated_to=type(translated).__name__,
                )
                raise translated from e
            except BaseException:
                self.database.restore(snapshot)
                raise
