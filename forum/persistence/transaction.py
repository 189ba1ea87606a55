"""PostgreSQL transaction manager.

Opens one session per transaction, pins the configured isolation level on
its connection and binds every repository of the unit of work to it.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

import logfire
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from forum.config import IsolationLevel
from forum.domain.repository import TransactionManager, UnitOfWork
from forum.persistence.errors import sqlstate_of, translate_db_error
from forum.persistence.repository import (
    PostgresCommentRepository,
    PostgresCommunityRepository,
    PostgresFollowRepository,
    PostgresPostRepository,
    PostgresUserRepository,
    PostgresVoteRepository,
)


class PostgresTransactionManager(TransactionManager):
    """TransactionManager backed by SQLAlchemy async sessions."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        isolation_level: IsolationLevel = "SERIALIZABLE",
    ) -> None:
        """Initialize transaction manager.

        Args:
            session_factory: Factory for creating database sessions
            isolation_level: Isolation level for every transaction
        """
        self.session_factory = session_factory
        self.isolation_level = isolation_level

    @asynccontextmanager
    async def begin(self) -> AsyncIterator[UnitOfWork]:
        """Open a transaction and yield its unit of work."""
        async with self.session_factory() as session:
            try:
                await session.connection(
                    execution_options={"isolation_level": self.isolation_level}
                )
                yield UnitOfWork(
                    users=PostgresUserRepository(session),
                    communities=PostgresCommunityRepository(session),
                    posts=PostgresPostRepository(session),
                    comments=PostgresCommentRepository(session),
                    votes=PostgresVoteRepository(session),
                    follows=PostgresFollowRepository(session),
                )
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
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
                await session.rollback()
                raise
