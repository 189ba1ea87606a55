"""Async engine and session factory for PostgreSQL."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from forum.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the engine every transaction manager session is drawn from.

    The configured isolation level is the engine default; the transaction
    manager also pins it per connection, so a pooled connection that was
    handed out with other options never leaks a weaker level.

    Args:
        settings: Application settings with database configuration

    Returns:
        Configured async engine
    """
    database = settings.database
    return create_async_engine(
        database.url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=database.pool_size,
        max_overflow=database.max_overflow,
        isolation_level=database.isolation_level,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the session factory used by ``PostgresTransactionManager``.

    Repositories flush explicitly after each write, and domain models are
    built from row mappings, so neither autoflush nor expiry is wanted.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
