"""Translation of database errors into domain errors.

Shared by the PostgreSQL and in-memory transaction managers, so both
stores surface the same domain error for the same violation.
"""

from typing import Optional

from sqlalchemy.exc import DBAPIError, IntegrityError, SQLAlchemyError

from forum.domain.error import InternalError, TransactionConflictError

# serialization_failure, deadlock_detected
CONFLICT_SQLSTATES = frozenset({"40001", "40P01"})

# foreign_key_violation: a row appeared under something being deleted (or a
# target vanished under a write) after this transaction read the table
FOREIGN_KEY_VIOLATION = "23503"

UNIQUE_VIOLATION = "23505"


def sqlstate_of(error: SQLAlchemyError) -> Optional[str]:
    orig = getattr(error, "orig", None)
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


def translate_db_error(error: SQLAlchemyError) -> Exception:
    """Map a database error onto the domain error callers should see.

    Unique violations are returned unchanged so that writers can turn them
    into conflicts on their own resource.

    Args:
        error: Error raised by SQLAlchemy

    Returns:
        The exception to raise in its place
    """
    sqlstate = sqlstate_of(error)
    if sqlstate in CONFLICT_SQLSTATES or sqlstate == FOREIGN_KEY_VIOLATION:
        return TransactionConflictError(
            f"Concurrent modification conflict (SQLSTATE {sqlstate})"
        )
    if isinstance(error, IntegrityError):
        return error
    if isinstance(error, DBAPIError):
        return InternalError(f"Database error (SQLSTATE {sqlstate})")
    return InternalError(f"Database error: {type(error).__name__}")
