"""Unit tests for database error translation."""

from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError

from forum.domain.error import InternalError, TransactionConflictError
from forum.persistence.errors import translate_db_error


class FakeDriverError(Exception):
    """Stands in for an asyncpg exception carrying a SQLSTATE."""

    def __init__(self, sqlstate):
        super().__init__(f"driver error {sqlstate}")
        self.sqlstate = sqlstate


def driver_error(cls, sqlstate):
    return cls("DELETE FROM comments", {}, FakeDriverError(sqlstate))


class TestTranslateDbError:
    """Tests for translate_db_error."""

    def test_serialization_failure_is_conflict(self):
        translated = translate_db_error(driver_error(OperationalError, "40001"))

        assert isinstance(translated, TransactionConflictError)
        assert "40001" in str(translated)

    def test_deadlock_is_conflict(self):
        translated = translate_db_error(driver_error(OperationalError, "40P01"))

        assert isinstance(translated, TransactionConflictError)

    def test_foreign_key_violation_is_conflict(self):
        translated = translate_db_error(driver_error(IntegrityError, "23503"))

        assert isinstance(translated, TransactionConflictError)

    def test_unique_violation_passes_through(self):
        error = driver_error(IntegrityError, "23505")

        assert translate_db_error(error) is error

    def test_other_driver_errors_are_internal(self):
        translated = translate_db_error(driver_error(OperationalError, "08006"))

        assert isinstance(translated, InternalError)
        assert "08006" in str(translated)

    def test_reads_psycopg_style_pgcode(self):
        orig = Exception("serialization failure")
        orig.pgcode = "40001"

        translated = translate_db_error(OperationalError("SELECT 1", {}, orig))

        assert isinstance(translated, TransactionConflictError)

    def test_non_driver_errors_are_internal(self):
        translated = translate_db_error(SQLAlchemyError("pool exhausted"))

        assert isinstance(translated, InternalError)
