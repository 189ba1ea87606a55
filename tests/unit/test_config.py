"""Unit tests for application settings."""

import pytest
from pydantic import ValidationError

from forum.config import DatabaseSettings


class TestIsolationLevel:
    """Tests for DatabaseSettings.isolation_level."""

    def test_defaults_to_serializable(self):
        database = DatabaseSettings()

        assert database.isolation_level == "SERIALIZABLE"
        assert database.guarantees_repeatable_read

    def test_read_committed_needs_revalidation(self):
        database = DatabaseSettings(isolation_level="READ COMMITTED")

        assert not database.guarantees_repeatable_read

    @pytest.mark.parametrize("level", ["REPEATABLE READ", "repeatable read"])
    def test_repeatable_read_is_rejected(self, level):
        with pytest.raises(ValidationError, match="use SERIALIZABLE"):
            DatabaseSettings(isolation_level=level)
