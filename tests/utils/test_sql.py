# tests/utils/test_sql.py
"""
Tests for SQL utility functions.
"""

from finsight.utils.sql import contains_pattern, escape_like_pattern


class TestEscapeLikePattern:
    """Tests for escape_like_pattern function."""

    def test_escape_percent_wildcard(self):
        """Should escape % wildcard."""
        assert escape_like_pattern("test%value") == "test\\%value"

    def test_escape_underscore_wildcard(self):
        """Should escape _ wildcard."""
        assert escape_like_pattern("test_value") == "test\\_value"

    def test_escape_backslash(self):
        assert escape_like_pattern("test\\value") == "test\\\\value"

    def test_no_escape_needed(self):
        assert escape_like_pattern("AAPL") == "AAPL"

    def test_empty_string(self):
        assert escape_like_pattern("") == ""

    def test_escape_order_matters(self):
        """Backslash is escaped before wildcards, so \\% does not double escape."""
        assert escape_like_pattern("\\%") == "\\\\\\%"


class TestContainsPattern:

    def test_wraps_in_wildcards(self):
        assert contains_pattern("apple") == "%apple%"

    def test_strips_whitespace(self):
        assert contains_pattern("  tech  ") == "%tech%"

    def test_escapes_user_wildcards(self):
        assert contains_pattern("50%") == "%50\\%%"
