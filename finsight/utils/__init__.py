# finsight/utils/__init__.py
"""
Cross-cutting utilities:
- logging: Logging setup with correlation ID support
- context: Request-scoped correlation ID
- sql: LIKE pattern helpers for search filters
"""

from finsight.utils.context import (
    get_correlation_id,
    set_correlation_id,
    clear_correlation_id,
)
from finsight.utils.logging import setup_logging
from finsight.utils.sql import escape_like_pattern, contains_pattern

__all__ = [
    "setup_logging",
    "get_correlation_id",
    "set_correlation_id",
    "clear_correlation_id",
    "escape_like_pattern",
    "contains_pattern",
]
