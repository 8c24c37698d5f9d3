# finsight/utils/sql.py
"""
SQL query construction helpers.

Usage:
    from finsight.utils.sql import contains_pattern

    query = query.where(Stock.name.ilike(contains_pattern(search), escape="\\\\"))
"""

LIKE_ESCAPE_CHAR = "\\"


def escape_like_pattern(value: str) -> str:
    """
    Escape LIKE wildcards so user input matches literally.

    The escape character itself is escaped first, then `%` and `_`.

    Example:
        >>> escape_like_pattern("50%_off")
        '50\\\\%\\\\_off'
    """
    return (
        value
        .replace(LIKE_ESCAPE_CHAR, LIKE_ESCAPE_CHAR * 2)
        .replace("%", LIKE_ESCAPE_CHAR + "%")
        .replace("_", LIKE_ESCAPE_CHAR + "_")
    )


def contains_pattern(value: str) -> str:
    """Build a `%value%` substring pattern with wildcards in value escaped."""
    return f"%{escape_like_pattern(value.strip())}%"
