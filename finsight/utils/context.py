# finsight/utils/context.py
"""
Request-scoped context for FinSight.

Holds the correlation ID of the request being served. Backed by
contextvars, so each request (and each asyncio task or worker thread
started with a copied context) sees its own value.

Usage:
    from finsight.utils.context import get_correlation_id, set_correlation_id

    set_correlation_id("abc-123")     # middleware, at request start
    get_correlation_id()              # anywhere, returns "abc-123"
"""

from contextvars import ContextVar

_correlation_id_var: ContextVar[str | None] = ContextVar("correlation_id", default=None)


def get_correlation_id() -> str | None:
    """Return the current correlation ID, or None outside a request."""
    return _correlation_id_var.get()


def set_correlation_id(correlation_id: str) -> None:
    _correlation_id_var.set(correlation_id)


def clear_correlation_id() -> None:
    _correlation_id_var.set(None)
