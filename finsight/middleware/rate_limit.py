# finsight/middleware/rate_limit.py
"""
Rate limiting with slowapi.

Clients are keyed by IP. Forwarded headers are honoured only when the
direct peer is a trusted proxy (or TRUST_PROXY_HEADERS is set), so a
client cannot pick its own key by sending X-Forwarded-For.

Limits live in finsight/services/constants.py. Every route gets
RATE_LIMIT_DEFAULT; routes that do heavier work declare their own:

    @router.post("/refresh")
    @limiter.limit(RATE_LIMIT_SYNC)
    def refresh_prices(request: Request, ...):
        ...

Storage is in-memory, i.e. per process.
"""

import logging

from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address
from starlette.requests import Request
from starlette.responses import JSONResponse

from finsight.config import settings
from finsight.services.constants import (
    RATE_LIMIT_DEFAULT,
    RATE_LIMIT_WRITE,
    RATE_LIMIT_SYNC,
    RATE_LIMIT_HEALTH,
)

logger = logging.getLogger(__name__)

# Seconds suggested to the client in Retry-After
RETRY_AFTER_SECONDS = 60


def _get_client_ip(request: Request) -> str:
    peer = get_remote_address(request)
    if not (settings.trust_proxy_headers or peer in settings.trusted_proxy_ips):
        return peer

    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        # left-most entry is the originating client
        return forwarded_for.split(",")[0].strip()
    return request.headers.get("X-Real-IP") or peer


limiter = Limiter(
    key_func=_get_client_ip,
    default_limits=[RATE_LIMIT_DEFAULT],
    enabled=settings.rate_limit_enabled,
)


async def rate_limit_exceeded_handler(
    request: Request, exc: RateLimitExceeded
) -> JSONResponse:
    """Return 429 in the standard error body with a Retry-After header."""
    limit_info = str(exc.detail) if exc.detail else "Rate limit exceeded"
    logger.warning(f"Rate limit exceeded for {_get_client_ip(request)}: {limit_info}")

    return JSONResponse(
        status_code=429,
        content={
            "error": "RateLimitError",
            "message": f"Too many requests. {limit_info}",
            "details": {"retry_after": RETRY_AFTER_SECONDS},
        },
        headers={"Retry-After": str(RETRY_AFTER_SECONDS)},
    )


__all__ = [
    "limiter",
    "rate_limit_exceeded_handler",
    "SlowAPIMiddleware",
    "RATE_LIMIT_DEFAULT",
    "RATE_LIMIT_WRITE",
    "RATE_LIMIT_SYNC",
    "RATE_LIMIT_HEALTH",
]
