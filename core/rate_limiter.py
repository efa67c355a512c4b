"""Rate limiting for the trip planner API.

SlowAPI keeps counters in memory by default, which only holds for a single
instance. Point RATE_LIMIT_STORAGE_URI at Redis when running several.

Planning a trip builds a graph and runs one search per candidate pair, so it
gets a much tighter limit than the health probe.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from fastapi import Request
from fastapi.responses import JSONResponse

from core.config import settings


def get_client_identifier(request: Request) -> str:
    """Get client identifier for rate limiting.

    Uses X-Forwarded-For header if behind a proxy, otherwise remote address.
    """
    # First address is the original client
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()

    return get_remote_address(request)


limiter = Limiter(
    key_func=get_client_identifier,
    default_limits=[settings.RATE_LIMIT_DEFAULT],
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    strategy="fixed-window",
    enabled=settings.RATE_LIMIT_ENABLED,
)


class RateLimits:
    """Per-endpoint limits."""

    ROUTE_PLANNER = settings.RATE_LIMIT_ROUTE_PLANNER
    HEALTH = "1000/minute"


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """429 in the same envelope as a failed planning request."""
    retry_after = getattr(exc, "retry_after", 60)
    return JSONResponse(
        status_code=429,
        content={
            "success": False,
            "message": f"Rate limit exceeded: {exc.detail}",
            "unmatched": [],
            "routes": [],
        },
        headers={"Retry-After": str(retry_after)},
    )
