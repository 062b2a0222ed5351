"""
Shared slowapi limiter.

Lives outside app.main so routers can decorate endpoints without a
circular import.
"""
from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from app.core.config import settings


def get_rate_limit_key(request: Request) -> str:
    """
    Get the rate limit key for a request.

    Uses IP address, with fallback to X-Forwarded-For for proxied requests.
    """
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return get_remote_address(request)


limiter = Limiter(
    key_func=get_rate_limit_key,
    default_limits=["60/minute"],
    storage_uri=settings.REDIS_URL if settings.RATE_LIMIT_STORAGE == "redis" else "memory://",
    enabled=settings.RATE_LIMIT_ENABLED
)


def rate_limit_analytics(endpoint_func):
    """Decorator applying ANALYTICS_RATE_LIMIT to an analytics endpoint."""
    return limiter.limit(settings.ANALYTICS_RATE_LIMIT)(endpoint_func)
