"""Per-client rate limiting for the HTTP API."""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from inner_garden.config import Settings

logger = logging.getLogger(__name__)

TOO_MANY_REQUESTS = "Too many requests from this IP, please try again later."
TOO_MANY_ORDERS = "Too many order requests. Please try again in an hour."


def create_limiter(settings: Settings) -> Limiter:
    """Create an in-memory limiter keyed by client address.

    ``rate_limit_api`` is one budget shared by every route the middleware sees;
    routes decorated with their own limit are counted by that limit instead.
    """
    logger.info(
        "Rate limiting configured",
        extra={
            "enabled": settings.rate_limit_enabled,
            "api": settings.rate_limit_api,
            "order": settings.rate_limit_order,
        },
    )
    return Limiter(
        key_func=get_remote_address,
        application_limits=[settings.rate_limit_api],
        enabled=settings.rate_limit_enabled,
    )


def handle_rate_limit(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Render a rate limit rejection in the API error shape."""
    message = exc.limit.error_message if exc.limit else None
    logger.warning(
        "Rate limit exceeded",
        extra={"path": request.url.path, "client": get_remote_address(request)},
    )
    return JSONResponse(
        status_code=429,
        content={
            "success": False,
            "error": message if isinstance(message, str) else TOO_MANY_REQUESTS,
        },
    )
