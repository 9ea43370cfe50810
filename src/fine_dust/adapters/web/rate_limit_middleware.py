"""Per-client rate limiting for the HTTP API using throttled-py."""

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from throttled import RateLimiterType, Throttled, rate_limiter, store

from fine_dust.domain.models.error_details import ErrorDetails

logger = logging.getLogger(__name__)

DEFAULT_RETRY_AFTER_SECONDS = 60.0


def extract_client_ip(request: Request) -> str:
    """Identify the caller for rate limiting.

    The first address of X-Forwarded-For wins so clients behind a reverse
    proxy are limited individually; otherwise the peer address is used.
    """
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        client_ip = forwarded_for.split(",")[0].strip()
        if client_ip:
            return client_ip

    if request.client and request.client.host:
        return request.client.host

    logger.warning("Could not determine client IP, using 'unknown'")
    return "unknown"


def retry_after_seconds(result: Any) -> int:
    """Whole seconds a limited client should wait, at least one."""
    state = getattr(result, "state", None)
    retry_after = getattr(state, "retry_after", None)
    if not retry_after:
        retry_after = DEFAULT_RETRY_AFTER_SECONDS
    return max(1, int(round(float(retry_after))))


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Token-bucket limit on lookups per client IP."""

    def __init__(
        self,
        app: Callable,
        requests_per_minute: int = 100,
        exempt_paths: tuple[str, ...] = ("/health",),
    ) -> None:
        """Initialize rate limiting middleware.

        Args:
            app: The ASGI application to wrap.
            requests_per_minute: Lookups allowed per client per minute.
            exempt_paths: Paths that are never limited.
        """
        super().__init__(app)
        self.requests_per_minute = requests_per_minute
        self.exempt_paths = exempt_paths
        self.throttle = Throttled(
            using=RateLimiterType.TOKEN_BUCKET.value,
            quota=rate_limiter.per_min(requests_per_minute, burst=requests_per_minute),
            store=store.MemoryStore(),
        )
        logger.info(f"Rate limiting enabled: {requests_per_minute} requests per minute per IP")

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Reject the request with 429 once the client's bucket is empty."""
        if request.url.path in self.exempt_paths:
            return await call_next(request)

        client_ip = extract_client_ip(request)
        result = self.throttle.limit(f"air-quality:{client_ip}")
        if not result.limited:
            return await call_next(request)

        retry_after = retry_after_seconds(result)
        logger.warning(f"Rate limit exceeded for IP {client_ip}, retry after {retry_after}s")
        details = ErrorDetails(
            status="fail",
            kind="RateLimited",
            message="Rate limit exceeded. Please try again later.",
        )
        return JSONResponse(
            details.model_dump(),
            status_code=429,
            headers={"Retry-After": str(retry_after)},
        )
