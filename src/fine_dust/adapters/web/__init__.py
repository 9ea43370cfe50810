"""Web adapters."""

from fine_dust.adapters.web.rate_limit_middleware import RateLimitMiddleware
from fine_dust.adapters.web.starlette_app import create_app

__all__ = ["RateLimitMiddleware", "create_app"]
