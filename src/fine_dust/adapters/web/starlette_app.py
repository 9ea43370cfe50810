"""Starlette application exposing the air-quality lookup over HTTP."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from fine_dust.adapters.app_context import ApplicationContext
from fine_dust.adapters.web.rate_limit_middleware import RateLimitMiddleware
from fine_dust.domain.errors import AirQualityError, InternalError
from fine_dust.domain.models.error_details import ErrorDetails

logger = logging.getLogger(__name__)

LATITUDE_PARAMS = ("latitude", "lat")
LONGITUDE_PARAMS = ("longitude", "lng")


def _query_value(request: Request, names: tuple[str, ...]) -> str | None:
    """First present query parameter among names."""
    for name in names:
        value = request.query_params.get(name)
        if value is not None:
            return value
    return None


def error_response(error: AirQualityError) -> JSONResponse:
    """Render a domain error as a JSON response.

    Client errors answer 400 with status "fail", everything else 500 with
    status "error".
    """
    details = ErrorDetails(
        status="fail" if error.is_client_error else "error",
        kind=error.kind,
        message=error.message,
    )
    return JSONResponse(details.model_dump(), status_code=400 if error.is_client_error else 500)


async def handle_air_quality_error(_request: Request, exc: AirQualityError) -> Response:
    """Exception handler for the AirQualityError hierarchy."""
    if exc.is_client_error:
        logger.info(f"Rejected lookup: {exc.kind}: {exc.message}")
    else:
        logger.warning(f"Lookup failed: {exc.kind}: {exc.message}")
    return error_response(exc)


async def handle_unexpected_error(_request: Request, exc: Exception) -> Response:
    """Exception handler turning anything unexpected into InternalError."""
    logger.error(f"Unexpected error while handling request: {exc}", exc_info=exc)
    return error_response(InternalError("Internal server error"))


def create_app(context: ApplicationContext | None = None) -> Starlette:
    """Build the ASGI application.

    Args:
        context: Application context to serve. Defaults to the process-wide one.

    Returns:
        Starlette app; usable as a uvicorn factory.
    """
    app_context = context if context is not None else ApplicationContext.get_instance()
    config = app_context.config

    async def air_quality(request: Request) -> Response:
        """GET /air-quality?latitude=..&longitude=.."""
        result = await app_context.service.get_air_quality(
            _query_value(request, LATITUDE_PARAMS),
            _query_value(request, LONGITUDE_PARAMS),
        )
        return JSONResponse(result.to_response())

    async def health(_request: Request) -> Response:
        """Health check endpoint for load balancers and monitoring."""
        return JSONResponse({"status": "ok"})

    @asynccontextmanager
    async def lifespan(_app: Starlette) -> AsyncIterator[None]:
        await app_context.start()
        try:
            yield
        finally:
            await app_context.stop()

    middleware = []
    if config.rate_limit_per_minute > 0:
        middleware.append(
            Middleware(RateLimitMiddleware, requests_per_minute=config.rate_limit_per_minute)
        )

    exception_handlers: dict[Any, Any] = {
        AirQualityError: handle_air_quality_error,
        Exception: handle_unexpected_error,
    }

    return Starlette(
        routes=[
            Route("/air-quality", air_quality, methods=["GET"]),
            Route("/health", health, methods=["GET"]),
        ],
        middleware=middleware,
        exception_handlers=exception_handlers,
        lifespan=lifespan,
    )
