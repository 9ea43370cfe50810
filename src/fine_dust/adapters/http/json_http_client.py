"""JSON-over-HTTP client shared by the upstream adapters.

Applies the per-request timeout, bounded retry with exponential backoff and the
per-API throttle, and turns transport failures into domain errors.
"""

import asyncio
import contextlib
import logging
from typing import TYPE_CHECKING, Any

import aiohttp

from fine_dust.adapters.api_request_logger import log_api_request
from fine_dust.adapters.api_throttle import ApiThrottle
from fine_dust.domain.errors import UpstreamError, UpstreamTimeout

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientResponse, ClientSession

RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}


def is_retryable(error: Exception) -> bool:
    """Whether a failed request is worth another attempt."""
    if isinstance(error, UpstreamTimeout):
        return True
    if isinstance(error, UpstreamError):
        return error.status_code is None or error.status_code in RETRYABLE_STATUS_CODES
    return False


class JsonHttpClient:
    """GET requests returning decoded JSON, with timeout, retries and throttling."""

    def __init__(
        self,
        api_name: str,
        session: "ClientSession | None",
        timeout_seconds: float = 8.0,
        max_retries: int = 2,
        retry_backoff_seconds: float = 0.5,
        throttle: ApiThrottle | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            api_name: Name of the upstream API, used in logs and error messages.
            session: aiohttp session owned by the application context.
            timeout_seconds: Total timeout of a single attempt.
            max_retries: Additional attempts after the first for transient failures.
            retry_backoff_seconds: Delay before the first retry, doubled per retry.
            throttle: Optional shared throttle for this API.
        """
        self.api_name = api_name
        self._session = session
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._timeout_seconds = timeout_seconds
        self._max_retries = max_retries
        self._retry_backoff_seconds = retry_backoff_seconds
        self._throttle = throttle

    async def _log_error_response(self, response: "ClientResponse", url: str) -> None:
        """Log error response details."""
        error_text = await response.text()
        error_body = error_text[:300] if error_text else "(empty response body)"
        content_type = response.headers.get("Content-Type", "unknown")
        logger.warning(
            f"{self.api_name} returned status {response.status} for {url}: "
            f"{error_body} (Content-Type: {content_type})"
        )

    async def _decode_json(self, response: "ClientResponse", url: str) -> Any:
        """Decode the body as JSON regardless of the declared content type."""
        try:
            return await response.json(content_type=None)
        except ValueError as e:
            await self._log_error_response(response, url)
            raise UpstreamError(
                f"{self.api_name} returned a non-JSON response", status_code=response.status
            ) from e

    async def _attempt(self, url: str, params: dict[str, Any] | None) -> Any:
        """Perform one request. Raises domain errors on failure."""
        if self._session is None:
            raise UpstreamError(f"{self.api_name} client has no HTTP session")

        throttle = self._throttle if self._throttle is not None else contextlib.nullcontext()
        try:
            async with throttle:
                async with self._session.get(url, params=params, timeout=self._timeout) as response:
                    if response.status != 200:
                        await self._log_error_response(response, url)
                        raise UpstreamError(
                            f"{self.api_name} returned HTTP {response.status}",
                            status_code=response.status,
                        )
                    return await self._decode_json(response, url)
        except asyncio.TimeoutError as e:
            raise UpstreamTimeout(
                f"{self.api_name} did not respond within {self._timeout_seconds:g}s"
            ) from e
        except aiohttp.ClientError as e:
            raise UpstreamError(f"{self.api_name} request failed: {e}") from e

    async def get_json(self, url: str, params: dict[str, Any] | None = None) -> Any:
        """GET a URL and return the decoded JSON body.

        Args:
            url: Request URL.
            params: Query parameters.

        Returns:
            Decoded JSON.

        Raises:
            UpstreamTimeout: When the last attempt timed out.
            UpstreamError: On HTTP errors, connection errors or non-JSON bodies.
        """
        attempt = 1
        while True:
            log_api_request("GET", url, params, attempt=attempt)
            try:
                return await self._attempt(url, params)
            except (UpstreamError, UpstreamTimeout) as e:
                if attempt > self._max_retries or not is_retryable(e):
                    raise
                delay = self._retry_backoff_seconds * (2 ** (attempt - 1))
                logger.warning(
                    f"{self.api_name} attempt {attempt} failed ({e.message}), "
                    f"retrying in {delay:.2f}s"
                )
                await asyncio.sleep(delay)
                attempt += 1
