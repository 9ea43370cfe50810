"""Throttle for outgoing API requests.

Bounds the number of in-flight requests per upstream API and optionally
spaces out request starts. The bulk-scan resolver fires one request per
region at once, so a single lookup can burst well past what data.go.kr
tolerates without this.
"""

from __future__ import annotations

import asyncio
import logging
import time

logger = logging.getLogger(__name__)


class ApiThrottle:
    """Per-API concurrency limit plus minimum delay between request starts.

    Use as an async context manager around a single request. The semaphore and
    lock bind to the event loop that first waits on them, so a throttle must not
    outlive the loop it was created on.
    """

    def __init__(
        self, api_name: str, max_concurrency: int = 8, min_delay_seconds: float = 0.0
    ) -> None:
        """Initialize the throttle.

        Args:
            api_name: Name of the API (for logging).
            max_concurrency: Maximum number of requests in flight (0 means unbounded).
            min_delay_seconds: Minimum delay between request starts in seconds.
        """
        self.api_name = api_name
        self.max_concurrency = max_concurrency
        self.min_delay_seconds = min_delay_seconds
        self._semaphore = asyncio.Semaphore(max_concurrency) if max_concurrency > 0 else None
        self._last_start_time: float = 0.0
        self._spacing_lock = asyncio.Lock()
        self._in_flight = 0

    @property
    def in_flight(self) -> int:
        """Number of requests currently holding the throttle."""
        return self._in_flight

    async def _wait_for_spacing(self) -> None:
        if self.min_delay_seconds <= 0:
            return
        async with self._spacing_lock:
            elapsed = time.monotonic() - self._last_start_time
            wait_time = self.min_delay_seconds - elapsed
            if wait_time > 0:
                logger.debug(f"{self.api_name}: waiting {wait_time:.2f}s before next request")
                await asyncio.sleep(wait_time)
            self._last_start_time = time.monotonic()

    async def acquire(self) -> None:
        """Block until a request slot is free and the start delay has passed."""
        if self._semaphore is not None:
            await self._semaphore.acquire()
        try:
            await self._wait_for_spacing()
        except BaseException:
            if self._semaphore is not None:
                self._semaphore.release()
            raise
        self._in_flight += 1

    def release(self) -> None:
        """Free the request slot taken by acquire()."""
        self._in_flight -= 1
        if self._semaphore is not None:
            self._semaphore.release()

    async def __aenter__(self) -> ApiThrottle:
        """Context manager entry - acquire a request slot."""
        await self.acquire()
        return self

    async def __aexit__(
        self, _exc_type: type | None, _exc_val: BaseException | None, _exc_tb: object
    ) -> None:
        """Context manager exit - release the request slot."""
        self.release()
