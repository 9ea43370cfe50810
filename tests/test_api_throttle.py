"""Tests for the outgoing API throttle."""

import asyncio
import time

import pytest

from fine_dust.adapters.api_throttle import ApiThrottle


class TestApiThrottle:
    """Tests for ApiThrottle class."""

    @pytest.mark.asyncio
    async def test_concurrency_is_bounded(self) -> None:
        """Given max_concurrency=2, when five requests run, then at most two are in flight."""
        throttle = ApiThrottle("test_api", max_concurrency=2)
        peak = 0

        async def request() -> None:
            nonlocal peak
            async with throttle:
                peak = max(peak, throttle.in_flight)
                await asyncio.sleep(0.01)

        await asyncio.gather(*(request() for _ in range(5)))

        assert peak == 2
        assert throttle.in_flight == 0

    @pytest.mark.asyncio
    async def test_zero_concurrency_is_unbounded(self) -> None:
        """Given max_concurrency=0, when requests run, then all run at once."""
        throttle = ApiThrottle("test_api", max_concurrency=0)
        peak = 0

        async def request() -> None:
            nonlocal peak
            async with throttle:
                peak = max(peak, throttle.in_flight)
                await asyncio.sleep(0.01)

        await asyncio.gather(*(request() for _ in range(5)))

        assert peak == 5

    @pytest.mark.asyncio
    async def test_second_request_waits_for_delay(self) -> None:
        """Given a minimum delay, when starting two requests, then the second waits."""
        delay = 0.2
        throttle = ApiThrottle("test_api", max_concurrency=0, min_delay_seconds=delay)

        await throttle.acquire()
        throttle.release()
        start = time.monotonic()
        await throttle.acquire()
        elapsed = time.monotonic() - start
        throttle.release()

        assert elapsed >= delay * 0.9

    @pytest.mark.asyncio
    async def test_slot_released_when_body_raises(self) -> None:
        """Given a failing request, when it exits, then the slot is released."""
        throttle = ApiThrottle("test_api", max_concurrency=1)

        with pytest.raises(RuntimeError):
            async with throttle:
                raise RuntimeError("boom")

        assert throttle.in_flight == 0
        await asyncio.wait_for(throttle.acquire(), timeout=0.1)
