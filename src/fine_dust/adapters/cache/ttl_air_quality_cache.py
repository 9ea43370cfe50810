"""In-memory TTL cache for composed air-quality results."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from fine_dust.domain.contracts.air_quality_cache import AirQualityCacheProtocol

if TYPE_CHECKING:
    from fine_dust.domain.models.air_quality_result import AirQualityResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    """A cached result and the monotonic time it expires at."""

    result: AirQualityResult
    expires_at: float


class TtlAirQualityCache(AirQualityCacheProtocol):
    """Process-wide cache of results by coordinate key.

    Entries expire after their TTL. When max_entries is reached the oldest
    entry is evicted. Not atomic across concurrent misses for the same key.
    """

    def __init__(
        self, max_entries: int = 1024, clock: Callable[[], float] = time.monotonic
    ) -> None:
        """Initialize the cache.

        Args:
            max_entries: Maximum number of entries kept (0 means unbounded).
            clock: Monotonic time source in seconds.
        """
        self._entries: dict[str, CacheEntry] = {}
        self._max_entries = max_entries
        self._clock = clock

    def get(self, key: str) -> AirQualityResult | None:
        """Get a cached result.

        Args:
            key: Cache key built from the rounded coordinate.

        Returns:
            The cached result, or None if absent or expired.
        """
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() >= entry.expires_at:
            del self._entries[key]
            return None
        return entry.result

    def set(self, key: str, result: AirQualityResult, ttl_seconds: float) -> None:
        """Store a result.

        Args:
            key: Cache key built from the rounded coordinate.
            result: The composed result.
            ttl_seconds: Seconds until the entry expires.
        """
        self._entries.pop(key, None)
        if self._max_entries and len(self._entries) >= self._max_entries:
            self._evict()
        self._entries[key] = CacheEntry(result=result, expires_at=self._clock() + ttl_seconds)

    def _evict(self) -> None:
        """Drop expired entries, then the oldest ones until there is room."""
        now = self._clock()
        for key in [k for k, e in self._entries.items() if now >= e.expires_at]:
            del self._entries[key]
        while len(self._entries) >= self._max_entries:
            oldest_key = next(iter(self._entries))
            del self._entries[oldest_key]
            logger.debug(f"Evicted cached result {oldest_key}")

    def __len__(self) -> int:
        """Number of stored entries, including ones not yet purged after expiry."""
        return len(self._entries)
