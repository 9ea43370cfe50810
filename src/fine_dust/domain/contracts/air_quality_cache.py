"""Protocol for caching composed air-quality results."""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from fine_dust.domain.models.air_quality_result import AirQualityResult


class AirQualityCacheProtocol(Protocol):
    """Protocol for a TTL cache of results keyed by rounded coordinate."""

    def get(self, key: str) -> "AirQualityResult | None":
        """Get a cached result.

        Args:
            key: Cache key built from the rounded coordinate.

        Returns:
            The cached result, or None if absent or expired.
        """
        ...

    def set(self, key: str, result: "AirQualityResult", ttl_seconds: float) -> None:
        """Store a result.

        Args:
            key: Cache key built from the rounded coordinate.
            result: The composed result.
            ttl_seconds: Seconds until the entry expires.
        """
        ...
