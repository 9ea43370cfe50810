"""Result caches."""

from fine_dust.adapters.cache.ttl_air_quality_cache import TtlAirQualityCache

__all__ = ["TtlAirQualityCache"]
