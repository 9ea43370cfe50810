"""Contracts (protocols) for infrastructure the application relies on."""

from fine_dust.domain.contracts.air_quality_cache import AirQualityCacheProtocol

__all__ = ["AirQualityCacheProtocol"]
