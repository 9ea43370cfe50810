"""Domain layer - core business logic and models."""

from fine_dust.domain.models import (
    AirQualityResult,
    Coordinate,
    GradeInfo,
    PollutionReading,
    ServiceArea,
    Station,
    WeatherReading,
)
from fine_dust.domain.ports import (
    PollutionRepository,
    StationResolver,
    WeatherRepository,
)

__all__ = [
    "AirQualityResult",
    "Coordinate",
    "GradeInfo",
    "PollutionReading",
    "PollutionRepository",
    "ServiceArea",
    "Station",
    "StationResolver",
    "WeatherReading",
    "WeatherRepository",
]
