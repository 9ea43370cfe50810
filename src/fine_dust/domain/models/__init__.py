"""Domain models for the air-quality lookup."""

from fine_dust.domain.models.air_quality_result import AirQualityResult
from fine_dust.domain.models.coordinate import Coordinate, ServiceArea
from fine_dust.domain.models.error_details import ErrorDetails
from fine_dust.domain.models.grade_info import GradeInfo
from fine_dust.domain.models.pollution_reading import PollutionReading
from fine_dust.domain.models.station import Station
from fine_dust.domain.models.weather_reading import WeatherReading

__all__ = [
    "AirQualityResult",
    "Coordinate",
    "ErrorDetails",
    "GradeInfo",
    "PollutionReading",
    "ServiceArea",
    "Station",
    "WeatherReading",
]
