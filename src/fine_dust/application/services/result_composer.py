"""Composition of station, reading, grade and weather into one result."""

import math

from fine_dust.domain.models.air_quality_result import AirQualityResult
from fine_dust.domain.models.grade_info import GradeInfo
from fine_dust.domain.models.pollution_reading import PollutionReading
from fine_dust.domain.models.station import Station
from fine_dust.domain.models.weather_reading import WeatherReading


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from negative infinity."""
    return math.floor(value + 0.5)


def compose_result(
    station: Station,
    reading: PollutionReading,
    grade: GradeInfo,
    weather: WeatherReading | None = None,
) -> AirQualityResult:
    """Merge the parts of a lookup into an AirQualityResult.

    Weather is optional; its fields stay unset when it is None.
    """
    weather_fields: dict[str, int | str] = {}
    if weather is not None:
        weather_fields = {
            "temperature": round_half_up(weather.temperature_c),
            "feels_like": round_half_up(weather.feels_like_c),
            "weather_icon": weather.icon,
            "weather_description": weather.description,
        }

    return AirQualityResult(
        sido_name=station.region,
        station_name=station.name,
        pm10_value=reading.pm10,
        pm25_value=reading.pm25,
        pm10_grade=reading.pm10_grade,
        pm25_grade=reading.pm25_grade,
        data_time=reading.data_time,
        grade_tier=grade.tier,
        grade_label=grade.label,
        grade_emoji=grade.emoji,
        background_color=grade.color,
        warning_message=grade.warning,
        **weather_fields,
    )
