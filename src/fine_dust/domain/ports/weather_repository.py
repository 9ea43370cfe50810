"""Weather repository port."""

from typing import Protocol

from fine_dust.domain.models.coordinate import Coordinate
from fine_dust.domain.models.weather_reading import WeatherReading


class WeatherRepository(Protocol):
    """Port for retrieving current weather."""

    async def get_current_weather(self, coordinate: Coordinate) -> WeatherReading:
        """Return current weather, or raise WeatherUnavailable."""
        ...
