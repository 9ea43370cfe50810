"""OpenWeatherMap weather repository adapter.

API Documentation: https://openweathermap.org/current
"""

import logging
from typing import Any

from fine_dust.adapters.http.json_http_client import JsonHttpClient
from fine_dust.domain.errors import AirQualityError, WeatherUnavailable
from fine_dust.domain.models.coordinate import Coordinate
from fine_dust.domain.models.weather_reading import WeatherReading
from fine_dust.domain.ports.weather_repository import WeatherRepository

logger = logging.getLogger(__name__)

CURRENT_WEATHER_PATH = "/weather"


def parse_weather(data: Any) -> WeatherReading:
    """Build a WeatherReading from a current-weather payload.

    Raises:
        WeatherUnavailable: If required fields are missing or malformed.
    """
    try:
        main = data["main"]
        condition = data["weather"][0]
        return WeatherReading(
            temperature_c=float(main["temp"]),
            feels_like_c=float(main["feels_like"]),
            icon=str(condition["icon"]),
            description=str(condition.get("description", "")),
        )
    except (KeyError, IndexError, TypeError, ValueError) as e:
        raise WeatherUnavailable(f"Malformed weather payload: {e!r}") from e


class OpenWeatherWeatherRepository(WeatherRepository):
    """Fetches current weather by coordinate."""

    def __init__(
        self,
        http_client: JsonHttpClient,
        base_url: str,
        api_key: str,
        language: str = "kr",
    ) -> None:
        """Initialize the repository.

        Args:
            http_client: Shared JSON client carrying timeout/retry/throttle policy.
            base_url: Base URL of the OpenWeatherMap API.
            api_key: OpenWeatherMap API key.
            language: Language of the weather description.
        """
        self._http_client = http_client
        self._url = f"{base_url.rstrip('/')}{CURRENT_WEATHER_PATH}"
        self._api_key = api_key
        self._language = language

    async def get_current_weather(self, coordinate: Coordinate) -> WeatherReading:
        """Return the current weather in metric units.

        Raises:
            WeatherUnavailable: On any upstream failure or malformed payload.
        """
        params = {
            "lat": coordinate.latitude,
            "lon": coordinate.longitude,
            "appid": self._api_key,
            "units": "metric",
            "lang": self._language,
        }
        try:
            data = await self._http_client.get_json(self._url, params=params)
        except AirQualityError as e:
            raise WeatherUnavailable(f"Weather lookup failed: {e.message}") from e
        return parse_weather(data)
