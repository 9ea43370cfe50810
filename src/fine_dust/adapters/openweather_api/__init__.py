"""OpenWeatherMap API adapters."""

from fine_dust.adapters.openweather_api.openweather_weather_repository import (
    OpenWeatherWeatherRepository,
)

__all__ = ["OpenWeatherWeatherRepository"]
