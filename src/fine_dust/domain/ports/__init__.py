"""Ports (interfaces) for the ports-and-adapters architecture."""

from fine_dust.domain.ports.pollution_repository import PollutionRepository
from fine_dust.domain.ports.station_resolver import StationResolver
from fine_dust.domain.ports.weather_repository import WeatherRepository

__all__ = [
    "PollutionRepository",
    "StationResolver",
    "WeatherRepository",
]
