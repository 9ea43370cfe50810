"""Air-quality lookup use case."""

import asyncio
import logging
from typing import Any

from fine_dust.application.services.coordinate_validator import validate_coordinate
from fine_dust.application.services.grade_calculator import calculate_grade
from fine_dust.application.services.result_composer import compose_result
from fine_dust.domain.contracts.air_quality_cache import AirQualityCacheProtocol
from fine_dust.domain.errors import AirQualityError, InternalError
from fine_dust.domain.models import (
    AirQualityResult,
    Coordinate,
    PollutionReading,
    ServiceArea,
    Station,
    WeatherReading,
)
from fine_dust.domain.ports import PollutionRepository, StationResolver, WeatherRepository

logger = logging.getLogger(__name__)

CACHE_KEY_PREFIX = "air-quality"


def build_cache_key(coordinate: Coordinate, precision: int = 3) -> str:
    """Build the cache key for a coordinate rounded to `precision` decimals."""
    # Adding 0.0 turns -0.0 into 0.0 so both round to the same key
    latitude = round(coordinate.latitude, precision) + 0.0
    longitude = round(coordinate.longitude, precision) + 0.0
    return f"{CACHE_KEY_PREFIX}:{latitude:.{precision}f}:{longitude:.{precision}f}"


class AirQualityService:
    """Validates coordinates, fans out to upstreams, grades and caches the result."""

    def __init__(
        self,
        station_resolver: StationResolver,
        pollution_repository: PollutionRepository,
        cache: AirQualityCacheProtocol,
        weather_repository: WeatherRepository | None = None,
        cache_ttl_seconds: float = 300.0,
        cache_precision: int = 3,
        service_area: ServiceArea | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            station_resolver: Strategy resolving the station for a coordinate.
            pollution_repository: Source of station readings.
            cache: Shared result cache.
            weather_repository: Optional weather source; None disables weather.
            cache_ttl_seconds: Lifetime of cached results.
            cache_precision: Decimal places the cache key is rounded to.
            service_area: Optional bounding box requests must fall into.
        """
        self._station_resolver = station_resolver
        self._pollution_repository = pollution_repository
        self._weather_repository = weather_repository
        self._cache = cache
        self._cache_ttl_seconds = cache_ttl_seconds
        self._cache_precision = cache_precision
        self._service_area = service_area

    async def get_air_quality(self, raw_latitude: Any, raw_longitude: Any) -> AirQualityResult:
        """Look up air quality for raw coordinate input.

        Raises:
            InvalidCoordinate / OutOfServiceArea: On bad input.
            NoStationFound / NoReadingAvailable / UpstreamTimeout / InternalError:
                When the pollution branch fails.
        """
        coordinate = validate_coordinate(raw_latitude, raw_longitude, self._service_area)
        return await self.get_air_quality_for(coordinate)

    async def get_air_quality_for(self, coordinate: Coordinate) -> AirQualityResult:
        """Look up air quality for an already validated coordinate."""
        logger.info(
            f"Fetching air quality for coordinates: {coordinate.latitude}, {coordinate.longitude}"
        )
        cache_key = build_cache_key(coordinate, self._cache_precision)

        cached = self._cache.get(cache_key)
        if cached is not None:
            logger.info(f"Returning cached data for {cache_key}")
            return cached

        pollution_outcome, weather = await asyncio.gather(
            self._fetch_pollution(coordinate),
            self._fetch_weather(coordinate),
            return_exceptions=True,
        )
        if isinstance(pollution_outcome, AirQualityError):
            raise pollution_outcome
        if isinstance(pollution_outcome, BaseException):
            logger.error("Unexpected error fetching pollution data", exc_info=pollution_outcome)
            raise InternalError("Failed to fetch air quality data") from pollution_outcome
        if isinstance(weather, BaseException):
            # _fetch_weather only lets unexpected errors through
            logger.error("Unexpected error fetching weather data", exc_info=weather)
            weather = None

        station, reading = pollution_outcome
        grade = calculate_grade(reading.pm10, reading.pm25)
        result = compose_result(station, reading, grade, weather)

        self._cache.set(cache_key, result, self._cache_ttl_seconds)
        return result

    async def _fetch_pollution(self, coordinate: Coordinate) -> tuple[Station, PollutionReading]:
        """Resolve the station, then fetch its latest reading."""
        station = await self._station_resolver.resolve(coordinate)
        logger.debug(f"Using station: {station.name} in {station.region}")
        reading = await self._pollution_repository.get_latest_reading(station)
        return station, reading

    async def _fetch_weather(self, coordinate: Coordinate) -> WeatherReading | None:
        """Fetch weather; any lookup failure degrades to None."""
        if self._weather_repository is None:
            return None
        try:
            return await self._weather_repository.get_current_weather(coordinate)
        except AirQualityError as e:
            logger.warning(f"Continuing without weather data ({e.kind}): {e.message}")
            return None
