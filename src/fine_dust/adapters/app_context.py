"""Application context wiring the lookup service to its upstream adapters.

One context lives per process. It owns the aiohttp session and the shared
result cache; the Starlette lifespan starts and stops it.
"""

from __future__ import annotations

import logging
import threading
from typing import ClassVar

import aiohttp

from fine_dust.adapters.airkorea_api import (
    AirKoreaHttpClient,
    AirKoreaPollutionRepository,
    BulkScanStationResolver,
    NearbyStationResolver,
)
from fine_dust.adapters.api_throttle import ApiThrottle
from fine_dust.adapters.config import AppConfig
from fine_dust.adapters.http import JsonHttpClient
from fine_dust.adapters.openweather_api import OpenWeatherWeatherRepository
from fine_dust.adapters.cache import TtlAirQualityCache
from fine_dust.application.services import AirQualityService
from fine_dust.domain.ports import StationResolver, WeatherRepository

logger = logging.getLogger(__name__)

AIRKOREA_API_NAME = "airkorea"
OPENWEATHER_API_NAME = "openweather"


class ApplicationContext:
    """Holds the process-wide service, cache and HTTP session."""

    _instance: ClassVar[ApplicationContext | None] = None
    _instance_lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self, config: AppConfig) -> None:
        """Initialize the context.

        Args:
            config: Application configuration.
        """
        self.config = config
        self.cache = TtlAirQualityCache(max_entries=config.cache_max_entries)
        self._session: aiohttp.ClientSession | None = None
        self._service: AirQualityService | None = None
        # Rebuilt on every start() so they never outlive their event loop
        self.throttles: dict[str, ApiThrottle] = {}

    @classmethod
    def get_instance(cls, config: AppConfig | None = None) -> ApplicationContext:
        """Get or create the process-wide context.

        The first caller's configuration wins.
        """
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = cls(config if config is not None else AppConfig())
            return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Forget the process-wide context (for tests)."""
        with cls._instance_lock:
            cls._instance = None

    @property
    def is_started(self) -> bool:
        """Whether start() has run and stop() has not."""
        return self._service is not None

    @property
    def service(self) -> AirQualityService:
        """The lookup service. Only available between start() and stop()."""
        if self._service is None:
            raise RuntimeError("Application context is not started")
        return self._service

    def _json_client(self, api_name: str) -> JsonHttpClient:
        config = self.config
        throttle = ApiThrottle(
            api_name,
            max_concurrency=config.upstream_max_concurrency,
            min_delay_seconds=config.upstream_min_delay_seconds,
        )
        self.throttles[api_name] = throttle
        return JsonHttpClient(
            api_name,
            self._session,
            timeout_seconds=config.upstream_timeout_seconds,
            max_retries=config.upstream_max_retries,
            retry_backoff_seconds=config.upstream_retry_backoff_seconds,
            throttle=throttle,
        )

    def _create_station_resolver(self, client: AirKoreaHttpClient) -> StationResolver:
        if self.config.station_strategy == "nearby":
            return NearbyStationResolver(client)
        return BulkScanStationResolver(client, self.config.regions)

    def _create_weather_repository(self) -> WeatherRepository | None:
        config = self.config
        if not config.weather_enabled:
            logger.info("Weather disabled, results will not include weather fields")
            return None
        return OpenWeatherWeatherRepository(
            self._json_client(OPENWEATHER_API_NAME),
            base_url=config.openweather_base_url,
            api_key=config.openweather_api_key or "",
            language=config.weather_language,
        )

    async def start(self) -> None:
        """Open the HTTP session and build the service graph."""
        if self._service is not None:
            return

        config = self.config
        config.require_credentials()

        self._session = aiohttp.ClientSession()
        airkorea_client = AirKoreaHttpClient(
            self._json_client(AIRKOREA_API_NAME),
            base_url=config.airkorea_base_url,
            service_key=config.airkorea_api_key or "",
        )
        self._service = AirQualityService(
            station_resolver=self._create_station_resolver(airkorea_client),
            pollution_repository=AirKoreaPollutionRepository(airkorea_client),
            cache=self.cache,
            weather_repository=self._create_weather_repository(),
            cache_ttl_seconds=config.cache_ttl_seconds,
            cache_precision=config.cache_coordinate_precision,
            service_area=config.get_service_area(),
        )
        logger.info(
            f"Application context started (station strategy: {config.station_strategy}, "
            f"weather: {'on' if config.weather_enabled else 'off'})"
        )

    async def stop(self) -> None:
        """Close the HTTP session."""
        self._service = None
        self.throttles = {}
        if self._session is not None:
            await self._session.close()
            self._session = None
            logger.info("Application context stopped")
