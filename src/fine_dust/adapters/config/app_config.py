"""12-factor configuration adapter using environment variables and optional TOML config."""

import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from fine_dust.domain.models.coordinate import ServiceArea

# First-level administrative regions (sido) queried by the bulk-scan resolver
DEFAULT_REGIONS = [
    "서울",
    "부산",
    "대구",
    "인천",
    "광주",
    "대전",
    "울산",
    "경기",
    "강원",
    "충북",
    "충남",
    "전북",
    "전남",
    "경북",
    "경남",
    "제주",
    "세종",
]

STATION_STRATEGIES = ("nearby", "bulk_scan")


class ConfigurationError(RuntimeError):
    """Raised when required configuration is missing at startup."""


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server configuration
    host: str = Field(default="0.0.0.0", description="Host to bind the server to")
    port: int = Field(default=8000, description="Port to bind the server to")
    reload: bool = Field(default=False, description="Enable auto-reload for development")
    log_level: str = Field(default="INFO", description="Root log level")

    # AirKorea (data.go.kr) configuration
    airkorea_api_key: str | None = Field(
        default=None, description="data.go.kr service key for the AirKorea APIs"
    )
    airkorea_base_url: str = Field(
        default="https://apis.data.go.kr/B552584",
        description="Base URL of the AirKorea APIs",
    )
    station_strategy: str = Field(
        default="bulk_scan",
        description="Station resolution strategy: 'nearby' or 'bulk_scan'",
    )
    regions: list[str] = Field(
        default_factory=lambda: list(DEFAULT_REGIONS),
        description="Regions (sidoName) queried by the bulk-scan strategy",
    )

    # OpenWeatherMap configuration
    weather_enabled: bool = Field(default=True, description="Include weather in results")
    openweather_api_key: str | None = Field(
        default=None, description="OpenWeatherMap API key"
    )
    openweather_base_url: str = Field(
        default="https://api.openweathermap.org/data/2.5",
        description="Base URL of the OpenWeatherMap API",
    )
    weather_language: str = Field(default="kr", description="Language of weather descriptions")

    # Upstream call policy
    upstream_timeout_seconds: float = Field(
        default=8.0, description="Timeout for each upstream request in seconds"
    )
    upstream_max_retries: int = Field(
        default=2, description="Retries for transient upstream failures"
    )
    upstream_retry_backoff_seconds: float = Field(
        default=0.5, description="Initial backoff between retries, doubled per attempt"
    )
    upstream_max_concurrency: int = Field(
        default=8, description="Maximum in-flight requests per upstream API"
    )
    upstream_min_delay_seconds: float = Field(
        default=0.0, description="Minimum delay between request starts per upstream API"
    )

    # Cache configuration
    cache_ttl_seconds: float = Field(
        default=300.0, description="Lifetime of cached results in seconds"
    )
    cache_coordinate_precision: int = Field(
        default=3, description="Decimal places coordinates are rounded to for cache keys"
    )
    cache_max_entries: int = Field(
        default=1024, description="Maximum number of cached results"
    )

    # Service area (defaults cover South Korea)
    service_area_enforced: bool = Field(
        default=True, description="Reject coordinates outside the service area"
    )
    service_area_min_latitude: float = Field(default=33.0)
    service_area_max_latitude: float = Field(default=38.7)
    service_area_min_longitude: float = Field(default=124.5)
    service_area_max_longitude: float = Field(default=132.0)

    # Rate limiting configuration
    rate_limit_per_minute: int = Field(
        default=100,
        description="Maximum number of requests allowed per IP address per minute (0 disables)",
    )

    # Optional TOML file overriding regions and service area
    config_file: str | None = Field(
        default=None,
        description="Path to TOML configuration file with [airkorea] and [service_area] sections",
    )

    @field_validator("station_strategy")
    @classmethod
    def validate_station_strategy(cls, v: str) -> str:
        """Validate station strategy is either 'nearby' or 'bulk_scan'."""
        v = v.lower().replace("-", "_")
        if v not in STATION_STRATEGIES:
            raise ValueError("station_strategy must be either 'nearby' or 'bulk_scan'")
        return v

    @field_validator("cache_ttl_seconds", "upstream_timeout_seconds")
    @classmethod
    def validate_positive(cls, v: float) -> float:
        """Validate durations are positive."""
        if v <= 0:
            raise ValueError("durations must be positive")
        return v

    @field_validator("cache_coordinate_precision")
    @classmethod
    def validate_precision(cls, v: int) -> int:
        """Validate cache precision is between 0 and 6 decimals."""
        if not 0 <= v <= 6:
            raise ValueError("cache_coordinate_precision must be between 0 and 6")
        return v

    @field_validator("upstream_max_retries", "upstream_max_concurrency", "cache_max_entries")
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        """Validate counts are not negative."""
        if v < 0:
            raise ValueError("counts must not be negative")
        return v

    @model_validator(mode="after")
    def validate_service_area(self) -> "AppConfig":
        """Validate service area bounds are ordered."""
        if self.service_area_min_latitude > self.service_area_max_latitude:
            raise ValueError("service_area_min_latitude must not exceed service_area_max_latitude")
        if self.service_area_min_longitude > self.service_area_max_longitude:
            raise ValueError(
                "service_area_min_longitude must not exceed service_area_max_longitude"
            )
        return self

    def require_credentials(self) -> None:
        """Fail fast when upstream credentials are missing.

        Raises:
            ConfigurationError: If a required API key is not configured.
        """
        missing = []
        if not self.airkorea_api_key:
            missing.append("AIRKOREA_API_KEY")
        if self.weather_enabled and not self.openweather_api_key:
            missing.append("OPENWEATHER_API_KEY")
        if missing:
            raise ConfigurationError(
                f"Missing required configuration: {', '.join(missing)}. "
                "Set it in the environment or in .env"
            )

    def get_service_area(self) -> ServiceArea | None:
        """Return the service area, or None when it is not enforced."""
        if not self.service_area_enforced:
            return None
        return ServiceArea(
            min_latitude=self.service_area_min_latitude,
            max_latitude=self.service_area_max_latitude,
            min_longitude=self.service_area_min_longitude,
            max_longitude=self.service_area_max_longitude,
        )

    def load_toml_overrides(self) -> dict[str, Any]:
        """Load config_file and apply its overrides.

        Supported sections:
        - [airkorea]: regions, station_strategy
        - [service_area]: enforced, min_latitude, max_latitude, min_longitude, max_longitude
        - [cache]: ttl_seconds, coordinate_precision

        Returns:
            The parsed TOML data (empty if config_file is not set).
        """
        if not self.config_file:
            return {}

        config_path = Path(self.config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)

        airkorea = toml_data.get("airkorea", {})
        if "regions" in airkorea:
            regions = airkorea["regions"]
            if not isinstance(regions, list) or not all(isinstance(r, str) for r in regions):
                raise ValueError("TOML config 'airkorea.regions' must be a list of strings")
            self.regions = regions
        if "station_strategy" in airkorea:
            self.station_strategy = self.validate_station_strategy(airkorea["station_strategy"])

        service_area = toml_data.get("service_area", {})
        if "enforced" in service_area:
            self.service_area_enforced = bool(service_area["enforced"])
        for bound in ("min_latitude", "max_latitude", "min_longitude", "max_longitude"):
            if bound in service_area:
                setattr(self, f"service_area_{bound}", float(service_area[bound]))
        self.validate_service_area()

        cache = toml_data.get("cache", {})
        if "ttl_seconds" in cache:
            self.cache_ttl_seconds = self.validate_positive(float(cache["ttl_seconds"]))
        if "coordinate_precision" in cache:
            self.cache_coordinate_precision = self.validate_precision(
                int(cache["coordinate_precision"])
            )

        return toml_data
