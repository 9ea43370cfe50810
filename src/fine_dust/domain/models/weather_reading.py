"""Weather reading domain model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class WeatherReading:
    """Current weather at a coordinate."""

    temperature_c: float
    feels_like_c: float
    icon: str
    description: str
