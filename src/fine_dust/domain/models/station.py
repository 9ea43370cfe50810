"""Station domain model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Station:
    """Represents an air-quality monitoring station."""

    name: str
    region: str
    address: str = ""
    latitude: float | None = None
    longitude: float | None = None
