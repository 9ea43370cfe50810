"""Coordinate domain model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Coordinate:
    """A validated WGS84 point."""

    latitude: float
    longitude: float


@dataclass(frozen=True)
class ServiceArea:
    """Bounding box the service answers for (inclusive)."""

    min_latitude: float
    max_latitude: float
    min_longitude: float
    max_longitude: float

    def contains(self, coordinate: Coordinate) -> bool:
        """Check whether the coordinate lies inside the box."""
        return (
            self.min_latitude <= coordinate.latitude <= self.max_latitude
            and self.min_longitude <= coordinate.longitude <= self.max_longitude
        )
