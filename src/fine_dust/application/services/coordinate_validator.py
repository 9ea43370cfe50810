"""Validation of raw latitude/longitude input."""

import math
from typing import Any

from fine_dust.domain.errors import InvalidCoordinate, OutOfServiceArea
from fine_dust.domain.models.coordinate import Coordinate, ServiceArea

MIN_LATITUDE, MAX_LATITUDE = -90.0, 90.0
MIN_LONGITUDE, MAX_LONGITUDE = -180.0, 180.0


def _parse_number(raw: Any, name: str) -> float:
    """Parse a raw query value into a finite float."""
    if raw is None or isinstance(raw, bool):
        raise InvalidCoordinate(f"{name} is required")
    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            raise InvalidCoordinate(f"{name} is required")
        # float() accepts digit-group underscores such as "3_7.5"
        if "_" in raw:
            raise InvalidCoordinate(f"{name} must be a number, got {raw!r}")
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise InvalidCoordinate(f"{name} must be a number, got {raw!r}") from None
    if not math.isfinite(value):
        raise InvalidCoordinate(f"{name} must be a finite number, got {raw!r}")
    return value


def validate_coordinate(
    raw_latitude: Any,
    raw_longitude: Any,
    service_area: ServiceArea | None = None,
) -> Coordinate:
    """Build a Coordinate from raw input.

    Args:
        raw_latitude: Latitude as received (string or number).
        raw_longitude: Longitude as received (string or number).
        service_area: Optional bounding box the point must fall into.

    Returns:
        The validated coordinate.

    Raises:
        InvalidCoordinate: If a value is missing, non-numeric or out of global range.
        OutOfServiceArea: If the point lies outside service_area.
    """
    latitude = _parse_number(raw_latitude, "latitude")
    longitude = _parse_number(raw_longitude, "longitude")

    if not MIN_LATITUDE <= latitude <= MAX_LATITUDE:
        raise InvalidCoordinate(f"latitude must be within [-90, 90], got {latitude}")
    if not MIN_LONGITUDE <= longitude <= MAX_LONGITUDE:
        raise InvalidCoordinate(f"longitude must be within [-180, 180], got {longitude}")

    coordinate = Coordinate(latitude=latitude, longitude=longitude)
    if service_area is not None and not service_area.contains(coordinate):
        raise OutOfServiceArea(
            f"Coordinate ({latitude}, {longitude}) is outside the service area"
        )
    return coordinate
