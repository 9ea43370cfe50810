"""Error taxonomy for the air-quality lookup.

Every failure the service can report is an ``AirQualityError``. Adapters map
``is_client_error`` to 4xx/5xx responses; the ``kind`` string is what clients see.
"""


class AirQualityError(Exception):
    """Base class for all air-quality lookup failures."""

    kind = "InternalError"
    is_client_error = False

    def __init__(self, message: str) -> None:
        """Initialize with a human-readable message."""
        super().__init__(message)
        self.message = message


class InvalidCoordinate(AirQualityError):
    """Latitude/longitude missing, non-numeric or outside the global range."""

    kind = "InvalidCoordinate"
    is_client_error = True


class OutOfServiceArea(AirQualityError):
    """Coordinate is valid but outside the configured service area."""

    kind = "OutOfServiceArea"
    is_client_error = True


class NoStationFound(AirQualityError):
    """No monitoring station could be resolved for the coordinate."""

    kind = "NoStationFound"


class NoReadingAvailable(AirQualityError):
    """The resolved station returned no measurements."""

    kind = "NoReadingAvailable"


class WeatherUnavailable(AirQualityError):
    """Weather upstream failed or returned a malformed payload."""

    kind = "WeatherUnavailable"


class UpstreamTimeout(AirQualityError):
    """An upstream call exceeded its timeout."""

    kind = "UpstreamTimeout"


class InternalError(AirQualityError):
    """Unexpected failure inside the service."""

    kind = "InternalError"


class UpstreamError(InternalError):
    """Upstream API answered with an error status or an error envelope."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        """Initialize with message and optional HTTP status from upstream."""
        super().__init__(message)
        self.status_code = status_code
