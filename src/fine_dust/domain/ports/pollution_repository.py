"""Pollution repository port."""

from typing import Protocol

from fine_dust.domain.models.pollution_reading import PollutionReading
from fine_dust.domain.models.station import Station


class PollutionRepository(Protocol):
    """Port for retrieving particulate matter readings."""

    async def get_latest_reading(self, station: Station) -> PollutionReading:
        """Return the most recent reading of a station, or raise NoReadingAvailable."""
        ...
