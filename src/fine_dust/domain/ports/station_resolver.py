"""Station resolver port."""

from typing import Protocol

from fine_dust.domain.models.coordinate import Coordinate
from fine_dust.domain.models.station import Station


class StationResolver(Protocol):
    """Port for resolving the monitoring station responsible for a coordinate."""

    async def resolve(self, coordinate: Coordinate) -> Station:
        """Return the relevant station, or raise NoStationFound."""
        ...
