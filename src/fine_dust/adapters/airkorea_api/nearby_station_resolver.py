"""Station resolver using the AirKorea nearby-station API."""

import logging

from fine_dust.adapters.airkorea_api.constants import NEARBY_API_VERSION, NEARBY_STATIONS_PATH
from fine_dust.adapters.airkorea_api.http_client import AirKoreaHttpClient
from fine_dust.adapters.airkorea_api.item_parser import region_from_address
from fine_dust.adapters.airkorea_api.tm_projection import wgs84_to_tm
from fine_dust.domain.errors import NoStationFound
from fine_dust.domain.models.coordinate import Coordinate
from fine_dust.domain.models.station import Station
from fine_dust.domain.ports.station_resolver import StationResolver

logger = logging.getLogger(__name__)


class NearbyStationResolver(StationResolver):
    """Asks AirKorea for the stations nearest to a TM-projected coordinate."""

    def __init__(self, client: AirKoreaHttpClient) -> None:
        """Initialize with an AirKorea HTTP client."""
        self._client = client

    async def resolve(self, coordinate: Coordinate) -> Station:
        """Resolve the nearest station; the API returns them sorted by distance."""
        tm_x, tm_y = wgs84_to_tm(coordinate.latitude, coordinate.longitude)
        params = {"tmX": f"{tm_x:.3f}", "tmY": f"{tm_y:.3f}", "ver": NEARBY_API_VERSION}
        items = await self._client.get_items(NEARBY_STATIONS_PATH, params)
        if not items:
            raise NoStationFound(
                f"No station found near ({coordinate.latitude}, {coordinate.longitude})"
            )

        first = items[0]
        address = str(first.get("addr", ""))
        station = Station(
            name=str(first.get("stationName", "")),
            region=str(first.get("sidoName") or region_from_address(address)),
            address=address,
        )
        logger.debug(f"Nearest station: {station.name} ({first.get('tm', '?')} km)")
        return station
