"""AirKorea pollution repository adapter."""

import logging
from datetime import datetime

from fine_dust.adapters.airkorea_api.constants import (
    DATA_TERM,
    REALTIME_BY_STATION_PATH,
    STATION_API_VERSION,
    STATION_PAGE_SIZE,
)
from fine_dust.adapters.airkorea_api.http_client import AirKoreaHttpClient
from fine_dust.adapters.airkorea_api.item_parser import parse_reading
from fine_dust.domain.errors import NoReadingAvailable
from fine_dust.domain.models.pollution_reading import PollutionReading
from fine_dust.domain.models.station import Station
from fine_dust.domain.ports.pollution_repository import PollutionRepository

logger = logging.getLogger(__name__)


class AirKoreaPollutionRepository(PollutionRepository):
    """Fetches the latest real-time reading of a station."""

    def __init__(self, client: AirKoreaHttpClient) -> None:
        """Initialize with an AirKorea HTTP client."""
        self._client = client

    async def get_latest_reading(self, station: Station) -> PollutionReading:
        """Return the station's reading with the most recent dataTime.

        Raises:
            NoReadingAvailable: If the station reported no items.
        """
        params = {
            "stationName": station.name,
            "dataTerm": DATA_TERM,
            "ver": STATION_API_VERSION,
            "numOfRows": STATION_PAGE_SIZE,
            "pageNo": 1,
        }
        items = await self._client.get_items(REALTIME_BY_STATION_PATH, params)
        if not items:
            raise NoReadingAvailable(f"No readings available for station {station.name}")

        readings = [parse_reading(item) for item in items]
        # max() keeps the first of equal elements; unparseable times sort last
        latest = max(readings, key=lambda r: r.measured_at or datetime.min)
        logger.debug(
            f"Latest reading for {station.name} at {latest.data_time}: "
            f"PM10={latest.pm10}, PM2.5={latest.pm25}"
        )
        return latest
