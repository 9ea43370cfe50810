"""Station resolver scanning every region's real-time readings."""

import asyncio
import logging
from typing import Any

from fine_dust.adapters.airkorea_api.constants import (
    DATA_TERM,
    REALTIME_BY_REGION_PATH,
    REGION_API_VERSION,
    REGION_PAGE_SIZE,
)
from fine_dust.adapters.airkorea_api.http_client import AirKoreaHttpClient
from fine_dust.adapters.airkorea_api.item_parser import parse_float
from fine_dust.domain.errors import AirQualityError, NoStationFound
from fine_dust.domain.models.coordinate import Coordinate
from fine_dust.domain.models.station import Station
from fine_dust.domain.ports.station_resolver import StationResolver

logger = logging.getLogger(__name__)


def manhattan_distance(item: dict[str, Any], coordinate: Coordinate) -> float:
    """Sum of absolute coordinate differences between a station item and a point.

    dmX carries the station longitude and dmY its latitude; missing values count as 0.
    """
    return abs(parse_float(item.get("dmX")) - coordinate.longitude) + abs(
        parse_float(item.get("dmY")) - coordinate.latitude
    )


def find_nearest_item(items: list[dict[str, Any]], coordinate: Coordinate) -> dict[str, Any]:
    """Return the item closest to the coordinate; the first minimum wins ties.

    Raises:
        NoStationFound: If items is empty.
    """
    nearest: dict[str, Any] | None = None
    min_distance = float("inf")
    for item in items:
        distance = manhattan_distance(item, coordinate)
        if distance < min_distance:
            min_distance = distance
            nearest = item
    if nearest is None:
        raise NoStationFound("No air quality stations were returned for any region")
    return nearest


class BulkScanStationResolver(StationResolver):
    """Queries all regions concurrently and picks the nearest station."""

    def __init__(self, client: AirKoreaHttpClient, regions: list[str]) -> None:
        """Initialize the resolver.

        Args:
            client: AirKorea HTTP client.
            regions: Region names (sidoName) to query.
        """
        self._client = client
        self._regions = list(regions)

    async def _fetch_region(self, region: str) -> list[dict[str, Any]]:
        params = {
            "sidoName": region,
            "ver": REGION_API_VERSION,
            "numOfRows": REGION_PAGE_SIZE,
            "pageNo": 1,
            "dataTerm": DATA_TERM,
        }
        return await self._client.get_items(REALTIME_BY_REGION_PATH, params)

    async def fetch_all_stations(self) -> list[dict[str, Any]]:
        """Fetch station items of every region, skipping regions that fail."""
        results = await asyncio.gather(
            *(self._fetch_region(region) for region in self._regions),
            return_exceptions=True,
        )

        all_items: list[dict[str, Any]] = []
        failed_regions = []
        for region, result in zip(self._regions, results, strict=True):
            if isinstance(result, AirQualityError):
                logger.warning(f"Skipping region {region}: {result.message}")
                failed_regions.append(region)
            elif isinstance(result, BaseException):
                logger.error(f"Unexpected error fetching region {region}", exc_info=result)
                failed_regions.append(region)
            else:
                all_items.extend(result)

        if failed_regions:
            logger.warning(
                f"{len(failed_regions)}/{len(self._regions)} region(s) failed: "
                f"{', '.join(failed_regions)}"
            )
        return all_items

    async def resolve(self, coordinate: Coordinate) -> Station:
        """Resolve the station nearest to the coordinate by Manhattan distance."""
        items = await self.fetch_all_stations()
        nearest = find_nearest_item(items, coordinate)

        station = Station(
            name=str(nearest.get("stationName", "")),
            region=str(nearest.get("sidoName", "")),
            latitude=parse_float(nearest.get("dmY")),
            longitude=parse_float(nearest.get("dmX")),
        )
        logger.debug(f"Nearest of {len(items)} station(s): {station.name} in {station.region}")
        return station
