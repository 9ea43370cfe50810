"""AirKorea API adapters."""

from fine_dust.adapters.airkorea_api.airkorea_pollution_repository import (
    AirKoreaPollutionRepository,
)
from fine_dust.adapters.airkorea_api.bulk_scan_station_resolver import BulkScanStationResolver
from fine_dust.adapters.airkorea_api.http_client import AirKoreaHttpClient
from fine_dust.adapters.airkorea_api.nearby_station_resolver import NearbyStationResolver

__all__ = [
    "AirKoreaHttpClient",
    "AirKoreaPollutionRepository",
    "BulkScanStationResolver",
    "NearbyStationResolver",
]
