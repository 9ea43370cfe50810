"""Tests for the bulk-scan station resolver."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from fine_dust.adapters.airkorea_api.bulk_scan_station_resolver import (
    BulkScanStationResolver,
    find_nearest_item,
    manhattan_distance,
)
from fine_dust.adapters.airkorea_api.constants import REALTIME_BY_REGION_PATH
from fine_dust.domain.errors import NoStationFound, UpstreamError
from fine_dust.domain.models import Coordinate

ORIGIN = Coordinate(latitude=37.0, longitude=127.0)


def _item(name: str, region: str, lat: float, lon: float) -> dict[str, str]:
    return {"stationName": name, "sidoName": region, "dmY": str(lat), "dmX": str(lon)}


def _client(items_by_region: dict[str, object]) -> MagicMock:
    async def get_items(_path: str, params: dict[str, object]) -> object:
        outcome = items_by_region[str(params["sidoName"])]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    client = MagicMock()
    client.get_items = AsyncMock(side_effect=get_items)
    return client


def test_manhattan_distance() -> None:
    """Distance is the sum of absolute latitude and longitude differences."""
    assert manhattan_distance(_item("a", "서울", 38.0, 129.0), ORIGIN) == pytest.approx(3.0)
    assert manhattan_distance(_item("b", "서울", 36.5, 127.5), ORIGIN) == pytest.approx(1.0)


def test_picks_nearest_item() -> None:
    """Given stations at distance 3.0 and 1.0, when picking, then the 1.0 one wins."""
    far = _item("far", "강원", 38.0, 129.0)
    near = _item("near", "충북", 36.5, 127.5)

    assert find_nearest_item([far, near], ORIGIN) is near


def test_first_item_wins_ties() -> None:
    """Given equidistant stations, when picking, then the first one wins."""
    first = _item("first", "서울", 37.5, 127.0)
    second = _item("second", "경기", 36.5, 127.0)

    assert find_nearest_item([first, second], ORIGIN) is first


def test_empty_items_raise() -> None:
    """Given no items, when picking, then NoStationFound is raised."""
    with pytest.raises(NoStationFound):
        find_nearest_item([], ORIGIN)


@pytest.mark.asyncio
async def test_resolve_scans_all_regions() -> None:
    """Given several regions, when resolving, then every region is queried and the nearest wins."""
    client = _client(
        {
            "강원": [_item("춘천", "강원", 38.0, 129.0)],
            "충북": [_item("청주", "충북", 36.5, 127.5)],
        }
    )
    resolver = BulkScanStationResolver(client, ["강원", "충북"])

    station = await resolver.resolve(ORIGIN)

    assert station.name == "청주"
    assert station.region == "충북"
    assert station.latitude == pytest.approx(36.5)
    assert station.longitude == pytest.approx(127.5)
    assert client.get_items.await_count == 2
    path, params = client.get_items.await_args_list[0].args
    assert path == REALTIME_BY_REGION_PATH
    assert params["numOfRows"] == 100
    assert params["dataTerm"] == "DAILY"


@pytest.mark.asyncio
async def test_failed_region_is_skipped() -> None:
    """Given one failing region, when resolving, then the others still produce a station."""
    client = _client(
        {
            "서울": UpstreamError("HTTP 500", status_code=500),
            "경기": [_item("수원", "경기", 37.3, 127.0)],
        }
    )
    resolver = BulkScanStationResolver(client, ["서울", "경기"])

    station = await resolver.resolve(ORIGIN)

    assert station.name == "수원"


@pytest.mark.asyncio
async def test_all_regions_empty_raises() -> None:
    """Given no stations anywhere, when resolving, then NoStationFound is raised."""
    client = _client({"서울": [], "경기": UpstreamError("down")})
    resolver = BulkScanStationResolver(client, ["서울", "경기"])

    with pytest.raises(NoStationFound):
        await resolver.resolve(ORIGIN)
