"""Tests for the application context."""

import asyncio

import pytest

from fake_http import FakeResponse, FakeSession
from fine_dust.adapters.airkorea_api import BulkScanStationResolver, NearbyStationResolver
from fine_dust.adapters.config import AppConfig, ConfigurationError
from fine_dust.adapters.app_context import ApplicationContext


def _config(**overrides: object) -> AppConfig:
    settings: dict[str, object] = {
        "airkorea_api_key": "airkorea-key",
        "openweather_api_key": "openweather-key",
    }
    settings.update(overrides)
    return AppConfig(**settings)  # type: ignore[arg-type]


def test_get_instance_returns_shared_context() -> None:
    """Given repeated calls, when getting the instance, then the first one is shared."""
    config = _config()

    first = ApplicationContext.get_instance(config)
    second = ApplicationContext.get_instance(_config(port=9999))

    assert first is second
    assert second.config is config


def test_service_unavailable_before_start() -> None:
    """Given a fresh context, when accessing the service, then RuntimeError is raised."""
    context = ApplicationContext(_config())

    assert context.is_started is False
    with pytest.raises(RuntimeError, match="not started"):
        _ = context.service


@pytest.mark.asyncio
async def test_start_builds_bulk_scan_service() -> None:
    """Given default strategy, when starting, then a bulk-scan service is wired."""
    context = ApplicationContext(_config())

    await context.start()
    try:
        service = context.service
        assert isinstance(service._station_resolver, BulkScanStationResolver)
        assert service._weather_repository is not None
        assert service._cache is context.cache
    finally:
        await context.stop()

    assert context.is_started is False


@pytest.mark.asyncio
async def test_start_builds_nearby_service_without_weather() -> None:
    """Given nearby strategy and weather disabled, when starting, then they are honored."""
    context = ApplicationContext(
        _config(station_strategy="nearby", weather_enabled=False, openweather_api_key=None)
    )

    await context.start()
    try:
        assert isinstance(context.service._station_resolver, NearbyStationResolver)
        assert context.service._weather_repository is None
    finally:
        await context.stop()


@pytest.mark.asyncio
async def test_start_requires_credentials() -> None:
    """Given no AirKorea key, when starting, then ConfigurationError is raised."""
    context = ApplicationContext(_config(airkorea_api_key=None))

    with pytest.raises(ConfigurationError, match="AIRKOREA_API_KEY"):
        await context.start()

    assert context.is_started is False


@pytest.mark.asyncio
async def test_stop_is_idempotent() -> None:
    """Given a stopped context, when stopping again, then nothing fails."""
    context = ApplicationContext(_config())
    await context.start()

    await context.stop()
    await context.stop()


def _region_response(region: str) -> FakeResponse:
    body = {
        "response": {
            "header": {"resultCode": "00"},
            "body": {
                "items": [
                    {"stationName": f"{region} station", "sidoName": region, "dmX": "127.0", "dmY": "37.5"}
                ]
            },
        }
    }
    return FakeResponse(json_body=body, hold=True)


def test_bulk_scan_survives_restart_on_new_event_loop() -> None:
    """Given a context restarted under a new event loop, when scanning again, then every region answers."""
    config = _config(upstream_max_concurrency=4, upstream_max_retries=0)
    context = ApplicationContext(config)

    async def scan() -> int:
        await context.start()
        try:
            resolver = context.service._station_resolver
            assert isinstance(resolver, BulkScanStationResolver)
            # Route the wired JSON client at scripted responses instead of the network
            resolver._client._http_client._session = FakeSession(
                [_region_response(region) for region in config.regions]
            )
            items = await resolver.fetch_all_stations()
            return len(items)
        finally:
            await context.stop()

    assert asyncio.run(scan()) == 17
    assert asyncio.run(scan()) == 17


@pytest.mark.asyncio
async def test_start_builds_fresh_throttles() -> None:
    """Given a restarted context, when starting again, then new throttles replace the old ones."""
    context = ApplicationContext(_config())

    await context.start()
    first = dict(context.throttles)
    await context.stop()
    assert context.throttles == {}

    await context.start()
    try:
        assert set(context.throttles) == {"airkorea", "openweather"}
        assert context.throttles["airkorea"] is not first["airkorea"]
    finally:
        await context.stop()
