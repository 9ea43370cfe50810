"""Tests for the HTTP adapter."""

from collections.abc import Iterator
from unittest.mock import AsyncMock, MagicMock

import pytest
from starlette.testclient import TestClient

from fine_dust.adapters.config import AppConfig
from fine_dust.adapters.web.starlette_app import create_app
from fine_dust.domain.errors import (
    InvalidCoordinate,
    NoStationFound,
    OutOfServiceArea,
    UpstreamError,
    UpstreamTimeout,
)
from fine_dust.domain.models import AirQualityResult

RESULT = AirQualityResult(
    sido_name="서울",
    station_name="중구",
    pm10_value=42,
    pm25_value=18,
    pm10_grade=2,
    pm25_grade=1,
    data_time="2024-03-31 14:00",
    grade_tier=4,
    grade_label="보통",
    grade_emoji="🤔",
    background_color="#00B700",
    warning_message="",
    temperature=12,
    feels_like=11,
    weather_icon="01d",
    weather_description="맑음",
)


class StubContext:
    """Application context double with a mocked service."""

    def __init__(self, rate_limit_per_minute: int = 0) -> None:
        self.config = AppConfig(rate_limit_per_minute=rate_limit_per_minute)
        self.service = MagicMock()
        self.service.get_air_quality = AsyncMock(return_value=RESULT)
        self.start = AsyncMock()
        self.stop = AsyncMock()


@pytest.fixture
def context() -> StubContext:
    return StubContext()


@pytest.fixture
def client(context: StubContext) -> Iterator[TestClient]:
    app = create_app(context)  # type: ignore[arg-type]
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


def test_air_quality_returns_result(client: TestClient, context: StubContext) -> None:
    """Given a valid coordinate, when requesting, then the result JSON is returned."""
    response = client.get("/air-quality", params={"latitude": "37.5665", "longitude": "126.978"})

    assert response.status_code == 200
    assert response.json() == RESULT.to_response()
    context.service.get_air_quality.assert_awaited_once_with("37.5665", "126.978")


def test_air_quality_accepts_short_aliases(client: TestClient, context: StubContext) -> None:
    """Given lat/lng parameters, when requesting, then they are used."""
    client.get("/air-quality", params={"lat": "35.1", "lng": "129.0"})

    context.service.get_air_quality.assert_awaited_once_with("35.1", "129.0")


def test_missing_parameters_are_passed_as_none(client: TestClient, context: StubContext) -> None:
    """Given no parameters, when requesting, then the service validates None values."""
    context.service.get_air_quality.side_effect = InvalidCoordinate("latitude is required")

    response = client.get("/air-quality")

    assert response.status_code == 400
    assert response.json() == {
        "status": "fail",
        "kind": "InvalidCoordinate",
        "message": "latitude is required",
    }
    context.service.get_air_quality.assert_awaited_once_with(None, None)


def test_out_of_service_area_is_400(client: TestClient, context: StubContext) -> None:
    """Given a point outside the area, when requesting, then 400 OutOfServiceArea is returned."""
    context.service.get_air_quality.side_effect = OutOfServiceArea("outside")

    response = client.get("/air-quality", params={"lat": "48.1", "lng": "11.5"})

    assert response.status_code == 400
    assert response.json()["kind"] == "OutOfServiceArea"


@pytest.mark.parametrize(
    ("error", "kind"),
    [
        (NoStationFound("none"), "NoStationFound"),
        (UpstreamTimeout("slow"), "UpstreamTimeout"),
        (UpstreamError("HTTP 502", status_code=502), "InternalError"),
    ],
)
def test_server_errors_are_500(
    client: TestClient, context: StubContext, error: Exception, kind: str
) -> None:
    """Given an upstream failure, when requesting, then 500 with the error kind is returned."""
    context.service.get_air_quality.side_effect = error

    response = client.get("/air-quality", params={"lat": "37.5", "lng": "127.0"})

    assert response.status_code == 500
    assert response.json()["status"] == "error"
    assert response.json()["kind"] == kind


def test_unexpected_error_is_internal_error(client: TestClient, context: StubContext) -> None:
    """Given a bug, when requesting, then a generic InternalError body is returned."""
    context.service.get_air_quality.side_effect = RuntimeError("secret detail")

    response = client.get("/air-quality", params={"lat": "37.5", "lng": "127.0"})

    assert response.status_code == 500
    assert response.json() == {
        "status": "error",
        "kind": "InternalError",
        "message": "Internal server error",
    }


def test_health(client: TestClient) -> None:
    """Given a running app, when checking health, then ok is returned."""
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_lifespan_starts_and_stops_context(context: StubContext) -> None:
    """Given the app, when the server starts and stops, then the context follows."""
    with TestClient(create_app(context)):  # type: ignore[arg-type]
        context.start.assert_awaited_once()
        context.stop.assert_not_awaited()

    context.stop.assert_awaited_once()


def test_rate_limit_applies_to_lookups() -> None:
    """Given a limit of one per minute, when requesting twice, then the second gets 429."""
    context = StubContext(rate_limit_per_minute=1)

    with TestClient(create_app(context)) as test_client:  # type: ignore[arg-type]
        first = test_client.get("/air-quality", params={"lat": "37.5", "lng": "127.0"})
        second = test_client.get("/air-quality", params={"lat": "37.5", "lng": "127.0"})
        health = test_client.get("/health")

    assert first.status_code == 200
    assert second.status_code == 429
    assert "Retry-After" in second.headers
    assert health.status_code == 200
