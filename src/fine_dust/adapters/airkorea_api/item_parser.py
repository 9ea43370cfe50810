"""Parsing helpers for AirKorea item fields.

AirKorea reports every value as a string and uses "-" or an empty string when
a measurement is missing.
"""

from datetime import datetime, timedelta
from typing import Any

from fine_dust.adapters.airkorea_api.constants import DEFAULT_GRADE
from fine_dust.domain.models.pollution_reading import PollutionReading

DATA_TIME_FORMAT = "%Y-%m-%d %H:%M"


def parse_int(value: Any, default: int = 0) -> int:
    """Parse an integer field, returning default when missing or malformed."""
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(float(str(value).strip()))
    except (ValueError, OverflowError):
        return default


def parse_float(value: Any, default: float = 0.0) -> float:
    """Parse a float field, returning default when missing or malformed."""
    if value is None or isinstance(value, bool):
        return default
    try:
        return float(str(value).strip())
    except ValueError:
        return default


def parse_data_time(value: Any) -> datetime | None:
    """Parse a dataTime string such as "2024-03-31 14:00".

    AirKorea reports midnight as hour 24 of the previous day.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    rolled_over = False
    if text.endswith(" 24:00"):
        text = text[: -len("24:00")] + "00:00"
        rolled_over = True
    try:
        parsed = datetime.strptime(text, DATA_TIME_FORMAT)
    except ValueError:
        return None
    return parsed + timedelta(days=1) if rolled_over else parsed


def parse_reading(item: dict[str, Any]) -> PollutionReading:
    """Build a PollutionReading from a measurement item."""
    pm10 = max(0, parse_int(item.get("pm10Value")))
    pm25 = max(0, parse_int(item.get("pm25Value")))
    pm10_grade = parse_int(item.get("pm10Grade"), DEFAULT_GRADE) or DEFAULT_GRADE
    pm25_grade = parse_int(item.get("pm25Grade"), DEFAULT_GRADE) or DEFAULT_GRADE
    data_time = item.get("dataTime") or ""
    return PollutionReading(
        pm10=pm10,
        pm25=pm25,
        pm10_grade=pm10_grade,
        pm25_grade=pm25_grade,
        data_time=str(data_time),
        measured_at=parse_data_time(data_time),
    )


def region_from_address(address: str) -> str:
    """Return the leading region token of an address ("서울 강남구 ..." -> "서울")."""
    parts = address.split()
    return parts[0] if parts else ""
