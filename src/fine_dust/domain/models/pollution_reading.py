"""Pollution reading domain model."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class PollutionReading:
    """Latest particulate matter measurement of a station."""

    pm10: int
    pm25: int
    pm10_grade: int = 1  # Upstream grade (1-4), 1 when missing
    pm25_grade: int = 1
    data_time: str = ""  # Raw upstream timestamp, e.g. "2024-03-31 14:00"
    measured_at: datetime | None = None
