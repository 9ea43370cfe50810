"""Air-quality result domain model."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class AirQualityResult(BaseModel):
    """Unified air-quality and weather answer for a coordinate.

    This is the unit that gets cached. Field aliases are the wire names.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    sido_name: str = Field(alias="sidoName")
    station_name: str = Field(alias="stationName")
    pm10_value: int = Field(alias="pm10Value")
    pm25_value: int = Field(alias="pm25Value")
    pm10_grade: int = Field(alias="pm10Grade")
    pm25_grade: int = Field(alias="pm25Grade")
    data_time: str = Field(alias="dataTime")
    grade_tier: int = Field(alias="gradeTier")
    grade_label: str = Field(alias="gradeLabel")
    grade_emoji: str = Field(alias="gradeEmoji")
    background_color: str = Field(alias="backgroundColor")
    warning_message: str = Field(alias="warningMessage")
    temperature: int | None = Field(default=None, alias="temperature")
    feels_like: int | None = Field(default=None, alias="feelsLike")
    weather_icon: str | None = Field(default=None, alias="weatherIcon")
    weather_description: str | None = Field(default=None, alias="weatherDescription")

    @property
    def has_weather(self) -> bool:
        """Whether weather fields were available when the result was built."""
        return self.temperature is not None

    def to_response(self) -> dict[str, Any]:
        """Serialize with wire names, omitting absent weather fields."""
        return self.model_dump(by_alias=True, exclude_none=True)
