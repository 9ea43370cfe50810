"""Composite air-quality grade from PM10 and PM2.5 concentrations.

Uses the 8-tier scale derived from the WHO 2021 air quality guidelines. Each
pollutant is bucketed on its own against inclusive upper bounds and the worse
of the two tiers wins.
"""

import logging
import math
from dataclasses import dataclass

from fine_dust.domain.models.grade_info import GradeInfo

logger = logging.getLogger(__name__)

SENSITIVE_GROUP_WARNING = "민감군은 실외활동을 자제하세요!"
STAY_INDOORS_WARNING = "외출을 삼가세요!"


@dataclass(frozen=True)
class GradeBand:
    """One row of the grade table."""

    tier: int
    label: str
    pm10_max: float
    pm25_max: float
    emoji: str
    color: str


GRADE_TABLE: tuple[GradeBand, ...] = (
    GradeBand(1, "최고 좋음", 15, 8, "😊", "#4E7BEE"),
    GradeBand(2, "좋음", 30, 15, "🙂", "#50A0E5"),
    GradeBand(3, "양호", 40, 20, "😐", "#53B77C"),
    GradeBand(4, "보통", 50, 25, "🤔", "#00B700"),
    GradeBand(5, "나쁨", 75, 37, "😕", "#FF8C00"),
    GradeBand(6, "상당히 나쁨", 100, 50, "😫", "#FF5400"),
    GradeBand(7, "매우 나쁨", 150, 75, "😱", "#FF0000"),
    GradeBand(8, "최악", math.inf, math.inf, "💀", "#960018"),
)

# Tiers from which a warning is shown
SENSITIVE_GROUP_TIER = 5
STAY_INDOORS_TIER = 6


def _pm10_tier(pm10: float) -> int:
    for band in GRADE_TABLE:
        if pm10 <= band.pm10_max:
            return band.tier
    return GRADE_TABLE[-1].tier


def _pm25_tier(pm25: float) -> int:
    for band in GRADE_TABLE:
        if pm25 <= band.pm25_max:
            return band.tier
    return GRADE_TABLE[-1].tier


def warning_for_tier(tier: int) -> str:
    """Return the warning text for a tier, empty below the sensitive-group tier."""
    if tier >= STAY_INDOORS_TIER:
        return STAY_INDOORS_WARNING
    if tier >= SENSITIVE_GROUP_TIER:
        return SENSITIVE_GROUP_WARNING
    return ""


def calculate_grade(pm10: int, pm25: int) -> GradeInfo:
    """Classify PM10/PM2.5 concentrations into a composite grade.

    Args:
        pm10: PM10 concentration in µg/m³. Negative values count as 0.
        pm25: PM2.5 concentration in µg/m³. Negative values count as 0.

    Returns:
        GradeInfo for the worse of the two per-pollutant tiers.
    """
    pm10_tier = _pm10_tier(max(0, pm10))
    pm25_tier = _pm25_tier(max(0, pm25))
    band = GRADE_TABLE[max(pm10_tier, pm25_tier) - 1]

    logger.debug(f"PM10({pm10}) -> tier {pm10_tier}, PM2.5({pm25}) -> tier {pm25_tier}")

    return GradeInfo(
        tier=band.tier,
        label=band.label,
        emoji=band.emoji,
        color=band.color,
        warning=warning_for_tier(band.tier),
    )
