"""Application services (use cases) for the air-quality lookup."""

from fine_dust.application.services.air_quality_service import (
    AirQualityService,
    build_cache_key,
)
from fine_dust.application.services.coordinate_validator import validate_coordinate
from fine_dust.application.services.grade_calculator import calculate_grade
from fine_dust.application.services.result_composer import compose_result

__all__ = [
    "AirQualityService",
    "build_cache_key",
    "calculate_grade",
    "compose_result",
    "validate_coordinate",
]
