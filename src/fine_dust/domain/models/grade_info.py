"""Grade info domain model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class GradeInfo:
    """Composite air-quality grade derived from PM10 and PM2.5."""

    tier: int  # 1 (best) .. 8 (worst)
    label: str
    emoji: str
    color: str  # Background color hex code
    warning: str  # Empty when no warning applies
