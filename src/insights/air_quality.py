from __future__ import annotations

from dataclasses import dataclass

# The waste lever saturates at 60 % rather than 100 %.
RENEWABLE_WEIGHT = 0.6
WASTE_WEIGHT = 0.4
WASTE_SATURATION = 60.0

HIGH_THRESHOLD = 0.75
MEDIUM_THRESHOLD = 0.4

LEVEL_LABELS: tuple[str, ...] = ("Low", "Medium", "High")


@dataclass(frozen=True, slots=True)
class AirQuality:
    """Qualitative air-quality category; ``level`` is 0 (Low) to 2 (High)."""

    label: str
    level: int
    score: float

    def as_pair(self) -> tuple[str, int]:
        return self.label, self.level


def air_quality_score(renewable_share: float, waste_reduction: float) -> float:
    return RENEWABLE_WEIGHT * (renewable_share / 100) + WASTE_WEIGHT * (
        waste_reduction / WASTE_SATURATION
    )


def level_for_score(score: float) -> int:
    """Strict thresholds: a score of exactly 0.75 or 0.4 falls to the lower tier."""
    if score > HIGH_THRESHOLD:
        return 2
    if score > MEDIUM_THRESHOLD:
        return 1
    return 0


def classify_air_quality(renewable_share: float, waste_reduction: float) -> AirQuality:
    """Map the two policy levers to a Low/Medium/High category."""
    score = air_quality_score(renewable_share, waste_reduction)
    level = level_for_score(score)
    return AirQuality(label=LEVEL_LABELS[level], level=level, score=score)


__all__ = [
    "AirQuality",
    "LEVEL_LABELS",
    "air_quality_score",
    "classify_air_quality",
    "level_for_score",
]
