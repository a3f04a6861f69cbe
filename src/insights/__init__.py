"""Narrative insights and the air-quality gauge derived from climate results."""

from .air_quality import AirQuality, air_quality_score, classify_air_quality, level_for_score
from .rules import DEFAULT_RULES, InsightRule, generate_insights, required_reduction, top_contributor

__all__ = [
    "AirQuality",
    "DEFAULT_RULES",
    "InsightRule",
    "air_quality_score",
    "classify_air_quality",
    "generate_insights",
    "level_for_score",
    "required_reduction",
    "top_contributor",
]
