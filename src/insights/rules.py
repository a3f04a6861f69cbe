"""Ordered predicate/message rules that turn a climate result into insights.

Rules are evaluated in table order and each one fires independently, so any subset
of the conditional notes may appear. The first rule (summary), the top-contributor
rule and the sea-level rule always fire; exactly one of the two target rules fires.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass

from forcing_model.aggregator import ClimateResult
from forcing_model.constants import CLIMATE_SENSITIVITY, WARMING_TARGET

Predicate = Callable[[ClimateResult], bool]
Message = Callable[[ClimateResult], str]

RENEWABLES_NOTE_THRESHOLD = 60.0
WASTE_NOTE_THRESHOLD = 30.0
DEFORESTATION_NOTE_THRESHOLD = 1.0


@dataclass(frozen=True)
class InsightRule:
    name: str
    predicate: Predicate
    message: Message

    def evaluate(self, result: ClimateResult) -> str | None:
        if not self.predicate(result):
            return None
        return self.message(result)


def _always(result: ClimateResult) -> bool:
    return True


def top_contributor(breakdown: Mapping[str, float]) -> tuple[str, float]:
    """Largest forcing source; on ties the earliest key wins."""
    if not breakdown:
        raise ValueError("Cannot pick a top contributor from an empty breakdown.")
    name, value = max(breakdown.items(), key=lambda item: item[1])
    return name, value


def required_reduction(delta_t: float, target: float = WARMING_TARGET) -> float:
    """Forcing reduction (W/m²) that would bring ``delta_t`` down to ``target``."""
    return max(0.0, (delta_t - target) / CLIMATE_SENSITIVITY)


def _summary(result: ClimateResult) -> str:
    return (
        f"Projected equilibrium warming: ~{result.delta_t:.2f}°C "
        f"(forcing {result.total_forcing:.2f} W/m²)."
    )


def _reduction_needed(result: ClimateResult) -> str:
    needed = required_reduction(result.delta_t)
    return (
        f"To reach ~{WARMING_TARGET}°C, reduce ≈{needed:.2f} W/m² "
        "via renewables or waste cuts."
    )


def _top_contributor(result: ClimateResult) -> str:
    name, value = top_contributor(result.breakdown)
    return f"Top contributor: {name} ({value:.2f} W/m²)."


def _sea_level(result: ClimateResult) -> str:
    return f"Estimated sea-level rise: ~{result.sea_level_rise:.2f} m by 2100."


DEFAULT_RULES: tuple[InsightRule, ...] = (
    InsightRule("summary", _always, _summary),
    InsightRule("target_exceeded", lambda r: r.delta_t > WARMING_TARGET, _reduction_needed),
    InsightRule(
        "within_target",
        lambda r: not r.delta_t > WARMING_TARGET,
        lambda r: f"Within ~{WARMING_TARGET}°C, but adaptation still needed.",
    ),
    InsightRule("top_contributor", _always, _top_contributor),
    InsightRule(
        "renewables",
        lambda r: r.inputs.renewable_share >= RENEWABLES_NOTE_THRESHOLD,
        lambda r: "High renewables share improves air quality & lowers CO₂.",
    ),
    InsightRule(
        "waste",
        lambda r: r.inputs.waste_reduction >= WASTE_NOTE_THRESHOLD,
        lambda r: "Waste cuts reduce methane emissions.",
    ),
    InsightRule(
        "deforestation",
        lambda r: r.inputs.deforestation >= DEFORESTATION_NOTE_THRESHOLD,
        lambda r: "Deforestation adds warming; forest protection helps.",
    ),
    InsightRule("sea_level", _always, _sea_level),
)


def generate_insights(
    result: ClimateResult,
    rules: Sequence[InsightRule] = DEFAULT_RULES,
) -> list[str]:
    """Evaluate ``rules`` in order and collect the lines that fire."""
    lines: list[str] = []
    for rule in rules:
        line = rule.evaluate(result)
        if line is not None:
            lines.append(line)
    return lines


__all__ = [
    "DEFAULT_RULES",
    "InsightRule",
    "generate_insights",
    "required_reduction",
    "top_contributor",
]
