"""Pipeline façade: inputs in, climate result + insights + air quality out."""

from .pipeline import (
    DEFAULT_SCENARIO_LABEL,
    CalculatorOutput,
    baseline_from_config,
    defaults_from_config,
    evaluate,
    run_from_config,
    scenarios_from_config,
    sweeps_from_config,
)

__all__ = [
    "DEFAULT_SCENARIO_LABEL",
    "CalculatorOutput",
    "baseline_from_config",
    "defaults_from_config",
    "evaluate",
    "run_from_config",
    "scenarios_from_config",
    "sweeps_from_config",
]
