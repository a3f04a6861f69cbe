"""Closed-form greenhouse-gas forcing model with policy attenuation."""

from .aggregator import (
    ClimateResult,
    InputMustBeFinite,
    InputSet,
    compute_climate,
    compute_forcings,
    default_inputs,
)
from .constants import BREAKDOWN_KEYS, PRE_INDUSTRIAL, RESET_DEFAULTS, Baseline
from .forcing import (
    ConcentrationMustBePositive,
    band_overlap,
    forcing_ch4,
    forcing_co2,
    forcing_n2o,
)
from .policy import PolicyFactors, policy_scale
from .scenario_runner import ScenarioSpec, SweepSpec, results_to_frame, run_scenarios, sweep

__all__ = [
    "BREAKDOWN_KEYS",
    "PRE_INDUSTRIAL",
    "RESET_DEFAULTS",
    "Baseline",
    "ClimateResult",
    "ConcentrationMustBePositive",
    "InputMustBeFinite",
    "InputSet",
    "PolicyFactors",
    "ScenarioSpec",
    "SweepSpec",
    "band_overlap",
    "compute_climate",
    "compute_forcings",
    "default_inputs",
    "forcing_ch4",
    "forcing_co2",
    "forcing_n2o",
    "policy_scale",
    "results_to_frame",
    "run_scenarios",
    "sweep",
]
