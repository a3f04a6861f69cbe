"""Utilities for evaluating named input sets and one-at-a-time sweeps."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, fields
from typing import Union

import numpy as np
import pandas as pd

from .aggregator import INPUT_ALIASES, ClimateResult, InputSet, compute_climate
from .constants import BREAKDOWN_KEYS, PRE_INDUSTRIAL, Baseline

SweepValues = Union[Sequence[float], np.ndarray]

SWEEP_COLUMNS: tuple[str, ...] = (
    "value",
    "total_forcing",
    "delta_t",
    "sea_level_rise",
    *BREAKDOWN_KEYS,
)


@dataclass
class ScenarioSpec:
    """A labelled input set to evaluate."""

    label: str
    inputs: InputSet


@dataclass
class SweepSpec:
    """Vary ``field`` over ``values`` while holding the other inputs at ``base``."""

    label: str
    field: str
    values: SweepValues
    base: InputSet


def run_scenarios(
    specs: Iterable[ScenarioSpec],
    baseline: Baseline = PRE_INDUSTRIAL,
) -> dict[str, ClimateResult]:
    """Evaluate each scenario and return results keyed by label."""
    results: dict[str, ClimateResult] = {}
    logger = logging.getLogger("forcing_model")
    for spec in specs:
        if spec.label in results:
            raise ValueError(f"Duplicate scenario label '{spec.label}'.")
        logger.info("Performing calculation for scenario '%s'", spec.label)
        results[spec.label] = compute_climate(spec.inputs, baseline)
    return results


def sweep(
    base: InputSet,
    field: str,
    values: SweepValues,
    baseline: Baseline = PRE_INDUSTRIAL,
) -> pd.DataFrame:
    """Re-run the pipeline for each value of one input, one row per value."""
    name = _resolve_field(field)
    rows = []
    for value in np.asarray(values, dtype=float):
        result = compute_climate(base.replace(**{name: float(value)}), baseline)
        rows.append(
            {
                "value": float(value),
                "total_forcing": result.total_forcing,
                "delta_t": result.delta_t,
                "sea_level_rise": result.sea_level_rise,
                **result.breakdown,
            }
        )
    return pd.DataFrame(rows, columns=list(SWEEP_COLUMNS))


def results_to_frame(results: Mapping[str, ClimateResult]) -> pd.DataFrame:
    """One row per scenario with headline metrics, breakdown and inputs."""
    records = [{"scenario": label, **result.to_dict()} for label, result in results.items()]
    return pd.DataFrame.from_records(records)


def _resolve_field(field: str) -> str:
    name = INPUT_ALIASES.get(field, field)
    valid = [f.name for f in fields(InputSet)]
    if name not in valid:
        raise KeyError(f"Cannot sweep unknown input '{field}'. Choose one of {valid}.")
    return name


__all__ = [
    "SWEEP_COLUMNS",
    "ScenarioSpec",
    "SweepSpec",
    "results_to_frame",
    "run_scenarios",
    "sweep",
]
