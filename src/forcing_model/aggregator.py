"""Combine per-gas forcings, policy factors and land use into climate metrics.

The aggregation is a closed-form, single-step evaluation:

``total = max(0, CO2_eff + CH4_eff + N2O_eff + Land)``
``delta_t = 0.8 * total`` and ``sea_level_rise = 0.3 * delta_t``

Net negative forcing is floored at zero, so the model never cools below the
pre-industrial state. Temperature and sea level have no floor of their own; they
stay non-negative because both coefficients are positive.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import asdict, dataclass, field, fields
from types import MappingProxyType

import pandas as pd

from .constants import (
    BREAKDOWN_KEYS,
    CLIMATE_SENSITIVITY,
    CO2_EFFICIENCY,
    LAND_FORCING_PER_UNIT,
    N2O_FIXED_WEIGHT,
    N2O_RENEWABLE_WEIGHT,
    PRE_INDUSTRIAL,
    RESET_DEFAULTS,
    SEA_LEVEL_PER_DEGREE,
    Baseline,
)
from .forcing import forcing_ch4, forcing_co2, forcing_n2o
from .policy import policy_scale

# Short identifiers used by the slider form of the calculator.
INPUT_ALIASES: Mapping[str, str] = {
    "ren": "renewable_share",
    "renewables": "renewable_share",
    "renewableShare": "renewable_share",
    "waste": "waste_reduction",
    "wasteReduction": "waste_reduction",
    "def": "deforestation",
    "deforest": "deforestation",
}

# Concentrations are checked by the forcing expressions themselves.
POLICY_FIELDS: tuple[str, ...] = ("renewable_share", "waste_reduction", "deforestation")


class InputMustBeFinite(ValueError):
    """Raised when a policy lever or deforestation input is NaN or infinite."""

    def __init__(self, name: str, value: object) -> None:
        super().__init__(f"Input '{name}' must be a finite number (got {value!r}).")
        self.name = name
        self.value = value


@dataclass(frozen=True, slots=True)
class InputSet:
    """The six user-controlled inputs of the calculator.

    Policy levers may lie outside 0-100 % (they extrapolate) but must be finite.
    """

    co2: float
    ch4: float
    n2o: float
    renewable_share: float
    waste_reduction: float
    deforestation: float

    def __post_init__(self) -> None:
        for name in POLICY_FIELDS:
            value = getattr(self, name)
            if not math.isfinite(value):
                raise InputMustBeFinite(name, value)

    @classmethod
    def from_mapping(
        cls,
        values: Mapping[str, object],
        defaults: Mapping[str, float] | None = None,
    ) -> InputSet:
        """Build an input set from config or CLI values, accepting short aliases.

        Missing fields are taken from ``defaults`` when given, otherwise a
        ``KeyError`` lists what is missing.
        """
        merged: dict[str, object] = dict(defaults or {})
        for key, value in values.items():
            merged[INPUT_ALIASES.get(str(key), str(key))] = value
        names = [f.name for f in fields(cls)]
        unknown = sorted(set(merged) - set(names))
        if unknown:
            raise KeyError(f"Unknown input fields: {unknown}. Expected: {names}")
        missing = [name for name in names if merged.get(name) is None]
        if missing:
            raise KeyError(f"Missing input fields: {missing}")
        try:
            numeric = {name: float(merged[name]) for name in names}
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Input values must be numeric: {exc}") from exc
        return cls(**numeric)

    def replace(self, **changes: float) -> InputSet:
        data = asdict(self)
        for key, value in changes.items():
            key = INPUT_ALIASES.get(key, key)
            if key not in data:
                raise KeyError(f"Unknown input field '{key}'.")
            data[key] = float(value)
        return InputSet(**data)

    def to_dict(self) -> dict[str, float]:
        return asdict(self)


def default_inputs() -> InputSet:
    """Inputs restored by the calculator's reset action."""
    return InputSet(**RESET_DEFAULTS)


@dataclass(frozen=True, slots=True)
class ClimateResult:
    """Forcing breakdown and derived climate metrics for one input set.

    ``breakdown`` is stored as a read-only mapping view so it cannot drift from
    ``total_forcing`` after construction.
    """

    total_forcing: float
    delta_t: float
    sea_level_rise: float
    breakdown: Mapping[str, float] = field(hash=False)
    inputs: InputSet

    def __post_init__(self) -> None:
        object.__setattr__(self, "breakdown", MappingProxyType(dict(self.breakdown)))

    def to_dict(self) -> dict[str, float]:
        """Flat record: headline metrics, per-source forcing and echoed inputs."""
        record = {
            "total_forcing": self.total_forcing,
            "delta_t": self.delta_t,
            "sea_level_rise": self.sea_level_rise,
        }
        record.update(self.breakdown)
        record.update(self.inputs.to_dict())
        return record

    def to_frame(self) -> pd.DataFrame:
        """Return the breakdown as a tidy :class:`pandas.DataFrame`."""
        return pd.DataFrame(
            {
                "source": list(self.breakdown.keys()),
                "forcing_w_m2": list(self.breakdown.values()),
            }
        )


def compute_forcings(inputs: InputSet, baseline: Baseline = PRE_INDUSTRIAL) -> dict[str, float]:
    """Raw (unscaled) forcing for each gas relative to ``baseline``."""
    return {
        "CO2": float(forcing_co2(inputs.co2, baseline.co2_0)),
        "CH4": float(forcing_ch4(inputs.ch4, baseline.ch4_0, inputs.n2o, baseline.n2o_0)),
        "N2O": float(forcing_n2o(inputs.n2o, baseline.n2o_0, inputs.ch4, baseline.ch4_0)),
    }


def land_forcing(deforestation: float) -> float:
    return LAND_FORCING_PER_UNIT * deforestation


def compute_climate(inputs: InputSet, baseline: Baseline = PRE_INDUSTRIAL) -> ClimateResult:
    """Evaluate the full forcing chain for ``inputs``.

    Raises
    ------
    ConcentrationMustBePositive
        If any gas concentration (current or baseline) is not strictly positive.

    Non-finite policy levers never get this far: :class:`InputSet` rejects them
    with :class:`InputMustBeFinite`.
    """
    raw = compute_forcings(inputs, baseline)
    factors = policy_scale(inputs.renewable_share, inputs.waste_reduction)

    effective = {
        "CO2": raw["CO2"] * factors.renewable_factor * CO2_EFFICIENCY,
        "CH4": raw["CH4"] * factors.waste_factor,
        "N2O": raw["N2O"] * (N2O_RENEWABLE_WEIGHT * factors.renewable_factor + N2O_FIXED_WEIGHT),
        "Land": land_forcing(inputs.deforestation),
    }
    breakdown = {key: effective[key] for key in BREAKDOWN_KEYS}

    total = max(0.0, sum(breakdown.values()))
    delta_t = total * CLIMATE_SENSITIVITY
    sea_level_rise = delta_t * SEA_LEVEL_PER_DEGREE
    return ClimateResult(
        total_forcing=total,
        delta_t=delta_t,
        sea_level_rise=sea_level_rise,
        breakdown=breakdown,
        inputs=inputs,
    )


__all__ = [
    "INPUT_ALIASES",
    "POLICY_FIELDS",
    "InputMustBeFinite",
    "ClimateResult",
    "InputSet",
    "compute_climate",
    "compute_forcings",
    "default_inputs",
    "land_forcing",
]
