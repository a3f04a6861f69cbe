from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Baseline:
    """Pre-industrial reference concentrations (ppm for CO₂, ppb for CH₄/N₂O)."""

    co2_0: float = 280.0
    ch4_0: float = 722.0
    n2o_0: float = 270.0


PRE_INDUSTRIAL = Baseline()

# Order matters: the top-contributor insight keeps the first key on ties.
BREAKDOWN_KEYS: tuple[str, ...] = ("CO2", "CH4", "N2O", "Land")

CO2_FORCING_COEFF = 5.35
CH4_SQRT_COEFF = 0.036
N2O_SQRT_COEFF = 0.12

OVERLAP_SCALE = 0.47
OVERLAP_LINEAR_COEFF = 2.01e-5
OVERLAP_LINEAR_EXPONENT = 0.75
OVERLAP_CUBIC_COEFF = 5.31e-15
OVERLAP_CUBIC_EXPONENT = 1.52

RENEWABLE_ATTENUATION = 0.6
WASTE_ATTENUATION = 0.25

CO2_EFFICIENCY = 0.95
N2O_RENEWABLE_WEIGHT = 0.9
N2O_FIXED_WEIGHT = 0.1
LAND_FORCING_PER_UNIT = 0.12

CLIMATE_SENSITIVITY = 0.8  # °C per W/m²
SEA_LEVEL_PER_DEGREE = 0.3  # m per °C

WARMING_TARGET = 1.5

RESET_DEFAULTS: dict[str, float] = {
    "co2": 420.0,
    "ch4": 1900.0,
    "n2o": 335.0,
    "renewable_share": 20.0,
    "waste_reduction": 0.0,
    "deforestation": 0.3,
}
