"""Simplified IPCC-style radiative forcing expressions for CO₂, CH₄ and N₂O.

Every function accepts plain floats or NumPy arrays, so the same expressions back
single evaluations and vectorised sweeps. Forcings are expressed in W/m² relative to
the supplied baseline concentration.

Concentrations must be strictly positive: the expressions take logarithms and
square roots of them. Instead of letting NaN propagate through the pipeline, a
non-positive value raises :class:`ConcentrationMustBePositive`.
"""

from __future__ import annotations

from typing import Union

import numpy as np

from .constants import (
    CH4_SQRT_COEFF,
    CO2_FORCING_COEFF,
    N2O_SQRT_COEFF,
    OVERLAP_CUBIC_COEFF,
    OVERLAP_CUBIC_EXPONENT,
    OVERLAP_LINEAR_COEFF,
    OVERLAP_LINEAR_EXPONENT,
    OVERLAP_SCALE,
)

ArrayLike = Union[float, np.ndarray]


class ConcentrationMustBePositive(ValueError):
    """Raised when a gas concentration is zero, negative or NaN."""

    def __init__(self, name: str, value: object) -> None:
        super().__init__(f"Concentration '{name}' must be strictly positive (got {value!r}).")
        self.name = name
        self.value = value


def _require_positive(**values: ArrayLike) -> None:
    for name, value in values.items():
        arr = np.asarray(value, dtype=float)
        # NaN compares False against 0, so check positivity rather than non-positivity.
        if not np.all(arr > 0):
            raise ConcentrationMustBePositive(name, value)


def forcing_co2(c: ArrayLike, c0: ArrayLike) -> ArrayLike:
    """Logarithmic CO₂ forcing ``5.35 * ln(C / C0)``."""
    _require_positive(c=c, c0=c0)
    return CO2_FORCING_COEFF * np.log(np.divide(c, c0))


def band_overlap(m: ArrayLike, n: ArrayLike) -> ArrayLike:
    """CH₄–N₂O absorption band overlap term.

    Not symmetric in ``m`` and ``n``: the second term carries an extra factor of the
    methane concentration.
    """
    _require_positive(m=m, n=n)
    mn = np.multiply(m, n)
    term = (
        1.0
        + OVERLAP_LINEAR_COEFF * np.power(mn, OVERLAP_LINEAR_EXPONENT)
        + OVERLAP_CUBIC_COEFF * np.multiply(m, np.power(mn, OVERLAP_CUBIC_EXPONENT))
    )
    return OVERLAP_SCALE * np.log(term)


def forcing_ch4(m: ArrayLike, m0: ArrayLike, n: ArrayLike, n0: ArrayLike) -> ArrayLike:
    """CH₄ forcing with the overlap correction evaluated at baseline N₂O.

    ``n`` is validated but the overlap is taken against the baseline ``n0`` only.
    """
    _require_positive(m=m, m0=m0, n=n, n0=n0)
    direct = CH4_SQRT_COEFF * (np.sqrt(m) - np.sqrt(m0))
    return direct - (band_overlap(m, n0) - band_overlap(m0, n0))


def forcing_n2o(n: ArrayLike, n0: ArrayLike, m: ArrayLike, m0: ArrayLike) -> ArrayLike:
    """N₂O forcing with the overlap correction evaluated at baseline CH₄."""
    _require_positive(n=n, n0=n0, m=m, m0=m0)
    direct = N2O_SQRT_COEFF * (np.sqrt(n) - np.sqrt(n0))
    return direct - (band_overlap(m0, n) - band_overlap(m0, n0))


__all__ = [
    "ConcentrationMustBePositive",
    "band_overlap",
    "forcing_ch4",
    "forcing_co2",
    "forcing_n2o",
]
