"""Policy levers expressed as multiplicative attenuation factors."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .constants import RENEWABLE_ATTENUATION, WASTE_ATTENUATION

LOGGER = logging.getLogger("forcing_model")


@dataclass(frozen=True, slots=True)
class PolicyFactors:
    renewable_factor: float
    waste_factor: float


def renewable_factor(renewable_share: float) -> float:
    """``1 - 0.6 * share/100``; 0.4 at full renewables, 1.0 at none."""
    return 1 - RENEWABLE_ATTENUATION * (renewable_share / 100)


def waste_factor(waste_reduction: float) -> float:
    """``1 - 0.25 * reduction/100``; ranges from 0.75 to 1.0."""
    return 1 - WASTE_ATTENUATION * (waste_reduction / 100)


def policy_scale(renewable_share: float, waste_reduction: float) -> PolicyFactors:
    """Return both policy factors.

    Percentages outside 0-100 are not clamped; the linear factors extrapolate and
    range checks are left to the caller.
    """
    for name, value in (("renewable_share", renewable_share), ("waste_reduction", waste_reduction)):
        if not 0 <= value <= 100:
            LOGGER.debug("%s=%s is outside 0-100; extrapolating policy factor", name, value)
    return PolicyFactors(
        renewable_factor=renewable_factor(renewable_share),
        waste_factor=waste_factor(waste_reduction),
    )


__all__ = ["PolicyFactors", "policy_scale", "renewable_factor", "waste_factor"]
