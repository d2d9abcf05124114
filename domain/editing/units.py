"""
Unit conversions for loads.

Pure functions, full precision. Rounding for storage/display is left to the
caller (``round_load``).
"""

from typing import Optional


KG_TO_LBS = 2.20462

# Precision used when derived values are written into a program
STORED_DECIMALS = 2


def kg_to_lbs(kg: float) -> float:
    """Convert kilograms to pounds."""
    return kg * KG_TO_LBS


def lbs_to_kg(lbs: float) -> float:
    """Convert pounds to kilograms."""
    return lbs / KG_TO_LBS


def weight_to_intensity(weight: float, one_rep_max: float) -> float:
    """
    Express a weight as a percentage of one-rep-max.

    Raises:
        ValueError: If ``one_rep_max`` is not positive.
    """
    _check_one_rep_max(one_rep_max)
    return (weight / one_rep_max) * 100


def intensity_to_weight(percent: float, one_rep_max: float) -> float:
    """
    Convert a percentage of one-rep-max to an absolute weight.

    Raises:
        ValueError: If ``one_rep_max`` is not positive.
    """
    _check_one_rep_max(one_rep_max)
    return (percent / 100) * one_rep_max


def round_load(value: Optional[float]) -> Optional[float]:
    """Round a derived load for storage; None passes through."""
    if value is None:
        return None
    return round(value, STORED_DECIMALS)


def _check_one_rep_max(one_rep_max: float) -> None:
    if one_rep_max is None or one_rep_max <= 0:
        raise ValueError(f"One-rep-max must be positive, got {one_rep_max}")
