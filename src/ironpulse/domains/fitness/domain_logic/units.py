"""Unit conversion between metric and imperial body measurements.

All stored data is metric (kg, cm). Conversions happen only when reading user
input and when formatting values for display.
"""

from __future__ import annotations

import math
from typing import Literal

WeightUnit = Literal["kg", "lbs"]
HeightUnit = Literal["cm", "ft"]

KG_TO_LBS = 2.20462
INCH_TO_CM = 2.54


def cm_to_feet_inches(cm: float) -> tuple[int, int]:
    """Split a height in cm into whole feet and rounded inches (12 inches carry)."""
    total_inches = cm / INCH_TO_CM
    feet = math.floor(total_inches / 12)
    inches = _round_half_up(total_inches % 12)
    if inches == 12:
        feet += 1
        inches = 0
    return feet, inches


def feet_inches_to_cm(feet: float, inches: float = 0) -> int:
    return _round_half_up((feet * 12 + inches) * INCH_TO_CM)


def kg_to_lbs(kg: float) -> float:
    return kg * KG_TO_LBS


def lbs_to_kg(lbs: float) -> float:
    return lbs / KG_TO_LBS


def display_weight(kg: float, unit: WeightUnit = "kg") -> float:
    """Weight in the requested unit, rounded to 1 decimal for display."""
    value = kg_to_lbs(kg) if unit == "lbs" else kg
    return round_tenth(value)


def canonical_weight(value: float, unit: WeightUnit = "kg") -> float:
    """Convert a weight typed by the user to kilograms.

    Values typed in kg are stored as typed. Values converted from lbs are
    rounded to 1 decimal.
    """
    if unit == "lbs":
        return round_tenth(lbs_to_kg(value))
    if unit != "kg":
        raise ValueError(f"Unknown weight unit: {unit!r}")
    return value


def canonical_height(
    unit: HeightUnit = "cm",
    *,
    cm: float | None = None,
    feet: int | None = None,
    inches: int | None = None,
) -> int | None:
    """Convert a height typed by the user to whole centimeters.

    Returns None when nothing was entered for the chosen unit.
    """
    if unit == "cm":
        return int(cm) if cm is not None else None
    if unit != "ft":
        raise ValueError(f"Unknown height unit: {unit!r}")
    if feet is None and inches is None:
        return None
    return feet_inches_to_cm(feet or 0, inches or 0)


def round_tenth(value: float) -> float:
    """Round to 1 decimal, halves up (70.25 -> 70.3)."""
    return math.floor(value * 10 + 0.5) / 10


def _round_half_up(value: float) -> int:
    # Halves round up (round() would round 2.5 to 2).
    return math.floor(value + 0.5)
