"""Derived fitness metrics: BMI, calorie burn, sleep, goal progress, daily quote.

Everything here is a pure function of its arguments (the daily quote also
reads today's date when none is given). Nothing is cached or persisted, so a
value is always recomputed from the current state.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from typing import Sequence

from ironpulse.domains.fitness.domain_logic.content import default_content
from ironpulse.domains.fitness.domain_logic.units import round_tenth

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# Metabolic Equivalent of Task per exercise type
EXERCISE_METS: dict[str, float] = {
    "running": 9.8,
    "cycling": 7.5,
    "yoga": 3.0,
    "boxing": 12.8,
    "hiit": 11.0,
    "weightlifting": 6.0,
    "swimming": 8.0,
}

DEFAULT_MET = 1.0
DEFAULT_BODY_WEIGHT_KG = 75.0

MINUTES_PER_DAY = 1440
SLEEP_CYCLE_MINUTES = 90

BMI_PLACEHOLDER = "--"


# ---------------------------------------------------------------------------
# BMI
# ---------------------------------------------------------------------------

def bmi(weight_kg: float | None, height_cm: float | None) -> float | None:
    """Body mass index, or None when weight or height is missing."""
    if not weight_kg or not height_cm:
        return None
    height_m = height_cm / 100
    return weight_kg / (height_m * height_m)


def format_bmi(weight_kg: float | None, height_cm: float | None) -> str | None:
    """BMI formatted to 1 decimal, or None when it cannot be computed."""
    value = bmi(weight_kg, height_cm)
    return f"{value:.1f}" if value is not None else None


def bmi_display(weight_kg: float | None, height_cm: float | None) -> str:
    return format_bmi(weight_kg, height_cm) or BMI_PLACEHOLDER


# ---------------------------------------------------------------------------
# Calorie burn
# ---------------------------------------------------------------------------

def met_for(exercise_type: str) -> float:
    return EXERCISE_METS.get(exercise_type, DEFAULT_MET)


def calories_burned(
    exercise_type: str,
    duration_minutes: float,
    weight_kg: float | None = None,
) -> int:
    """Estimate calories burned: ``MET x body weight (kg) x hours``.

    Unknown exercise types use a MET of 1; a missing weight uses 75 kg.
    """
    weight = weight_kg or DEFAULT_BODY_WEIGHT_KG
    return math.floor(met_for(exercise_type) * weight * (duration_minutes / 60) + 0.5)


# ---------------------------------------------------------------------------
# Sleep
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SleepDuration:
    minutes: int
    hours: float  # rounded to 1 decimal, halves up
    cycles: int

    @property
    def display(self) -> str:
        """Human-readable duration, e.g. ``7h 30m`` or ``8h``."""
        hours, mins = divmod(self.minutes, 60)
        return f"{hours}h {mins}m" if mins else f"{hours}h"


def parse_clock(value: str) -> int:
    """Minutes after midnight for an ``HH:MM`` string.

    Raises:
        ValueError: If ``value`` is not a valid 24-hour clock time.
    """
    try:
        hours_str, minutes_str = value.strip().split(":")
        hours, minutes = int(hours_str), int(minutes_str)
    except (AttributeError, ValueError) as exc:
        raise ValueError(f"Expected HH:MM, got {value!r}") from exc
    if not (0 <= hours < 24 and 0 <= minutes < 60):
        raise ValueError(f"Clock time out of range: {value!r}")
    return hours * 60 + minutes


def sleep_duration(bed_time: str, wake_time: str) -> SleepDuration:
    """Time asleep between two clock times; waking earlier than bedtime means overnight.

    Equal times give zero minutes.
    """
    minutes = (parse_clock(wake_time) - parse_clock(bed_time)) % MINUTES_PER_DAY
    return SleepDuration(
        minutes=minutes,
        hours=round_tenth(minutes / 60),
        cycles=minutes // SLEEP_CYCLE_MINUTES,
    )


# ---------------------------------------------------------------------------
# Weight goal progress
# ---------------------------------------------------------------------------

def progress_percent(
    start: float | None,
    current: float | None,
    goal: float | None,
) -> float:
    """Percentage of the way from ``start`` to ``goal`` weight, in [0, 100].

    Direction comes from ``start`` vs ``goal``. Reaching or passing the goal is
    100; being at or behind the start is 0. Missing current or goal weight
    gives 0. A zero start-to-goal distance counts as done.
    """
    if not current or not goal:
        return 0.0
    if start is None:
        start = current

    total_distance = abs(goal - start)
    if total_distance == 0:
        return 100.0

    aiming_for_loss = start > goal
    if aiming_for_loss:
        if current <= goal:
            return 100.0
        if current >= start:
            return 0.0
        progress = (start - current) / total_distance * 100
    else:
        if current >= goal:
            return 100.0
        if current <= start:
            return 0.0
        progress = (current - start) / total_distance * 100

    return max(0.0, min(100.0, progress))


# ---------------------------------------------------------------------------
# Daily quote
# ---------------------------------------------------------------------------

def day_of_year(today: date) -> int:
    """1 for January 1st."""
    return today.timetuple().tm_yday


def daily_quote(today: date | None = None, quotes: Sequence[str] | None = None) -> str:
    """The quote for a calendar day. Stable all day, changes at local midnight."""
    if today is None:
        today = date.today()
    if quotes is None:
        quotes = default_content().quotes
    if not quotes:
        raise ValueError("No quotes to choose from")
    return quotes[day_of_year(today) % len(quotes)]
