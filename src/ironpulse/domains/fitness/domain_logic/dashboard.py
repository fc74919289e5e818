"""Dashboard aggregation over a user's entry log.

Computes today's hydration and calorie totals, the weight history and the
weight-goal progress report. Inputs are the profile and its entries; nothing
is read from storage here.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Iterable, Sequence

from ironpulse.core.storage.models import (
    ENTRY_TYPES,
    AppEntry,
    BiometricEntry,
    HydrationEntry,
    UserProfile,
    WorkoutEntry,
)
from ironpulse.domains.fitness.domain_logic.entries import parse_timestamp
from ironpulse.domains.fitness.domain_logic.metrics import (
    bmi_display,
    daily_quote,
    progress_percent,
)
from ironpulse.domains.fitness.domain_logic.units import WeightUnit, display_weight, round_tenth

logger = logging.getLogger(__name__)

DEFAULT_HYDRATION_TARGET_ML = 2500
WEIGHT_TREND_POINTS = 7


@dataclass
class WeightPoint:
    timestamp: str
    weight: float


@dataclass
class GoalProgress:
    """Progress toward the goal weight, expressed in ``unit``."""

    unit: str
    start: float
    current: float
    goal: float
    gap: float
    percent: float


@dataclass
class DashboardSummary:
    username: str
    day: str
    water_intake_ml: int
    hydration_target_ml: int
    calories_burned: int
    workouts_today: int
    current_weight: float | None
    bmi: str
    activity_level: str | None
    goal: str | None
    weight_trend: list[WeightPoint] = field(default_factory=list)
    entry_counts: dict[str, int] = field(default_factory=dict)
    quote: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _entry_day(entry: AppEntry) -> date | None:
    try:
        return parse_timestamp(entry.timestamp).date()
    except ValueError:
        logger.warning("Entry %s has an unreadable timestamp: %r", entry.id, entry.timestamp)
        return None


def todays_entries(entries: Iterable[AppEntry], today: date | None = None) -> list[AppEntry]:
    """Entries whose UTC timestamp falls on ``today`` (default: current UTC date)."""
    today = today or datetime.now(timezone.utc).date()
    return [e for e in entries if _entry_day(e) == today]


def weight_history(entries: Iterable[AppEntry]) -> list[WeightPoint]:
    """Biometrics weights, oldest first."""
    points = []
    for entry in entries:
        if not isinstance(entry, BiometricEntry):
            continue
        try:
            when = parse_timestamp(entry.timestamp)
        except ValueError:
            continue
        points.append((when, WeightPoint(timestamp=entry.timestamp, weight=entry.weight)))
    points.sort(key=lambda pair: pair[0])
    return [point for _, point in points]


def starting_weight(history: Sequence[WeightPoint], current: float | None) -> float | None:
    """The first recorded weight, or ``current`` when there is no history."""
    return history[0].weight if history else current


def goal_progress(
    profile: UserProfile,
    entries: Iterable[AppEntry],
    unit: WeightUnit = "kg",
) -> GoalProgress | None:
    """Progress report toward the goal weight, or None without weight and goal weight."""
    if not profile.weight or not profile.goal_weight:
        return None

    history = weight_history(entries)
    start = starting_weight(history, profile.weight)
    percent = progress_percent(start, profile.weight, profile.goal_weight)

    return GoalProgress(
        unit=unit,
        start=display_weight(start, unit),
        current=display_weight(profile.weight, unit),
        goal=display_weight(profile.goal_weight, unit),
        gap=display_weight(abs(profile.goal_weight - profile.weight), unit),
        percent=round_tenth(percent),
    )


def build_dashboard(
    profile: UserProfile,
    entries: Sequence[AppEntry],
    *,
    today: date | None = None,
    hydration_target_ml: int = DEFAULT_HYDRATION_TARGET_ML,
    quotes: Sequence[str] | None = None,
) -> DashboardSummary:
    """Summarize today's activity and the recent weight trend.

    Entry timestamps are grouped by UTC date; the quote follows the local
    calendar day unless ``today`` is given.
    """
    quote = daily_quote(today, quotes)
    today = today or datetime.now(timezone.utc).date()
    todays = todays_entries(entries, today)

    water = sum(e.amount_ml for e in todays if isinstance(e, HydrationEntry))
    workouts = [e for e in todays if isinstance(e, WorkoutEntry)]
    counts = {t: 0 for t in ENTRY_TYPES}
    for entry in entries:
        counts[entry.type] += 1

    return DashboardSummary(
        username=profile.username,
        day=today.isoformat(),
        water_intake_ml=water,
        hydration_target_ml=hydration_target_ml,
        calories_burned=sum(e.calories_burned for e in workouts),
        workouts_today=len(workouts),
        current_weight=profile.weight,
        bmi=bmi_display(profile.weight, profile.height),
        activity_level=profile.activity_level,
        goal=profile.goal,
        weight_trend=weight_history(entries)[-WEIGHT_TREND_POINTS:],
        entry_counts=counts,
        quote=quote,
    )
