"""Builders for new log entries, filling in ids, timestamps and derived fields."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Iterable

from ironpulse.core.storage.models import (
    ENTRY_TYPES,
    AppEntry,
    BiometricEntry,
    HydrationEntry,
    JournalEntry,
    SleepEntry,
    WorkoutEntry,
)
from ironpulse.domains.fitness.domain_logic.errors import InvalidEntryError
from ironpulse.domains.fitness.domain_logic.metrics import (
    calories_burned,
    format_bmi,
    sleep_duration,
)

QUICK_LOG_HYDRATION_ML = 250


def new_entry_id() -> str:
    """Time-based unique id (UUID version 1)."""
    return str(uuid.uuid1())


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def build_workout(
    exercise_type: str,
    duration_minutes: float,
    weight_kg: float | None = None,
    *,
    timestamp: str | None = None,
) -> WorkoutEntry:
    if duration_minutes <= 0:
        raise InvalidEntryError("Workout duration must be greater than zero minutes")
    return WorkoutEntry(
        id=new_entry_id(),
        timestamp=timestamp or now_iso(),
        exercise_type=exercise_type,
        duration=duration_minutes,
        calories_burned=calories_burned(exercise_type, duration_minutes, weight_kg),
    )


def build_hydration(
    amount_ml: int = QUICK_LOG_HYDRATION_ML, *, timestamp: str | None = None
) -> HydrationEntry:
    if amount_ml <= 0:
        raise InvalidEntryError("Hydration amount must be greater than zero ml")
    return HydrationEntry(id=new_entry_id(), timestamp=timestamp or now_iso(), amount_ml=int(amount_ml))


def build_sleep(bed_time: str, wake_time: str, *, timestamp: str | None = None) -> SleepEntry:
    try:
        duration = sleep_duration(bed_time, wake_time)
    except ValueError as exc:
        raise InvalidEntryError(str(exc)) from exc
    if duration.minutes == 0:
        raise InvalidEntryError("Bed time and wake time must differ")
    return SleepEntry(
        id=new_entry_id(),
        timestamp=timestamp or now_iso(),
        bed_time=bed_time,
        wake_time=wake_time,
        duration_hours=duration.hours,
        cycles=duration.cycles,
    )


def build_journal(
    title: str, content: str, mood: str | None = None, *, timestamp: str | None = None
) -> JournalEntry:
    if not title.strip() or not content.strip():
        raise InvalidEntryError("Journal entries need both a title and some content")
    return JournalEntry(
        id=new_entry_id(),
        timestamp=timestamp or now_iso(),
        title=title,
        content=content,
        mood=mood or None,
    )


def build_biometric(
    weight_kg: float, height_cm: float | None = None, *, timestamp: str | None = None
) -> BiometricEntry:
    if weight_kg <= 0:
        raise InvalidEntryError("Weight must be greater than zero")
    return BiometricEntry(
        id=new_entry_id(),
        timestamp=timestamp or now_iso(),
        weight=weight_kg,
        bmi=format_bmi(weight_kg, height_cm),
    )


def entries_of_type(entries: Iterable[AppEntry], entry_type: str) -> list[AppEntry]:
    """Entries with the given ``type`` tag, order preserved."""
    if entry_type not in ENTRY_TYPES:
        raise InvalidEntryError(f"Unknown entry type: {entry_type!r}")
    return [e for e in entries if e.type == entry_type]


def latest_biometric(entries: Iterable[AppEntry]) -> BiometricEntry | None:
    """Most recently recorded biometrics entry (logs are newest first)."""
    return next((e for e in entries if isinstance(e, BiometricEntry)), None)


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO 8601 timestamp into an aware UTC datetime."""
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)
