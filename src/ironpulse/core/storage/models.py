"""Data models for the IronPulse persistence layer.

Records are persisted as JSON with camelCase field names; the dataclasses
below use snake_case and convert at the ``to_dict``/``from_dict`` boundary.
Weights are always kilograms and heights always centimeters here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Literal, Union

Gender = Literal["male", "female", "other"]
Goal = Literal["gain", "loss", "maintain", "fitness"]
ActivityLevel = Literal["sedentary", "light", "moderate", "active"]
EntryType = Literal["workout", "hydration", "sleep", "journal", "biometrics"]

GENDERS: tuple[str, ...] = ("male", "female", "other")
GOALS: tuple[str, ...] = ("gain", "loss", "maintain", "fitness")
ACTIVITY_LEVELS: tuple[str, ...] = ("sedentary", "light", "moderate", "active")
ENTRY_TYPES: tuple[str, ...] = ("workout", "hydration", "sleep", "journal", "biometrics")


def _drop_none(data: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in data.items() if v is not None}


# ---------------------------------------------------------------------------
# Accounts and session
# ---------------------------------------------------------------------------

@dataclass
class UserProfile:
    """One account's profile. ``username`` never changes after creation."""

    username: str
    joined_at: str  # ISO 8601
    email: str | None = None
    age: int | None = None
    gender: Gender | None = None
    height: float | None = None  # cm
    weight: float | None = None  # kg
    goal_weight: float | None = None  # kg
    goal: Goal | None = None
    activity_level: ActivityLevel | None = None
    onboarding_completed: bool = False

    def to_dict(self) -> dict[str, Any]:
        return _drop_none({
            "username": self.username,
            "email": self.email,
            "age": self.age,
            "gender": self.gender,
            "height": self.height,
            "weight": self.weight,
            "goalWeight": self.goal_weight,
            "goal": self.goal,
            "activityLevel": self.activity_level,
            "joinedAt": self.joined_at,
            "onboardingCompleted": self.onboarding_completed,
        })

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> UserProfile:
        return cls(
            username=data["username"],
            joined_at=data.get("joinedAt", ""),
            email=data.get("email"),
            age=data.get("age"),
            gender=data.get("gender"),
            height=data.get("height"),
            weight=data.get("weight"),
            goal_weight=data.get("goalWeight"),
            goal=data.get("goal"),
            activity_level=data.get("activityLevel"),
            onboarding_completed=bool(data.get("onboardingCompleted", False)),
        )


@dataclass
class StoredAccount:
    """Registry record: a profile and its plaintext password."""

    profile: UserProfile
    password: str

    def to_dict(self) -> dict[str, Any]:
        return {"profile": self.profile.to_dict(), "password": self.password}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StoredAccount:
        return cls(profile=UserProfile.from_dict(data["profile"]), password=data["password"])


@dataclass
class AuthState:
    """The persisted login state."""

    is_authenticated: bool = False
    user: UserProfile | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "isAuthenticated": self.is_authenticated,
            "user": self.user.to_dict() if self.user is not None else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AuthState:
        user = data.get("user")
        return cls(
            is_authenticated=bool(data.get("isAuthenticated", False)),
            user=UserProfile.from_dict(user) if user else None,
        )


# ---------------------------------------------------------------------------
# Entries (tagged union on ``type``)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class WorkoutEntry:
    id: str
    timestamp: str
    exercise_type: str
    duration: float  # minutes
    calories_burned: int

    type: ClassVar[str] = "workout"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "type": self.type,
            "exerciseType": self.exercise_type,
            "duration": self.duration,
            "caloriesBurned": self.calories_burned,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WorkoutEntry:
        return cls(
            id=data["id"],
            timestamp=data["timestamp"],
            exercise_type=data["exerciseType"],
            duration=data["duration"],
            calories_burned=int(data["caloriesBurned"]),
        )


@dataclass(frozen=True)
class HydrationEntry:
    id: str
    timestamp: str
    amount_ml: int

    type: ClassVar[str] = "hydration"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "type": self.type,
            "amountMl": self.amount_ml,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> HydrationEntry:
        return cls(id=data["id"], timestamp=data["timestamp"], amount_ml=int(data["amountMl"]))


@dataclass(frozen=True)
class SleepEntry:
    id: str
    timestamp: str
    bed_time: str  # HH:MM
    wake_time: str  # HH:MM
    duration_hours: float
    cycles: int

    type: ClassVar[str] = "sleep"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "type": self.type,
            "bedTime": self.bed_time,
            "wakeTime": self.wake_time,
            "durationHours": self.duration_hours,
            "cycles": self.cycles,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SleepEntry:
        return cls(
            id=data["id"],
            timestamp=data["timestamp"],
            bed_time=data["bedTime"],
            wake_time=data["wakeTime"],
            duration_hours=data["durationHours"],
            cycles=int(data["cycles"]),
        )


@dataclass(frozen=True)
class JournalEntry:
    id: str
    timestamp: str
    title: str
    content: str
    mood: str | None = None

    type: ClassVar[str] = "journal"

    def to_dict(self) -> dict[str, Any]:
        return _drop_none({
            "id": self.id,
            "timestamp": self.timestamp,
            "type": self.type,
            "title": self.title,
            "content": self.content,
            "mood": self.mood,
        })

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> JournalEntry:
        return cls(
            id=data["id"],
            timestamp=data["timestamp"],
            title=data["title"],
            content=data["content"],
            mood=data.get("mood"),
        )


@dataclass(frozen=True)
class BiometricEntry:
    id: str
    timestamp: str
    weight: float  # kg
    bmi: str | None  # formatted to 1 decimal; None when height is unknown

    type: ClassVar[str] = "biometrics"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "type": self.type,
            "weight": self.weight,
            "bmi": self.bmi,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BiometricEntry:
        bmi = data.get("bmi")
        return cls(
            id=data["id"],
            timestamp=data["timestamp"],
            weight=data["weight"],
            bmi=str(bmi) if bmi is not None else None,
        )


AppEntry = Union[WorkoutEntry, HydrationEntry, SleepEntry, JournalEntry, BiometricEntry]

ENTRY_CLASSES: dict[str, type] = {
    "workout": WorkoutEntry,
    "hydration": HydrationEntry,
    "sleep": SleepEntry,
    "journal": JournalEntry,
    "biometrics": BiometricEntry,
}


def entry_from_dict(data: dict[str, Any]) -> AppEntry:
    """Decode a persisted entry, dispatching on its ``type`` tag.

    Raises:
        ValueError: If the tag is unknown or a required field is missing.
    """
    tag = data.get("type")
    entry_cls = ENTRY_CLASSES.get(tag)  # type: ignore[arg-type]
    if entry_cls is None:
        raise ValueError(f"Unknown entry type: {tag!r}")
    try:
        return entry_cls.from_dict(data)
    except (KeyError, TypeError) as exc:
        raise ValueError(f"Malformed {tag} entry: {exc}") from exc

