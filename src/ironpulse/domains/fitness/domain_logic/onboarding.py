"""Three-step onboarding flow for new accounts.

``PERSONAL`` (age, gender) -> ``BODY`` (height, weight) -> ``GOALS`` (activity
level, goal, optional goal weight) -> ``COMPLETED``. Moving forward requires
the current step to be complete; moving back is allowed from any step but the
first. The flow itself persists nothing (see ``ProfileService``).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import IntEnum

from ironpulse.core.storage.models import ActivityLevel, Gender, Goal, UserProfile
from ironpulse.domains.fitness.domain_logic.errors import MissingRequiredFieldError
from ironpulse.domains.fitness.domain_logic.units import (
    HeightUnit,
    WeightUnit,
    canonical_height,
    canonical_weight,
)

logger = logging.getLogger(__name__)


class OnboardingStep(IntEnum):
    PERSONAL = 1
    BODY = 2
    GOALS = 3
    COMPLETED = 4


TOTAL_STEPS = 3


@dataclass
class OnboardingAnswers:
    """Raw answers as typed, in the units the user chose."""

    age: int | None = None
    gender: Gender | None = "male"
    height_unit: HeightUnit = "cm"
    height_cm: float | None = None
    height_feet: int | None = None
    height_inches: int | None = None
    weight_unit: WeightUnit = "kg"
    weight: float | None = None
    goal_weight: float | None = None
    activity_level: ActivityLevel | None = "moderate"
    goal: Goal | None = "fitness"


class OnboardingFlow:
    """State machine over ``OnboardingStep`` for one profile.

    Usage::

        flow = OnboardingFlow(session.profile)
        flow.answers.age = 30
        flow.advance()                # -> BODY
        ...
        flow.advance()                # -> COMPLETED, flow.result is set
    """

    def __init__(self, profile: UserProfile, answers: OnboardingAnswers | None = None) -> None:
        self._profile = profile
        self.answers = answers or OnboardingAnswers()
        self._step = OnboardingStep.PERSONAL
        self._result: UserProfile | None = None

    @property
    def step(self) -> OnboardingStep:
        return self._step

    @property
    def completed(self) -> bool:
        return self._step is OnboardingStep.COMPLETED

    @property
    def result(self) -> UserProfile | None:
        """The finished profile, available once the flow is completed."""
        return self._result

    @property
    def progress(self) -> float:
        """Fraction of steps reached, for a progress bar."""
        return min(int(self._step), TOTAL_STEPS) / TOTAL_STEPS

    def missing_fields(self, step: OnboardingStep | None = None) -> list[str]:
        """Fields still required before ``step`` (default: current) can be left."""
        step = self._step if step is None else step
        a = self.answers
        missing: list[str] = []

        if step is OnboardingStep.PERSONAL:
            if not a.age:
                missing.append("age")
            if not a.gender:
                missing.append("gender")
        elif step is OnboardingStep.BODY:
            if a.height_unit == "cm":
                if not a.height_cm:
                    missing.append("height_cm")
            elif a.height_feet is None:
                missing.append("height_feet")
            if a.weight is None or a.weight <= 0:
                missing.append("weight")
        elif step is OnboardingStep.GOALS:
            if not a.activity_level:
                missing.append("activity_level")
            if not a.goal:
                missing.append("goal")
        return missing

    def is_step_valid(self) -> bool:
        return not self.completed and not self.missing_fields()

    def advance(self) -> OnboardingStep:
        """Move to the next step, finishing the profile after ``GOALS``.

        Raises:
            MissingRequiredFieldError: If the current step is incomplete. The
                step does not change.
        """
        if self.completed:
            return self._step

        missing = self.missing_fields()
        if missing:
            raise MissingRequiredFieldError(missing, step=int(self._step))

        if self._step is OnboardingStep.GOALS:
            self._result = self._finish()
        self._step = OnboardingStep(self._step + 1)
        logger.debug("Onboarding for %s moved to %s", self._profile.username, self._step.name)
        return self._step

    def back(self) -> OnboardingStep:
        """Return to the previous step. No-op on the first step and once completed."""
        if OnboardingStep.PERSONAL < self._step < OnboardingStep.COMPLETED:
            self._step = OnboardingStep(self._step - 1)
        return self._step

    def _finish(self) -> UserProfile:
        a = self.answers
        height = canonical_height(
            a.height_unit, cm=a.height_cm, feet=a.height_feet, inches=a.height_inches
        )
        weight = canonical_weight(a.weight, a.weight_unit) if a.weight else None
        goal_weight = canonical_weight(a.goal_weight, a.weight_unit) if a.goal_weight else None

        return replace(
            self._profile,
            age=a.age,
            gender=a.gender,
            height=height,
            weight=weight,
            goal_weight=goal_weight if goal_weight is not None else self._profile.goal_weight,
            activity_level=a.activity_level,
            goal=a.goal,
            onboarding_completed=True,
        )
