"""MCP tools for onboarding and profile settings."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from fastmcp import Context, FastMCP

if TYPE_CHECKING:
    from ironpulse.domains.fitness.domain_logic.auth import AuthService
    from ironpulse.domains.fitness.domain_logic.profile_service import ProfileService

from ironpulse.core.storage.models import ActivityLevel, Gender, Goal
from ironpulse.domains.fitness.domain_logic.errors import TrackerError
from ironpulse.domains.fitness.domain_logic.onboarding import OnboardingAnswers, OnboardingStep
from ironpulse.domains.fitness.domain_logic.units import (
    HeightUnit,
    WeightUnit,
    canonical_height,
    canonical_weight,
)
from ironpulse.domains.fitness.tools.responses import error, ok

logger = logging.getLogger(__name__)


def register_profile_tools(
    mcp: FastMCP,
    auth: AuthService,
    profiles: ProfileService,
) -> None:
    """Register onboarding and profile tools on the MCP server."""

    @mcp.tool
    async def complete_onboarding(
        ctx: Context,
        age: int | None = None,
        gender: Gender = "male",
        height_unit: HeightUnit = "cm",
        height_cm: float | None = None,
        height_feet: int | None = None,
        height_inches: int | None = None,
        weight_unit: WeightUnit = "kg",
        weight: float | None = None,
        goal_weight: float | None = None,
        activity_level: ActivityLevel = "moderate",
        goal: Goal = "fitness",
    ) -> str:
        """Answer the three onboarding steps for a new account in one go.

        Step 1 needs age and gender, step 2 needs height and weight, step 3
        needs activity level and goal. Heights and weights may be given in
        imperial units; they are stored in cm and kg.

        Args:
            age: Age in years.
            gender: 'male', 'female' or 'other'.
            height_unit: 'cm' or 'ft'.
            height_cm: Height in centimeters (when height_unit is 'cm').
            height_feet: Whole feet (when height_unit is 'ft').
            height_inches: Remaining inches (when height_unit is 'ft').
            weight_unit: 'kg' or 'lbs', used for weight and goal_weight.
            weight: Current body weight.
            goal_weight: Optional target weight.
            activity_level: 'sedentary', 'light', 'moderate' or 'active'.
            goal: 'gain', 'loss', 'maintain' or 'fitness'.
        """
        try:
            session = auth.require_session()
        except TrackerError as exc:
            return error(exc)
        if not session.needs_onboarding:
            return ok("already_completed", user=session.profile.to_dict())

        flow = profiles.start_onboarding(session)
        flow.answers = OnboardingAnswers(
            age=age,
            gender=gender,
            height_unit=height_unit,
            height_cm=height_cm,
            height_feet=height_feet,
            height_inches=height_inches,
            weight_unit=weight_unit,
            weight=weight,
            goal_weight=goal_weight,
            activity_level=activity_level,
            goal=goal,
        )
        try:
            while flow.step is not OnboardingStep.COMPLETED:
                profiles.advance_onboarding(session, flow)
        except TrackerError as exc:
            return error(exc, step=int(flow.step))

        logger.info("Onboarding finished for %s via tool", session.username)
        return ok("completed", user=session.profile.to_dict())

    @mcp.tool
    async def update_profile(
        ctx: Context,
        email: str | None = None,
        age: int | None = None,
        gender: Gender | None = None,
        height_unit: HeightUnit = "cm",
        height_cm: float | None = None,
        height_feet: int | None = None,
        height_inches: int | None = None,
        weight_unit: WeightUnit = "kg",
        weight: float | None = None,
        goal_weight: float | None = None,
        activity_level: ActivityLevel | None = None,
        goal: Goal | None = None,
    ) -> str:
        """Change profile settings. Only the fields you pass are changed.

        Saving a new weight also records it in the weight history.

        Args:
            email: New email address.
            age: Age in years.
            gender: 'male', 'female' or 'other'.
            height_unit: 'cm' or 'ft'.
            height_cm: Height in centimeters (when height_unit is 'cm').
            height_feet: Whole feet (when height_unit is 'ft').
            height_inches: Remaining inches (when height_unit is 'ft').
            weight_unit: 'kg' or 'lbs', used for weight and goal_weight.
            weight: Current body weight.
            goal_weight: Target weight.
            activity_level: 'sedentary', 'light', 'moderate' or 'active'.
            goal: 'gain', 'loss', 'maintain' or 'fitness'.
        """
        try:
            session = auth.require_session()
        except TrackerError as exc:
            return error(exc)

        changes: dict[str, Any] = {
            name: value
            for name, value in (
                ("email", email),
                ("age", age),
                ("gender", gender),
                ("activity_level", activity_level),
                ("goal", goal),
            )
            if value is not None
        }
        height = canonical_height(
            height_unit, cm=height_cm, feet=height_feet, inches=height_inches
        )
        if height is not None:
            changes["height"] = height
        if weight is not None:
            changes["weight"] = canonical_weight(weight, weight_unit)
        if goal_weight is not None:
            changes["goal_weight"] = canonical_weight(goal_weight, weight_unit)

        try:
            updated = profiles.update_profile(session, **changes)
        except TrackerError as exc:
            return error(exc)
        return ok("saved", updated_fields=sorted(changes), user=updated.to_dict())
