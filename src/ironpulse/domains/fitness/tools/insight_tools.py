"""MCP tools for derived statistics, calculators and guidance."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from typing import TYPE_CHECKING

from fastmcp import Context, FastMCP

if TYPE_CHECKING:
    from ironpulse.domains.fitness.domain_logic.auth import AuthService
    from ironpulse.domains.fitness.domain_logic.content import ContentCatalog
    from ironpulse.domains.fitness.domain_logic.profile_service import ProfileService

from ironpulse.domains.fitness.domain_logic.dashboard import build_dashboard, goal_progress
from ironpulse.domains.fitness.domain_logic.errors import TrackerError
from ironpulse.domains.fitness.domain_logic.metrics import (
    EXERCISE_METS,
    calories_burned,
    daily_quote as quote_of_the_day,
    met_for,
    sleep_duration,
)
from ironpulse.domains.fitness.domain_logic.units import (
    WeightUnit,
    cm_to_feet_inches,
    feet_inches_to_cm,
    kg_to_lbs,
    lbs_to_kg,
    round_tenth,
)
from ironpulse.domains.fitness.tools.responses import error, ok

logger = logging.getLogger(__name__)


def register_insight_tools(
    mcp: FastMCP,
    auth: AuthService,
    profiles: ProfileService,
    content: ContentCatalog,
    *,
    hydration_target_ml: int = 2500,
) -> None:
    """Register dashboard, calculator and guidance tools on the MCP server."""

    @mcp.tool
    async def dashboard_summary(ctx: Context) -> str:
        """Today's hydration and calories, current weight and BMI, and the weight trend."""
        try:
            session = auth.require_session()
        except TrackerError as exc:
            return error(exc)

        summary = build_dashboard(
            session.profile,
            profiles.entries(session),
            hydration_target_ml=hydration_target_ml,
            quotes=content.quotes,
        )
        return json.dumps({"status": "ok", **summary.to_dict()}, indent=2)

    @mcp.tool
    async def weight_progress(ctx: Context, unit: WeightUnit = "kg") -> str:
        """Progress from your starting weight toward your goal weight.

        Args:
            unit: 'kg' or 'lbs' for the reported weights.
        """
        try:
            session = auth.require_session()
        except TrackerError as exc:
            return error(exc)

        report = goal_progress(session.profile, profiles.entries(session), unit)
        if report is None:
            return json.dumps({
                "status": "no_goal",
                "message": "Set both your weight and a goal weight to track progress.",
            })
        return ok(**asdict(report))

    @mcp.tool
    async def daily_quote(ctx: Context) -> str:
        """Today's motivational quote. The same quote is shown all day."""
        return ok(quote=quote_of_the_day(quotes=content.quotes))

    @mcp.tool
    async def nutrition_guide(ctx: Context) -> str:
        """Food suggestions for your goal, plus activity and goal descriptions."""
        session = auth.current
        profile = session.profile if session is not None and session.active else None
        goal = profile.goal if profile else None
        activity = profile.activity_level if profile else None

        return json.dumps({
            "status": "ok",
            "goal": goal or "maintain",
            "suggestions": [asdict(s) for s in content.suggestions_for_goal(goal)],
            "dietary_tip": content.dietary_tip,
            "goal_description": content.describe_goal(goal),
            "activity_description": content.describe_activity_level(activity),
        }, indent=2)

    @mcp.tool
    async def estimate_workout_calories(
        ctx: Context,
        exercise_type: str,
        duration_minutes: float,
        weight_kg: float | None = None,
    ) -> str:
        """Estimate calories for a workout without logging it.

        Args:
            exercise_type: Exercise key from the MET table.
            duration_minutes: Session length in minutes.
            weight_kg: Body weight; defaults to your profile weight, then 75 kg.
        """
        if weight_kg is None and auth.current is not None and auth.current.active:
            weight_kg = auth.current.profile.weight
        return ok(
            exercise_type=exercise_type,
            met=met_for(exercise_type),
            known_exercise=exercise_type in EXERCISE_METS,
            duration_minutes=duration_minutes,
            calories=calories_burned(exercise_type, duration_minutes, weight_kg),
        )

    @mcp.tool
    async def calculate_sleep(ctx: Context, bed_time: str, wake_time: str) -> str:
        """Work out sleep duration and full 90-minute cycles without logging.

        Args:
            bed_time: 24-hour HH:MM.
            wake_time: 24-hour HH:MM.
        """
        try:
            duration = sleep_duration(bed_time, wake_time)
        except ValueError as exc:
            return json.dumps({"status": "error", "error": "invalid_time", "message": str(exc)})
        return ok(
            minutes=duration.minutes,
            hours=duration.hours,
            cycles=duration.cycles,
            display=duration.display,
            tips=content.sleep_tips,
        )

    @mcp.tool
    async def convert_height(
        ctx: Context,
        cm: float | None = None,
        feet: int | None = None,
        inches: int = 0,
    ) -> str:
        """Convert a height between centimeters and feet/inches.

        Args:
            cm: Height in centimeters, to convert to feet and inches.
            feet: Whole feet, to convert (with inches) to centimeters.
            inches: Remaining inches.
        """
        if cm is not None:
            ft, inch = cm_to_feet_inches(cm)
            return ok(cm=cm, feet=ft, inches=inch)
        if feet is not None:
            return ok(cm=feet_inches_to_cm(feet, inches), feet=feet, inches=inches)
        return json.dumps({"status": "error", "error": "missing_value",
                           "message": "Pass either cm or feet."})

    @mcp.tool
    async def convert_weight(ctx: Context, value: float, unit: WeightUnit = "kg") -> str:
        """Convert a weight between kilograms and pounds (rounded to 1 decimal).

        Args:
            value: The weight to convert.
            unit: Unit of ``value``: 'kg' or 'lbs'.
        """
        if unit == "lbs":
            return ok(lbs=value, kg=round_tenth(lbs_to_kg(value)))
        return ok(kg=value, lbs=round_tenth(kg_to_lbs(value)))
