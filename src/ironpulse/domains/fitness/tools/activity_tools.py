"""MCP tools for logging and reviewing daily activity.

Workouts, hydration, sleep and journal entries are appended to the signed-in
user's entry log. Derived values (calories, sleep duration and cycles) are
computed at logging time and stored with the entry.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from fastmcp import Context, FastMCP

if TYPE_CHECKING:
    from ironpulse.domains.fitness.domain_logic.auth import AuthService
    from ironpulse.domains.fitness.domain_logic.profile_service import ProfileService

from ironpulse.core.storage.models import AppEntry
from ironpulse.domains.fitness.domain_logic.entries import (
    QUICK_LOG_HYDRATION_ML,
    build_hydration,
    build_journal,
    build_sleep,
    build_workout,
    entries_of_type,
)
from ironpulse.domains.fitness.domain_logic.errors import TrackerError
from ironpulse.domains.fitness.tools.responses import error, ok

logger = logging.getLogger(__name__)


def register_activity_tools(
    mcp: FastMCP,
    auth: AuthService,
    profiles: ProfileService,
) -> None:
    """Register activity logging tools on the MCP server."""

    def _save(entry: AppEntry) -> str:
        session = auth.require_session()
        entries = profiles.log_entry(session, entry)
        return ok("saved", entry=entry.to_dict(), total_entries=len(entries))

    @mcp.tool
    async def log_workout(ctx: Context, exercise_type: str, duration_minutes: float) -> str:
        """Log a workout session. Calories are estimated from the MET table and body weight.

        Args:
            exercise_type: e.g. 'running', 'cycling', 'yoga', 'boxing', 'hiit',
                'weightlifting', 'swimming'. Other types use a MET of 1.
            duration_minutes: Session length in minutes.
        """
        try:
            session = auth.require_session()
            entry = build_workout(exercise_type, duration_minutes, session.profile.weight)
            return _save(entry)
        except TrackerError as exc:
            return error(exc)

    @mcp.tool
    async def log_hydration(ctx: Context, amount_ml: int = QUICK_LOG_HYDRATION_ML) -> str:
        """Log water intake.

        Args:
            amount_ml: Amount drunk in milliliters (default: one 250 ml glass).
        """
        try:
            return _save(build_hydration(amount_ml))
        except TrackerError as exc:
            return error(exc)

    @mcp.tool
    async def log_sleep(ctx: Context, bed_time: str = "22:00", wake_time: str = "06:00") -> str:
        """Log a night's sleep. Waking earlier than bedtime means the next morning.

        Args:
            bed_time: Time you went to bed, 24-hour HH:MM.
            wake_time: Time you woke up, 24-hour HH:MM.
        """
        try:
            return _save(build_sleep(bed_time, wake_time))
        except TrackerError as exc:
            return error(exc)

    @mcp.tool
    async def write_journal(ctx: Context, title: str, content: str, mood: str = "") -> str:
        """Write a training journal entry.

        Args:
            title: Short title, e.g. 'Leg Day Breakthrough'.
            content: How the session went, how you feel, any PBs.
            mood: Optional mood label.
        """
        try:
            return _save(build_journal(title, content, mood or None))
        except TrackerError as exc:
            return error(exc)

    @mcp.tool
    async def list_entries(ctx: Context, entry_type: str = "all", limit: int = 20) -> str:
        """List logged entries, newest first.

        Args:
            entry_type: 'workout', 'hydration', 'sleep', 'journal', 'biometrics' or 'all'.
            limit: Maximum number of entries to return.
        """
        try:
            session = auth.require_session()
            entries = profiles.entries(session)
            if entry_type != "all":
                entries = entries_of_type(entries, entry_type)
        except TrackerError as exc:
            return error(exc)

        selected = entries[: max(limit, 0)]
        return json.dumps({
            "status": "ok",
            "count": len(selected),
            "total": len(entries),
            "entries": [e.to_dict() for e in selected],
        }, indent=2)

    @mcp.tool
    async def delete_entry(ctx: Context, entry_id: str) -> str:
        """Delete one logged entry.

        Args:
            entry_id: The id of the entry, as shown by list_entries.
        """
        try:
            session = auth.require_session()
        except TrackerError as exc:
            return error(exc)

        if profiles.delete_entry(session, entry_id):
            return ok("deleted", entry_id=entry_id)
        return json.dumps({
            "status": "not_found",
            "entry_id": entry_id,
            "message": "No entry found with that id.",
        })
