"""MCP tools for accounts and the current session."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastmcp import Context, FastMCP

if TYPE_CHECKING:
    from ironpulse.domains.fitness.domain_logic.auth import AuthService

from ironpulse.domains.fitness.domain_logic.errors import TrackerError
from ironpulse.domains.fitness.tools.responses import error, ok

logger = logging.getLogger(__name__)


def register_account_tools(mcp: FastMCP, auth: AuthService) -> None:
    """Register sign-up, sign-in and session tools on the MCP server."""

    @mcp.tool
    async def sign_up(ctx: Context, username: str, password: str, email: str) -> str:
        """Create a new IronPulse account and sign in to it.

        Args:
            username: Unique account name.
            password: Account password (stored locally in plain text).
            email: Contact email address. Required.
        """
        try:
            session = auth.sign_up(username, password, email)
        except TrackerError as exc:
            logger.info("sign_up refused for %r: %s", username, exc.code)
            return error(exc)
        logger.info("sign_up: account %s created", session.username)
        return ok(
            "signed_up",
            user=session.profile.to_dict(),
            needs_onboarding=session.needs_onboarding,
        )

    @mcp.tool
    async def sign_in(ctx: Context, username: str, password: str) -> str:
        """Sign in to an existing account.

        Args:
            username: Account name.
            password: Account password.
        """
        try:
            session = auth.sign_in(username, password)
        except TrackerError as exc:
            logger.info("sign_in refused for %r: %s", username, exc.code)
            return error(exc)
        logger.info("sign_in: %s (onboarding pending: %s)", session.username, session.needs_onboarding)
        return ok(
            "signed_in",
            user=session.profile.to_dict(),
            needs_onboarding=session.needs_onboarding,
        )

    @mcp.tool
    async def sign_out(ctx: Context) -> str:
        """Sign out of the current account."""
        session = auth.current
        auth.sign_out()
        logger.info("sign_out: %s", session.username if session is not None else "nobody signed in")
        return ok("signed_out")

    @mcp.tool
    async def current_user(ctx: Context) -> str:
        """Show who is signed in and whether onboarding is still pending."""
        session = auth.current
        if session is None or not session.active:
            return ok(is_authenticated=False, user=None)
        return ok(
            is_authenticated=True,
            user=session.profile.to_dict(),
            needs_onboarding=session.needs_onboarding,
        )
