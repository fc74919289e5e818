"""IronPulse MCP server — application factory.

This module provides:
- create_app() for testability (integration tests create fresh server instances)
- Module-level `mcp` variable for FastMCP discovery
"""

from __future__ import annotations

import logging

from fastmcp import Context, FastMCP

from ironpulse.core.config.settings import Settings, get_settings
from ironpulse.core.storage.accounts import AccountRegistry
from ironpulse.core.storage.database import TrackerDatabase
from ironpulse.core.storage.encryption import EncryptionError, RecordEncryptor
from ironpulse.core.storage.entry_log import EntryLog
from ironpulse.core.storage.kv_store import LocalStore
from ironpulse.core.storage.session import SessionStore
from ironpulse.domains.fitness.domain_logic.auth import AuthService
from ironpulse.domains.fitness.domain_logic.content import ContentCatalog, default_content
from ironpulse.domains.fitness.domain_logic.profile_service import ProfileService
from ironpulse.domains.fitness.tools.account_tools import register_account_tools
from ironpulse.domains.fitness.tools.activity_tools import register_activity_tools
from ironpulse.domains.fitness.tools.insight_tools import register_insight_tools
from ironpulse.domains.fitness.tools.profile_tools import register_profile_tools

logger = logging.getLogger(__name__)

SERVER_NAME = "IronPulse"
SERVER_VERSION = "0.1.0"


def create_store(settings: Settings) -> LocalStore:
    """Open the SQLite-backed store described by ``settings``.

    An invalid encryption key is reported and the store falls back to plain
    JSON records.
    """
    encryptor: RecordEncryptor | None = None
    if settings.encryption_key:
        try:
            encryptor = RecordEncryptor(settings.encryption_key)
        except EncryptionError as exc:
            logger.error("Failed to initialize encryption: %s", exc)
            logger.warning("Continuing without encryption; records will be stored as plain JSON")

    database = TrackerDatabase(settings.db_path)
    database.initialize()
    logger.info(
        "Local store initialized: %s (schema v%d, encrypted=%s)",
        settings.db_path,
        database.get_schema_version(),
        encryptor is not None,
    )
    return LocalStore(database, encryptor, prefix=settings.storage_key_prefix)


def create_app(
    *,
    store_override: LocalStore | None = None,
    content_override: ContentCatalog | None = None,
    settings_override: Settings | None = None,
) -> FastMCP:
    """Create and configure the IronPulse MCP server.

    This is the main application factory. It:
    1. Creates the FastMCP server instance
    2. Opens the local store (SQLite, optionally encrypted)
    3. Builds the account registry, session store and entry log
    4. Restores the persisted session, if any
    5. Registers all tools
    """
    settings = settings_override or get_settings()

    # --- Server instance ---
    server = FastMCP(
        SERVER_NAME,
        instructions=(
            "IronPulse personal fitness tracker. Sign up or sign in, complete "
            "onboarding, then log workouts, hydration, sleep and journal entries "
            "and review your dashboard, BMI and weight-goal progress."
        ),
    )

    # --- Storage ---
    store = store_override or create_store(settings)
    registry = AccountRegistry(store)
    sessions = SessionStore(store)
    entry_log = EntryLog(store)

    # --- Domain services ---
    auth = AuthService(registry, sessions)
    session = auth.restore()
    if session is not None:
        logger.info("Resuming session for %s", session.username)
    profiles = ProfileService(auth, entry_log)
    content = content_override or default_content()

    # --- Register tools ---
    @server.tool
    async def health_check(ctx: Context) -> dict:
        """Check server health and return basic status information."""
        current = auth.current
        return {
            "status": "ok",
            "server": SERVER_NAME,
            "version": SERVER_VERSION,
            "storage_encrypted": store.encrypted,
            "accounts": len(registry.usernames()),
            "signed_in": current.username if current is not None and current.active else None,
            "quotes_loaded": len(content.quotes),
        }

    register_account_tools(server, auth)
    register_profile_tools(server, auth, profiles)
    register_activity_tools(server, auth, profiles)
    register_insight_tools(
        server, auth, profiles, content,
        hydration_target_ml=settings.hydration_target_ml,
    )
    logger.info("Fitness tools registered")

    return server


# Module-level instance for FastMCP discovery.
# Lazy: only created when this module is loaded directly (not when tests import create_app).
def __getattr__(name: str):
    if name == "mcp":
        global mcp  # noqa: PLW0603
        mcp = create_app()
        return mcp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
