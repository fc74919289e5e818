"""IronPulse server entry point — ``python -m ironpulse.core.server.main``."""

from __future__ import annotations

import logging

from ironpulse.core.config.settings import get_settings
from ironpulse.core.server.app import create_app


def run() -> None:
    """Start the IronPulse MCP server on the stdio transport.

    The tracker is local-only: it never listens on a network socket.
    """
    settings = get_settings()
    logging.basicConfig(level=getattr(logging, settings.ironpulse_log_level.upper(), logging.INFO))

    logger = logging.getLogger(__name__)
    logger.info("Starting IronPulse server (store: %s)", settings.db_path)

    mcp = create_app(settings_override=settings)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    run()
