"""JSON payload helpers shared by the fitness MCP tools."""

from __future__ import annotations

import json
from typing import Any

from ironpulse.domains.fitness.domain_logic.errors import TrackerError


def ok(status: str = "ok", **fields: Any) -> str:
    return json.dumps({"status": status, **fields})


def error(exc: TrackerError, **fields: Any) -> str:
    return json.dumps({
        "status": "error",
        "error": exc.code,
        "message": str(exc),
        **fields,
    })
