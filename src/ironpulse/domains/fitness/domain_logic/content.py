"""Content catalog — quotes and guidance text read from YAML files on disk."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

# YAML content lives under src/ironpulse/domains/fitness/content/
CONTENT_DIR = Path(__file__).resolve().parent.parent / "content"


@dataclass
class FoodSuggestion:
    name: str
    calories: str
    description: str


@dataclass
class ContentCatalog:
    """Static text used by the dashboard and guidance tools."""

    quotes: list[str]
    nutrition: dict[str, list[FoodSuggestion]] = field(default_factory=dict)
    dietary_tip: str = ""
    activity_levels: dict[str, str] = field(default_factory=dict)
    goals: dict[str, str] = field(default_factory=dict)
    sleep_tips: list[str] = field(default_factory=list)

    def suggestions_for_goal(self, goal: str | None) -> list[FoodSuggestion]:
        """Food suggestions for a goal. ``fitness`` and unknown goals use ``maintain``."""
        key = "maintain" if goal in (None, "fitness") else goal
        return self.nutrition.get(key) or self.nutrition.get("maintain", [])

    def describe_activity_level(self, level: str | None) -> str:
        return self.activity_levels.get(level or "", "")

    def describe_goal(self, goal: str | None) -> str:
        return self.goals.get(goal or "", "")


def _read_yaml(path: Path) -> dict[str, Any]:
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping at the top of {path}")
    return data


def load_content(directory: str | Path = CONTENT_DIR) -> ContentCatalog:
    """Parse ``quotes.yaml`` and ``guidance.yaml`` from ``directory``.

    Raises:
        ValueError: If the quote list is empty (the daily quote needs at least one).
    """
    directory = Path(directory)
    quotes_data = _read_yaml(directory / "quotes.yaml")
    guidance = _read_yaml(directory / "guidance.yaml")

    quotes = [str(q) for q in quotes_data.get("quotes", [])]
    if not quotes:
        raise ValueError(f"No quotes defined in {directory / 'quotes.yaml'}")

    nutrition = {
        goal: [
            FoodSuggestion(
                name=item["name"],
                calories=item.get("calories", ""),
                description=item.get("description", ""),
            )
            for item in items
        ]
        for goal, items in guidance.get("nutrition", {}).items()
    }

    catalog = ContentCatalog(
        quotes=quotes,
        nutrition=nutrition,
        dietary_tip=guidance.get("dietary_tip", ""),
        activity_levels=dict(guidance.get("activity_levels", {})),
        goals=dict(guidance.get("goals", {})),
        sleep_tips=list(guidance.get("sleep_tips", [])),
    )
    logger.info("Loaded %d quotes and %d nutrition lists from %s",
                len(quotes), len(nutrition), directory)
    return catalog


@lru_cache(maxsize=1)
def default_content() -> ContentCatalog:
    """The bundled catalog, loaded once per process."""
    return load_content()
