"""Tests for the YAML content catalog."""

from __future__ import annotations

import pytest

from ironpulse.domains.fitness.domain_logic.content import (
    ContentCatalog,
    FoodSuggestion,
    default_content,
    load_content,
)


class TestBundledContent:
    def test_quotes_loaded(self):
        catalog = default_content()
        assert len(catalog.quotes) == 17
        assert catalog.quotes[0] == "The only bad workout is the one that didn't happen."

    def test_nutrition_lists(self):
        catalog = default_content()
        assert set(catalog.nutrition) == {"gain", "loss", "maintain"}
        for items in catalog.nutrition.values():
            assert len(items) == 5
            assert all(isinstance(i, FoodSuggestion) for i in items)

    def test_descriptions(self):
        catalog = default_content()
        assert catalog.describe_activity_level("sedentary").startswith("Little or no exercise")
        assert catalog.describe_goal("loss")
        assert catalog.describe_goal(None) == ""
        assert catalog.sleep_tips

    def test_cached(self):
        assert default_content() is default_content()


class TestSuggestions:
    @pytest.fixture
    def catalog(self) -> ContentCatalog:
        return ContentCatalog(
            quotes=["q"],
            nutrition={
                "gain": [FoodSuggestion("Oats", "389kcal/100g", "Complex Carbs")],
                "maintain": [FoodSuggestion("Quinoa", "120kcal/100g", "Amino")],
            },
        )

    def test_goal_specific(self, catalog):
        assert catalog.suggestions_for_goal("gain")[0].name == "Oats"

    @pytest.mark.parametrize("goal", ["fitness", None, "loss"])
    def test_falls_back_to_maintain(self, catalog, goal):
        assert catalog.suggestions_for_goal(goal)[0].name == "Quinoa"


class TestLoadContent:
    def test_custom_directory(self, tmp_path):
        (tmp_path / "quotes.yaml").write_text('quotes:\n  - "Keep going."\n')
        (tmp_path / "guidance.yaml").write_text(
            "nutrition:\n  loss:\n    - {name: Berries}\nsleep_tips:\n  - Dark room.\n"
        )
        catalog = load_content(tmp_path)
        assert catalog.quotes == ["Keep going."]
        assert catalog.nutrition["loss"][0] == FoodSuggestion("Berries", "", "")
        assert catalog.sleep_tips == ["Dark room."]
        assert catalog.dietary_tip == ""

    def test_no_quotes_rejected(self, tmp_path):
        (tmp_path / "quotes.yaml").write_text("quotes: []\n")
        (tmp_path / "guidance.yaml").write_text("{}\n")
        with pytest.raises(ValueError, match="No quotes"):
            load_content(tmp_path)

    def test_non_mapping_file_rejected(self, tmp_path):
        (tmp_path / "quotes.yaml").write_text("- just a list\n")
        (tmp_path / "guidance.yaml").write_text("{}\n")
        with pytest.raises(ValueError, match="Expected a mapping"):
            load_content(tmp_path)
