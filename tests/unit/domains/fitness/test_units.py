"""Tests for metric/imperial conversions."""

from __future__ import annotations

import pytest

from ironpulse.domains.fitness.domain_logic.units import (
    canonical_height,
    canonical_weight,
    cm_to_feet_inches,
    display_weight,
    feet_inches_to_cm,
    kg_to_lbs,
    lbs_to_kg,
    round_tenth,
)


class TestHeight:
    @pytest.mark.parametrize("cm,expected", [
        (180, (5, 11)),
        (170, (5, 7)),
        (152.4, (5, 0)),
        (0, (0, 0)),
    ])
    def test_cm_to_feet_inches(self, cm, expected):
        assert cm_to_feet_inches(cm) == expected

    def test_inches_carry_into_feet(self):
        # 182.6 cm is 71.89 inches: 5 ft 11.89 in, which rounds to 6 ft 0 in
        assert cm_to_feet_inches(182.6) == (6, 0)

    def test_feet_inches_to_cm(self):
        assert feet_inches_to_cm(5, 11) == 180
        assert feet_inches_to_cm(6) == 183

    @pytest.mark.parametrize("feet,inches", [
        (feet, inches) for feet in (4, 5, 6, 7) for inches in (0, 3, 6, 9, 11)
    ])
    def test_feet_inches_round_trip_within_one_inch(self, feet, inches):
        back_feet, back_inches = cm_to_feet_inches(feet_inches_to_cm(feet, inches))
        assert abs((back_feet * 12 + back_inches) - (feet * 12 + inches)) <= 1
        assert 0 <= back_inches < 12

    @pytest.mark.parametrize("cm", [150, 163, 175, 188, 201])
    def test_round_trip_within_one_cm(self, cm):
        feet, inches = cm_to_feet_inches(cm)
        assert abs(feet_inches_to_cm(feet, inches) - cm) <= 1.5


class TestWeight:
    def test_kg_to_lbs(self):
        assert kg_to_lbs(100) == pytest.approx(220.462)

    def test_lbs_to_kg(self):
        assert lbs_to_kg(220.462) == pytest.approx(100)

    def test_display_weight(self):
        assert display_weight(70, "kg") == 70
        assert display_weight(70, "lbs") == 154.3

    def test_display_weight_rounds_halves_up(self):
        assert display_weight(70.25, "kg") == 70.3
        assert display_weight(7.25, "kg") == 7.3

    @pytest.mark.parametrize("value", [0.1, 1.0, 45.5, 70.3, 99.99, 154.3234, 250.0])
    def test_raw_round_trip(self, value):
        assert kg_to_lbs(lbs_to_kg(value)) == pytest.approx(value)
        assert lbs_to_kg(kg_to_lbs(value)) == pytest.approx(value)

    @pytest.mark.parametrize("kg", [45.0, 70.3, 99.9, 150.0])
    def test_round_trip_within_tenth(self, kg):
        lbs = display_weight(kg, "lbs")
        assert canonical_weight(lbs, "lbs") == pytest.approx(kg, abs=0.1)


class TestCanonical:
    def test_kg_kept_as_typed(self):
        assert canonical_weight(70.25, "kg") == 70.25

    def test_lbs_rounded_to_one_decimal(self):
        assert canonical_weight(150, "lbs") == 68.0

    def test_unknown_weight_unit(self):
        with pytest.raises(ValueError, match="Unknown weight unit"):
            canonical_weight(70, "stone")  # type: ignore[arg-type]

    def test_height_cm(self):
        assert canonical_height("cm", cm=175.6) == 175
        assert canonical_height("cm") is None

    def test_height_feet(self):
        assert canonical_height("ft", feet=5, inches=11) == 180
        assert canonical_height("ft", feet=6) == 183
        assert canonical_height("ft") is None

    def test_unknown_height_unit(self):
        with pytest.raises(ValueError, match="Unknown height unit"):
            canonical_height("m", cm=1.8)  # type: ignore[arg-type]


class TestRoundTenth:
    @pytest.mark.parametrize("value,expected", [
        (0.25, 0.3),
        (70.25, 70.3),
        (1.04, 1.0),
        (1.06, 1.1),
        (68.0388, 68.0),
        (50.0, 50.0),
    ])
    def test_halves_round_up(self, value, expected):
        assert round_tenth(value) == expected
