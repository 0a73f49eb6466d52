"""Tests for guideline unit normalization and formatting."""

import pytest

from metabolic_diet.core.units import (
    DailyUnit,
    format_amount,
    format_daily_range,
    format_source_range,
    to_daily_unit,
    to_daily_value,
)
from metabolic_diet.models.models import NutrientRange


class TestDailyUnit:
    """Tests for collapsing guideline units into daily units."""

    @pytest.mark.parametrize("unit,expected", [
        ("mg/kg", DailyUnit.MG_PER_DAY),
        ("mg/day", DailyUnit.MG_PER_DAY),
        ("g/kg", DailyUnit.G_PER_DAY),
        ("g/day", DailyUnit.G_PER_DAY),
        ("kcal/kg", DailyUnit.KCAL_PER_DAY),
        ("kcal/day", DailyUnit.KCAL_PER_DAY),
        ("mL/kg", DailyUnit.ML_PER_DAY),
        ("mL/day", DailyUnit.ML_PER_DAY),
        ("%energy", DailyUnit.PERCENT_ENERGY),
    ])
    def test_unit_families(self, unit, expected):
        assert to_daily_unit(unit) == expected

    def test_unknown_unit_falls_back_to_percent_energy(self):
        """Test that an unrecognized unit falls through to %energy."""
        assert to_daily_unit("furlongs") == DailyUnit.PERCENT_ENERGY


class TestDailyValue:
    """Tests for scaling guideline values by weight."""

    def test_per_kg_scales_by_weight(self):
        """Test per-kg values are multiplied by weight."""
        # 25 mg/kg × 4 kg = 100 mg/day
        assert to_daily_value(25, "mg/kg", 4) == 100

    @pytest.mark.parametrize("weight", [0, 3.2, 4, 70])
    def test_per_kg_invariant(self, weight):
        assert to_daily_value(2.5, "g/kg", weight) == 2.5 * weight

    def test_absolute_passes_through(self):
        """Test absolute daily values are not scaled."""
        assert to_daily_value(320, "mg/day", 12) == 320
        assert to_daily_value(15, "%energy", 12) == 15


class TestFormatting:
    """Tests for display formatting of ranges."""

    def test_format_amount_precision(self):
        assert format_amount(12.346, "g/day") == "12.35"
        assert format_amount(279.6, "mg/day") == "280"
        assert format_amount(12.34, "%energy") == "12.3"

    def test_format_amount_non_finite(self):
        assert format_amount(None, "mg/day") == "-"
        assert format_amount(float("nan"), "mg/day") == "-"

    def test_format_source_range(self):
        assert format_source_range(NutrientRange(25, 70, "mg/kg")) == "25-70 mg/kg"
        assert format_source_range(NutrientRange(2.5, 3.5, "g/kg", mid=3.0)) == "3.00 (2.50-3.50) g/kg"
        assert format_source_range(NutrientRange(1000, 1300, "mg/day", min_only=True)) == ">= 1000 mg/day"
        assert format_source_range(NutrientRange(5, 5, "mg/day")) == "5 mg/day"

    def test_format_daily_range(self):
        source = NutrientRange(25, 70, "mg/kg")
        assert format_daily_range(source, 100, 280, "mg/day") == "100-280 mg/day"
