"""Tests for nutrient balance and caregiver intake review."""

import math

import pytest

from metabolic_diet.core.analysis import analyze_reported_values, overall_status
from metabolic_diet.core.balance import classify_status, evaluate_balance
from metabolic_diet.core.calculations import aggregate_totals, make_contribution
from metabolic_diet.core.targets import resolve_targets
from metabolic_diet.models.models import (
    AgeGuideline,
    FormulaReference,
    FormulaRole,
    NutrientRange,
    NutrientStatus,
    TargetMode,
)


@pytest.fixture
def rows():
    guide = AgeGuideline("Infant", {
        "Protein": NutrientRange(2.5, 3.5, "g/kg"),
        "Fluid": NutrientRange(120, 150, "mL/kg"),
        "PHE": NutrientRange(20, 60, "mg/kg"),
        "TYR": NutrientRange(1000, 1300, "mg/day", min_only=True),
        "PHE+TYR": NutrientRange(1000, 1600, "mg/day"),
    })
    return resolve_targets(guide, TargetMode.MID, 4).rows


class TestClassifyStatus:
    """Tests for range classification."""

    def test_bounds_inclusive(self):
        assert classify_status(80, 80, 240, False) == NutrientStatus.NORMAL
        assert classify_status(240, 80, 240, False) == NutrientStatus.NORMAL

    def test_low_and_high(self):
        assert classify_status(79, 80, 240, False) == NutrientStatus.LOW
        assert classify_status(241, 80, 240, False) == NutrientStatus.HIGH

    def test_min_only_never_high(self):
        assert classify_status(50000, 1000, 1300, True) == NutrientStatus.NORMAL


class TestEvaluateBalance:
    """Tests for plan balance rows."""

    def test_balance(self, rows):
        formula = FormulaReference("F", "100g", {"Protein": 10, "PHE": 400, "TYR": 1000})
        items = [make_contribution(FormulaRole.STANDARD, formula, 60, 6, 5, 30, "PHE")]
        totals = aggregate_totals(items, 6, "PHE")
        formula_by_role = {FormulaRole.STANDARD: formula}

        balances = {b.nutrient: b for b in evaluate_balance(rows, items, formula_by_role, totals)}

        assert balances["Protein"].delivered == pytest.approx(6)
        assert balances["Protein"].status == NutrientStatus.LOW
        assert balances["Protein"].deficit_to_target == pytest.approx(6)
        # 12 scoops x 30 mL of water
        assert balances["Fluid"].delivered == 360
        assert balances["Fluid"].status == NutrientStatus.LOW
        assert balances["PHE"].status == NutrientStatus.NORMAL
        assert balances["TYR"].delivered == 600
        assert balances["PHE+TYR"].delivered == 840
        assert balances["PHE+TYR"].excess_to_target == 0
        assert all(b.deficit_to_target >= 0 and b.excess_to_target >= 0 for b in balances.values())


class TestIntakeAnalysis:
    """Tests for caregiver-reported value review."""

    def test_statuses_and_messages(self, rows):
        analysis = analyze_reported_values(rows, ("PHE", "TYR", "Protein"), {"PHE": 50, "TYR": 1200})
        phe, tyr, protein = analysis.items

        assert phe.status == NutrientStatus.LOW
        assert phe.message == (
            "50 mg/day is below the expected 80-240 mg/day by 30 mg/day. Review with the clinical team."
        )
        assert tyr.status == NutrientStatus.NORMAL
        assert tyr.message == "1200 mg/day is within the expected >= 1000 mg/day."
        assert protein.status == NutrientStatus.NA
        assert protein.message.startswith("No value entered. Expected")
        assert analysis.overall_status == NutrientStatus.LOW

    def test_high_message(self, rows):
        analysis = analyze_reported_values(rows, ("PHE",), {"PHE": 300})
        assert analysis.items[0].message == (
            "300 mg/day is above the expected 80-240 mg/day by 60 mg/day. Review with the clinical team."
        )
        assert analysis.overall_status == NutrientStatus.HIGH

    def test_non_finite_is_not_entered(self, rows):
        analysis = analyze_reported_values(rows, ("PHE",), {"PHE": math.nan})
        assert analysis.items[0].value is None
        assert analysis.overall_status == NutrientStatus.NA

    def test_nutrient_without_row_skipped(self, rows):
        assert analyze_reported_values(rows, ("LEU",), {"LEU": 10}).items == ()

    def test_overall_severity(self):
        assert overall_status([NutrientStatus.LOW, NutrientStatus.HIGH]) == NutrientStatus.HIGH
        assert overall_status([NutrientStatus.NA, NutrientStatus.NORMAL]) == NutrientStatus.NORMAL
        assert overall_status([]) == NutrientStatus.NA
