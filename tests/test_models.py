"""Tests for construction-time validation of domain types."""

import math

import pytest

from metabolic_diet.core.nutrients import CORE_NUTRIENTS
from metabolic_diet.models.models import (
    AgeGuideline,
    Disease,
    DiseaseProfile,
    FormulaBasis,
    FormulaReference,
    FormulaRole,
    FormulaSet,
    NutrientRange,
    NutrientUnit,
)


def _profile(nutrients, primary_limiter="PHE"):
    return DiseaseProfile(
        disease=Disease.PKU,
        name="Phenylketonuria",
        short_name="PKU",
        primary_limiter=primary_limiter,
        nutrient_keys=CORE_NUTRIENTS | frozenset({"PHE", "TYR"}),
        age_guidelines=(AgeGuideline("Infant", nutrients),),
    )


class TestNutrientRange:
    """Tests for guideline range validation."""

    def test_unit_string_is_coerced(self):
        assert NutrientRange(1, 2, "mg/kg").unit == NutrientUnit.MG_PER_KG

    def test_inverted_range_rejected(self):
        with pytest.raises(ValueError):
            NutrientRange(60, 20, "mg/kg")

    def test_inverted_min_only_allowed(self):
        """Test min-only ranges skip the ordering check."""
        assert NutrientRange(60, 20, "mg/kg", min_only=True).min == 60

    def test_unknown_unit_rejected(self):
        with pytest.raises(ValueError):
            NutrientRange(1, 2, "stone")


class TestDiseaseProfile:
    """Tests for the closed nutrient-key registry."""

    def test_registered_keys_accepted(self):
        profile = _profile({
            "PHE": NutrientRange(20, 60, "mg/kg"),
            "PHE+TYR": NutrientRange(1000, 2000, "mg/day"),
        })
        assert profile.primary_limiter == "PHE"

    def test_unknown_key_rejected(self):
        with pytest.raises(ValueError, match="Unknown nutrient 'LEU'"):
            _profile({"LEU": NutrientRange(40, 100, "mg/kg")})

    def test_unknown_primary_limiter_rejected(self):
        with pytest.raises(ValueError):
            _profile({"PHE": NutrientRange(20, 60, "mg/kg")}, primary_limiter="LYS")

    def test_empty_guidelines_rejected(self):
        with pytest.raises(ValueError):
            DiseaseProfile(
                disease=Disease.PKU, name="PKU", short_name="PKU", primary_limiter=None,
                nutrient_keys=CORE_NUTRIENTS, age_guidelines=(),
            )


class TestFormulaReference:
    """Tests for formula validation."""

    def test_basis_string_is_coerced(self):
        assert FormulaReference("F", "100mL").basis == FormulaBasis.PER_100ML

    def test_unknown_basis_rejected(self):
        with pytest.raises(ValueError):
            FormulaReference("F", "1 scoop")

    def test_unknown_nutrient_rejected(self):
        with pytest.raises(ValueError):
            FormulaReference("F", "100g", {"Vitamin C": 50})

    def test_formula_set_by_role(self):
        standard = FormulaReference("Std", "100g", {"Protein": 11})
        modular = FormulaReference("Mod", "100g", {"Energy": 490})
        by_role = FormulaSet(standard=standard, modular=modular).by_role()
        assert by_role == {FormulaRole.STANDARD: standard, FormulaRole.MODULAR: modular}

    def test_non_finite_values_dropped(self):
        """Test NaN and infinite densities are treated as not tracked."""
        formula = FormulaReference("F", "100g", {"Protein": math.nan, "Energy": math.inf, "PHE": 0})
        assert formula.values == {"PHE": 0}

    def test_unknown_nutrient_rejected_even_when_blank(self):
        with pytest.raises(ValueError):
            FormulaReference("F", "100g", {"Vitamin C": math.nan})
