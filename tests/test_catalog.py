"""Tests for the formula catalog and custom formulas."""

import pytest

from metabolic_diet.models.models import Disease, FormulaBasis, FormulaRole
from metabolic_diet.services.catalog import (
    CATALOG,
    DEFAULT_SELECTION,
    CustomFormula,
    FormulaNotApplicableError,
    FormulaNotFoundError,
    custom_formula_reference,
    formula_options,
    resolve_formula,
)


class TestFormulaOptions:
    """Tests for catalog filtering."""

    def test_pku_standard_options(self):
        ids = [entry.id for entry in formula_options(FormulaRole.STANDARD, Disease.PKU)]
        assert ids == ["PKU_STD", "SIMILAC_RTF_100ML"]

    def test_modular_available_for_every_disease(self):
        for disease in Disease:
            assert [e.id for e in formula_options(FormulaRole.MODULAR, disease)] == ["MODULAR"]

    def test_defaults_resolve(self):
        """Test every default selection fits its role and disease."""
        for disease, selection in DEFAULT_SELECTION.items():
            for role, formula_id in selection.items():
                assert resolve_formula(formula_id, role, disease) is CATALOG[formula_id].formula


class TestResolveFormula:
    """Tests for catalog lookup errors."""

    def test_unknown_id(self):
        with pytest.raises(FormulaNotFoundError):
            resolve_formula("NOPE", FormulaRole.STANDARD, Disease.PKU)

    def test_wrong_disease(self):
        with pytest.raises(FormulaNotApplicableError):
            resolve_formula("MSUD_SPEC", FormulaRole.SPECIAL, Disease.PKU)

    def test_wrong_role(self):
        with pytest.raises(FormulaNotApplicableError):
            resolve_formula("MODULAR", FormulaRole.SPECIAL, Disease.PKU)


class TestCustomFormula:
    """Tests for caregiver-entered formulas."""

    def test_limiter_stored_under_primary_limiter(self):
        formula = custom_formula_reference(
            FormulaRole.STANDARD, Disease.MSUD, CustomFormula(name=" My formula ", kcal=500, protein=12, limiter=900)
        )
        assert formula.name == "My formula"
        assert formula.values == {"Energy": 500, "Protein": 12, "LEU": 900}

    def test_blank_values_not_tracked(self):
        formula = custom_formula_reference(FormulaRole.SPECIAL, Disease.PKU, CustomFormula(protein=13, limiter=0))
        assert formula.name == "Custom special"
        assert formula.values == {"Protein": 13, "PHE": 0}
        assert formula.basis == FormulaBasis.PER_100G

    def test_liquid_basis(self):
        custom = CustomFormula(basis=FormulaBasis.PER_100ML, kcal=67)
        formula = custom_formula_reference(FormulaRole.STANDARD, Disease.UCD, custom)
        assert formula.basis == FormulaBasis.PER_100ML
        assert formula.values == {"Energy": 67}
