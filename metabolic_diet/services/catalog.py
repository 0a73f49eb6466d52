"""
Formula catalog: library formulas tagged by role and disease, plus
conversion of caregiver-entered custom formulas.

Values are per 100 g of powder (or per 100 mL for ready-to-feed liquids):
Energy kcal, Protein/Fat/Carbohydrate g, amino acids mg.
"""

from dataclasses import dataclass
from typing import Optional

from metabolic_diet.core.guidelines import get_profile
from metabolic_diet.models.models import Disease, FormulaBasis, FormulaReference, FormulaRole


class FormulaNotFoundError(LookupError):
    """Raised when a formula id is not in the catalog."""


class FormulaNotApplicableError(ValueError):
    """Raised when a catalog formula does not fit the requested role or disease."""


@dataclass(frozen=True)
class CatalogEntry:
    id: str
    role: FormulaRole
    formula: FormulaReference
    diseases: Optional[frozenset] = None  # None means every disease

    def applies_to(self, role: FormulaRole, disease: Disease) -> bool:
        if self.role != role:
            return False
        return self.diseases is None or disease in self.diseases


@dataclass(frozen=True)
class CustomFormula:
    """Caregiver-entered formula; omitted values are not tracked."""
    name: str = ""
    basis: FormulaBasis = FormulaBasis.PER_100G
    kcal: Optional[float] = None
    protein: Optional[float] = None
    limiter: Optional[float] = None


# Intact-protein infant formula powder
_STANDARD_INFANT_VALUES = {
    "Energy": 526, "Protein": 10.83, "Fat": 28.0, "Carbohydrate": 56.0,
    "IntactProtein": 10.83,
    "PHE": 430, "TYR": 420, "LEU": 1079, "ILE": 620, "VAL": 680,
    "MET": 273, "CYS": 190, "THR": 560, "LYS": 895, "TRP": 170,
}

_ENTRIES = (
    CatalogEntry(
        id="PKU_STD",
        role=FormulaRole.STANDARD,
        diseases=frozenset({Disease.PKU}),
        formula=FormulaReference("Standard Formula", FormulaBasis.PER_100G, {
            **_STANDARD_INFANT_VALUES, "Energy": 510, "Protein": 10.8, "IntactProtein": 10.8,
        }),
    ),
    CatalogEntry(
        id="S26_STD",
        role=FormulaRole.STANDARD,
        diseases=frozenset({Disease.MMA_PA, Disease.MSUD, Disease.GA}),
        formula=FormulaReference("Standard S-26", FormulaBasis.PER_100G, dict(_STANDARD_INFANT_VALUES)),
    ),
    CatalogEntry(
        id="UCD_STD",
        role=FormulaRole.STANDARD,
        diseases=frozenset({Disease.UCD}),
        formula=FormulaReference("Standard (UCD)", FormulaBasis.PER_100G, {
            "Energy": 540, "Protein": 11, "IntactProtein": 11, "MedicalProtein": 0,
            "Fat": 28.5, "Carbohydrate": 57.0,
        }),
    ),
    CatalogEntry(
        id="SIMILAC_RTF_100ML",
        role=FormulaRole.STANDARD,
        formula=FormulaReference("Similac Ready-to-Feed", FormulaBasis.PER_100ML, {
            "Energy": 68, "Protein": 1.4, "IntactProtein": 1.4, "Fat": 3.7, "Carbohydrate": 7.2,
            "PHE": 62, "TYR": 58, "LEU": 143, "ILE": 80, "VAL": 88,
            "MET": 33, "THR": 70, "LYS": 115, "TRP": 22,
        }),
    ),
    CatalogEntry(
        id="PKU_SPEC",
        role=FormulaRole.SPECIAL,
        diseases=frozenset({Disease.PKU}),
        formula=FormulaReference("PHE-free Formula", FormulaBasis.PER_100G, {
            "Energy": 473, "Protein": 13.5, "MedicalProtein": 13.5, "PHE": 0, "TYR": 1350,
        }),
    ),
    CatalogEntry(
        id="MMA_SPEC",
        role=FormulaRole.SPECIAL,
        diseases=frozenset({Disease.MMA_PA}),
        formula=FormulaReference("MMA/PA Special", FormulaBasis.PER_100G, {
            "Energy": 506, "Protein": 11.8, "MedicalProtein": 11.8,
            "ILE": 0, "MET": 0, "THR": 0, "VAL": 0,
        }),
    ),
    CatalogEntry(
        id="MSUD_SPEC",
        role=FormulaRole.SPECIAL,
        diseases=frozenset({Disease.MSUD}),
        formula=FormulaReference("BCAA-free Formula", FormulaBasis.PER_100G, {
            "Energy": 466, "Protein": 13.0, "MedicalProtein": 13.0, "LEU": 0, "ILE": 0, "VAL": 0,
        }),
    ),
    CatalogEntry(
        id="GA_SPEC",
        role=FormulaRole.SPECIAL,
        diseases=frozenset({Disease.GA}),
        formula=FormulaReference("LYS/TRP-free Formula", FormulaBasis.PER_100G, {
            "Energy": 466, "Protein": 13.1, "MedicalProtein": 13.1, "LYS": 0, "TRP": 0,
        }),
    ),
    CatalogEntry(
        id="UCD_SPEC",
        role=FormulaRole.SPECIAL,
        diseases=frozenset({Disease.UCD}),
        formula=FormulaReference("Special EAA (UCD)", FormulaBasis.PER_100G, {
            "Energy": 492, "Protein": 7.5, "MedicalProtein": 7.5, "IntactProtein": 0,
        }),
    ),
    CatalogEntry(
        id="MODULAR",
        role=FormulaRole.MODULAR,
        formula=FormulaReference("Protein-free (Modular)", FormulaBasis.PER_100G, {
            "Energy": 492, "Protein": 0, "Fat": 25.0, "Carbohydrate": 66.0,
        }),
    ),
)

CATALOG = {entry.id: entry for entry in _ENTRIES}

DEFAULT_SELECTION = {
    Disease.PKU: {FormulaRole.STANDARD: "PKU_STD", FormulaRole.SPECIAL: "PKU_SPEC", FormulaRole.MODULAR: "MODULAR"},
    Disease.MMA_PA: {FormulaRole.STANDARD: "S26_STD", FormulaRole.SPECIAL: "MMA_SPEC", FormulaRole.MODULAR: "MODULAR"},
    Disease.MSUD: {FormulaRole.STANDARD: "S26_STD", FormulaRole.SPECIAL: "MSUD_SPEC", FormulaRole.MODULAR: "MODULAR"},
    Disease.GA: {FormulaRole.STANDARD: "S26_STD", FormulaRole.SPECIAL: "GA_SPEC", FormulaRole.MODULAR: "MODULAR"},
    Disease.UCD: {FormulaRole.STANDARD: "UCD_STD", FormulaRole.SPECIAL: "UCD_SPEC", FormulaRole.MODULAR: "MODULAR"},
}


def formula_options(role: FormulaRole, disease: Disease) -> list[CatalogEntry]:
    """List catalog entries usable for a role and disease, in catalog order."""
    return [entry for entry in _ENTRIES if entry.applies_to(FormulaRole(role), Disease(disease))]


def resolve_formula(formula_id: str, role: FormulaRole, disease: Disease) -> FormulaReference:
    """
    Resolve a catalog id into the formula the engine consumes.

    Raises:
        FormulaNotFoundError: Unknown id
        FormulaNotApplicableError: Entry is tagged for another role or disease
    """
    entry = CATALOG.get(formula_id)
    if entry is None:
        raise FormulaNotFoundError(f"Formula '{formula_id}' not found")
    if not entry.applies_to(FormulaRole(role), Disease(disease)):
        raise FormulaNotApplicableError(
            f"Formula '{formula_id}' is not a {FormulaRole(role).value} formula for {Disease(disease).value}"
        )
    return entry.formula


def custom_formula_reference(role: FormulaRole, disease: Disease, custom: CustomFormula) -> FormulaReference:
    """
    Build a formula from caregiver-entered values.

    Only values that were entered are stored; zero is kept as a real value.
    The limiter value is stored under the disease's primary limiter key.
    """
    values = {}
    if custom.kcal is not None:
        values["Energy"] = custom.kcal
    if custom.protein is not None:
        values["Protein"] = custom.protein

    primary_limiter = get_profile(disease).primary_limiter
    if primary_limiter and custom.limiter is not None:
        values[primary_limiter] = custom.limiter

    name = custom.name.strip() or f"Custom {FormulaRole(role).value}"
    return FormulaReference(name=name, basis=custom.basis, values=values)
