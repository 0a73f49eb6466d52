"""Immutable domain types for the diet-formulation engine."""

import enum
import math
from dataclasses import dataclass, field
from typing import Optional

from metabolic_diet.core.nutrients import ALL_NUTRIENT_KEYS, is_registered_key


class Disease(str, enum.Enum):
    PKU = "PKU"
    MMA_PA = "MMA_PA"
    MSUD = "MSUD"
    GA = "GA"
    UCD = "UCD"


class TargetMode(str, enum.Enum):
    MIN = "MIN"
    MID = "MID"
    MAX = "MAX"


class FormulaBasis(str, enum.Enum):
    PER_100G = "100g"
    PER_100ML = "100mL"


class FormulaRole(str, enum.Enum):
    STANDARD = "standard"
    SPECIAL = "special"
    MODULAR = "modular"


class NutrientStatus(str, enum.Enum):
    LOW = "LOW"
    NORMAL = "NORMAL"
    HIGH = "HIGH"
    NA = "NA"


class NutrientUnit(str, enum.Enum):
    MG_PER_KG = "mg/kg"
    MG_PER_DAY = "mg/day"
    G_PER_KG = "g/kg"
    G_PER_DAY = "g/day"
    KCAL_PER_KG = "kcal/kg"
    KCAL_PER_DAY = "kcal/day"
    ML_PER_KG = "mL/kg"
    ML_PER_DAY = "mL/day"
    PERCENT_ENERGY = "%energy"


@dataclass(frozen=True)
class NutrientRange:
    """Clinical guideline band for one nutrient at one age bracket."""
    min: float
    max: float
    unit: NutrientUnit
    mid: Optional[float] = None
    min_only: bool = False

    def __post_init__(self):
        # Accept plain strings from data tables and request payloads
        object.__setattr__(self, "unit", NutrientUnit(self.unit))
        if not self.min_only and self.min > self.max:
            raise ValueError(f"Range minimum {self.min} exceeds maximum {self.max}")


@dataclass(frozen=True)
class AgeGuideline:
    age_label: str
    nutrients: dict[str, NutrientRange]


@dataclass(frozen=True)
class DiseaseProfile:
    """A disease's guideline table and its closed registry of nutrient keys."""
    disease: Disease
    name: str
    short_name: str
    primary_limiter: Optional[str]
    nutrient_keys: frozenset[str]
    age_guidelines: tuple[AgeGuideline, ...]
    analysis_nutrients: tuple[str, ...] = ()

    def __post_init__(self):
        if not self.age_guidelines:
            raise ValueError(f"{self.disease.value} has no age guidelines")
        for guide in self.age_guidelines:
            for key in guide.nutrients:
                if not is_registered_key(key, self.nutrient_keys):
                    raise ValueError(
                        f"Unknown nutrient '{key}' in {self.disease.value} guideline '{guide.age_label}'"
                    )
        if self.primary_limiter and not is_registered_key(self.primary_limiter, self.nutrient_keys):
            raise ValueError(f"Unknown primary limiter '{self.primary_limiter}'")


@dataclass(frozen=True)
class FormulaReference:
    """Nutrient density of one formula, per 100 g powder or per 100 mL liquid.

    Nutrients that are absent or not tracked are simply omitted from
    ``values``; zero is a real clinical value and is kept.
    Missing or non-finite values are dropped the same way.
    """
    name: str
    basis: FormulaBasis
    values: dict[str, float] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "basis", FormulaBasis(self.basis))
        for key in self.values:
            if not is_registered_key(key, ALL_NUTRIENT_KEYS):
                raise ValueError(f"Unknown nutrient '{key}' in formula '{self.name}'")
        object.__setattr__(self, "values", {
            key: value for key, value in self.values.items()
            if value is not None and math.isfinite(value)
        })


@dataclass(frozen=True)
class FormulaSet:
    standard: FormulaReference
    special: Optional[FormulaReference] = None
    modular: Optional[FormulaReference] = None

    def by_role(self) -> dict:
        """Formulas keyed by role, omitting roles with no formula."""
        roles = (
            (FormulaRole.STANDARD, self.standard),
            (FormulaRole.SPECIAL, self.special),
            (FormulaRole.MODULAR, self.modular),
        )
        return {role: formula for role, formula in roles if formula is not None}


@dataclass(frozen=True)
class CalculationInputs:
    weight_kg: float
    disease: Disease
    age_group_index: int
    target_mode: TargetMode
    feeds_per_day: int
    formulas: FormulaSet
    scoop_size_g: float = 5.0
    water_per_scoop_ml: float = 0.0
    analysis_values: dict[str, Optional[float]] = field(default_factory=dict)


@dataclass(frozen=True)
class ResolvedTarget:
    nutrient: str
    source: NutrientRange
    total_min: float
    total_max: float
    total_target: float
    total_unit: str


@dataclass(frozen=True)
class FormulaContribution:
    role: FormulaRole
    formula_name: str
    basis: FormulaBasis
    amount: float
    amount_unit: str
    kcal: float
    protein: float
    per_feed_amount: float
    primary_limiter_delivered: Optional[float] = None
    scoops: Optional[float] = None
    water_ml: Optional[float] = None
    per_feed_scoops: Optional[float] = None
    per_feed_water_ml: Optional[float] = None


@dataclass(frozen=True)
class NutrientBalance:
    nutrient: str
    unit: str
    min: float
    max: float
    target: float
    delivered: float
    deficit_to_target: float
    excess_to_target: float
    status: NutrientStatus


@dataclass(frozen=True)
class PrimaryLimit:
    nutrient: str
    value: float
    unit: str


@dataclass(frozen=True)
class Highlights:
    target_energy: Optional[float] = None
    target_protein: Optional[float] = None
    target_fluid: Optional[float] = None
    primary_limit: Optional[PrimaryLimit] = None


@dataclass(frozen=True)
class PlanTotals:
    kcal: float
    protein: float
    primary_limiter: Optional[float]
    powder_g: float
    scoops: float
    water_ml: float
    ready_to_feed_ml: float
    final_volume_ml: float
    scoops_per_feed: float
    volume_per_feed_ml: float


@dataclass(frozen=True)
class PlanDeficits:
    protein: float
    energy: float


@dataclass(frozen=True)
class FormulaPlan:
    primary_limiter: Optional[str]
    notes: tuple[str, ...]
    items: tuple[FormulaContribution, ...]
    nutrient_balances: tuple[NutrientBalance, ...]
    totals: PlanTotals
    deficits: PlanDeficits


@dataclass(frozen=True)
class AnalysisItem:
    nutrient: str
    unit: str
    min: float
    max: float
    value: Optional[float]
    status: NutrientStatus
    message: str


@dataclass(frozen=True)
class IntakeAnalysis:
    items: tuple[AnalysisItem, ...]
    overall_status: NutrientStatus


@dataclass(frozen=True)
class CalculationOutputs:
    rows: tuple[ResolvedTarget, ...]
    highlights: Highlights
    formula_plan: FormulaPlan
    analysis: IntakeAnalysis
