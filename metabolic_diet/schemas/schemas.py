"""Pydantic schemas for request/response validation."""

from typing import Optional
from pydantic import BaseModel, Field, model_validator

from metabolic_diet.core.config import settings
from metabolic_diet.models.models import (
    Disease,
    FormulaBasis,
    FormulaRole,
    NutrientStatus,
    NutrientUnit,
    TargetMode,
)


# Formula schemas
class CustomFormulaCreate(BaseModel):
    name: str = Field("", max_length=200)
    basis: FormulaBasis = FormulaBasis.PER_100G
    kcal: Optional[float] = Field(None, ge=0, description="kcal per 100 g or 100 mL")
    protein: Optional[float] = Field(None, ge=0, description="g protein per 100 g or 100 mL")
    limiter: Optional[float] = Field(None, ge=0, description="Primary limiter per 100 g or 100 mL")


class FormulaSelection(BaseModel):
    """Either a catalog formula id or a custom formula, not both."""
    formula_id: Optional[str] = None
    custom: Optional[CustomFormulaCreate] = None

    @model_validator(mode="after")
    def check_one_source(self):
        if (self.formula_id is None) == (self.custom is None):
            raise ValueError("Provide exactly one of formula_id or custom")
        return self


class FormulaOptionResponse(BaseModel):
    id: str
    role: FormulaRole
    name: str
    basis: FormulaBasis
    diseases: Optional[list[Disease]]
    values: dict[str, float]


# Guideline schemas
class NutrientRangeResponse(BaseModel):
    nutrient: str
    min: float
    max: float
    unit: NutrientUnit
    mid: Optional[float]
    min_only: bool
    display: str


class AgeGuidelineResponse(BaseModel):
    index: int
    age_label: str
    nutrients: list[NutrientRangeResponse]


class DiseaseSummaryResponse(BaseModel):
    disease: Disease
    name: str
    short_name: str
    primary_limiter: Optional[str]
    age_groups: list[str]


class DiseaseGuidelineResponse(DiseaseSummaryResponse):
    analysis_nutrients: list[str]
    default_formulas: dict[FormulaRole, str]
    guidelines: list[AgeGuidelineResponse]
    reference: str


# Plan schemas
class PlanComputeRequest(BaseModel):
    weight_kg: float = Field(..., ge=0, le=300)
    disease: Disease
    age_group_index: int = Field(0, ge=0)
    target_mode: TargetMode = TargetMode.MID
    feeds_per_day: int = Field(settings.DEFAULT_FEEDS_PER_DAY, ge=1, le=24)
    scoop_size_g: float = Field(settings.DEFAULT_SCOOP_SIZE_G, gt=0, le=100)
    water_per_scoop_ml: float = Field(settings.DEFAULT_WATER_PER_SCOOP_ML, ge=0, le=500)
    standard: FormulaSelection
    special: Optional[FormulaSelection] = None  # None means no special formula
    modular: Optional[FormulaSelection] = None  # None means no modular formula
    analysis_values: dict[str, Optional[float]] = Field(
        default_factory=dict, description="Caregiver-reported daily intake per nutrient"
    )


class ResolvedTargetResponse(BaseModel):
    nutrient: str
    total_min: float
    total_max: float
    total_target: float
    total_unit: str
    source_range: str
    daily_range: str


class PrimaryLimitResponse(BaseModel):
    nutrient: str
    value: float
    unit: str


class HighlightsResponse(BaseModel):
    target_energy: Optional[float]
    target_protein: Optional[float]
    target_fluid: Optional[float]
    primary_limit: Optional[PrimaryLimitResponse]


class FormulaContributionResponse(BaseModel):
    role: FormulaRole
    formula_name: str
    basis: FormulaBasis
    amount: float
    amount_unit: str
    kcal: float
    protein: float
    per_feed_amount: float
    primary_limiter_delivered: Optional[float]
    scoops: Optional[float]
    water_ml: Optional[float]
    per_feed_scoops: Optional[float]
    per_feed_water_ml: Optional[float]


class NutrientBalanceResponse(BaseModel):
    nutrient: str
    unit: str
    min: float
    max: float
    target: float
    delivered: float
    deficit_to_target: float
    excess_to_target: float
    status: NutrientStatus


class PlanTotalsResponse(BaseModel):
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


class PlanDeficitsResponse(BaseModel):
    protein: float
    energy: float


class FormulaPlanResponse(BaseModel):
    primary_limiter: Optional[str]
    notes: list[str]
    items: list[FormulaContributionResponse]
    nutrient_balances: list[NutrientBalanceResponse]
    totals: PlanTotalsResponse
    deficits: PlanDeficitsResponse


class AnalysisItemResponse(BaseModel):
    nutrient: str
    unit: str
    min: float
    max: float
    value: Optional[float]
    status: NutrientStatus
    message: str


class IntakeAnalysisResponse(BaseModel):
    items: list[AnalysisItemResponse]
    overall_status: NutrientStatus


class PlanComputeResponse(BaseModel):
    disease: Disease
    age_label: str
    weight_kg: float
    target_mode: TargetMode
    rows: list[ResolvedTargetResponse]
    highlights: HighlightsResponse
    formula_plan: FormulaPlanResponse
    analysis: IntakeAnalysisResponse
