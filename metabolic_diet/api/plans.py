"""Feeding plan API endpoints."""

import logging
from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, HTTPException

from metabolic_diet.core.engine import calculate_diet
from metabolic_diet.core.guidelines import get_profile
from metabolic_diet.core.targets import select_age_guideline
from metabolic_diet.core.units import format_daily_range, format_source_range
from metabolic_diet.models.models import (
    CalculationInputs,
    Disease,
    FormulaReference,
    FormulaRole,
    FormulaSet,
)
from metabolic_diet.schemas.schemas import (
    FormulaSelection,
    PlanComputeRequest,
    PlanComputeResponse,
    ResolvedTargetResponse,
)
from metabolic_diet.services.catalog import (
    CustomFormula,
    FormulaNotApplicableError,
    FormulaNotFoundError,
    custom_formula_reference,
    resolve_formula,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/plan", tags=["feeding plans"])


def _resolve_selection(
    selection: Optional[FormulaSelection],
    role: FormulaRole,
    disease: Disease
) -> Optional[FormulaReference]:
    """Turn a request's formula selection into the formula the engine consumes."""
    if selection is None:
        return None

    if selection.custom is not None:
        return custom_formula_reference(role, disease, CustomFormula(**selection.custom.model_dump()))

    try:
        return resolve_formula(selection.formula_id, role, disease)
    except FormulaNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except FormulaNotApplicableError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/compute", response_model=PlanComputeResponse)
def compute_feeding_plan(request: PlanComputeRequest):
    """
    Compute a daily formula plan for a patient.

    Returns:
    - Daily targets for every guideline nutrient
    - Standard / special / modular amounts with scoops and water
    - Totals, remaining deficits and per-nutrient balance
    - Advisory notes and the caregiver intake review
    """
    formulas = FormulaSet(
        standard=_resolve_selection(request.standard, FormulaRole.STANDARD, request.disease),
        special=_resolve_selection(request.special, FormulaRole.SPECIAL, request.disease),
        modular=_resolve_selection(request.modular, FormulaRole.MODULAR, request.disease),
    )

    inputs = CalculationInputs(
        weight_kg=request.weight_kg,
        disease=request.disease,
        age_group_index=request.age_group_index,
        target_mode=request.target_mode,
        feeds_per_day=request.feeds_per_day,
        formulas=formulas,
        scoop_size_g=request.scoop_size_g,
        water_per_scoop_ml=request.water_per_scoop_ml,
        analysis_values=dict(request.analysis_values),
    )
    outputs = calculate_diet(inputs)

    guide = select_age_guideline(get_profile(request.disease), request.age_group_index)
    plan = outputs.formula_plan
    logger.info(
        "Computed %s plan (%s, %.2f kg): %d formulas, %d notes",
        request.disease.value, guide.age_label, request.weight_kg, len(plan.items), len(plan.notes),
    )

    rows = [
        ResolvedTargetResponse(
            nutrient=row.nutrient,
            total_min=row.total_min,
            total_max=row.total_max,
            total_target=row.total_target,
            total_unit=row.total_unit,
            source_range=format_source_range(row.source),
            daily_range=format_daily_range(row.source, row.total_min, row.total_max, row.total_unit),
        )
        for row in outputs.rows
    ]

    return PlanComputeResponse(
        disease=request.disease,
        age_label=guide.age_label,
        weight_kg=request.weight_kg,
        target_mode=request.target_mode,
        rows=rows,
        highlights=asdict(outputs.highlights),
        formula_plan=asdict(plan),
        analysis=asdict(outputs.analysis),
    )
