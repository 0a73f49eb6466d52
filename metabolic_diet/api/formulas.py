"""Formula catalog API endpoints."""

from fastapi import APIRouter, Query

from metabolic_diet.models.models import Disease, FormulaRole
from metabolic_diet.schemas.schemas import FormulaOptionResponse
from metabolic_diet.services.catalog import formula_options

router = APIRouter(prefix="/formula", tags=["formulas"])


@router.get("", response_model=list[FormulaOptionResponse])
def list_formula_options(
    disease: Disease = Query(..., description="Disease the formula is used for"),
    role: FormulaRole = Query(..., description="Role of the formula in the plan"),
):
    """List catalog formulas that can fill a role for a disease."""
    return [
        FormulaOptionResponse(
            id=entry.id,
            role=entry.role,
            name=entry.formula.name,
            basis=entry.formula.basis,
            diseases=sorted(entry.diseases, key=lambda d: d.value) if entry.diseases is not None else None,
            values=dict(entry.formula.values),
        )
        for entry in formula_options(role, disease)
    ]
