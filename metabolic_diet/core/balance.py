"""Nutrient balance of a formula plan against its resolved targets."""

from typing import Mapping, Sequence

from metabolic_diet.core.calculations import EPSILON, delivered_nutrient
from metabolic_diet.models.models import (
    FormulaContribution,
    FormulaReference,
    FormulaRole,
    NutrientBalance,
    NutrientStatus,
    PlanTotals,
    ResolvedTarget,
)


def classify_status(delivered: float, total_min: float, total_max: float, min_only: bool) -> NutrientStatus:
    """
    Classify a delivered amount against a daily range.

    Min-only ranges have no tracked ceiling and are never HIGH.
    """
    if delivered < total_min - EPSILON:
        return NutrientStatus.LOW
    if not min_only and delivered > total_max + EPSILON:
        return NutrientStatus.HIGH
    return NutrientStatus.NORMAL


def evaluate_balance(
    rows: Sequence[ResolvedTarget],
    items: Sequence[FormulaContribution],
    formula_by_role: Mapping[FormulaRole, FormulaReference],
    totals: PlanTotals
) -> tuple[NutrientBalance, ...]:
    """
    Compare delivered amounts with every resolved target.

    Fluid is the total prepared volume (ready-to-feed liquid plus
    reconstitution water); all other nutrients are summed across plan items.
    """
    balances = []
    for row in rows:
        if row.nutrient == "Fluid":
            delivered = totals.final_volume_ml
        else:
            delivered = delivered_nutrient(row.nutrient, items, formula_by_role)

        balances.append(NutrientBalance(
            nutrient=row.nutrient,
            unit=row.total_unit,
            min=row.total_min,
            max=row.total_max,
            target=row.total_target,
            delivered=delivered,
            deficit_to_target=max(0.0, row.total_target - delivered),
            excess_to_target=max(0.0, delivered - row.total_target),
            status=classify_status(delivered, row.total_min, row.total_max, row.source.min_only),
        ))
    return tuple(balances)
