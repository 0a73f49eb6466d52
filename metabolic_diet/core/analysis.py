"""Review of caregiver-reported daily intake against guideline ranges."""

import math
from typing import Mapping, Optional, Sequence

from metabolic_diet.core.balance import classify_status
from metabolic_diet.core.units import format_amount, format_daily_range
from metabolic_diet.models.models import (
    AnalysisItem,
    IntakeAnalysis,
    NutrientStatus,
    ResolvedTarget,
)

# Most severe first
STATUS_SEVERITY = (
    NutrientStatus.HIGH,
    NutrientStatus.LOW,
    NutrientStatus.NORMAL,
    NutrientStatus.NA,
)


def analysis_message(row: ResolvedTarget, value: Optional[float], status: NutrientStatus) -> str:
    expected = format_daily_range(row.source, row.total_min, row.total_max, row.total_unit)
    if status == NutrientStatus.NA:
        return f"No value entered. Expected {expected}."

    reported = f"{format_amount(value, row.total_unit)} {row.total_unit}"
    if status == NutrientStatus.LOW:
        gap = format_amount(row.total_min - value, row.total_unit)
        return f"{reported} is below the expected {expected} by {gap} {row.total_unit}. Review with the clinical team."
    if status == NutrientStatus.HIGH:
        gap = format_amount(value - row.total_max, row.total_unit)
        return f"{reported} is above the expected {expected} by {gap} {row.total_unit}. Review with the clinical team."
    return f"{reported} is within the expected {expected}."


def overall_status(statuses: Sequence[NutrientStatus]) -> NutrientStatus:
    """Most severe status present; NA when nothing was reported."""
    for status in STATUS_SEVERITY:
        if status in statuses:
            return status
    return NutrientStatus.NA


def analyze_reported_values(
    rows: Sequence[ResolvedTarget],
    analysis_nutrients: Sequence[str],
    reported: Mapping[str, Optional[float]]
) -> IntakeAnalysis:
    """
    Classify caregiver-entered daily intake values.

    Args:
        rows: Resolved target rows of the current calculation
        analysis_nutrients: Nutrients the disease profile asks caregivers for
        reported: Entered values; missing or None means not entered

    Returns:
        IntakeAnalysis with one item per analysis nutrient that has a target row
    """
    row_by_nutrient = {row.nutrient: row for row in rows}
    items = []

    for nutrient in analysis_nutrients:
        row = row_by_nutrient.get(nutrient)
        if row is None:
            continue

        value = reported.get(nutrient)
        if value is not None and not math.isfinite(value):
            value = None
        if value is None:
            status = NutrientStatus.NA
        else:
            status = classify_status(value, row.total_min, row.total_max, row.source.min_only)

        items.append(AnalysisItem(
            nutrient=nutrient,
            unit=row.total_unit,
            min=row.total_min,
            max=row.total_max,
            value=value,
            status=status,
            message=analysis_message(row, value, status),
        ))

    return IntakeAnalysis(
        items=tuple(items),
        overall_status=overall_status([item.status for item in items]),
    )
