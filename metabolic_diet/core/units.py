"""Guideline unit normalization and display utilities."""

import math
from enum import Enum
from typing import Optional

from metabolic_diet.models.models import NutrientRange, NutrientUnit


class DailyUnit(str, Enum):
    MG_PER_DAY = "mg/day"
    G_PER_DAY = "g/day"
    KCAL_PER_DAY = "kcal/day"
    ML_PER_DAY = "mL/day"
    PERCENT_ENERGY = "%energy"


# Per-kilogram units and their absolute counterparts share a daily unit
DAILY_UNITS = {
    NutrientUnit.MG_PER_KG: DailyUnit.MG_PER_DAY,
    NutrientUnit.MG_PER_DAY: DailyUnit.MG_PER_DAY,
    NutrientUnit.G_PER_KG: DailyUnit.G_PER_DAY,
    NutrientUnit.G_PER_DAY: DailyUnit.G_PER_DAY,
    NutrientUnit.KCAL_PER_KG: DailyUnit.KCAL_PER_DAY,
    NutrientUnit.KCAL_PER_DAY: DailyUnit.KCAL_PER_DAY,
    NutrientUnit.ML_PER_KG: DailyUnit.ML_PER_DAY,
    NutrientUnit.ML_PER_DAY: DailyUnit.ML_PER_DAY,
}


def to_daily_unit(unit: str) -> DailyUnit:
    """Collapse a guideline unit into its daily unit family."""
    try:
        return DAILY_UNITS.get(NutrientUnit(unit), DailyUnit.PERCENT_ENERGY)
    except ValueError:
        return DailyUnit.PERCENT_ENERGY


def is_weight_relative(unit: str) -> bool:
    return str(getattr(unit, "value", unit)).endswith("/kg")


def to_daily_value(value: float, unit: str, weight_kg: float) -> float:
    """Scale a per-kilogram value by body weight; absolute values pass through."""
    if is_weight_relative(unit):
        return value * weight_kg
    return value


def decimals_for_unit(unit: str) -> int:
    unit = str(getattr(unit, "value", unit))
    if unit.startswith("g"):
        return 2
    if unit == DailyUnit.PERCENT_ENERGY.value:
        return 1
    return 0


def format_amount(value: Optional[float], unit: str) -> str:
    """Format a value with the precision suited to its unit."""
    if value is None or not math.isfinite(value):
        return "-"
    return f"{value:.{decimals_for_unit(unit)}f}"


def format_source_range(source: NutrientRange) -> str:
    """Format a guideline range as written in the source table, e.g. "25-70 mg/kg"."""
    unit = source.unit.value
    low = format_amount(source.min, unit)
    high = format_amount(source.max, unit)

    if source.min_only:
        return f">= {low} {unit}"
    if source.min == source.max:
        return f"{low} {unit}"
    if source.mid is not None:
        return f"{format_amount(source.mid, unit)} ({low}-{high}) {unit}"
    return f"{low}-{high} {unit}"


def format_daily_range(source: NutrientRange, total_min: float, total_max: float, total_unit: str) -> str:
    """Format a resolved daily range, e.g. "100-280 mg/day"."""
    low = format_amount(total_min, total_unit)
    high = format_amount(total_max, total_unit)

    if source.min_only:
        return f">= {low} {total_unit}"
    if total_min == total_max:
        return f"{low} {total_unit}"
    return f"{low}-{high} {total_unit}"
