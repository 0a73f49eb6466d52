"""
Core math for formula contributions and plan totals.

Formula nutrient densities are given per 100 g of powder or per 100 mL of
ready-to-feed liquid:
    delivered = amount × per_100 / 100
Powder is measured in scoops and reconstituted with a fixed water volume
per scoop; liquids are fed as-is.
"""

import math
from typing import Mapping, Optional, Sequence

from metabolic_diet.core.nutrients import resolve_composite_value
from metabolic_diet.models.models import (
    FormulaBasis,
    FormulaContribution,
    FormulaReference,
    FormulaRole,
    PlanDeficits,
    PlanTotals,
)

EPSILON = 1e-6

# Guard values applied to caller input before any arithmetic
MIN_SCOOP_SIZE_G = 0.1
MIN_FEEDS_PER_DAY = 1


def safe_amount(value: float) -> float:
    """Clamp negative or non-finite amounts to zero."""
    if value is None or not math.isfinite(value) or value < 0:
        return 0.0
    return value


def calculate_nutrient_amount(amount: float, nutrient_per_100: float) -> float:
    """
    Calculate nutrient delivered by a given amount of formula.

    Formula: delivered = (amount × nutrient_per_100) / 100

    Args:
        amount: Grams of powder or mL of liquid
        nutrient_per_100: Nutrient per 100 g or 100 mL

    Returns:
        Total nutrient amount
    """
    return (amount * nutrient_per_100) / 100


def amount_for_nutrient(nutrient_amount: float, nutrient_per_100: float) -> float:
    """
    Amount of formula that delivers a given nutrient amount.

    Formula: amount = (nutrient_amount × 100) / nutrient_per_100

    Raises:
        ValueError: If the formula carries none of the nutrient
    """
    if nutrient_per_100 <= 0:
        raise ValueError("nutrient_per_100 must be positive")
    return (nutrient_amount * 100) / nutrient_per_100


def formula_nutrient(formula: FormulaReference, nutrient: str) -> Optional[float]:
    """Per-100 content of a simple or composite nutrient in one formula."""
    return resolve_composite_value(nutrient, formula.values)


def amount_unit_for_basis(basis: FormulaBasis) -> str:
    return "g/day" if basis == FormulaBasis.PER_100G else "mL/day"


def make_contribution(
    role: FormulaRole,
    formula: FormulaReference,
    amount: float,
    feeds_per_day: int,
    scoop_size_g: float,
    water_per_scoop_ml: float,
    primary_limiter: Optional[str] = None
) -> FormulaContribution:
    """
    Compute what a daily amount of one formula delivers and how to prepare it.

    Args:
        role: Formula role in the plan
        formula: Formula nutrient density
        amount: Daily grams (powder) or mL (liquid)
        feeds_per_day: Number of feeds the daily amount is split into
        scoop_size_g: Grams of powder per scoop
        water_per_scoop_ml: Water added per scoop
        primary_limiter: Disease primary limiter key, may be composite

    Returns:
        FormulaContribution; scoop and water fields are only set for powders
    """
    kcal = calculate_nutrient_amount(amount, formula.values.get("Energy") or 0)
    protein = calculate_nutrient_amount(amount, formula.values.get("Protein") or 0)

    limiter_per_100 = formula_nutrient(formula, primary_limiter) if primary_limiter else None
    limiter_delivered = (
        calculate_nutrient_amount(amount, limiter_per_100) if limiter_per_100 is not None else None
    )

    scoops = water_ml = per_feed_scoops = per_feed_water_ml = None
    if formula.basis == FormulaBasis.PER_100G and scoop_size_g > 0:
        scoops = amount / scoop_size_g
        water_ml = scoops * water_per_scoop_ml
        per_feed_scoops = scoops / feeds_per_day
        per_feed_water_ml = water_ml / feeds_per_day

    return FormulaContribution(
        role=role,
        formula_name=formula.name,
        basis=formula.basis,
        amount=amount,
        amount_unit=amount_unit_for_basis(formula.basis),
        kcal=kcal,
        protein=protein,
        per_feed_amount=amount / feeds_per_day,
        primary_limiter_delivered=limiter_delivered,
        scoops=scoops,
        water_ml=water_ml,
        per_feed_scoops=per_feed_scoops,
        per_feed_water_ml=per_feed_water_ml,
    )


def delivered_nutrient(
    nutrient: str,
    items: Sequence[FormulaContribution],
    formula_by_role: Mapping[FormulaRole, FormulaReference]
) -> float:
    """
    Sum a nutrient across plan items.

    Energy and protein come straight from each item's kcal/protein. Any other
    nutrient is resolved per item against that item's own formula, so a
    composite key sums correctly; items whose formula lacks it add nothing.
    """
    if nutrient == "Energy":
        return sum(item.kcal for item in items)
    if nutrient == "Protein":
        return sum(item.protein for item in items)

    total = 0.0
    for item in items:
        formula = formula_by_role.get(item.role)
        if formula is None:
            continue
        per_100 = formula_nutrient(formula, nutrient)
        if per_100 is None:
            continue
        total += calculate_nutrient_amount(item.amount, per_100)
    return total


def aggregate_totals(
    items: Sequence[FormulaContribution],
    feeds_per_day: int,
    primary_limiter: Optional[str] = None
) -> PlanTotals:
    """Aggregate plan items into daily and per-feed preparation quantities."""
    total_kcal = sum(item.kcal for item in items)
    total_protein = sum(item.protein for item in items)
    total_limiter = sum(
        item.primary_limiter_delivered for item in items
        if item.primary_limiter_delivered is not None
    )

    powder_g = sum(item.amount for item in items if item.basis == FormulaBasis.PER_100G)
    ready_to_feed_ml = sum(item.amount for item in items if item.basis == FormulaBasis.PER_100ML)
    scoops = sum(item.scoops or 0 for item in items)
    water_ml = sum(item.water_ml or 0 for item in items)
    final_volume_ml = ready_to_feed_ml + water_ml

    return PlanTotals(
        kcal=total_kcal,
        protein=total_protein,
        primary_limiter=total_limiter if primary_limiter and math.isfinite(total_limiter) else None,
        powder_g=powder_g,
        scoops=scoops,
        water_ml=water_ml,
        ready_to_feed_ml=ready_to_feed_ml,
        final_volume_ml=final_volume_ml,
        scoops_per_feed=scoops / feeds_per_day,
        volume_per_feed_ml=final_volume_ml / feeds_per_day,
    )


def remaining_deficits(
    totals: PlanTotals,
    target_protein: Optional[float],
    target_energy: Optional[float]
) -> PlanDeficits:
    return PlanDeficits(
        protein=max(0.0, (target_protein or 0) - totals.protein),
        energy=max(0.0, (target_energy or 0) - totals.kcal),
    )
