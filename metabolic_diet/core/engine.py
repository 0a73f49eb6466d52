"""
Diet-formulation engine entry point.

calculate_diet() is a pure function: the same inputs always produce equal
outputs, nothing is cached and no input is mutated.
"""

import logging
import math
from typing import Optional

from metabolic_diet.core.allocation import PreparationSettings, allocate_formulas
from metabolic_diet.core.analysis import analyze_reported_values
from metabolic_diet.core.balance import evaluate_balance
from metabolic_diet.core.calculations import (
    MIN_FEEDS_PER_DAY,
    MIN_SCOOP_SIZE_G,
    aggregate_totals,
    remaining_deficits,
)
from metabolic_diet.core.guidelines import get_profile
from metabolic_diet.core.nutrients import resolve_composite_value, resolve_unit_for_composite
from metabolic_diet.core.targets import TargetTable, resolve_targets, select_age_guideline
from metabolic_diet.models.models import (
    CalculationInputs,
    CalculationOutputs,
    DiseaseProfile,
    FormulaPlan,
    Highlights,
    PrimaryLimit,
)

logger = logging.getLogger(__name__)

DEFAULT_SCOOP_SIZE_G = 5.0


def _finite_or(value, default: float) -> float:
    if value is None or not math.isfinite(value):
        return default
    return value


def safe_weight(weight_kg) -> float:
    return max(0.0, _finite_or(weight_kg, 0.0))


def safe_feeds(feeds_per_day) -> int:
    return max(MIN_FEEDS_PER_DAY, math.floor(_finite_or(feeds_per_day, 0) or MIN_FEEDS_PER_DAY))


def safe_scoop_size(scoop_size_g) -> float:
    return max(MIN_SCOOP_SIZE_G, _finite_or(scoop_size_g, 0.0) or DEFAULT_SCOOP_SIZE_G)


def safe_water_per_scoop(water_per_scoop_ml) -> float:
    return max(0.0, _finite_or(water_per_scoop_ml, 0.0))


def primary_limit_highlight(primary_limiter: Optional[str], targets: TargetTable) -> Optional[PrimaryLimit]:
    if not primary_limiter:
        return None
    value = resolve_composite_value(primary_limiter, targets.target_by_nutrient)
    if value is None:
        return None
    return PrimaryLimit(
        nutrient=primary_limiter,
        value=value,
        unit=resolve_unit_for_composite(primary_limiter, targets.unit_by_nutrient),
    )


def calculate_diet(inputs: CalculationInputs, profile: Optional[DiseaseProfile] = None) -> CalculationOutputs:
    """
    Compute a daily feeding plan for one patient.

    Args:
        inputs: Patient, target mode, preparation settings and formulas
        profile: Guideline profile to use instead of the built-in one for
            inputs.disease

    Returns:
        CalculationOutputs with target rows, highlights, the formula plan
        with nutrient balances, and the caregiver intake review
    """
    profile = profile or get_profile(inputs.disease)

    weight_kg = safe_weight(inputs.weight_kg)
    feeds_per_day = safe_feeds(inputs.feeds_per_day)
    scoop_size_g = safe_scoop_size(inputs.scoop_size_g)
    water_per_scoop_ml = safe_water_per_scoop(inputs.water_per_scoop_ml)

    guide = select_age_guideline(profile, inputs.age_group_index)
    targets = resolve_targets(guide, inputs.target_mode, weight_kg)
    primary_limiter = profile.primary_limiter

    allocation = allocate_formulas(
        inputs.formulas,
        targets,
        PreparationSettings(
            feeds_per_day=feeds_per_day,
            scoop_size_g=scoop_size_g,
            water_per_scoop_ml=water_per_scoop_ml,
            primary_limiter=primary_limiter,
        ),
    )

    formula_by_role = inputs.formulas.by_role()

    totals = aggregate_totals(allocation.items, feeds_per_day, primary_limiter)
    balances = evaluate_balance(targets.rows, allocation.items, formula_by_role, totals)

    logger.debug(
        "Plan for %s '%s' at %.2f kg: %.1f kcal, %.2f g protein, %d notes",
        profile.short_name, guide.age_label, weight_kg, totals.kcal, totals.protein, len(allocation.notes),
    )

    return CalculationOutputs(
        rows=targets.rows,
        highlights=Highlights(
            target_energy=targets.target("Energy"),
            target_protein=targets.target("Protein"),
            target_fluid=targets.target("Fluid"),
            primary_limit=primary_limit_highlight(primary_limiter, targets),
        ),
        formula_plan=FormulaPlan(
            primary_limiter=primary_limiter,
            notes=allocation.notes,
            items=allocation.items,
            nutrient_balances=balances,
            totals=totals,
            deficits=remaining_deficits(totals, targets.target("Protein"), targets.target("Energy")),
        ),
        analysis=analyze_reported_values(targets.rows, profile.analysis_nutrients, inputs.analysis_values),
    )
