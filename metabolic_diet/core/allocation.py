"""
Three-stage greedy allocation of standard, special and modular formulas.

1. Standard: dosed as high as the tightest amino-acid ceiling allows.
2. Special: dosed to close the largest remaining macronutrient deficit.
3. Modular: same completion rule on top of standard + special.

Each stage runs once and is never revisited. When one formula's profile
makes two completion targets conflict, the larger required amount wins;
there is no further arbitration.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional

from metabolic_diet.core.calculations import (
    EPSILON,
    amount_for_nutrient,
    delivered_nutrient,
    formula_nutrient,
    make_contribution,
    safe_amount,
)
from metabolic_diet.core.nutrients import is_amino_acid_nutrient
from metabolic_diet.core.targets import TargetTable
from metabolic_diet.models.models import (
    FormulaContribution,
    FormulaReference,
    FormulaRole,
    FormulaSet,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompletionTarget:
    nutrient: str
    target: Optional[float]
    label: str


@dataclass(frozen=True)
class PreparationSettings:
    feeds_per_day: int
    scoop_size_g: float
    water_per_scoop_ml: float
    primary_limiter: Optional[str] = None


@dataclass(frozen=True)
class AllocationResult:
    items: tuple[FormulaContribution, ...]
    notes: tuple[str, ...]
    limiting_nutrient: Optional[str] = None


COMPLETION_LABELS = {
    "Protein": "protein",
    "Energy": "calories",
    "Carbohydrate": "carbohydrate",
    "Fat": "fat",
}

# Special formulas complete protein first; modular exists for calories
SPECIAL_COMPLETION_ORDER = ("Protein", "Energy", "Carbohydrate", "Fat")
MODULAR_COMPLETION_ORDER = ("Energy", "Carbohydrate", "Fat", "Protein")


def completion_targets(targets: TargetTable, order: tuple[str, ...]) -> list[CompletionTarget]:
    return [
        CompletionTarget(nutrient, targets.target(nutrient), COMPLETION_LABELS[nutrient])
        for nutrient in order
    ]


def standard_ceiling_amount(
    standard: FormulaReference,
    targets: TargetTable
) -> tuple[float, Optional[str]]:
    """
    Find the largest standard formula amount that keeps every amino-acid
    ceiling respected.

    Returns:
        (amount, limiting nutrient); amount is infinite when no tracked
        ceiling applies to this formula
    """
    best_amount = math.inf
    limiting = None

    for row in targets.rows:
        if not is_amino_acid_nutrient(row.nutrient) or row.source.min_only:
            continue

        per_100 = formula_nutrient(standard, row.nutrient)
        if per_100 is None or per_100 <= EPSILON:
            continue

        candidate = amount_for_nutrient(row.total_max, per_100)
        if candidate < best_amount:
            best_amount = candidate
            limiting = row.nutrient

    return best_amount, limiting


def size_standard(
    standard: FormulaReference,
    targets: TargetTable,
    notes: list[str]
) -> tuple[float, Optional[str]]:
    """Stage 1: size the standard formula by its binding amino-acid ceiling."""
    ceiling_amount, limiting = standard_ceiling_amount(standard, targets)
    if math.isfinite(ceiling_amount):
        return safe_amount(ceiling_amount), limiting

    target_protein = targets.target("Protein") or 0
    protein_per_100 = standard.values.get("Protein") or 0
    if target_protein > 0 and protein_per_100 > 0:
        notes.append("No elemental upper limit found, so standard amount is set by protein target.")
        return safe_amount(amount_for_nutrient(target_protein, protein_per_100)), None

    if target_protein > 0:
        notes.append("Standard formula has zero protein, so protein deficit remains.")
    return 0.0, None


def required_amount_for_completion(
    formula: FormulaReference,
    formula_label: str,
    targets: list[CompletionTarget],
    items: list[FormulaContribution],
    formula_by_role: dict[FormulaRole, FormulaReference],
    notes: list[str]
) -> float:
    """
    Amount of a formula needed to close every remaining completion deficit.

    Contribution scales linearly with dose, so the hardest-to-fill nutrient
    sets the amount and every other deficit closes along with it.
    """
    required = 0.0

    for completion in targets:
        if completion.target is None:
            continue

        delivered = delivered_nutrient(completion.nutrient, items, formula_by_role)
        deficit = max(0.0, completion.target - delivered)
        if deficit <= EPSILON:
            continue

        per_100 = formula_nutrient(formula, completion.nutrient)
        if per_100 is not None and per_100 > EPSILON:
            required = max(required, amount_for_nutrient(deficit, per_100))
            continue

        notes.append(
            f"{formula_label} has zero {completion.label}, so {completion.label} deficit remains."
        )

    return safe_amount(required)


def has_remaining_deficit(
    targets: list[CompletionTarget],
    items: list[FormulaContribution],
    formula_by_role: dict[FormulaRole, FormulaReference]
) -> bool:
    return any(
        completion.target is not None
        and completion.target - delivered_nutrient(completion.nutrient, items, formula_by_role) > EPSILON
        for completion in targets
    )


def allocate_formulas(
    formulas: FormulaSet,
    targets: TargetTable,
    prep: PreparationSettings
) -> AllocationResult:
    """
    Size each formula role in turn.

    Args:
        formulas: Standard formula plus optional special and modular
        targets: Resolved daily targets
        prep: Feeding and reconstitution settings

    Returns:
        AllocationResult with plan items in role order and advisory notes
    """
    notes: list[str] = []
    items: list[FormulaContribution] = []
    formula_by_role = formulas.by_role()

    def add_item(role: FormulaRole, amount: float):
        item = make_contribution(
            role=role,
            formula=formula_by_role[role],
            amount=amount,
            feeds_per_day=prep.feeds_per_day,
            scoop_size_g=prep.scoop_size_g,
            water_per_scoop_ml=prep.water_per_scoop_ml,
            primary_limiter=prep.primary_limiter,
        )
        items.append(item)
        logger.debug("Sized %s formula '%s' at %.3f %s", role.value, item.formula_name, amount, item.amount_unit)

    # Stage 1
    standard_amount, limiting = size_standard(formulas.standard, targets, notes)
    add_item(FormulaRole.STANDARD, standard_amount)

    if limiting:
        logger.debug("Standard formula limited by %s", limiting)
        if formulas.special is not None:
            notes.append(
                f"{limiting} reached its highest allowed level from standard formula. "
                "Special formula will complete remaining needs."
            )
        else:
            notes.append(
                f"{limiting} reached its highest allowed level from standard formula, "
                "but no special formula is selected."
            )

    # Stage 2
    special_targets = completion_targets(targets, SPECIAL_COMPLETION_ORDER)
    if formulas.special is not None:
        amount = required_amount_for_completion(
            formulas.special, "Special formula", special_targets, items, formula_by_role, notes
        )
        add_item(FormulaRole.SPECIAL, amount)
    elif has_remaining_deficit(special_targets, items, formula_by_role):
        if formulas.modular is not None:
            notes.append("No special formula selected. Remaining deficits will be handled by modular.")
        else:
            notes.append("No special formula selected while deficits exist.")

    # Stage 3
    modular_targets = completion_targets(targets, MODULAR_COMPLETION_ORDER)
    if formulas.modular is not None:
        amount = required_amount_for_completion(
            formulas.modular, "Modular formula", modular_targets, items, formula_by_role, notes
        )
        add_item(FormulaRole.MODULAR, amount)
    elif has_remaining_deficit(modular_targets, items, formula_by_role):
        notes.append("No modular formula selected while deficits exist.")

    for note in notes:
        logger.debug("Plan note: %s", note)

    return AllocationResult(items=tuple(items), notes=tuple(notes), limiting_nutrient=limiting)
