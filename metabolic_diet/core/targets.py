"""Resolution of guideline ranges into daily nutrient targets."""

from dataclasses import dataclass

from metabolic_diet.core.units import to_daily_unit, to_daily_value
from metabolic_diet.models.models import (
    AgeGuideline,
    DiseaseProfile,
    NutrientRange,
    ResolvedTarget,
    TargetMode,
)


@dataclass(frozen=True)
class TargetTable:
    """Resolved targets as an ordered row list plus by-nutrient lookups."""
    rows: tuple[ResolvedTarget, ...]
    target_by_nutrient: dict[str, float]
    unit_by_nutrient: dict[str, str]

    def target(self, nutrient: str):
        return self.target_by_nutrient.get(nutrient)


def clamp_age_index(index: int, guideline_count: int) -> int:
    """Clamp an age bracket index into the valid range of a guideline list."""
    return min(max(0, int(index)), guideline_count - 1)


def select_age_guideline(profile: DiseaseProfile, age_group_index: int) -> AgeGuideline:
    guides = profile.age_guidelines
    return guides[clamp_age_index(age_group_index, len(guides))]


def pick_target(source: NutrientRange, mode: TargetMode) -> float:
    """
    Pick where within a guideline band to aim.

    A min-only range has no ceiling to aim below, so its floor is always the
    target. Otherwise MIN/MAX return that bound and MID returns the explicit
    midpoint when the guideline gives one, else the arithmetic mean.
    """
    if source.min_only:
        return source.min
    if mode == TargetMode.MIN:
        return source.min
    if mode == TargetMode.MAX:
        return source.max
    if source.mid is not None:
        return source.mid
    return (source.min + source.max) / 2


def resolve_target(nutrient: str, source: NutrientRange, mode: TargetMode, weight_kg: float) -> ResolvedTarget:
    return ResolvedTarget(
        nutrient=nutrient,
        source=source,
        total_min=to_daily_value(source.min, source.unit, weight_kg),
        total_max=to_daily_value(source.max, source.unit, weight_kg),
        total_target=to_daily_value(pick_target(source, mode), source.unit, weight_kg),
        total_unit=to_daily_unit(source.unit).value,
    )


def resolve_targets(
    guide: AgeGuideline,
    mode: TargetMode,
    weight_kg: float
) -> TargetTable:
    """
    Resolve every nutrient of an age guideline into daily terms.

    Args:
        guide: Age bracket guideline
        mode: Target mode policy
        weight_kg: Body weight used for per-kilogram ranges

    Returns:
        TargetTable with rows in guideline order
    """
    rows = tuple(
        resolve_target(nutrient, source, mode, weight_kg)
        for nutrient, source in guide.nutrients.items()
    )
    return TargetTable(
        rows=rows,
        target_by_nutrient={row.nutrient: row.total_target for row in rows},
        unit_by_nutrient={row.nutrient: row.total_unit for row in rows},
    )
