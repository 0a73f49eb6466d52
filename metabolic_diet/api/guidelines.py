"""Clinical guideline API endpoints."""

from fastapi import APIRouter

from metabolic_diet.core.guidelines import DISEASE_PROFILES, REFERENCE_TEXT, get_profile
from metabolic_diet.core.units import format_source_range
from metabolic_diet.models.models import Disease
from metabolic_diet.schemas.schemas import (
    AgeGuidelineResponse,
    DiseaseGuidelineResponse,
    DiseaseSummaryResponse,
    NutrientRangeResponse,
)
from metabolic_diet.services.catalog import DEFAULT_SELECTION

router = APIRouter(prefix="/guideline", tags=["guidelines"])


@router.get("", response_model=list[DiseaseSummaryResponse])
def list_diseases():
    """List supported diseases and their age brackets."""
    return [
        DiseaseSummaryResponse(
            disease=profile.disease,
            name=profile.name,
            short_name=profile.short_name,
            primary_limiter=profile.primary_limiter,
            age_groups=[guide.age_label for guide in profile.age_guidelines],
        )
        for profile in DISEASE_PROFILES.values()
    ]


@router.get("/{disease}", response_model=DiseaseGuidelineResponse)
def get_disease_guideline(disease: Disease):
    """
    Get the full guideline table for a disease.

    Ranges are returned as written in the guideline (per kg or per day)
    along with a display string; daily totals depend on weight and are
    computed by /plan/compute.
    """
    profile = get_profile(disease)
    guidelines = [
        AgeGuidelineResponse(
            index=index,
            age_label=guide.age_label,
            nutrients=[
                NutrientRangeResponse(
                    nutrient=nutrient,
                    min=source.min,
                    max=source.max,
                    unit=source.unit,
                    mid=source.mid,
                    min_only=source.min_only,
                    display=format_source_range(source),
                )
                for nutrient, source in guide.nutrients.items()
            ],
        )
        for index, guide in enumerate(profile.age_guidelines)
    ]

    return DiseaseGuidelineResponse(
        disease=profile.disease,
        name=profile.name,
        short_name=profile.short_name,
        primary_limiter=profile.primary_limiter,
        age_groups=[guide.age_label for guide in profile.age_guidelines],
        analysis_nutrients=list(profile.analysis_nutrients),
        default_formulas=DEFAULT_SELECTION[profile.disease],
        guidelines=guidelines,
        reference=REFERENCE_TEXT,
    )
