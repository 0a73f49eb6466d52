import pytest
from fastapi.testclient import TestClient

from metabolic_diet.main import app
from metabolic_diet.models.models import (
    AgeGuideline,
    Disease,
    DiseaseProfile,
    FormulaReference,
    NutrientRange,
)
from metabolic_diet.core.nutrients import CORE_NUTRIENTS


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def pku_profile():
    """Single-bracket PKU profile: Protein 3 g/kg, PHE 20-60 mg/kg."""
    return DiseaseProfile(
        disease=Disease.PKU,
        name="Phenylketonuria",
        short_name="PKU",
        primary_limiter="PHE",
        nutrient_keys=CORE_NUTRIENTS | frozenset({"PHE", "TYR"}),
        age_guidelines=(
            AgeGuideline("Infant", {
                "Protein": NutrientRange(2.5, 3.5, "g/kg", mid=3.0),
                "PHE": NutrientRange(20, 60, "mg/kg"),
            }),
        ),
        analysis_nutrients=("PHE",),
    )


@pytest.fixture
def standard_formula():
    return FormulaReference("Standard", "100g", {"Protein": 11, "PHE": 400})


@pytest.fixture
def special_formula():
    return FormulaReference("PHE-free", "100g", {"Protein": 13, "PHE": 0})
