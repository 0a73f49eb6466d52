"""
Clinical guideline tables for inborn errors of metabolism.

Values per age bracket:
- Energy in kcal/kg/day, Protein in g/kg/day, Fluid in mL/kg/day
- Restricted amino acids in mg/kg/day, or mg/day where the guideline
  gives an absolute daily amount
- Urea cycle disorders split protein into intact and medical (EAA) fractions

Source: Metabolic Nutrition Guidelines 2024 (PKU, MMA/PA, MSUD, GA, UCD)
"""

from metabolic_diet.core.nutrients import CORE_NUTRIENTS, PROTEIN_FRACTIONS
from metabolic_diet.models.models import AgeGuideline, Disease, DiseaseProfile, NutrientRange

REFERENCE_TEXT = "Metabolic Nutrition Guidelines 2024 (PKU, MMA/PA, MSUD, GA, UCD)"


def _r(low, high, unit, mid=None, min_only=False) -> NutrientRange:
    return NutrientRange(min=low, max=high, unit=unit, mid=mid, min_only=min_only)


PKU_GUIDELINES = (
    AgeGuideline("Birth to 3 months", {
        "Energy": _r(108, 120, "kcal/kg"),
        "Protein": _r(2.5, 3.0, "g/kg"),
        "Fluid": _r(125, 150, "mL/kg"),
        "PHE": _r(25, 70, "mg/kg"),
        "TYR": _r(1000, 1300, "mg/day", min_only=True),
    }),
    AgeGuideline("3 to <6 months", {
        "Energy": _r(95, 105, "kcal/kg"),
        "Protein": _r(2.0, 3.0, "g/kg"),
        "Fluid": _r(130, 160, "mL/kg"),
        "PHE": _r(20, 45, "mg/kg"),
        "TYR": _r(1400, 2100, "mg/day", min_only=True),
    }),
    AgeGuideline("6 to <9 months", {
        "Energy": _r(85, 95, "kcal/kg"),
        "Protein": _r(2.0, 2.5, "g/kg"),
        "Fluid": _r(125, 145, "mL/kg"),
        "PHE": _r(15, 35, "mg/kg"),
        "TYR": _r(2500, 3000, "mg/day", min_only=True),
    }),
    AgeGuideline("9 to <12 months", {
        "Energy": _r(80, 90, "kcal/kg"),
        "Protein": _r(2.0, 2.5, "g/kg"),
        "Fluid": _r(120, 135, "mL/kg"),
        "PHE": _r(10, 35, "mg/kg"),
        "TYR": _r(2500, 3000, "mg/day", min_only=True),
    }),
    AgeGuideline("1 to 4 years", {
        "Energy": _r(70, 85, "kcal/kg"),
        "Protein": _r(1.5, 2.0, "g/kg"),
        "PHE": _r(200, 320, "mg/day"),
        "TYR": _r(2800, 3500, "mg/day", min_only=True),
    }),
    AgeGuideline("4 years to adult", {
        "Energy": _r(40, 60, "kcal/kg"),
        "Protein": _r(1.0, 1.5, "g/kg"),
        "PHE": _r(200, 1100, "mg/day"),
        "TYR": _r(4000, 6000, "mg/day", min_only=True),
    }),
)

MMA_PA_GUIDELINES = (
    AgeGuideline("0-6 months", {
        "Energy": _r(125, 145, "kcal/kg"),
        "Protein": _r(2.75, 3.5, "g/kg"),
        "Fluid": _r(125, 150, "mL/kg"),
        "ILE": _r(60, 110, "mg/kg"),
        "MET": _r(20, 50, "mg/kg"),
        "THR": _r(50, 125, "mg/kg"),
        "VAL": _r(60, 105, "mg/kg"),
    }),
    AgeGuideline("7-12 months", {
        "Energy": _r(115, 140, "kcal/kg"),
        "Protein": _r(2.5, 3.25, "g/kg"),
        "Fluid": _r(120, 135, "mL/kg"),
        "ILE": _r(40, 90, "mg/kg"),
        "MET": _r(15, 40, "mg/kg"),
        "THR": _r(20, 75, "mg/kg"),
        "VAL": _r(40, 80, "mg/kg"),
    }),
)

MSUD_GUIDELINES = (
    AgeGuideline("0-6 months", {
        "Energy": _r(95, 145, "kcal/kg"),
        "Protein": _r(2.5, 3.5, "g/kg"),
        "Fluid": _r(125, 160, "mL/kg"),
        "LEU": _r(40, 100, "mg/kg"),
        "ILE": _r(30, 90, "mg/kg"),
        "VAL": _r(40, 95, "mg/kg"),
    }),
    AgeGuideline("7-12 months", {
        "Energy": _r(80, 135, "kcal/kg"),
        "Protein": _r(2.5, 3.0, "g/kg"),
        "Fluid": _r(120, 135, "mL/kg"),
        "LEU": _r(40, 75, "mg/kg"),
        "ILE": _r(30, 70, "mg/kg"),
        "VAL": _r(30, 80, "mg/kg"),
    }),
    AgeGuideline("1-3 years", {
        "Energy": _r(80, 130, "kcal/kg"),
        "Protein": _r(1.5, 2.5, "g/kg"),
        "LEU": _r(40, 70, "mg/kg"),
        "ILE": _r(20, 70, "mg/kg"),
        "VAL": _r(30, 70, "mg/kg"),
    }),
    AgeGuideline("4-8 years", {
        "Energy": _r(50, 120, "kcal/kg"),
        "Protein": _r(1.3, 2.0, "g/kg"),
        "LEU": _r(35, 65, "mg/kg"),
        "ILE": _r(20, 30, "mg/kg"),
        "VAL": _r(30, 50, "mg/kg"),
    }),
)

GA_GUIDELINES = (
    AgeGuideline("Birth-6 months", {
        "Energy": _r(100, 120, "kcal/kg"),
        "Protein": _r(2.75, 3.0, "g/kg"),
        "Fluid": _r(125, 150, "mL/kg"),
        "LYS": _r(65, 100, "mg/kg"),
        "TRP": _r(10, 20, "mg/kg"),
    }),
    AgeGuideline("6 months to 1 year", {
        "Energy": _r(95, 110, "kcal/kg"),
        "Protein": _r(2.5, 3.0, "g/kg"),
        "Fluid": _r(120, 135, "mL/kg"),
        "LYS": _r(55, 90, "mg/kg"),
        "TRP": _r(10, 12, "mg/kg"),
    }),
    AgeGuideline("1 year to 4 years", {
        "Energy": _r(80, 95, "kcal/kg"),
        "Protein": _r(1.8, 2.6, "g/kg"),
        "LYS": _r(50, 80, "mg/kg"),
        "TRP": _r(8, 12, "mg/kg"),
    }),
    AgeGuideline("4 years to 7 years", {
        "Energy": _r(60, 80, "kcal/kg"),
        "Protein": _r(1.6, 2.0, "g/kg"),
        "LYS": _r(40, 70, "mg/kg"),
        "TRP": _r(7, 11, "mg/kg"),
    }),
)

UCD_GUIDELINES = (
    AgeGuideline("0-1 year", {
        "Energy": _r(100, 120, "kcal/kg"),
        "Protein": _r(1.2, 2.2, "g/kg"),
        "Fluid": _r(120, 150, "mL/kg"),
        "IntactProtein": _r(0.8, 1.1, "g/kg"),
        "MedicalProtein": _r(0.4, 1.1, "g/kg"),
    }),
    AgeGuideline("1-7 years", {
        "Energy": _r(80, 100, "kcal/kg"),
        "Protein": _r(1.0, 1.2, "g/kg"),
        "IntactProtein": _r(0.7, 0.8, "g/kg"),
        "MedicalProtein": _r(0.3, 0.7, "g/kg"),
    }),
    AgeGuideline("7-19 years", {
        "Energy": _r(60, 80, "kcal/kg"),
        "Protein": _r(0.8, 1.4, "g/kg"),
        "IntactProtein": _r(0.3, 1.0, "g/kg"),
        "MedicalProtein": _r(0.4, 0.7, "g/kg"),
    }),
)


DISEASE_PROFILES = {
    Disease.PKU: DiseaseProfile(
        disease=Disease.PKU,
        name="Phenylketonuria",
        short_name="PKU",
        primary_limiter="PHE",
        nutrient_keys=CORE_NUTRIENTS | frozenset({"PHE", "TYR"}),
        age_guidelines=PKU_GUIDELINES,
        analysis_nutrients=("PHE", "TYR"),
    ),
    Disease.MMA_PA: DiseaseProfile(
        disease=Disease.MMA_PA,
        name="Methylmalonic / Propionic Acidemia",
        short_name="MMA/PA",
        primary_limiter="MET",
        nutrient_keys=CORE_NUTRIENTS | frozenset({"ILE", "MET", "THR", "VAL"}),
        age_guidelines=MMA_PA_GUIDELINES,
        analysis_nutrients=("ILE", "MET", "THR", "VAL"),
    ),
    Disease.MSUD: DiseaseProfile(
        disease=Disease.MSUD,
        name="Maple Syrup Urine Disease",
        short_name="MSUD",
        primary_limiter="LEU",
        nutrient_keys=CORE_NUTRIENTS | frozenset({"LEU", "ILE", "VAL"}),
        age_guidelines=MSUD_GUIDELINES,
        analysis_nutrients=("LEU", "ILE", "VAL"),
    ),
    Disease.GA: DiseaseProfile(
        disease=Disease.GA,
        name="Glutaric Acidemia",
        short_name="GA",
        primary_limiter="LYS",
        nutrient_keys=CORE_NUTRIENTS | frozenset({"LYS", "TRP"}),
        age_guidelines=GA_GUIDELINES,
        analysis_nutrients=("LYS", "TRP"),
    ),
    Disease.UCD: DiseaseProfile(
        disease=Disease.UCD,
        name="Urea Cycle Disorders",
        short_name="UCD",
        primary_limiter="IntactProtein",
        nutrient_keys=CORE_NUTRIENTS | PROTEIN_FRACTIONS,
        age_guidelines=UCD_GUIDELINES,
        analysis_nutrients=("IntactProtein", "MedicalProtein"),
    ),
}


def get_profile(disease: Disease) -> DiseaseProfile:
    return DISEASE_PROFILES[Disease(disease)]
