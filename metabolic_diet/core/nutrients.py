"""
Nutrient-key registry and composite key resolution.

A nutrient key is either a simple name ("PHE") or a "+"-joined composite
("MET+CYS") reported as one clinical limit. Composite values are the sum of
their parts and are only reported when every part is known.
"""

from typing import Mapping, Optional


# Macronutrients, fluid and essential fatty acids tracked for every disease
CORE_NUTRIENTS = frozenset({
    "Energy",
    "Protein",
    "Fluid",
    "Fat",
    "Carbohydrate",
    "LinoleicAcid",
    "LinolenicAcid",
})

AMINO_ACIDS = frozenset({
    "PHE",
    "TYR",
    "LEU",
    "ILE",
    "VAL",
    "MET",
    "CYS",
    "THR",
    "LYS",
    "TRP",
})

# Urea cycle disorders split protein by source
PROTEIN_FRACTIONS = frozenset({
    "IntactProtein",
    "MedicalProtein",
})

ALL_NUTRIENT_KEYS = CORE_NUTRIENTS | AMINO_ACIDS | PROTEIN_FRACTIONS

# Nutrients that never bound the standard formula dose
NON_AMINO_NUTRIENTS = CORE_NUTRIENTS


def split_composite_key(key: str) -> list[str]:
    """Split a composite key into its trimmed, non-empty parts."""
    return [part.strip() for part in key.split("+") if part.strip()]


def is_registered_key(key: str, registry: frozenset) -> bool:
    """Check a simple or composite key against a closed registry."""
    if key in registry:
        return True
    if "+" not in key:
        return False
    parts = split_composite_key(key)
    return bool(parts) and all(part in registry for part in parts)


def resolve_composite_value(
    key: str,
    values_by_key: Mapping[str, Optional[float]]
) -> Optional[float]:
    """
    Resolve a nutrient value for a simple or composite key.

    Args:
        key: Nutrient key, e.g. "PHE" or "MET+CYS"
        values_by_key: Sparse table of known values

    Returns:
        The direct value if present, the sum of all parts for a composite
        key whose parts are all present, otherwise None. Partial sums are
        never returned.
    """
    direct = values_by_key.get(key)
    if direct is not None:
        return direct

    if "+" not in key:
        return None

    parts = split_composite_key(key)
    if not parts:
        return None

    total = 0.0
    for part in parts:
        value = values_by_key.get(part)
        if value is None:
            return None
        total += value
    return total


def resolve_unit_for_composite(
    key: str,
    unit_by_key: Mapping[str, str],
    default: str = "mg/day"
) -> str:
    """Resolve the display unit for a key, using the first part of a composite."""
    direct = unit_by_key.get(key)
    if direct:
        return direct

    if "+" not in key:
        return default

    parts = split_composite_key(key)
    if not parts:
        return default
    return unit_by_key.get(parts[0]) or default


def is_amino_acid_nutrient(nutrient: str) -> bool:
    """
    Classify a nutrient key as an amino-acid-like constraint.

    Composite keys qualify only when none of their parts is a macronutrient,
    fluid or fatty acid.
    """
    if nutrient in NON_AMINO_NUTRIENTS:
        return False

    if "+" not in nutrient:
        return True

    return all(
        part and part not in NON_AMINO_NUTRIENTS
        for part in (p.strip() for p in nutrient.split("+"))
    )
