"""Ingredient domain models."""

import math
from dataclasses import dataclass

from macro_mixer.domain.errors import DivisionError, MalformedIngredientError


@dataclass(frozen=True)
class RawIngredient:
    """Ingredient as entered: macro grams for a given total mass."""

    name: str
    grams: float
    kcal: float
    carb_g: float
    fat_g: float
    protein_g: float


@dataclass(frozen=True)
class NormalizedIngredient:
    """Macro grams and calories per gram of ingredient mass."""

    name: str
    carb: float
    fat: float
    protein: float
    kcal_per_g: float


def normalize_ingredient(raw: RawIngredient) -> NormalizedIngredient:
    """Convert a raw ingredient into per-gram densities.

    Macro fractions need not sum to 1; the remaining mass is water, fibre or
    anything else the record does not account for.
    """
    values = (raw.grams, raw.kcal, raw.carb_g, raw.fat_g, raw.protein_g)
    if not all(math.isfinite(value) for value in values):
        raise MalformedIngredientError(raw.name, "values must be finite numbers")
    if raw.grams <= 0:
        raise DivisionError(raw.name, raw.grams)
    if raw.kcal < 0:
        raise MalformedIngredientError(raw.name, f"negative kcal {raw.kcal}")
    macros = {"carb": raw.carb_g, "fat": raw.fat_g, "protein": raw.protein_g}
    for label, amount in macros.items():
        if amount < 0:
            raise MalformedIngredientError(raw.name, f"negative {label} {amount}g")
        if amount > raw.grams:
            raise MalformedIngredientError(
                raw.name, f"{label} {amount}g exceeds total mass {raw.grams}g"
            )
    return NormalizedIngredient(
        name=raw.name,
        carb=raw.carb_g / raw.grams,
        fat=raw.fat_g / raw.grams,
        protein=raw.protein_g / raw.grams,
        kcal_per_g=raw.kcal / raw.grams,
    )
