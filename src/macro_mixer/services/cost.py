"""Scoring of allocations against a target ratio."""

from collections.abc import Mapping, Sequence

from macro_mixer.domain.ingredients import NormalizedIngredient
from macro_mixer.domain.proposals import MacroTotals
from macro_mixer.domain.targets import NormalizedTarget

# Cost of an allocation with no macro mass. Any real mix scores at most 2.
ZERO_MASS_COST = 1.0e6


def macro_totals(
    allocation: Mapping[str, float], ingredients: Sequence[NormalizedIngredient]
) -> MacroTotals:
    """Sum calories and macro grams in catalog order."""
    kcal = 0.0
    carb = 0.0
    fat = 0.0
    protein = 0.0
    for ingredient in ingredients:
        grams = allocation.get(ingredient.name, 0.0)
        kcal += grams * ingredient.kcal_per_g
        carb += grams * ingredient.carb
        fat += grams * ingredient.fat
        protein += grams * ingredient.protein
    return MacroTotals(kcal=kcal, carb_g=carb, fat_g=fat, protein_g=protein)


def total_kcal(
    allocation: Mapping[str, float], ingredients: Sequence[NormalizedIngredient]
) -> float:
    return macro_totals(allocation, ingredients).kcal


def cost(
    allocation: Mapping[str, float],
    ingredients: Sequence[NormalizedIngredient],
    target: NormalizedTarget,
) -> float:
    """Squared distance between the allocation's macro ratio and the target.

    Lower is better and 0 is a perfect match. Total calories are not part of
    the score.
    """
    return cost_of_totals(macro_totals(allocation, ingredients), target)


def cost_of_totals(totals: MacroTotals, target: NormalizedTarget) -> float:
    mass = totals.macro_g
    if mass <= 0:
        return ZERO_MASS_COST
    return (
        _square(totals.carb_g / mass - target.carb)
        + _square(totals.fat_g / mass - target.fat)
        + _square(totals.protein_g / mass - target.protein)
    )


def _square(value: float) -> float:
    return value * value
