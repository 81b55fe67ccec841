"""Human-readable rendering of search inputs and results."""

from collections.abc import Mapping

from macro_mixer.domain.proposals import Proposal
from macro_mixer.services.constraints import ConstraintSet
from macro_mixer.services.mixer import PreparedMix


def render_inputs(prepared: PreparedMix) -> list[str]:
    """Describe the normalized target, constraints and ingredients."""
    target = prepared.target
    lines = [
        "Starting search with",
        (
            f"\tTarget {target.kcal:g} kcal, carb={target.carb:.3f} "
            f"fat={target.fat:.3f} protein={target.protein:.3f}"
        ),
        f"\t{render_constraints(prepared.constraints)}",
    ]
    for ingredient in prepared.ingredients:
        lines.append(
            f"\tIngredient {ingredient.name} carb={ingredient.carb:.3f} "
            f"fat={ingredient.fat:.3f} protein={ingredient.protein:.3f} "
            f"kcal/g={ingredient.kcal_per_g:.3f}"
        )
    return lines


def render_constraints(constraints: ConstraintSet) -> str:
    return (
        f"constraints exact: {_grams(constraints.exact_grams)}, "
        f"at least: {_grams(constraints.at_least)}, "
        f"at most: {_grams(constraints.at_most)}"
    )


def render_search(proposal: Proposal) -> str:
    """Describe the raw search outcome."""
    return (
        f"\tFound {_grams(proposal.allocation)} with cost {proposal.cost:.6f} "
        f"after {len(proposal.steps)} steps"
    )


def render_result(proposal: Proposal) -> list[str]:
    """Describe the mix and its macro totals."""
    totals = proposal.totals
    carb_pct, fat_pct, protein_pct = totals.ratio()
    return [
        "",
        "---- RESULT ----",
        f"Mix the following together (in grams) {_grams(proposal.allocation)}",
        (
            f"Results in {round(totals.carb_g)}g carb, {round(totals.fat_g)}g fat, "
            f"{round(totals.protein_g)}g protein in {round(totals.kcal)} kcal "
            f"({round(carb_pct)}:{round(fat_pct)}:{round(protein_pct)})."
        ),
    ]


def _grams(values: Mapping[str, float]) -> str:
    if not values:
        return "none"
    return ", ".join(f"{name}={grams:g}g" for name, grams in values.items())
