"""Greedy search for a mix matching a target ratio and calorie goal."""

import logging
import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from macro_mixer.domain.errors import InfeasibleError
from macro_mixer.domain.ingredients import NormalizedIngredient
from macro_mixer.domain.proposals import Allocation, Proposal, SearchStep
from macro_mixer.domain.targets import NormalizedTarget
from macro_mixer.services.constraints import ConstraintSet
from macro_mixer.services.cost import cost, cost_of_totals, macro_totals, total_kcal

DEFAULT_STEP_GRAMS = 1.0

# Float slack when comparing accumulated steps against a cap.
GRAMS_TOLERANCE = 1e-9

_logger = logging.getLogger(__name__)


def initial_allocation(
    ingredients: Sequence[NormalizedIngredient], constraints: ConstraintSet
) -> Allocation:
    """Start every ingredient at its exact amount, else its lower bound."""
    return {
        ingredient.name: constraints.initial_grams(ingredient.name)
        for ingredient in ingredients
    }


def is_eligible(
    ingredient: NormalizedIngredient,
    allocation: Mapping[str, float],
    constraints: ConstraintSet,
    step_grams: float,
) -> bool:
    """Return whether one more step may be added to the ingredient."""
    if constraints.is_pinned(ingredient.name):
        return False
    if ingredient.kcal_per_g <= 0:
        return False
    grams = allocation.get(ingredient.name, 0.0) + step_grams
    return within_upper_bound(grams, constraints.upper_bound(ingredient.name))


def within_upper_bound(grams: float, upper: float) -> bool:
    return grams <= upper or math.isclose(grams, upper, abs_tol=GRAMS_TOLERANCE)


def stepped_grams(
    allocation: Mapping[str, float],
    name: str,
    constraints: ConstraintSet,
    step_grams: float,
) -> float:
    """Amount after one more step, snapped onto the cap when within tolerance."""
    grams = allocation.get(name, 0.0) + step_grams
    return min(grams, constraints.upper_bound(name))


def evaluate_candidates(
    allocation: Mapping[str, float],
    ingredients: Sequence[NormalizedIngredient],
    target: NormalizedTarget,
    constraints: ConstraintSet,
    step_grams: float,
) -> list[tuple[str, float]]:
    """Score adding one step to each eligible ingredient, in catalog order.

    The allocation is never modified; each trial works on its own copy.
    """
    candidates: list[tuple[str, float]] = []
    for ingredient in ingredients:
        if not is_eligible(ingredient, allocation, constraints, step_grams):
            continue
        trial = dict(allocation)
        trial[ingredient.name] = stepped_grams(
            allocation, ingredient.name, constraints, step_grams
        )
        candidates.append((ingredient.name, cost(trial, ingredients, target)))
    return candidates


def advance(
    allocation: Mapping[str, float],
    ingredients: Sequence[NormalizedIngredient],
    target: NormalizedTarget,
    constraints: ConstraintSet,
    step_grams: float = DEFAULT_STEP_GRAMS,
) -> tuple[Allocation, str, float] | None:
    """Commit one step to the cheapest candidate.

    Returns the new allocation, the chosen ingredient and the resulting cost,
    or None when nothing is eligible. Ties go to the ingredient that comes
    first in the catalog.
    """
    best: tuple[str, float] | None = None
    for name, trial_cost in evaluate_candidates(
        allocation, ingredients, target, constraints, step_grams
    ):
        if best is None or trial_cost < best[1]:
            best = (name, trial_cost)
    if best is None:
        return None
    name, best_cost = best
    updated = dict(allocation)
    updated[name] = stepped_grams(allocation, name, constraints, step_grams)
    return updated, name, best_cost


def iteration_limit(
    allocation: Mapping[str, float],
    ingredients: Sequence[NormalizedIngredient],
    target: NormalizedTarget,
    constraints: ConstraintSet,
    step_grams: float,
) -> int:
    """Upper bound on the steps needed to close the remaining calorie gap.

    Every step adds at least ``step_grams`` of the least calorie-dense free
    ingredient, so the gap closes within this many steps.
    """
    remaining = target.kcal - total_kcal(allocation, ingredients)
    if remaining <= 0:
        return 0
    densities = [
        ingredient.kcal_per_g
        for ingredient in ingredients
        if not constraints.is_pinned(ingredient.name) and ingredient.kcal_per_g > 0
    ]
    if not densities:
        return 0
    return math.ceil(remaining / (step_grams * min(densities))) + 1


@dataclass
class SearchEngine:
    """Drives the greedy step function until the calorie goal is met."""

    step_grams: float = DEFAULT_STEP_GRAMS
    max_iterations: int | None = None
    debug: bool = False

    def __post_init__(self) -> None:
        if self.step_grams <= 0:
            raise ValueError(f"Step size must be positive, got {self.step_grams}")

    def run(
        self,
        ingredients: Sequence[NormalizedIngredient],
        target: NormalizedTarget,
        constraints: ConstraintSet,
    ) -> Proposal:
        """Search for a proposal, raising InfeasibleError if it falls short."""
        allocation = initial_allocation(ingredients, constraints)
        kcal = total_kcal(allocation, ingredients)
        limit = iteration_limit(
            allocation, ingredients, target, constraints, self.step_grams
        )
        if self.max_iterations is not None:
            limit = min(limit, self.max_iterations)
        _logger.info(
            "Starting search: target=%.0f kcal start=%.1f kcal step=%gg limit=%s",
            target.kcal,
            kcal,
            self.step_grams,
            limit,
        )

        steps: list[SearchStep] = []
        while kcal < target.kcal:
            outcome = advance(
                allocation, ingredients, target, constraints, self.step_grams
            )
            if outcome is None:
                break
            if len(steps) >= limit:
                proposal = build_proposal(allocation, ingredients, target, steps)
                raise InfeasibleError(
                    proposal, f"iteration limit of {limit} steps reached"
                )
            allocation, chosen, step_cost = outcome
            kcal = total_kcal(allocation, ingredients)
            steps.append(
                SearchStep(
                    index=len(steps) + 1,
                    ingredient=chosen,
                    grams=allocation[chosen],
                    cost=step_cost,
                    kcal=kcal,
                )
            )
            if self.debug:
                _logger.info(
                    "Search step %s: %s -> %gg cost=%.6f kcal=%.1f",
                    len(steps),
                    chosen,
                    allocation[chosen],
                    step_cost,
                    kcal,
                )

        proposal = build_proposal(allocation, ingredients, target, steps)
        violated = [
            name
            for name, grams in proposal.allocation.items()
            if not constraints.satisfied_by(name, grams)
        ]
        if violated:
            raise RuntimeError(
                f"Search left constraints unsatisfied for {', '.join(violated)}"
            )
        fully_pinned = all(
            constraints.is_pinned(ingredient.name) for ingredient in ingredients
        )
        if not proposal.reached_target and not fully_pinned:
            _logger.warning(
                "Search stalled at %.1f of %.0f kcal after %s steps",
                proposal.totals.kcal,
                target.kcal,
                len(steps),
            )
            raise InfeasibleError(proposal, "no ingredient can take another step")
        _logger.info(
            "Search finished: %s steps, %.1f kcal, cost=%.6f",
            len(steps),
            proposal.totals.kcal,
            proposal.cost,
        )
        return proposal


def build_proposal(
    allocation: Mapping[str, float],
    ingredients: Sequence[NormalizedIngredient],
    target: NormalizedTarget,
    steps: Sequence[SearchStep],
) -> Proposal:
    """Freeze an allocation together with its totals and decision log."""
    totals = macro_totals(allocation, ingredients)
    return Proposal(
        allocation=dict(allocation),
        totals=totals,
        cost=cost_of_totals(totals, target),
        steps=tuple(steps),
        reached_target=totals.kcal >= target.kcal,
    )
