"""Composition of a mix from a target and an ingredient catalog."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from macro_mixer.domain.errors import DuplicateIngredientError, EmptyCatalogError
from macro_mixer.domain.ingredients import (
    NormalizedIngredient,
    RawIngredient,
    normalize_ingredient,
)
from macro_mixer.domain.proposals import Proposal
from macro_mixer.domain.targets import NormalizedTarget, RawTarget, normalize_target
from macro_mixer.services.constraints import ConstraintSet
from macro_mixer.services.search import SearchEngine

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PreparedMix:
    """Normalized inputs ready for the search."""

    target: NormalizedTarget
    ingredients: tuple[NormalizedIngredient, ...]
    constraints: ConstraintSet


@dataclass
class MixService:
    """Normalizes inputs, validates constraints and runs the search."""

    engine: SearchEngine = field(default_factory=SearchEngine)

    def prepare(
        self, target: RawTarget, ingredients: Sequence[RawIngredient]
    ) -> PreparedMix:
        """Normalize the target and catalog and build the constraint set."""
        if not ingredients:
            raise EmptyCatalogError("At least one ingredient is required")
        seen: set[str] = set()
        for ingredient in ingredients:
            if ingredient.name in seen:
                raise DuplicateIngredientError(ingredient.name)
            seen.add(ingredient.name)

        normalized_target = normalize_target(target)
        normalized = tuple(normalize_ingredient(item) for item in ingredients)
        constraints = ConstraintSet.from_target(target, seen)
        _logger.info(
            "Prepared mix: %s ingredients, %s exact, %s at least, %s at most",
            len(normalized),
            len(constraints.exact_grams),
            len(constraints.at_least),
            len(constraints.at_most),
        )
        return PreparedMix(
            target=normalized_target,
            ingredients=normalized,
            constraints=constraints,
        )

    def search(self, prepared: PreparedMix) -> Proposal:
        """Run the search over already prepared inputs."""
        return self.engine.run(
            prepared.ingredients, prepared.target, prepared.constraints
        )

    def compose(
        self, target: RawTarget, ingredients: Sequence[RawIngredient]
    ) -> Proposal:
        """Return the proposal for a target and catalog."""
        return self.search(self.prepare(target, ingredients))


def compose_mix(
    target: RawTarget,
    ingredients: Sequence[RawIngredient],
    step_grams: float = 1.0,
) -> Proposal:
    """Compose a mix with a default service."""
    return MixService(SearchEngine(step_grams=step_grams)).compose(target, ingredients)
