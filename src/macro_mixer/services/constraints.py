"""Per-ingredient quantity constraints."""

import math
from collections.abc import Iterable
from dataclasses import dataclass, field

from macro_mixer.domain.errors import (
    ConflictingConstraintError,
    UnknownIngredientError,
)
from macro_mixer.domain.targets import RawTarget, TargetConstraint


@dataclass(frozen=True)
class ConstraintSet:
    """Exact, lower and upper gram bounds keyed by ingredient name."""

    exact_grams: dict[str, float] = field(default_factory=dict)
    at_least: dict[str, float] = field(default_factory=dict)
    at_most: dict[str, float] = field(default_factory=dict)

    @classmethod
    def from_target(
        cls, target: RawTarget, catalog_names: Iterable[str]
    ) -> "ConstraintSet":
        """Collect and validate the target's constraint lists."""
        known = set(catalog_names)
        constraints = cls(
            exact_grams=_collect(target.exact, known, "exact"),
            at_least=_collect(target.at_least, known, "at least"),
            at_most=_collect(target.at_most, known, "at most"),
        )
        constraints.validate()
        return constraints

    def exact(self, name: str) -> float | None:
        return self.exact_grams.get(name)

    def lower_bound(self, name: str) -> float:
        return self.at_least.get(name, 0.0)

    def upper_bound(self, name: str) -> float:
        return self.at_most.get(name, math.inf)

    def is_pinned(self, name: str) -> bool:
        return name in self.exact_grams

    def initial_grams(self, name: str) -> float:
        """Starting amount: the exact value, else the lower bound."""
        exact = self.exact(name)
        if exact is not None:
            return exact
        return self.lower_bound(name)

    def satisfied_by(self, name: str, grams: float) -> bool:
        """Return whether an amount honours every bound for the ingredient."""
        exact = self.exact(name)
        if exact is not None and grams != exact:
            return False
        return self.lower_bound(name) <= grams <= self.upper_bound(name)

    def validate(self) -> None:
        """Raise if any ingredient's bounds contradict each other."""
        for name, lower in self.at_least.items():
            upper = self.upper_bound(name)
            if lower > upper:
                raise ConflictingConstraintError(
                    name, f"at least {lower:g}g exceeds at most {upper:g}g"
                )
        for name, grams in self.exact_grams.items():
            lower = self.lower_bound(name)
            upper = self.upper_bound(name)
            if grams < lower:
                raise ConflictingConstraintError(
                    name, f"exact {grams:g}g is below at least {lower:g}g"
                )
            if grams > upper:
                raise ConflictingConstraintError(
                    name, f"exact {grams:g}g is above at most {upper:g}g"
                )


def _collect(
    entries: Iterable[TargetConstraint], known: set[str], kind: str
) -> dict[str, float]:
    collected: dict[str, float] = {}
    for entry in entries:
        if entry.name not in known:
            raise UnknownIngredientError(entry.name)
        if not math.isfinite(entry.grams) or entry.grams < 0:
            raise ConflictingConstraintError(
                entry.name, f"{kind} amount {entry.grams:g}g is not a valid amount"
            )
        previous = collected.get(entry.name)
        if previous is not None and previous != entry.grams:
            raise ConflictingConstraintError(
                entry.name,
                f"{kind} listed twice ({previous:g}g and {entry.grams:g}g)",
            )
        collected[entry.name] = float(entry.grams)
    return collected
