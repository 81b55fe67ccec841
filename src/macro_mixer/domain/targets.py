"""Target domain models."""

import math
from dataclasses import dataclass

from macro_mixer.domain.errors import DegenerateTargetError


@dataclass(frozen=True)
class TargetConstraint:
    """A gram amount bound to one named ingredient."""

    name: str
    grams: float


@dataclass(frozen=True)
class RawTarget:
    """Calorie goal, macro ratio components and ingredient constraints."""

    kcal: float
    carb: float
    fat: float
    protein: float
    exact: tuple[TargetConstraint, ...] = ()
    at_least: tuple[TargetConstraint, ...] = ()
    at_most: tuple[TargetConstraint, ...] = ()


@dataclass(frozen=True)
class NormalizedTarget:
    """Calorie goal and macro ratio scaled to sum to 1."""

    kcal: float
    carb: float
    fat: float
    protein: float


def normalize_target(raw: RawTarget) -> NormalizedTarget:
    """Scale ratio components so they sum to 1."""
    values = (raw.kcal, raw.carb, raw.fat, raw.protein)
    if not all(math.isfinite(value) for value in values):
        raise DegenerateTargetError("Target values must be finite numbers")
    if raw.kcal <= 0:
        raise DegenerateTargetError(f"Target kcal must be positive, got {raw.kcal}")
    components = {"carb": raw.carb, "fat": raw.fat, "protein": raw.protein}
    negative = [label for label, value in components.items() if value < 0]
    if negative:
        raise DegenerateTargetError(
            f"Target ratio components must not be negative: {', '.join(negative)}"
        )
    total = raw.carb + raw.fat + raw.protein
    if total <= 0:
        raise DegenerateTargetError("Target ratio components sum to zero")
    return NormalizedTarget(
        kcal=raw.kcal,
        carb=raw.carb / total,
        fat=raw.fat / total,
        protein=raw.protein / total,
    )
