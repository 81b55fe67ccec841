"""Errors raised while composing a mix."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from macro_mixer.domain.proposals import Proposal


class MixError(Exception):
    """Base class for all mix composition failures."""


class DivisionError(MixError, ZeroDivisionError):
    """Raised when an ingredient has no mass to normalize against."""

    def __init__(self, name: str, grams: float) -> None:
        super().__init__(f"Ingredient {name!r} has non-positive mass {grams}g")
        self.name = name
        self.grams = grams


class MalformedIngredientError(MixError, ValueError):
    """Raised when ingredient macros are negative or exceed its mass."""

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"Ingredient {name!r} is malformed: {reason}")
        self.name = name


class DegenerateTargetError(MixError, ValueError):
    """Raised when a target ratio or calorie goal cannot be normalized."""


class UnknownIngredientError(MixError):
    """Raised when a constraint names an ingredient missing from the catalog."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Missing constraint ingredient {name!r}")
        self.name = name


class ConflictingConstraintError(MixError):
    """Raised when constraints for one ingredient cannot hold together."""

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"Conflicting constraints for {name!r}: {reason}")
        self.name = name


class DuplicateIngredientError(MixError):
    """Raised when two catalog entries share a name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Ingredient {name!r} is listed more than once")
        self.name = name


class EmptyCatalogError(MixError):
    """Raised when no ingredients are supplied."""


class InfeasibleError(MixError):
    """Raised when the search stops short of the calorie target.

    The best partial proposal is attached so callers can inspect how far the
    search got.
    """

    def __init__(self, proposal: Proposal, reason: str) -> None:
        super().__init__(
            f"Target kcal cannot be reached ({reason}); "
            f"stopped at {proposal.totals.kcal:.1f} kcal"
        )
        self.proposal = proposal
        self.reason = reason


class InputFileError(MixError):
    """Raised when an input file cannot be read or validated."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason
