"""Pydantic models for target and ingredient input files."""

from pydantic import BaseModel, ConfigDict, Field

from macro_mixer.domain.ingredients import RawIngredient
from macro_mixer.domain.targets import RawTarget, TargetConstraint


class ConstraintEntry(BaseModel):
    """Constraint entry payload."""

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    name: str = Field(min_length=1)
    g: float

    def to_domain(self) -> TargetConstraint:
        return TargetConstraint(name=self.name, grams=self.g)


class TargetFile(BaseModel):
    """Target file payload."""

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    kcal: float
    carb: float
    fat: float
    protein: float
    constraint_exact: list[ConstraintEntry] | None = None
    constraint_at_least: list[ConstraintEntry] | None = None
    constraint_at_most: list[ConstraintEntry] | None = None

    def to_domain(self) -> RawTarget:
        return RawTarget(
            kcal=self.kcal,
            carb=self.carb,
            fat=self.fat,
            protein=self.protein,
            exact=_constraints(self.constraint_exact),
            at_least=_constraints(self.constraint_at_least),
            at_most=_constraints(self.constraint_at_most),
        )


class IngredientFile(BaseModel):
    """Ingredient file payload."""

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    name: str = Field(min_length=1)
    g: float
    kcal: float
    carb: float
    fat: float
    protein: float

    def to_domain(self) -> RawIngredient:
        return RawIngredient(
            name=self.name,
            grams=self.g,
            kcal=self.kcal,
            carb_g=self.carb,
            fat_g=self.fat,
            protein_g=self.protein,
        )


def _constraints(
    entries: list[ConstraintEntry] | None,
) -> tuple[TargetConstraint, ...]:
    if not entries:
        return ()
    return tuple(entry.to_domain() for entry in entries)
