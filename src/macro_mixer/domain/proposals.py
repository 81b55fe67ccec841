"""Domain models for allocations and proposals."""

from dataclasses import dataclass

Allocation = dict[str, float]


@dataclass(frozen=True)
class MacroTotals:
    """Calories and macro grams of an allocation."""

    kcal: float
    carb_g: float
    fat_g: float
    protein_g: float

    @property
    def macro_g(self) -> float:
        return self.carb_g + self.fat_g + self.protein_g

    def ratio(self) -> tuple[float, float, float]:
        """Return carb, fat and protein as percentages of macro mass."""
        total = self.macro_g
        if total <= 0:
            return 0.0, 0.0, 0.0
        return (
            100.0 * self.carb_g / total,
            100.0 * self.fat_g / total,
            100.0 * self.protein_g / total,
        )


@dataclass(frozen=True)
class SearchStep:
    """One committed search decision."""

    index: int
    ingredient: str
    grams: float
    cost: float
    kcal: float


@dataclass(frozen=True)
class Proposal:
    """Final allocation with derived totals and the decision log."""

    allocation: Allocation
    totals: MacroTotals
    cost: float
    steps: tuple[SearchStep, ...]
    reached_target: bool
