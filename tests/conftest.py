"""Shared test fixtures."""

from pathlib import Path

import pytest

from macro_mixer.config import Settings
from macro_mixer.domain.ingredients import (
    NormalizedIngredient,
    RawIngredient,
    normalize_ingredient,
)
from macro_mixer.domain.targets import RawTarget, TargetConstraint

QUARK_TOML = """
name = "quark40"
g = 1000
kcal = 1390
carb = 32
fat = 100
protein = 90
"""

BANANA_TOML = """
name = "banana"
g = 100
kcal = 89
carb = 20
fat = 0.3
protein = 1.1
"""

SEEDS_TOML = """
name = "seeds"
g = 100
kcal = 584
carb = 20
fat = 51
protein = 21
"""

OATS_TOML = """
name = "oats"
g = 100
kcal = 372
carb = 59
fat = 7
protein = 13
"""

TARGET_TOML = """
kcal = 1500
carb = 40
fat = 30
protein = 30
constraint_at_least = [{ name = "banana", g = 378 }]
constraint_at_most = [
    { name = "quark40", g = 500 },
    { name = "seeds", g = 75 },
]
"""


def apple() -> RawIngredient:
    """Ingredient with a 20:30:50 ratio and 1 kcal per gram."""
    return RawIngredient(
        name="apple", grams=100, kcal=100, carb_g=20, fat_g=30, protein_g=50
    )


def pear() -> RawIngredient:
    """Ingredient with a 40:50:60 ratio and 0.75 kcal per gram."""
    return RawIngredient(
        name="pear", grams=200, kcal=150, carb_g=40, fat_g=50, protein_g=60
    )


def normalized(*ingredients: RawIngredient) -> tuple[NormalizedIngredient, ...]:
    return tuple(normalize_ingredient(item) for item in ingredients)


def worked_catalog() -> list[RawIngredient]:
    return [
        RawIngredient("quark40", 1000, 1390, 32, 100, 90),
        RawIngredient("banana", 100, 89, 20, 0.3, 1.1),
        RawIngredient("seeds", 100, 584, 20, 51, 21),
        RawIngredient("oats", 100, 372, 59, 7, 13),
    ]


def worked_target() -> RawTarget:
    return RawTarget(
        kcal=1500,
        carb=40,
        fat=30,
        protein=30,
        at_least=(TargetConstraint("banana", 378),),
        at_most=(
            TargetConstraint("quark40", 500),
            TargetConstraint("seeds", 75),
        ),
    )


def write_file(directory: Path, name: str, content: str) -> Path:
    path = directory / name
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def settings() -> Settings:
    return Settings(step_grams=1.0, max_iterations=None, log_level="INFO")


@pytest.fixture
def input_files(tmp_path: Path) -> tuple[Path, list[Path]]:
    target = write_file(tmp_path, "target.toml", TARGET_TOML)
    ingredients = [
        write_file(tmp_path, "quark40.toml", QUARK_TOML),
        write_file(tmp_path, "banana.toml", BANANA_TOML),
        write_file(tmp_path, "seeds.toml", SEEDS_TOML),
        write_file(tmp_path, "oats.toml", OATS_TOML),
    ]
    return target, ingredients
