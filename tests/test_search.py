"""Tests for the greedy search engine."""

from dataclasses import dataclass

import pytest

from macro_mixer.domain.errors import InfeasibleError
from macro_mixer.domain.ingredients import RawIngredient
from macro_mixer.domain.targets import RawTarget, TargetConstraint, normalize_target
from macro_mixer.services.constraints import ConstraintSet
from macro_mixer.services.cost import cost, macro_totals
from macro_mixer.services.search import (
    SearchEngine,
    advance,
    evaluate_candidates,
    initial_allocation,
    iteration_limit,
)
from tests.conftest import apple, normalized, pear


def _setup(raw_target: RawTarget, *raw_ingredients: RawIngredient):
    ingredients = normalized(*raw_ingredients)
    constraints = ConstraintSet.from_target(
        raw_target, [item.name for item in ingredients]
    )
    return ingredients, normalize_target(raw_target), constraints


def test_search_prefers_ingredient_matching_target() -> None:
    ingredients, target, constraints = _setup(
        RawTarget(kcal=2, carb=20, fat=30, protein=50), apple(), pear()
    )

    proposal = SearchEngine().run(ingredients, target, constraints)

    assert proposal.allocation == {"apple": 2, "pear": 0}
    assert [step.ingredient for step in proposal.steps] == ["apple", "apple"]
    assert proposal.reached_target


def test_search_switches_to_other_ingredient() -> None:
    ingredients, target, constraints = _setup(
        RawTarget(kcal=1.5, carb=40, fat=50, protein=60), apple(), pear()
    )

    proposal = SearchEngine().run(ingredients, target, constraints)

    assert proposal.allocation == {"apple": 0, "pear": 2}
    assert proposal.totals.kcal == pytest.approx(1.5)


def test_initial_allocation_uses_exact_then_lower_bound() -> None:
    ingredients, _, constraints = _setup(
        RawTarget(
            kcal=100,
            carb=1,
            fat=1,
            protein=1,
            exact=(TargetConstraint("apple", 12),),
            at_least=(TargetConstraint("pear", 7),),
        ),
        apple(),
        pear(),
    )

    assert initial_allocation(ingredients, constraints) == {"apple": 12, "pear": 7}


def test_tie_goes_to_first_ingredient_in_catalog() -> None:
    first = RawIngredient("first", 100, 100, 20, 30, 50)
    second = RawIngredient("second", 100, 100, 20, 30, 50)
    raw_target = RawTarget(kcal=10, carb=1, fat=1, protein=1)

    ingredients, target, constraints = _setup(raw_target, first, second)
    outcome = advance({"first": 0, "second": 0}, ingredients, target, constraints)
    assert outcome is not None
    assert outcome[1] == "first"

    ingredients, target, constraints = _setup(raw_target, second, first)
    outcome = advance({"first": 0, "second": 0}, ingredients, target, constraints)
    assert outcome is not None
    assert outcome[1] == "second"


def test_advance_does_not_modify_snapshot() -> None:
    ingredients, target, constraints = _setup(
        RawTarget(kcal=10, carb=20, fat=30, protein=50), apple(), pear()
    )
    snapshot = {"apple": 3.0, "pear": 1.0}

    outcome = advance(snapshot, ingredients, target, constraints, step_grams=2)

    assert snapshot == {"apple": 3.0, "pear": 1.0}
    assert outcome is not None
    updated, chosen, chosen_cost = outcome
    assert updated[chosen] == snapshot[chosen] + 2
    assert chosen_cost == pytest.approx(cost(updated, ingredients, target))


def test_evaluate_candidates_skips_pinned_capped_and_empty_ingredients() -> None:
    water = RawIngredient("water", 100, 0, 0, 0, 0)
    ingredients, target, constraints = _setup(
        RawTarget(
            kcal=100,
            carb=20,
            fat=30,
            protein=50,
            exact=(TargetConstraint("apple", 5),),
            at_most=(TargetConstraint("pear", 10),),
        ),
        apple(),
        pear(),
        water,
    )

    open_pear = evaluate_candidates(
        {"apple": 5, "pear": 9, "water": 0}, ingredients, target, constraints, 1
    )
    capped_pear = evaluate_candidates(
        {"apple": 5, "pear": 10, "water": 0}, ingredients, target, constraints, 1
    )

    assert [name for name, _ in open_pear] == ["pear"]
    assert capped_pear == []


def test_each_step_increases_calories() -> None:
    ingredients, target, constraints = _setup(
        RawTarget(kcal=300, carb=30, fat=40, protein=50), apple(), pear()
    )
    start = macro_totals(
        initial_allocation(ingredients, constraints), ingredients
    ).kcal

    proposal = SearchEngine().run(ingredients, target, constraints)

    previous = start
    for step in proposal.steps:
        assert step.kcal > previous
        previous = step.kcal
    assert proposal.totals.kcal >= 300


def test_search_is_deterministic() -> None:
    ingredients, target, constraints = _setup(
        RawTarget(kcal=500, carb=25, fat=35, protein=45), apple(), pear()
    )
    engine = SearchEngine(step_grams=1)

    assert engine.run(ingredients, target, constraints) == engine.run(
        ingredients, target, constraints
    )


def test_step_size_is_configurable() -> None:
    ingredients, target, constraints = _setup(
        RawTarget(kcal=100, carb=20, fat=30, protein=50), apple(), pear()
    )

    proposal = SearchEngine(step_grams=5).run(ingredients, target, constraints)

    assert proposal.allocation == {"apple": 100, "pear": 0}
    assert len(proposal.steps) == 20


def test_step_size_must_be_positive() -> None:
    with pytest.raises(ValueError):
        SearchEngine(step_grams=0)


def test_fully_pinned_search_takes_no_steps() -> None:
    ingredients, target, constraints = _setup(
        RawTarget(
            kcal=1500,
            carb=40,
            fat=30,
            protein=30,
            exact=(TargetConstraint("apple", 10), TargetConstraint("pear", 20)),
        ),
        apple(),
        pear(),
    )

    proposal = SearchEngine().run(ingredients, target, constraints)

    assert proposal.steps == ()
    assert proposal.allocation == {"apple": 10, "pear": 20}
    assert proposal.totals == macro_totals({"apple": 10, "pear": 20}, ingredients)
    assert not proposal.reached_target


def test_capped_ingredients_make_search_infeasible() -> None:
    ingredients, target, constraints = _setup(
        RawTarget(
            kcal=1_000_000,
            carb=40,
            fat=30,
            protein=30,
            at_most=(TargetConstraint("apple", 10), TargetConstraint("pear", 10)),
        ),
        apple(),
        pear(),
    )

    with pytest.raises(InfeasibleError) as excinfo:
        SearchEngine().run(ingredients, target, constraints)

    proposal = excinfo.value.proposal
    assert proposal.allocation == {"apple": 10, "pear": 10}
    assert proposal.totals.kcal == pytest.approx(17.5)
    assert len(proposal.steps) == 20
    assert not proposal.reached_target


def test_zero_calorie_ingredient_cannot_close_the_gap() -> None:
    water = RawIngredient("water", 100, 0, 0, 0, 0)
    ingredients, target, constraints = _setup(
        RawTarget(
            kcal=100,
            carb=1,
            fat=1,
            protein=1,
            exact=(TargetConstraint("apple", 5),),
        ),
        apple(),
        water,
    )

    with pytest.raises(InfeasibleError) as excinfo:
        SearchEngine().run(ingredients, target, constraints)

    assert excinfo.value.proposal.steps == ()


def test_iteration_cap_stops_search() -> None:
    ingredients, target, constraints = _setup(
        RawTarget(kcal=1000, carb=20, fat=30, protein=50), apple(), pear()
    )

    with pytest.raises(InfeasibleError) as excinfo:
        SearchEngine(max_iterations=3).run(ingredients, target, constraints)

    assert len(excinfo.value.proposal.steps) == 3


def test_iteration_limit_covers_remaining_calories() -> None:
    ingredients, target, constraints = _setup(
        RawTarget(kcal=100, carb=1, fat=1, protein=1), apple(), pear()
    )

    limit = iteration_limit(
        {"apple": 0, "pear": 0}, ingredients, target, constraints, 1
    )

    # pear is the least dense at 0.75 kcal/g
    assert limit == 135
    satisfied = {"apple": 100, "pear": 0}
    assert iteration_limit(satisfied, ingredients, target, constraints, 1) == 0


def test_fractional_steps_reach_upper_bound() -> None:
    ingredients, target, constraints = _setup(
        RawTarget(
            kcal=0.3,
            carb=20,
            fat=30,
            protein=50,
            at_most=(TargetConstraint("apple", 0.3),),
        ),
        apple(),
    )

    proposal = SearchEngine(step_grams=0.1).run(ingredients, target, constraints)

    assert proposal.allocation == {"apple": 0.3}
    assert proposal.reached_target
    assert len(proposal.steps) == 3


def test_unsatisfied_constraints_are_reported() -> None:
    @dataclass(frozen=True)
    class RejectingConstraints(ConstraintSet):
        def satisfied_by(self, name: str, grams: float) -> bool:
            return False

    ingredients = normalized(apple())
    target = normalize_target(RawTarget(kcal=2, carb=20, fat=30, protein=50))

    with pytest.raises(RuntimeError):
        SearchEngine().run(ingredients, target, RejectingConstraints())
