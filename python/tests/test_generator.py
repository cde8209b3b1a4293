"""Generator test suite.

Seeded ``random.Random`` instances make every generated puzzle
reproducible; each one is checked against the generation recipe.
"""

from __future__ import annotations

import random
from collections import Counter

import pytest

from backend.engine.gamegenerator import GENERATION_OPERATIONS, GameGenerator
from backend.models.puzzle import (
    MAX_VALUE,
    MIN_TARGET,
    Operation,
    PuzzleDefinition,
    compute,
)

SEEDS = list(range(40))


# -- helpers ------------------------------------------------------------------


def _replay(puzzle: PuzzleDefinition) -> int:
    """Replay the witness path from ``numbers[0]`` and return the final value."""
    value = puzzle.numbers[0]
    for i, step in enumerate(puzzle.solution_steps):
        assert step.operand1 == value, f"step {i} does not chain ({step})"
        assert step.operand2 == puzzle.numbers[i + 1], f"step {i} skips a number"
        value = compute(step.operation, step.operand1, step.operand2)
        assert value == step.result, f"step {i} records the wrong result ({step})"
    return value


# -- scenarios ----------------------------------------------------------------


def test_small_target_is_rejected() -> None:
    # 2×3=6, 6×4=24, 24+1=25, 25÷5=5 -> 5 < 15
    numbers = [2, 3, 4, 1, 5, 6, 7, 8]
    ops = [Operation.MULTIPLY, Operation.MULTIPLY, Operation.ADD, Operation.DIVIDE]
    assert GameGenerator.build(numbers, ops) is None


def test_inexact_division_is_rejected() -> None:
    # 4×2=8, 8+3=11, 11×1=11, 11÷2 not exact
    numbers = [4, 2, 3, 1, 2, 5, 6, 7]
    ops = [Operation.MULTIPLY, Operation.ADD, Operation.MULTIPLY, Operation.DIVIDE]
    assert GameGenerator.build(numbers, ops) is None


def test_result_over_limit_is_rejected() -> None:
    # 9×9=81, 81×9=729
    numbers = [9, 9, 9, 1, 1, 1, 1, 1]
    ops = [Operation.MULTIPLY, Operation.MULTIPLY, Operation.ADD, Operation.DIVIDE]
    assert GameGenerator.build(numbers, ops) is None


def test_valid_candidate_is_accepted() -> None:
    numbers = [6, 4, 3, 2, 5, 1, 7, 9]
    ops = [Operation.MULTIPLY, Operation.DIVIDE, Operation.MULTIPLY, Operation.ADD]
    puzzle = GameGenerator.build(numbers, ops)

    assert puzzle is not None
    assert puzzle.target == 21
    assert puzzle.numbers == tuple(numbers)
    assert [str(s) for s in puzzle.solution_steps] == [
        "6 × 4 = 24",
        "24 ÷ 3 = 8",
        "8 × 2 = 16",
        "16 + 5 = 21",
    ]


def test_numbers_beyond_the_fifth_are_not_used() -> None:
    ops = [Operation.MULTIPLY, Operation.DIVIDE, Operation.MULTIPLY, Operation.ADD]
    a = GameGenerator.build([6, 4, 3, 2, 5, 1, 1, 1], ops)
    b = GameGenerator.build([6, 4, 3, 2, 5, 9, 9, 9], ops)
    assert a is not None and b is not None
    assert a.target == b.target
    assert a.solution_steps == b.solution_steps


# -- draws --------------------------------------------------------------------


def test_draw_numbers_range() -> None:
    rng = random.Random(0)
    for _ in range(200):
        numbers = GameGenerator.draw_numbers(rng)
        assert len(numbers) == 8
        assert all(1 <= n <= 9 for n in numbers)


def test_draw_operations_is_a_permutation_of_the_recipe() -> None:
    rng = random.Random(0)
    for _ in range(50):
        ops = GameGenerator.draw_operations(rng)
        assert Counter(ops) == Counter(GENERATION_OPERATIONS)


# -- generated puzzles --------------------------------------------------------


@pytest.mark.parametrize("seed", SEEDS)
def test_generated_puzzle_replays_to_target(seed: int) -> None:
    puzzle = GameGenerator.generate(random.Random(seed))
    assert _replay(puzzle) == puzzle.target


@pytest.mark.parametrize("seed", SEEDS)
def test_generated_puzzle_honours_constraints(seed: int) -> None:
    puzzle = GameGenerator.generate(random.Random(seed))

    assert MIN_TARGET <= puzzle.target <= MAX_VALUE
    assert len(puzzle.numbers) == 8
    assert all(1 <= n <= 9 for n in puzzle.numbers)
    assert Counter(s.operation for s in puzzle.solution_steps) == Counter(
        GENERATION_OPERATIONS
    )
    for step in puzzle.solution_steps:
        assert step.operation is not Operation.SUBTRACT
        assert 0 < step.result <= MAX_VALUE
        if step.operation is Operation.DIVIDE:
            assert step.operand2 != 0
            assert step.operand1 % step.operand2 == 0


def test_same_seed_same_puzzle() -> None:
    a = GameGenerator.generate(random.Random(1234))
    b = GameGenerator.generate(random.Random(1234))
    assert a == b


def test_grid_duplicates_first_number() -> None:
    puzzle = GameGenerator.generate(random.Random(5))
    grid = puzzle.grid_numbers
    assert len(grid) == 9
    assert grid[:8] == puzzle.numbers
    assert grid[8] == puzzle.numbers[0]
