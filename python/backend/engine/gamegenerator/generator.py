"""Generates solvable target-number puzzles."""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence

from backend.models.puzzle import (
    MIN_TARGET,
    NUMBER_COUNT,
    NUMBER_RANGE,
    STEP_COUNT,
    InvalidMove,
    Operation,
    PuzzleDefinition,
    Step,
    compute,
)

logger = logging.getLogger(__name__)

# Multiply appears twice to push targets upward; subtraction never appears
# in a witness path.
GENERATION_OPERATIONS: tuple[Operation, ...] = (
    Operation.MULTIPLY,
    Operation.MULTIPLY,
    Operation.ADD,
    Operation.DIVIDE,
)


class GameGenerator:
    """Creates solvable puzzles by building the solution first."""

    @staticmethod
    def draw_numbers(rng: random.Random | None = None) -> list[int]:
        """Return ``NUMBER_COUNT`` uniform random integers in ``NUMBER_RANGE``."""
        rng = rng or random
        lo, hi = NUMBER_RANGE
        return [rng.randint(lo, hi) for _ in range(NUMBER_COUNT)]

    @staticmethod
    def draw_operations(rng: random.Random | None = None) -> list[Operation]:
        """Return a random permutation of ``GENERATION_OPERATIONS``."""
        rng = rng or random
        operations = list(GENERATION_OPERATIONS)
        rng.shuffle(operations)
        return operations

    @staticmethod
    def build(
        numbers: Sequence[int], operations: Sequence[Operation]
    ) -> PuzzleDefinition | None:
        """Replay *operations* from ``numbers[0]`` through ``numbers[1..4]``.

        Returns the puzzle, or ``None`` if any step is invalid or the final
        result is below ``MIN_TARGET``.
        """
        steps: list[Step] = []
        result = numbers[0]

        for i in range(STEP_COUNT):
            operand2 = numbers[i + 1]
            operation = operations[i]
            try:
                new_result = compute(operation, result, operand2)
            except InvalidMove as exc:
                logger.debug("Rejected %s / %s: %s", numbers, operations, exc)
                return None
            steps.append(Step(result, operand2, operation, new_result))
            result = new_result

        if result < MIN_TARGET:
            logger.debug("Rejected %s / %s: target %d too small", numbers, operations, result)
            return None

        return PuzzleDefinition(
            numbers=tuple(numbers),
            target=result,
            solution_steps=tuple(steps),
        )

    @staticmethod
    def generate(rng: random.Random | None = None) -> PuzzleDefinition:
        """Return a random *solvable* puzzle.

        Retries until a candidate passes; there is no attempt cap, since
        capping would change which puzzles can come out.
        """
        attempts = 0
        while True:
            attempts += 1
            numbers = GameGenerator.draw_numbers(rng)
            operations = GameGenerator.draw_operations(rng)
            puzzle = GameGenerator.build(numbers, operations)
            if puzzle is not None:
                logger.debug(
                    "Generated target %d from %s after %d attempt(s)",
                    puzzle.target, puzzle.numbers, attempts,
                )
                return puzzle
