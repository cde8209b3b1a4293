"""Puzzle model for the target-number game."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

NUMBER_COUNT = 8
NUMBER_RANGE = (1, 9)
STEP_COUNT = 4
MIN_TARGET = 15
MAX_VALUE = 100


class Operation(StrEnum):
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "×"
    DIVIDE = "÷"


class InvalidMove(ValueError):
    """Raised when an operation cannot be applied to a pair of numbers."""


def is_valid_number(value: int) -> bool:
    """Return True if *value* may appear in the grid (1..100)."""
    return 0 < value <= MAX_VALUE


def compute(operation: Operation, a: int, b: int) -> int:
    """Apply *operation* to ``a`` and ``b`` using exact integer arithmetic.

    Subtraction requires ``a > b`` and division requires an exact quotient.
    Raises ``InvalidMove`` when a precondition fails or the result falls
    outside ``1..MAX_VALUE``.
    """
    if operation is Operation.ADD:
        result = a + b
    elif operation is Operation.SUBTRACT:
        if a <= b:
            raise InvalidMove(f"{a} - {b} would not be positive")
        result = a - b
    elif operation is Operation.MULTIPLY:
        result = a * b
    elif operation is Operation.DIVIDE:
        if b == 0 or a % b != 0:
            raise InvalidMove(f"{a} ÷ {b} is not a whole number")
        result = a // b
    else:
        raise InvalidMove(f"Unknown operation {operation!r}")

    if not is_valid_number(result):
        raise InvalidMove(f"{a} {operation} {b} = {result} is out of range")
    return result


@dataclass(frozen=True)
class Step:
    operand1: int
    operand2: int
    operation: Operation
    result: int

    def __str__(self) -> str:
        return f"{self.operand1} {self.operation} {self.operand2} = {self.result}"


@dataclass(frozen=True)
class Anchor:
    """The selected first operand: a slot index and its live value."""

    slot: int
    value: int


@dataclass(frozen=True)
class PuzzleDefinition:
    """An immutable generated puzzle.

    ``numbers`` is the original draw; ``solution_steps`` is the witness
    path from ``numbers[0]`` through ``numbers[1..4]`` to ``target``.
    """

    numbers: tuple[int, ...]
    target: int
    solution_steps: tuple[Step, ...]

    def __post_init__(self) -> None:
        lo, hi = NUMBER_RANGE
        if len(self.numbers) != NUMBER_COUNT:
            raise ValueError(
                f"Expected {NUMBER_COUNT} numbers, got {len(self.numbers)}."
            )
        if any(not lo <= n <= hi for n in self.numbers):
            raise ValueError(f"Numbers must lie in [{lo}, {hi}]: {self.numbers}")
        if len(self.solution_steps) != STEP_COUNT:
            raise ValueError(
                f"Expected {STEP_COUNT} solution steps, "
                f"got {len(self.solution_steps)}."
            )
        if not MIN_TARGET <= self.target <= MAX_VALUE:
            raise ValueError(
                f"Target {self.target} outside [{MIN_TARGET}, {MAX_VALUE}]."
            )

    # -- derived --------------------------------------------------------------

    @property
    def grid_numbers(self) -> tuple[int, ...]:
        """Starting grid: the draw plus a duplicate of the first number."""
        return (*self.numbers, self.numbers[0])

    # -- serialisation --------------------------------------------------------

    @classmethod
    def from_dict(cls, data: dict) -> PuzzleDefinition:
        """Build a definition from its JSON form (see ``to_dict``)."""
        steps = tuple(
            Step(
                operand1=s["operand1"],
                operand2=s["operand2"],
                operation=Operation(s["operation"]),
                result=s["result"],
            )
            for s in data["steps"]
        )
        return cls(
            numbers=tuple(data["numbers"]),
            target=data["target"],
            solution_steps=steps,
        )

    def to_dict(self) -> dict:
        return {
            "numbers": list(self.numbers),
            "target": self.target,
            "steps": [
                {
                    "operand1": s.operand1,
                    "operand2": s.operand2,
                    "operation": s.operation.value,
                    "result": s.result,
                }
                for s in self.solution_steps
            ],
        }
