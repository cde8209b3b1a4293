"""Tracks the mutable state of a puzzle attempt."""

from __future__ import annotations

from dataclasses import dataclass

from backend.models.puzzle import Anchor, Operation, PuzzleDefinition, Step


# -- selection variant ---------------------------------------------------------


@dataclass(frozen=True)
class Idle:
    """No operand selected."""


@dataclass(frozen=True)
class AnchorSelected:
    anchor: Anchor


@dataclass(frozen=True)
class OperationPending:
    anchor: Anchor
    operation: Operation


Selection = Idle | AnchorSelected | OperationPending


class GameState:
    """Holds the grid, current selection, used operations and history."""

    def __init__(self, grid: list[int | None], target: int) -> None:
        self.grid = grid
        self.target = target
        self.selection: Selection = Idle()
        self.used_operations: set[Operation] = set()
        self.history: list[Step] = []

    @classmethod
    def from_puzzle(cls, puzzle: PuzzleDefinition) -> GameState:
        """Fresh attempt: starting grid (first number duplicated), same target."""
        return cls(grid=list(puzzle.grid_numbers), target=puzzle.target)

    # -- grid -----------------------------------------------------------------

    def value_at(self, slot: int) -> int | None:
        """Live value of *slot*, or ``None`` if empty or out of range."""
        if not 0 <= slot < len(self.grid):
            return None
        return self.grid[slot]

    def is_empty(self, slot: int) -> bool:
        return self.value_at(slot) is None

    @property
    def live_slots(self) -> list[int]:
        return [i for i, v in enumerate(self.grid) if v is not None]

    # -- selection ------------------------------------------------------------

    @property
    def anchor(self) -> Anchor | None:
        if isinstance(self.selection, (AnchorSelected, OperationPending)):
            return self.selection.anchor
        return None

    @property
    def pending_operation(self) -> Operation | None:
        if isinstance(self.selection, OperationPending):
            return self.selection.operation
        return None

    # -- operations -----------------------------------------------------------

    @property
    def available_operations(self) -> list[Operation]:
        return [op for op in Operation if op not in self.used_operations]

    @property
    def moves_left(self) -> int:
        return len(Operation) - len(self.used_operations)

    @property
    def is_finished(self) -> bool:
        return not self.available_operations
