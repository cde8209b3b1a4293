"""Core gameplay logic — processes selections and checks the outcome."""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from dataclasses import dataclass

from backend.engine.gamegenerator import GameGenerator
from backend.engine.gamestate import (
    AnchorSelected,
    GameState,
    Idle,
    OperationPending,
)
from backend.models.puzzle import (
    Anchor,
    InvalidMove,
    Operation,
    PuzzleDefinition,
    Step,
    compute,
)

logger = logging.getLogger(__name__)

# Seconds a frontend waits before announcing the outcome, so the final grid
# is drawn first.
OUTCOME_DELAY = 0.1


@dataclass(frozen=True)
class Outcome:
    won: bool
    target: int
    result: int

    def message(self) -> str:
        if self.won:
            return "Congratulations! You reached the target!"
        return f"Game over! The target was {self.target}. Try again!"


@dataclass(frozen=True)
class SlotSelection:
    """Result of ``GamePlay.select_slot``.

    ``error`` is set only for an invalid move; ``step`` and ``outcome`` are
    set when the selection applied a move.
    """

    anchor: int | None
    error: str | None = None
    step: Step | None = None
    outcome: Outcome | None = None


@dataclass(frozen=True)
class OperationSelection:
    pending: Operation | None
    error: str | None = None


class GamePlay:
    """Orchestrates a single game: one puzzle, one attempt at a time."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng
        self._listeners: list[Callable[[Outcome], None]] = []
        self.start_new_game()

    @classmethod
    def from_puzzle(
        cls, puzzle: PuzzleDefinition, rng: random.Random | None = None
    ) -> "GamePlay":
        """Create a game session from an existing puzzle (e.g. a fixture)."""
        obj = object.__new__(cls)
        obj._rng = rng
        obj._listeners = []
        obj._load(puzzle)
        return obj

    # -- lifecycle ------------------------------------------------------------

    def start_new_game(self) -> PuzzleDefinition:
        """Generate a fresh puzzle and start a new attempt on it."""
        self._load(GameGenerator.generate(self._rng))
        logger.info("New game: target %d, grid %s", self.puzzle.target, self.state.grid)
        return self.puzzle

    def reset_puzzle(self) -> GameState:
        """Restart the current puzzle with the same numbers and target."""
        self.state = GameState.from_puzzle(self.puzzle)
        self.outcome = None
        logger.info("Puzzle reset: target %d", self.puzzle.target)
        return self.state

    def subscribe(self, callback: Callable[[Outcome], None]) -> None:
        """Register *callback* to receive each attempt's outcome once."""
        self._listeners.append(callback)

    # -- selections -----------------------------------------------------------

    def select_slot(self, index: int) -> SlotSelection:
        """Handle a click on grid slot *index*."""
        state = self.state
        selection = state.selection
        value = state.value_at(index)

        if value is None:
            logger.debug("Ignored selection of empty slot %d", index)
            return self._slot_result()

        if isinstance(selection, Idle):
            state.selection = AnchorSelected(Anchor(index, value))
        elif selection.anchor.slot == index:
            logger.debug("Ignored re-selection of anchor slot %d", index)
        elif isinstance(selection, AnchorSelected):
            state.selection = AnchorSelected(Anchor(index, value))
        else:
            return self._apply(selection, index, value)

        return self._slot_result()

    def select_operation(self, operation: Operation) -> OperationSelection:
        """Handle a click on an operation button."""
        state = self.state
        anchor = state.anchor
        if anchor is None or operation in state.used_operations:
            logger.debug("Ignored operation %s", operation.name)
        else:
            state.selection = OperationPending(anchor, operation)
        return OperationSelection(pending=state.pending_operation)

    def play(self, anchor_slot: int, operation: Operation, operand_slot: int) -> SlotSelection:
        """Select anchor, operation and operand in one call.

        Any current selection is discarded first. Used for solver hints.
        A move naming an empty slot, the same slot twice or a used operation
        is ignored and leaves the current selection alone.
        """
        state = self.state
        if (
            state.is_empty(anchor_slot)
            or state.is_empty(operand_slot)
            or anchor_slot == operand_slot
            or operation in state.used_operations
        ):
            logger.debug("Ignored move %d %s %d", anchor_slot, operation, operand_slot)
            return self._slot_result()
        state.selection = Idle()
        self.select_slot(anchor_slot)
        self.select_operation(operation)
        return self.select_slot(operand_slot)

    # -- queries --------------------------------------------------------------

    def get_solution(self) -> tuple[Step, ...] | None:
        """The generator's witness path for the current puzzle."""
        return self.puzzle.solution_steps if self.puzzle else None

    @property
    def is_over(self) -> bool:
        return self.outcome is not None

    @property
    def is_won(self) -> bool:
        return self.outcome is not None and self.outcome.won

    # -- helpers --------------------------------------------------------------

    def _load(self, puzzle: PuzzleDefinition) -> None:
        self.puzzle = puzzle
        self.state = GameState.from_puzzle(puzzle)
        self.outcome: Outcome | None = None

    def _slot_result(self) -> SlotSelection:
        anchor = self.state.anchor
        return SlotSelection(anchor=anchor.slot if anchor else None)

    def _apply(self, selection: OperationPending, index: int, value: int) -> SlotSelection:
        state = self.state
        anchor = selection.anchor
        operation = selection.operation

        try:
            result = compute(operation, anchor.value, value)
        except InvalidMove as exc:
            logger.debug("Invalid move: %s", exc)
            return SlotSelection(anchor=anchor.slot, error=str(exc))

        step = Step(anchor.value, value, operation, result)
        state.grid[anchor.slot] = result
        state.grid[index] = None
        state.history.append(step)
        state.used_operations.add(operation)
        state.selection = AnchorSelected(Anchor(anchor.slot, result))
        logger.debug("Applied %s", step)

        outcome = None
        if state.is_finished:
            outcome = self._finish(result)
        return SlotSelection(anchor=anchor.slot, step=step, outcome=outcome)

    def _finish(self, result: int) -> Outcome:
        outcome = Outcome(won=result == self.state.target, target=self.state.target, result=result)
        self.outcome = outcome
        logger.info("Attempt finished: %s (result %d, target %d)",
                    "win" if outcome.won else "loss", result, outcome.target)
        for callback in self._listeners:
            callback(outcome)
        return outcome
