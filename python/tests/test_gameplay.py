"""Move engine test suite — selections, move application, outcome, reset."""

from __future__ import annotations

import random

import pytest

from backend.engine.gameplay import GamePlay, Outcome
from backend.engine.gamestate import AnchorSelected, GameState, Idle, OperationPending
from backend.models.puzzle import Anchor, Operation, PuzzleDefinition, Step

ADD, SUB, MUL, DIV = Operation.ADD, Operation.SUBTRACT, Operation.MULTIPLY, Operation.DIVIDE

# 6×4=24, 24÷3=8, 8×2=16, 16+5=21
PUZZLE = PuzzleDefinition(
    numbers=(6, 4, 3, 2, 5, 1, 7, 9),
    target=21,
    solution_steps=(
        Step(6, 4, MUL, 24),
        Step(24, 3, DIV, 8),
        Step(8, 2, MUL, 16),
        Step(16, 5, ADD, 21),
    ),
)

# Each operation once: 9-1=8, 8÷4=2, 5+2=7, 3×7=21
WINNING_PATH = [(7, SUB, 5), (7, DIV, 1), (4, ADD, 7), (2, MUL, 4)]


# -- helpers ------------------------------------------------------------------


@pytest.fixture
def game() -> GamePlay:
    return GamePlay.from_puzzle(PUZZLE)


def _with_grid(grid: list[int | None], target: int = 21) -> GamePlay:
    game = GamePlay.from_puzzle(PUZZLE)
    game.state = GameState(grid=grid, target=target)
    return game


def _move(game: GamePlay, anchor: int, op: Operation, operand: int):
    game.select_slot(anchor)
    game.select_operation(op)
    return game.select_slot(operand)


def _snapshot(state: GameState) -> tuple:
    return (
        list(state.grid),
        state.selection,
        set(state.used_operations),
        list(state.history),
    )


# -- initial state ------------------------------------------------------------


def test_initial_state(game: GamePlay) -> None:
    state = game.state
    assert state.grid == [6, 4, 3, 2, 5, 1, 7, 9, 6]
    assert state.target == 21
    assert state.selection == Idle()
    assert state.used_operations == set()
    assert state.history == []
    assert state.moves_left == 4
    assert game.outcome is None


def test_get_solution_returns_witness(game: GamePlay) -> None:
    assert game.get_solution() == PUZZLE.solution_steps


# -- slot selection -----------------------------------------------------------


def test_select_slot_sets_anchor(game: GamePlay) -> None:
    result = game.select_slot(2)
    assert result.anchor == 2
    assert result.error is None
    assert game.state.selection == AnchorSelected(Anchor(2, 3))


def test_reselect_moves_anchor(game: GamePlay) -> None:
    game.select_slot(2)
    result = game.select_slot(5)
    assert result.anchor == 5
    assert game.state.selection == AnchorSelected(Anchor(5, 1))


def test_reselect_anchor_is_noop(game: GamePlay) -> None:
    game.select_slot(2)
    result = game.select_slot(2)
    assert result.anchor == 2
    assert game.state.selection == AnchorSelected(Anchor(2, 3))


@pytest.mark.parametrize("index", [-1, 9, 42])
def test_out_of_range_slot_is_noop(game: GamePlay, index: int) -> None:
    result = game.select_slot(index)
    assert result.anchor is None
    assert result.error is None
    assert game.state.selection == Idle()


def test_empty_slot_is_noop() -> None:
    game = _with_grid([10, None, 3, 2, 5, 1, 7, 9, 6])
    result = game.select_slot(1)
    assert result.anchor is None
    assert game.state.selection == Idle()


# -- operation selection ------------------------------------------------------


def test_operation_without_anchor_is_noop(game: GamePlay) -> None:
    result = game.select_operation(ADD)
    assert result.pending is None
    assert result.error is None
    assert game.state.selection == Idle()


def test_operation_with_anchor_is_pending(game: GamePlay) -> None:
    game.select_slot(0)
    result = game.select_operation(MUL)
    assert result.pending is MUL
    assert game.state.selection == OperationPending(Anchor(0, 6), MUL)


def test_pending_operation_can_be_replaced(game: GamePlay) -> None:
    game.select_slot(0)
    game.select_operation(MUL)
    result = game.select_operation(ADD)
    assert result.pending is ADD


def test_used_operation_is_noop(game: GamePlay) -> None:
    _move(game, 0, MUL, 1)
    result = game.select_operation(MUL)
    assert result.pending is None
    assert result.error is None
    assert game.state.selection == AnchorSelected(Anchor(0, 24))


def test_anchor_as_second_operand_is_noop(game: GamePlay) -> None:
    game.select_slot(0)
    game.select_operation(MUL)
    before = _snapshot(game.state)
    result = game.select_slot(0)
    assert result.error is None
    assert result.step is None
    assert _snapshot(game.state) == before


# -- move application ---------------------------------------------------------


def test_valid_move_updates_state(game: GamePlay) -> None:
    result = _move(game, 0, MUL, 1)

    assert result.error is None
    assert result.anchor == 0
    assert result.step == Step(6, 4, MUL, 24)
    assert result.outcome is None

    state = game.state
    assert state.grid == [24, None, 3, 2, 5, 1, 7, 9, 6]
    assert state.history == [Step(6, 4, MUL, 24)]
    assert state.used_operations == {MUL}
    assert state.selection == AnchorSelected(Anchor(0, 24))
    assert state.pending_operation is None
    assert state.moves_left == 3


def test_emptied_slot_stays_empty(game: GamePlay) -> None:
    _move(game, 0, MUL, 1)
    game.select_operation(ADD)
    before = _snapshot(game.state)
    game.select_slot(1)
    assert _snapshot(game.state) == before
    assert game.state.grid[1] is None


def test_subtract_not_greater_is_invalid() -> None:
    game = _with_grid([10, 15, 3, 2, 5, 1, 7, 9, 10])
    game.select_slot(0)
    game.select_operation(SUB)
    before = _snapshot(game.state)

    result = game.select_slot(1)

    assert result.error is not None
    assert result.step is None
    assert _snapshot(game.state) == before
    assert game.state.selection == OperationPending(Anchor(0, 10), SUB)


def test_inexact_divide_is_invalid() -> None:
    game = _with_grid([12, 5, 3, 2, 5, 1, 7, 9, 12])
    game.select_slot(0)
    game.select_operation(DIV)
    before = _snapshot(game.state)

    result = game.select_slot(1)

    assert result.error is not None
    assert _snapshot(game.state) == before


def test_result_over_limit_is_invalid() -> None:
    game = _with_grid([24, 5, 3, 2, 5, 1, 7, 9, 6])
    game.select_slot(0)
    game.select_operation(MUL)
    before = _snapshot(game.state)

    result = game.select_slot(1)

    assert result.error is not None
    assert _snapshot(game.state) == before


def test_invalid_move_then_valid_move() -> None:
    game = _with_grid([12, 5, 4, 2, 5, 1, 7, 9, 12])
    game.select_slot(0)
    game.select_operation(DIV)
    assert game.select_slot(1).error is not None
    result = game.select_slot(2)
    assert result.step == Step(12, 4, DIV, 3)


# -- outcome ------------------------------------------------------------------


def test_winning_path_wins(game: GamePlay) -> None:
    received: list[Outcome] = []
    game.subscribe(received.append)

    for anchor, op, operand in WINNING_PATH:
        result = _move(game, anchor, op, operand)
        assert result.step is not None

    assert result.outcome == Outcome(won=True, target=21, result=21)
    assert received == [result.outcome]
    assert game.is_over
    assert game.is_won
    assert game.state.is_finished


def test_witness_path_cannot_be_replayed(game: GamePlay) -> None:
    steps = PUZZLE.solution_steps
    assert [s.operation for s in steps].count(MUL) == 2

    game.play(0, steps[0].operation, 1)
    game.play(0, steps[1].operation, 2)
    result = game.play(0, steps[2].operation, 3)

    assert result.step is None
    assert game.state.grid[0] == 8
    assert game.outcome is None


def test_other_path_loses(game: GamePlay) -> None:
    received: list[Outcome] = []
    game.subscribe(received.append)

    _move(game, 0, ADD, 1)   # 6 + 4 = 10
    _move(game, 0, SUB, 2)   # 10 - 3 = 7
    _move(game, 0, MUL, 3)   # 7 × 2 = 14
    result = _move(game, 0, DIV, 6)  # 14 ÷ 7 = 2

    assert result.outcome == Outcome(won=False, target=21, result=2)
    assert "21" in result.outcome.message()
    assert received == [result.outcome]
    assert game.is_over
    assert not game.is_won


def test_winning_path_final_grid(game: GamePlay) -> None:
    for anchor, op, operand in WINNING_PATH:
        _move(game, anchor, op, operand)

    assert game.state.grid == [6, None, 21, 2, None, None, 7, None, 6]
    assert game.state.live_slots == [0, 2, 3, 6, 8]


def test_outcome_emitted_exactly_once(game: GamePlay) -> None:
    received: list[Outcome] = []
    game.subscribe(received.append)

    for anchor, op, operand in WINNING_PATH:
        _move(game, anchor, op, operand)

    # Nothing left to apply: further clicks change only the anchor.
    for op in Operation:
        assert game.select_operation(op).pending is None
    game.select_slot(5)
    game.select_slot(6)

    assert len(received) == 1


def test_used_operations_match_history(game: GamePlay) -> None:
    for i, (anchor, op, operand) in enumerate(WINNING_PATH):
        _move(game, anchor, op, operand)
        state = game.state
        assert len(state.used_operations) == len(state.history) == i + 1
        ops = [s.operation for s in state.history]
        assert len(ops) == len(set(ops))


# -- play ---------------------------------------------------------------------


def test_play_discards_current_selection(game: GamePlay) -> None:
    game.select_slot(4)
    game.select_operation(ADD)
    result = game.play(0, MUL, 1)
    assert result.step == Step(6, 4, MUL, 24)
    assert game.state.grid[4] == 5


def test_play_with_used_operation_is_noop(game: GamePlay) -> None:
    game.play(0, MUL, 1)
    before = _snapshot(game.state)
    result = game.play(2, MUL, 3)
    assert result.step is None
    assert _snapshot(game.state) == before


@pytest.mark.parametrize("operand", [0, 1])
def test_play_with_bad_operand_keeps_selection(operand: int) -> None:
    game = _with_grid([6, None, 3, 2, 5, 1, 7, 9, 6])
    game.select_slot(4)
    before = _snapshot(game.state)

    result = game.play(0, ADD, operand)

    assert result.step is None
    assert result.error is None
    assert _snapshot(game.state) == before
    assert game.state.selection == AnchorSelected(Anchor(4, 5))


# -- reset / new game ---------------------------------------------------------


def test_reset_restores_starting_grid(game: GamePlay) -> None:
    _move(game, 0, ADD, 1)
    _move(game, 0, SUB, 2)
    game.select_operation(MUL)

    state = game.reset_puzzle()

    assert state is game.state
    assert state.grid == list(PUZZLE.grid_numbers)
    assert state.grid[8] == state.grid[0]
    assert state.target == PUZZLE.target
    assert state.selection == Idle()
    assert state.used_operations == set()
    assert state.history == []
    assert game.puzzle is PUZZLE


def test_reset_after_outcome_allows_new_attempt(game: GamePlay) -> None:
    received: list[Outcome] = []
    game.subscribe(received.append)

    for anchor, op, operand in WINNING_PATH:
        _move(game, anchor, op, operand)
    game.reset_puzzle()
    assert game.outcome is None

    for anchor, op, operand in WINNING_PATH:
        _move(game, anchor, op, operand)
    assert len(received) == 2


def test_start_new_game_generates_fresh_puzzle() -> None:
    game = GamePlay(random.Random(3))
    first = game.puzzle
    _move(game, 0, ADD, 1)

    puzzle = game.start_new_game()

    assert puzzle is game.puzzle
    assert game.state.grid == list(puzzle.grid_numbers)
    assert game.state.target == puzzle.target
    assert game.state.history == []
    assert game.get_solution() == puzzle.solution_steps
    assert GamePlay(random.Random(3)).puzzle == first
