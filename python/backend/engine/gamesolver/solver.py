"""Target-number solver."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from functools import lru_cache

from backend.engine.gamestate import GameState
from backend.models.puzzle import InvalidMove, Operation, compute

# (anchor value, operation, operand value)
_ValueMove = tuple[int, Operation, int]


@dataclass(frozen=True)
class Move:
    """One player move: anchor slot, operation, then operand slot."""

    anchor_slot: int
    operation: Operation
    operand_slot: int


class Solver:
    """Stateless solver — all methods are static."""

    @staticmethod
    def solve(state: GameState) -> list[Move]:
        """Return a move sequence that wins from *state*, or ``[]`` if none exists."""
        if state.is_finished:
            return []

        values = tuple(sorted(state.grid[i] for i in state.live_slots))
        plan = _search(values, frozenset(state.available_operations), state.target)
        if plan is None:
            return []
        return _to_slots(state.grid, plan)

    @staticmethod
    def hint(state: GameState) -> Move | None:
        """Return the next move of a winning line, or ``None`` if there is none."""
        moves = Solver.solve(state)
        return moves[0] if moves else None

    @staticmethod
    def is_solvable(state: GameState) -> bool:
        """Return True if the remaining operations can still reach the target."""
        return bool(Solver.solve(state))


# -- search -------------------------------------------------------------------

_COMMUTATIVE = frozenset({Operation.ADD, Operation.MULTIPLY})


@lru_cache(maxsize=200_000)
def _search(
    values: tuple[int, ...], operations: frozenset[Operation], target: int
) -> tuple[_ValueMove, ...] | None:
    """Depth-first search over value multisets; ``values`` is sorted."""
    counts = Counter(values)
    if len(operations) == 1:
        (op,) = operations
        move = _finishing_move(counts, op, target)
        return (move,) if move is not None else None

    distinct = sorted(counts)
    for a in distinct:
        for b in distinct:
            if a == b and counts[a] < 2:
                continue
            for op in Operation:
                if op not in operations or (op in _COMMUTATIVE and a > b):
                    continue
                try:
                    result = compute(op, a, b)
                except InvalidMove:
                    continue
                rest = list(values)
                rest.remove(a)
                rest.remove(b)
                rest.append(result)
                tail = _search(tuple(sorted(rest)), operations - {op}, target)
                if tail is not None:
                    return ((a, op, b), *tail)
    return None


def _finishing_move(counts: Counter, op: Operation, target: int) -> _ValueMove | None:
    """Find ``a op b == target`` among *counts*, solving for ``b`` directly."""
    for a in counts:
        if op is Operation.ADD:
            b = target - a
        elif op is Operation.SUBTRACT:
            b = a - target
        elif op is Operation.MULTIPLY:
            if target % a:
                continue
            b = target // a
        else:
            if a % target:
                continue
            b = a // target
        if b not in counts or (a == b and counts[a] < 2):
            continue
        try:
            if compute(op, a, b) == target:
                return (a, op, b)
        except InvalidMove:
            continue
    return None


def _to_slots(grid: list[int | None], plan: tuple[_ValueMove, ...]) -> list[Move]:
    """Replay a value-level plan on a copy of *grid*, picking concrete slots."""
    grid = list(grid)
    moves: list[Move] = []
    for a, op, b in plan:
        i = grid.index(a)
        j = next(k for k, v in enumerate(grid) if v == b and k != i)
        grid[i] = compute(op, a, b)
        grid[j] = None
        moves.append(Move(i, op, j))
    return moves
