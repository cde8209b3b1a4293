"""Vanilla terminal frontend — no third-party dependencies.

Uses only stdlib (print, ANSI codes, tty/termios) for rendering and input.
Includes a small menu for play, rules, and quit.
"""

from __future__ import annotations

import random
import sys
import time

from backend.engine.gameplay import OUTCOME_DELAY, GamePlay, Outcome
from backend.engine.gamesolver import Solver
from backend.engine.gamestate import GameState
from backend.models.puzzle import Operation
from frontend.cli.input_handler import get_key, parse_slot


# -- ANSI helpers -------------------------------------------------------------

_G = "\033[32;1m"    # bold green
_Y = "\033[33;1m"    # bold yellow
_C = "\033[36;1m"    # bold cyan
_RED = "\033[31;1m"  # bold red
_DIM = "\033[2m"     # dim
_BOLD = "\033[1m"    # bold
_R = "\033[0m"       # reset
_BG_SEL = "\033[42;30m"  # green bg, black fg (anchor)

_OPERATION_KEYS = {
    "add": Operation.ADD,
    "subtract": Operation.SUBTRACT,
    "multiply": Operation.MULTIPLY,
    "divide": Operation.DIVIDE,
}

_COLS = 3


def _clear() -> None:
    sys.stdout.write("\033[2J\033[H")
    sys.stdout.flush()


# -- rendering ----------------------------------------------------------------


def _render_grid(state: GameState) -> str:
    """Return an ANSI-coloured 3×3 grid; each cell shows its key and value."""
    anchor = state.anchor
    cell_w = 7
    sep = "+" + (("-" * cell_w + "+") * _COLS)

    lines: list[str] = [sep]
    for start in range(0, len(state.grid), _COLS):
        cells: list[str] = []
        for slot in range(start, start + _COLS):
            val = state.grid[slot]
            if val is None:
                cells.append(f"{_DIM}{'·':^{cell_w}}{_R}")
            elif anchor is not None and anchor.slot == slot:
                cells.append(f"{_BG_SEL}{slot + 1}:{val:>3}  {_R}")
            else:
                cells.append(f"{_DIM}{slot + 1}:{_R}{_BOLD}{val:>3}{_R}  ")
        lines.append("|" + "|".join(cells) + "|")
        lines.append(sep)
    return "\n".join(lines)


def _render_operations(state: GameState) -> str:
    parts: list[str] = []
    for op in Operation:
        if op in state.used_operations:
            parts.append(f"{_DIM} {op} {_R}")
        elif op is state.pending_operation:
            parts.append(f"{_BG_SEL} {op} {_R}")
        else:
            parts.append(f"{_C} {op} {_R}")
    return "  ".join(parts)


def _render_history(state: GameState) -> str:
    if not state.history:
        return f"  {_DIM}(no moves yet){_R}"
    return "\n".join(f"  {i}. {step}" for i, step in enumerate(state.history, 1))


# -- solver helpers -----------------------------------------------------------


def _apply_hint(game: GamePlay) -> str:
    """Play the solver's next move.  Returns a status message."""
    move = Solver.hint(game.state)
    if move is None:
        if game.is_over:
            return f"{_Y}The round is over.{_R}"
        return f"{_Y}No winning line from here. Press R to reset.{_R}"
    result = game.play(move.anchor_slot, move.operation, move.operand_slot)
    return f"{_C}Hint:{_R} {result.step}"


def _solution_text(game: GamePlay) -> str:
    steps = game.get_solution() or ()
    lines = [f"{_C}Solution path to reach {game.puzzle.target}:{_R}"]
    lines += [f"    Step {i}: {step}" for i, step in enumerate(steps, 1)]
    return "\n  ".join(lines)


# -- screens ------------------------------------------------------------------


def _show_menu() -> None:
    _clear()
    print()
    print(f"  {_BOLD}======================================{_R}")
    print(f"  {_BOLD}      T A R G E T   N U M B E R      {_R}")
    print(f"  {_BOLD}======================================{_R}")
    print()
    print(f"    {_C}1{_R}  Play")
    print(f"    {_Y}2{_R}  How to play")
    print(f"    {_DIM}Q{_R}  Quit")
    print()


def _show_rules() -> None:
    _clear()
    print()
    print(f"  {_BOLD}=== HOW TO PLAY ==={_R}")
    print()
    print("  Reach the target number by combining numbers from the grid.")
    print("  Pick a number, an operation, then a second number: the first")
    print("  cell takes the result and the second is used up.")
    print()
    print(f"  Each of {_C}+ - × ÷{_R} can be used once, so every round has")
    print("  exactly four moves. Results must stay whole numbers from 1")
    print("  to 100, and subtraction must stay positive.")
    print()
    print(f"  {_C}1-9{_R} pick a cell   {_C}+ - * /{_R} pick an operation")
    print(f"  {_C}R{_R} reset   {_C}N{_R} new puzzle   {_C}H{_R} hint   "
          f"{_C}S{_R} solution   {_C}Q{_R} back")
    print(f"\n  {_DIM}Press any key to go back.{_R}")
    get_key()


def _show_game(game: GamePlay, status: str = "") -> None:
    """Draw the full game screen."""
    _clear()
    state = game.state
    print(f"  {_C}=== Target Number ==={_R}")
    print()
    print(f"  Target: {_Y}{state.target}{_R}    Moves left: {_Y}{state.moves_left}{_R}")
    print()
    print(_render_grid(state))
    print()
    print(f"  {_render_operations(state)}")
    print()
    print(_render_history(state))
    print()
    print(
        f"  {_C}1-9{_R}: cell  |  {_C}+-*/{_R}: op  |  "
        f"{_C}R{_R}: reset  |  {_C}N{_R}: new  |  "
        f"{_C}H{_R}: hint  |  {_C}S{_R}: solution  |  {_C}Q{_R}: back"
    )
    if status:
        print(f"\n  {status}")
    sys.stdout.flush()


def _outcome_text(outcome: Outcome) -> str:
    colour = _G if outcome.won else _RED
    return f"{colour}{outcome.message()}{_R}"


# -- game loop ----------------------------------------------------------------


def _play_game(rng: random.Random | None) -> None:
    game = GamePlay(rng)
    status = ""

    while True:
        _show_game(game, status)
        status = ""
        key = get_key()

        slot = parse_slot(key)
        if slot is not None:
            result = game.select_slot(slot)
            if result.error:
                status = f"{_RED}Invalid operation!{_R} {result.error}"
            elif result.outcome is not None:
                _show_game(game)
                time.sleep(OUTCOME_DELAY)
                status = _outcome_text(result.outcome)
        elif key in _OPERATION_KEYS:
            game.select_operation(_OPERATION_KEYS[key])
        elif key == "hint":
            status = _apply_hint(game)
            if game.outcome is not None:
                status += "\n  " + _outcome_text(game.outcome)
        elif key == "solution":
            status = _solution_text(game)
        elif key == "reset":
            game.reset_puzzle()
        elif key == "new":
            game.start_new_game()
        elif key == "help":
            _show_rules()
        elif key == "quit":
            return


# -- menu loop ----------------------------------------------------------------


def _menu_loop(rng: random.Random | None) -> None:
    while True:
        _show_menu()
        key = get_key()

        if key == "quit":
            _clear()
            print("  Goodbye!\n")
            return
        elif key in ("slot:0", "enter"):
            _play_game(rng)
        elif key in ("slot:1", "help"):
            _show_rules()


# -- public entry point -------------------------------------------------------


def run(rng: random.Random | None = None) -> None:
    """Launch the vanilla CLI with interactive menu."""
    _menu_loop(rng)
