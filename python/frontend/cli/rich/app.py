"""Rich terminal frontend — tables, colours, and panels.

Uses the ``rich`` library for styled output while sharing the same
input handler and backend as the vanilla CLI.  Includes a built-in
menu for play, rules, and quit.
"""

from __future__ import annotations

import random
import time

import rich.box
from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from backend.engine.gameplay import OUTCOME_DELAY, GamePlay, Outcome
from backend.engine.gamesolver import Solver
from backend.engine.gamestate import GameState
from backend.models.puzzle import Operation
from frontend.cli.input_handler import get_key, parse_slot

console = Console()

_OPERATION_KEYS = {
    "add": Operation.ADD,
    "subtract": Operation.SUBTRACT,
    "multiply": Operation.MULTIPLY,
    "divide": Operation.DIVIDE,
}

_COLS = 3


# -- grid rendering -----------------------------------------------------------


def _render_grid(state: GameState) -> Table:
    """Return a Rich Table representing the 3×3 number grid."""
    anchor = state.anchor
    table = Table(
        show_header=False,
        show_edge=True,
        pad_edge=True,
        box=rich.box.HEAVY,
        border_style="bright_blue",
        padding=(0, 1),
    )
    for _ in range(_COLS):
        table.add_column(width=7, justify="center")

    for start in range(0, len(state.grid), _COLS):
        cells: list[str] = []
        for slot in range(start, start + _COLS):
            val = state.grid[slot]
            if val is None:
                cells.append("[dim]·[/dim]")
            elif anchor is not None and anchor.slot == slot:
                cells.append(f"[dim]{slot + 1}[/dim] [bold black on green]{val:>3}[/]")
            else:
                cells.append(f"[dim]{slot + 1}[/dim] [bold white]{val:>3}[/bold white]")
        table.add_row(*cells)

    return table


def _render_operations(state: GameState) -> Text:
    ops = Text()
    for i, op in enumerate(Operation):
        if i:
            ops.append("  ")
        if op in state.used_operations:
            ops.append(f" {op} ", style="dim strike")
        elif op is state.pending_operation:
            ops.append(f" {op} ", style="bold black on green")
        else:
            ops.append(f" {op} ", style="bold cyan on #313244")
    return ops


def _render_history(state: GameState) -> Text:
    history = Text()
    if not state.history:
        history.append("no moves yet", style="dim")
    for i, step in enumerate(state.history, 1):
        if i > 1:
            history.append("\n")
        history.append(f"{i}. ", style="dim")
        history.append(str(step), style="bold white")
    return history


# -- solver helpers -----------------------------------------------------------


def _apply_hint(game: GamePlay) -> str:
    move = Solver.hint(game.state)
    if move is None:
        if game.is_over:
            return "[yellow]The round is over.[/yellow]"
        return "[yellow]No winning line from here. Press R to reset.[/yellow]"
    result = game.play(move.anchor_slot, move.operation, move.operand_slot)
    return f"[cyan]Hint:[/cyan] [bold]{result.step}[/bold]"


def _solution_status(game: GamePlay) -> str:
    steps = game.get_solution() or ()
    lines = [f"[cyan]Solution path to reach {game.puzzle.target}:[/cyan]"]
    lines += [f"Step {i}: [bold]{step}[/bold]" for i, step in enumerate(steps, 1)]
    return "\n".join(lines)


def _outcome_status(outcome: Outcome) -> str:
    if outcome.won:
        return f"[bold green]★ {outcome.message()} ★[/bold green]"
    return f"[bold red]{outcome.message()}[/bold red]"


# -- menu screen --------------------------------------------------------------


def _draw_menu() -> None:
    """Draw the main menu."""
    console.clear()

    opts = Text()
    opts.append("  1", style="bold cyan")
    opts.append("  Play    ")
    opts.append("2", style="bold yellow")
    opts.append("  How to play    ")
    opts.append("Q", style="dim bold")
    opts.append("  Quit", style="dim")

    body = Group(
        Text(""),
        Align.center(Text("Combine the numbers to hit the target.", style="dim")),
        Text(""),
        Align.center(opts),
        Text(""),
    )

    panel = Panel(
        body,
        title="[bold]T A R G E T   N U M B E R[/bold]",
        border_style="bright_blue",
        padding=(1, 4),
    )

    console.print()
    console.print(Align.center(panel))


def _draw_rules() -> None:
    console.clear()

    rules = Text()
    rules.append("Reach the target by combining numbers from the grid.\n\n")
    rules.append("Pick a number, an operation, then a second number: the\n")
    rules.append("first cell takes the result and the second is used up.\n\n")
    rules.append("Each of ")
    rules.append("+ - × ÷", style="bold cyan")
    rules.append(" can be used once, so a round has exactly\n")
    rules.append("four moves. Results must be whole numbers from 1 to 100.\n")

    panel = Panel(
        rules,
        title="[bold]HOW  TO  PLAY[/bold]",
        border_style="bright_blue",
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))
    console.print(Align.center(Text("\n  Press any key to go back.\n", style="dim")))
    get_key()


# -- game screen --------------------------------------------------------------


def _draw_game(game: GamePlay, status: str = "") -> None:
    console.clear()
    state = game.state

    stats = Text()
    stats.append("Target: ", style="dim")
    stats.append(str(state.target), style="bold yellow")
    stats.append("    Moves left: ", style="dim")
    stats.append(str(state.moves_left), style="bold yellow")

    history_panel = Panel(
        _render_history(state),
        title="[dim]History[/dim]",
        border_style="dim",
        box=rich.box.ROUNDED,
        width=28,
    )

    group = Group(
        Align.center(stats),
        Text(""),
        Align.center(_render_grid(state)),
        Text(""),
        Align.center(_render_operations(state)),
        Text(""),
        Align.center(history_panel),
    )

    controls = Text()
    controls.append("  1-9", style="bold cyan")
    controls.append("  cell   ", style="dim")
    controls.append("+ - * /", style="bold cyan")
    controls.append("  op   ", style="dim")
    controls.append("R", style="bold cyan")
    controls.append("  reset   ", style="dim")
    controls.append("N", style="bold cyan")
    controls.append("  new   ", style="dim")
    controls.append("H", style="bold cyan")
    controls.append("  hint   ", style="dim")
    controls.append("S", style="bold cyan")
    controls.append("  solution   ", style="dim")
    controls.append("Q", style="bold cyan")
    controls.append("  back", style="dim")

    border = "bright_blue"
    if game.outcome is not None:
        border = "bold green" if game.outcome.won else "red"

    panel = Panel(
        group,
        title="[bold cyan]Target Number[/bold cyan]",
        border_style=border,
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))
    if status:
        console.print(Align.center(Text.from_markup(status)))
    console.print(Align.center(controls))


# -- game loop ----------------------------------------------------------------


def _play_game(rng: random.Random | None) -> None:
    game = GamePlay(rng)
    status = ""

    while True:
        _draw_game(game, status)
        status = ""
        key = get_key()

        slot = parse_slot(key)
        if slot is not None:
            result = game.select_slot(slot)
            if result.error:
                status = f"[red]Invalid operation![/red] {result.error}"
            elif result.outcome is not None:
                _draw_game(game)
                time.sleep(OUTCOME_DELAY)
                status = _outcome_status(result.outcome)
        elif key in _OPERATION_KEYS:
            game.select_operation(_OPERATION_KEYS[key])
        elif key == "hint":
            status = _apply_hint(game)
            if game.outcome is not None:
                status += "\n" + _outcome_status(game.outcome)
        elif key == "solution":
            status = _solution_status(game)
        elif key == "reset":
            game.reset_puzzle()
            status = "[yellow]Puzzle reset.[/yellow]"
        elif key == "new":
            game.start_new_game()
            status = "[yellow]New puzzle![/yellow]"
        elif key == "help":
            _draw_rules()
        elif key == "quit":
            return


# -- menu loop ----------------------------------------------------------------


def _menu_loop(rng: random.Random | None) -> None:
    while True:
        _draw_menu()
        key = get_key()

        if key == "quit":
            console.clear()
            console.print(
                Align.center(Text("\nGoodbye!\n", style="bold cyan"))
            )
            return
        elif key in ("slot:0", "enter"):
            _play_game(rng)
        elif key in ("slot:1", "help"):
            _draw_rules()


# -- public entry point -------------------------------------------------------


def run(rng: random.Random | None = None) -> None:
    """Launch the Rich CLI with interactive menu."""
    _menu_loop(rng)
