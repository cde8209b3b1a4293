#!/usr/bin/env python3
"""Target Number Game.

Usage::

    python main.py                # interactive menu
    python main.py -f rich        # Rich terminal
    python main.py -f pygame      # Pygame GUI (has its own menu)
    python main.py --seed 7 -v    # reproducible puzzles, debug logging
"""

import importlib
import logging
import random
import sys
from enum import StrEnum
from pathlib import Path
from typing import Optional

import typer

ROOT = Path(__file__).resolve().parent  # python/

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


# -- frontend registry -------------------------------------------------------


class Frontend(StrEnum):
    vanilla = "vanilla"
    rich = "rich"
    pygame = "pygame"
    pyqt = "pyqt"


_RUNNERS = {
    Frontend.vanilla: "frontend.cli.vanilla.app",
    Frontend.rich: "frontend.cli.rich.app",
    Frontend.pygame: "frontend.gui.pygame.app",
    Frontend.pyqt: "frontend.gui.pyqt.app",
}


# -- helpers ------------------------------------------------------------------


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _launch(frontend: Frontend, rng: random.Random | None) -> None:
    mod = importlib.import_module(_RUNNERS[frontend])
    mod.run(rng=rng)


def _menu_loop(rng: random.Random | None) -> None:
    choices = {
        "1": Frontend.vanilla,
        "2": Frontend.rich,
        "3": Frontend.pygame,
        "4": Frontend.pyqt,
    }
    while True:
        print()
        print("  ====================================")
        print("        T A R G E T   N U M B E R     ")
        print("  ====================================")
        print()
        print("  1.  Play  (Vanilla Terminal)")
        print("  2.  Play  (Rich Terminal)")
        print("  3.  Play  (Pygame GUI)")
        print("  4.  Play  (PyQt GUI)")
        print("  0.  Quit")
        print()

        choice = input("  Select: ").strip()

        if choice == "0":
            print("\n  Goodbye!\n")
            return

        if choice in choices:
            _launch(choices[choice], rng)
        else:
            print("  Unknown option.")


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False)


@app.command()
def main(
    frontend: Optional[Frontend] = typer.Option(
        None, "-f", "--frontend",
        help="Frontend to launch. Omit for interactive menu.",
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed",
        help="Seed the puzzle generator for reproducible games.",
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose",
        help="Log generation and moves at DEBUG level.",
    ),
) -> None:
    """Target Number Game."""
    _configure_logging(verbose)
    rng = random.Random(seed) if seed is not None else None

    if frontend is None:
        _menu_loop(rng)
        return

    _launch(frontend, rng)


if __name__ == "__main__":
    app()
