"""Cross-platform single-keypress reader for CLI frontends.

Handles digits, operator symbols and command letters without requiring
Enter. Works on macOS / Linux (tty+termios) and Windows (msvcrt).
"""

from __future__ import annotations

import os
import sys


# -- low-level character readers -----------------------------------------------


def _getch_unix() -> str:
    import termios
    import tty

    fd = sys.stdin.fileno()
    old = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        ch = sys.stdin.read(1)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)
    return ch


def _getch_windows() -> str:
    import msvcrt  # type: ignore[import-not-found]

    return msvcrt.getch().decode("utf-8", errors="ignore")


_getch = _getch_windows if os.name == "nt" else _getch_unix


# -- shared key mapping --------------------------------------------------------

_KEY_MAP: dict[str, str] = {
    "+": "add",
    "-": "subtract",
    "*": "multiply",
    "x": "multiply",
    "X": "multiply",
    "×": "multiply",
    "/": "divide",
    "÷": "divide",
    "q": "quit",
    "Q": "quit",
    "\x03": "quit",  # Ctrl-C
    "r": "reset",
    "R": "reset",
    "n": "new",
    "N": "new",
    "s": "solution",
    "S": "solution",
    "h": "hint",
    "H": "hint",
    "?": "help",
    "\r": "enter",
    "\n": "enter",
}


def _resolve(ch: str) -> str:
    """Map a raw character to its action string."""
    if ch and ch in "123456789":
        return f"slot:{int(ch) - 1}"
    return _KEY_MAP.get(ch, ch if ch.isprintable() else "")


# -- public API ----------------------------------------------------------------


def get_key() -> str:
    """Read a single keypress and return a normalised action string.

    Blocks until a key is pressed.

    Possible return values:
        "slot:<i>"                     — 1-9 (zero-based slot index)
        "add", "subtract",
        "multiply", "divide"           — + - * x / ÷
        "quit"                         — q / Ctrl-C / Escape
        "reset"                        — r (same puzzle)
        "new"                          — n (new puzzle)
        "solution"                     — s (reveal witness solution)
        "hint"                         — h (apply next solver move)
        "help"                         — ?
        "enter"                        — Enter / Return
        "<char>"                       — unmapped printable char
        ""                             — unrecognised key
    """
    ch = _getch()

    # Escape sequences (arrow keys etc.) are swallowed; bare Escape quits.
    if ch == "\x1b":
        ch2 = _getch()
        if ch2 == "[":
            _getch()
            return ""
        return "quit"

    return _resolve(ch)


def parse_slot(action: str) -> int | None:
    """Return the slot index encoded in a ``slot:<i>`` action, else ``None``."""
    if action.startswith("slot:"):
        return int(action.split(":", 1)[1])
    return None
