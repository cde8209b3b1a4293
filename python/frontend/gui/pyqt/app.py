"""PyQt6 GUI frontend — fully self-contained.

Includes main menu, gameplay with clickable cells and operation buttons,
and an outcome screen.  No terminal interaction required.
"""

from __future__ import annotations

import random
import sys

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtGui import QFont, QKeyEvent
from PyQt6.QtWidgets import (
    QApplication,
    QFrame,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QSpacerItem,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from backend.engine.gameplay import OUTCOME_DELAY, GamePlay, Outcome
from backend.engine.gamesolver import Solver
from backend.models.puzzle import Operation

# ---------------------------------------------------------------------------
# Catppuccin Mocha CSS colours
# ---------------------------------------------------------------------------
_BASE = "#1e1e2e"
_MANTLE = "#181825"
_SURFACE0 = "#313244"
_SURFACE1 = "#45475a"
_OVERLAY0 = "#6c7086"
_TEXT = "#cdd6f4"
_SUBTEXT = "#a6adc8"
_BLUE = "#89b4fa"
_BLUE_H = "#a4c4fc"
_GREEN = "#a6e3a1"
_GREEN_H = "#b8ecb4"
_PINK = "#f5c2e7"
_YELLOW = "#f9e2af"
_RED = "#f38ba8"
_RED_H = "#f5a0b8"
_LAVENDER = "#b4befe"

_GLOBAL_CSS = f"""
    QMainWindow, QWidget#page {{ background: {_BASE}; }}
    QLabel {{ color: {_TEXT}; }}
"""

_CELL_PX = 84
_COLS = 3


def _styled_btn(
    text: str,
    *,
    bg: str = _SURFACE0,
    hover: str = _SURFACE1,
    fg: str = _TEXT,
    font_size: int = 14,
    bold: bool = True,
    min_w: int = 0,
    min_h: int = 44,
    radius: int = 8,
) -> QPushButton:
    btn = QPushButton(text)
    btn.setFont(QFont("Helvetica", font_size, QFont.Weight.Bold if bold else QFont.Weight.Normal))
    btn.setMinimumHeight(min_h)
    if min_w:
        btn.setMinimumWidth(min_w)
    btn.setFocusPolicy(Qt.FocusPolicy.NoFocus)
    btn.setCursor(Qt.CursorShape.PointingHandCursor)
    _paint(btn, bg, hover, fg, radius)
    return btn


def _paint(btn: QPushButton, bg: str, hover: str, fg: str, radius: int = 8) -> None:
    btn.setStyleSheet(
        f"QPushButton {{ background:{bg}; color:{fg};"
        f" border:none; border-radius:{radius}px; padding:6px 18px; }}"
        f" QPushButton:hover {{ background:{hover}; }}"
    )


# ═══════════════════════════════════════════════════════════════════════════
# Pages
# ═══════════════════════════════════════════════════════════════════════════


class _MenuPage(QWidget):
    """Main menu with play and quit."""

    def __init__(self) -> None:
        super().__init__()
        self.setObjectName("page")

        root = QVBoxLayout(self)
        root.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.setSpacing(12)
        root.setContentsMargins(30, 30, 30, 30)

        title = QLabel("TARGET  NUMBER")
        title.setFont(QFont("Helvetica", 34, QFont.Weight.Bold))
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.addWidget(title)

        root.addSpacerItem(QSpacerItem(0, 16))

        sub = QLabel(
            "Pick a number, an operation, then a second number.\n"
            "Each of + - × ÷ may be used once. Hit the target on the last move."
        )
        sub.setFont(QFont("Helvetica", 13))
        sub.setStyleSheet(f"color:{_SUBTEXT};")
        sub.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.addWidget(sub)

        root.addSpacerItem(QSpacerItem(0, 24))

        self.play_btn = _styled_btn(
            "P L A Y", bg=_BLUE, hover=_LAVENDER, fg=_BASE,
            font_size=16, min_w=240, min_h=52,
        )
        root.addWidget(self.play_btn, alignment=Qt.AlignmentFlag.AlignCenter)

        root.addSpacerItem(QSpacerItem(0, 4))

        self.quit_btn = _styled_btn(
            "Q U I T", bg=_RED, hover=_RED_H, fg=_BASE, min_w=240, font_size=13
        )
        root.addWidget(self.quit_btn, alignment=Qt.AlignmentFlag.AlignCenter)


class _GamePage(QWidget):
    """The number grid, operation buttons, and move history."""

    def __init__(self, game: GamePlay) -> None:
        super().__init__()
        self.setObjectName("page")
        self.game = game

        root = QVBoxLayout(self)
        root.setSpacing(8)
        root.setContentsMargins(16, 10, 16, 10)

        # target + moves
        self._target = QLabel()
        self._target.setFont(QFont("Helvetica", 20, QFont.Weight.Bold))
        self._target.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.addWidget(self._target)

        self._stats = QLabel()
        self._stats.setFont(QFont("Helvetica", 13))
        self._stats.setStyleSheet(f"color:{_PINK};")
        self._stats.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.addWidget(self._stats)

        # grid
        frame = QFrame()
        frame.setStyleSheet(f"background:{_MANTLE}; border-radius:10px;")
        grid = QGridLayout(frame)
        grid.setSpacing(6)
        grid.setContentsMargins(8, 8, 8, 8)
        root.addWidget(frame, alignment=Qt.AlignmentFlag.AlignCenter)

        self._cells: list[QPushButton] = []
        for slot in range(len(game.state.grid)):
            b = QPushButton()
            b.setFixedSize(_CELL_PX, _CELL_PX)
            b.setFont(QFont("Helvetica", 24, QFont.Weight.Bold))
            b.setFocusPolicy(Qt.FocusPolicy.NoFocus)
            b.clicked.connect(lambda _, s=slot: self.select(s))
            r, c = divmod(slot, _COLS)
            grid.addWidget(b, r, c)
            self._cells.append(b)

        # operations
        ops = QHBoxLayout()
        ops.setAlignment(Qt.AlignmentFlag.AlignCenter)
        ops.setSpacing(10)
        self._op_btns: dict[Operation, QPushButton] = {}
        for op in Operation:
            b = _styled_btn(str(op), font_size=20, min_w=64, min_h=52)
            b.clicked.connect(lambda _, o=op: self.choose(o))
            ops.addWidget(b)
            self._op_btns[op] = b
        root.addLayout(ops)

        # actions
        actions = QHBoxLayout()
        actions.setAlignment(Qt.AlignmentFlag.AlignCenter)
        actions.setSpacing(8)
        self.reset_btn = _styled_btn("RESET", bg=_PINK, hover=_LAVENDER, fg=_BASE, font_size=11, min_h=34)
        self.new_btn = _styled_btn("NEW", bg=_BLUE, hover=_BLUE_H, fg=_BASE, font_size=11, min_h=34)
        self.hint_btn = _styled_btn("HINT", bg=_YELLOW, hover=_GREEN_H, fg=_BASE, font_size=11, min_h=34)
        self.solution_btn = _styled_btn("SOLUTION", bg=_GREEN, hover=_GREEN_H, fg=_BASE, font_size=11, min_h=34)
        self.reset_btn.clicked.connect(self.reset)
        self.hint_btn.clicked.connect(self.hint)
        self.solution_btn.clicked.connect(self.toggle_solution)
        for b in (self.reset_btn, self.new_btn, self.hint_btn, self.solution_btn):
            actions.addWidget(b)
        root.addLayout(actions)

        # history + solution
        self._history = QLabel()
        self._history.setFont(QFont("Helvetica", 13))
        self._history.setStyleSheet(f"color:{_SUBTEXT};")
        self._history.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.addWidget(self._history)

        self._solution = QLabel()
        self._solution.setFont(QFont("Helvetica", 13))
        self._solution.setStyleSheet(f"color:{_BLUE};")
        self._solution.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._solution.hide()
        root.addWidget(self._solution)

        # status
        self._status = QLabel(
            "1-9  cell     + - * /  operation     R  reset     M  menu"
        )
        self._status.setFont(QFont("Helvetica", 11))
        self._status.setStyleSheet(f"color:{_OVERLAY0};")
        self._status.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.addWidget(self._status)

        self.sync()

    # -- helpers --

    def sync(self) -> None:
        state = self.game.state
        anchor = state.anchor
        self._target.setText(f"Target: {state.target}")
        self._stats.setText(f"Moves left: {state.moves_left}")

        for slot, b in enumerate(self._cells):
            v = state.grid[slot]
            if v is None:
                b.setText("")
                b.setEnabled(False)
                b.setStyleSheet(
                    f"QPushButton{{background:{_SURFACE0};border:none;border-radius:8px;}}"
                )
                continue
            b.setEnabled(True)
            b.setText(str(v))
            selected = anchor is not None and anchor.slot == slot
            bg = _GREEN if selected else _BLUE
            hv = _GREEN_H if selected else _BLUE_H
            b.setStyleSheet(
                f"QPushButton{{background:{bg};color:{_BASE};"
                f"border:none;border-radius:8px;font-weight:bold;}}"
                f"QPushButton:hover{{background:{hv};}}"
            )

        for op, b in self._op_btns.items():
            if op in state.used_operations:
                b.setEnabled(False)
                _paint(b, _MANTLE, _MANTLE, _OVERLAY0)
            elif op is state.pending_operation:
                b.setEnabled(True)
                _paint(b, _GREEN, _GREEN_H, _BASE)
            else:
                b.setEnabled(True)
                _paint(b, _SURFACE0, _SURFACE1, _TEXT)

        self._history.setText(
            "\n".join(f"{i}.  {step}" for i, step in enumerate(state.history, 1))
        )

        steps = self.game.get_solution() or ()
        self._solution.setText(
            f"Solution to reach {state.target}:\n"
            + "\n".join(f"Step {i}:  {step}" for i, step in enumerate(steps, 1))
        )

    def _set_status(self, text: str, colour: str = _YELLOW) -> None:
        self._status.setText(text)
        self._status.setStyleSheet(f"color:{colour};")

    def select(self, slot: int) -> None:
        result = self.game.select_slot(slot)
        if result.error:
            self._set_status(f"Invalid operation! {result.error}", _RED)
        self.sync()

    def choose(self, op: Operation) -> None:
        self.game.select_operation(op)
        self.sync()

    def reset(self) -> None:
        self.game.reset_puzzle()
        self._set_status("Puzzle reset")
        self.sync()

    def hint(self) -> None:
        move = Solver.hint(self.game.state)
        if move is None:
            self._set_status(
                "The round is over" if self.game.is_over
                else "No winning line from here, press R to reset"
            )
            return
        result = self.game.play(move.anchor_slot, move.operation, move.operand_slot)
        self._set_status(f"Hint: {result.step}", _BLUE)
        self.sync()

    def toggle_solution(self) -> None:
        self._solution.setVisible(not self._solution.isVisible())


class _OutcomePage(QWidget):
    """Win / loss screen with navigation buttons."""

    def __init__(self, outcome: Outcome) -> None:
        super().__init__()
        self.setObjectName("page")

        root = QVBoxLayout(self)
        root.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.setSpacing(10)
        root.setContentsMargins(30, 30, 30, 30)

        if outcome.won:
            headline, colour = "★  T A R G E T  ★", _GREEN
        else:
            headline, colour = "G A M E   O V E R", _RED

        star = QLabel(headline)
        star.setFont(QFont("Helvetica", 32, QFont.Weight.Bold))
        star.setStyleSheet(f"color:{colour};")
        star.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.addWidget(star)

        root.addSpacerItem(QSpacerItem(0, 20))

        for txt, col in [
            (outcome.message(), _SUBTEXT),
            (f"Target:  {outcome.target}", _YELLOW),
            (f"Reached: {outcome.result}", _YELLOW),
        ]:
            lbl = QLabel(txt)
            lbl.setFont(QFont("Helvetica", 18, QFont.Weight.Bold))
            lbl.setStyleSheet(f"color:{col};")
            lbl.setAlignment(Qt.AlignmentFlag.AlignCenter)
            root.addWidget(lbl)

        root.addSpacerItem(QSpacerItem(0, 24))

        self.again_btn = _styled_btn(
            "NEW PUZZLE", bg=_GREEN, hover=_GREEN_H, fg=_BASE,
            font_size=16, min_w=240, min_h=50,
        )
        root.addWidget(self.again_btn, alignment=Qt.AlignmentFlag.AlignCenter)

        self.retry_btn = _styled_btn("TRY AGAIN", min_w=240, font_size=13)
        root.addWidget(self.retry_btn, alignment=Qt.AlignmentFlag.AlignCenter)

        self.menu_btn = _styled_btn("M E N U", min_w=240, font_size=13)
        root.addWidget(self.menu_btn, alignment=Qt.AlignmentFlag.AlignCenter)


# ═══════════════════════════════════════════════════════════════════════════
# Main window
# ═══════════════════════════════════════════════════════════════════════════

_IDX_MENU = 0
_IDX_GAME = 1
_IDX_OUTCOME = 2

_OPERATION_KEYS = {
    Qt.Key.Key_Plus: Operation.ADD,
    Qt.Key.Key_Minus: Operation.SUBTRACT,
    Qt.Key.Key_Asterisk: Operation.MULTIPLY,
    Qt.Key.Key_X: Operation.MULTIPLY,
    Qt.Key.Key_Slash: Operation.DIVIDE,
}


class _MainWindow(QMainWindow):
    def __init__(self, rng: random.Random | None) -> None:
        super().__init__()
        self._rng = rng
        self._game: GamePlay | None = None

        self.setWindowTitle("Target Number")
        self.setStyleSheet(_GLOBAL_CSS)
        self.setMinimumSize(480, 680)

        self._stack = QStackedWidget()
        self.setCentralWidget(self._stack)

        # menu
        self._menu = _MenuPage()
        self._menu.play_btn.clicked.connect(self._on_play)
        self._menu.quit_btn.clicked.connect(self.close)
        self._stack.addWidget(self._menu)  # 0

        # placeholders (replaced dynamically)
        self._game_page: _GamePage | None = None
        self._stack.addWidget(QWidget())  # 1
        self._stack.addWidget(QWidget())  # 2

        self._stack.setCurrentIndex(_IDX_MENU)

    # -- navigation ---

    def _replace(self, idx: int, page: QWidget) -> None:
        old = self._stack.widget(idx)
        self._stack.removeWidget(old)
        old.deleteLater()
        self._stack.insertWidget(idx, page)
        self._stack.setCurrentIndex(idx)

    def _show_menu(self) -> None:
        self._stack.setCurrentIndex(_IDX_MENU)

    def _on_play(self) -> None:
        if self._game is None:
            self._game = GamePlay(self._rng)
            self._game.subscribe(self._on_outcome)
        else:
            self._game.start_new_game()
        self._show_game()

    def _on_retry(self) -> None:
        assert self._game is not None
        self._game.reset_puzzle()
        self._show_game()

    def _show_game(self) -> None:
        assert self._game is not None
        page = _GamePage(self._game)
        page.new_btn.clicked.connect(self._on_play)
        self._game_page = page
        self._replace(_IDX_GAME, page)

    def _on_outcome(self, outcome: Outcome) -> None:
        if self._game_page is not None:
            self._game_page.sync()
        QTimer.singleShot(int(OUTCOME_DELAY * 1000), lambda: self._show_outcome(outcome))

    def _show_outcome(self, outcome: Outcome) -> None:
        page = _OutcomePage(outcome)
        page.again_btn.clicked.connect(self._on_play)
        page.retry_btn.clicked.connect(self._on_retry)
        page.menu_btn.clicked.connect(self._show_menu)
        self._replace(_IDX_OUTCOME, page)

    # -- keyboard ---

    def keyPressEvent(self, event: QKeyEvent | None) -> None:  # noqa: N802
        if event is None:
            return
        key = event.key()
        idx = self._stack.currentIndex()

        if idx == _IDX_MENU:
            if key == Qt.Key.Key_Return:
                self._on_play()
            elif key in (Qt.Key.Key_Q, Qt.Key.Key_Escape):
                self.close()

        elif idx == _IDX_GAME and self._game_page is not None:
            gp = self._game_page
            if Qt.Key.Key_1.value <= key <= Qt.Key.Key_9.value:
                gp.select(key - Qt.Key.Key_1.value)
            elif key in _OPERATION_KEYS:
                gp.choose(_OPERATION_KEYS[key])
            elif key == Qt.Key.Key_R:
                gp.reset()
            elif key == Qt.Key.Key_N:
                self._on_play()
            elif key == Qt.Key.Key_H:
                gp.hint()
            elif key == Qt.Key.Key_S:
                gp.toggle_solution()
            elif key in (Qt.Key.Key_M, Qt.Key.Key_Escape):
                self._show_menu()

        elif idx == _IDX_OUTCOME:
            if key in (Qt.Key.Key_N, Qt.Key.Key_Return):
                self._on_play()
            elif key == Qt.Key.Key_R:
                self._on_retry()
            elif key in (Qt.Key.Key_M, Qt.Key.Key_Escape):
                self._show_menu()

        else:
            super().keyPressEvent(event)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------
def run(rng: random.Random | None = None) -> None:
    """Launch the PyQt6 GUI (opens directly to the menu)."""
    qapp = QApplication.instance() or QApplication(sys.argv)
    window = _MainWindow(rng)
    window.show()
    qapp.exec()
