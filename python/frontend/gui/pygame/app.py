"""Pygame GUI frontend — fully self-contained.

Includes main menu, gameplay with clickable cells and operation buttons,
outcome banner, and a solution overlay.  No terminal interaction required.
"""

from __future__ import annotations

import enum
import random
import time

import pygame

from backend.engine.gameplay import OUTCOME_DELAY, GamePlay, Outcome
from backend.engine.gamesolver import Solver
from backend.models.puzzle import Operation

# ---------------------------------------------------------------------------
# Catppuccin Mocha palette
# ---------------------------------------------------------------------------
COL_BASE = (30, 30, 46)
COL_MANTLE = (24, 24, 37)
COL_SURFACE0 = (49, 50, 68)
COL_SURFACE1 = (69, 71, 90)
COL_OVERLAY0 = (108, 112, 134)
COL_TEXT = (205, 214, 244)
COL_SUBTEXT = (166, 173, 200)
COL_BLUE = (137, 180, 250)
COL_LAVENDER = (180, 190, 254)
COL_GREEN = (166, 227, 161)
COL_PINK = (245, 194, 231)
COL_YELLOW = (249, 226, 175)
COL_RED = (243, 139, 168)

# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------
WIN_W, WIN_H = 500, 700
CELL_GAP = 8
CELL_PX = 96
GRID_COLS = 3
GRID_TOP = 110


# ---------------------------------------------------------------------------
# Screen enum
# ---------------------------------------------------------------------------
class _Screen(enum.Enum):
    MENU = "menu"
    PLAYING = "playing"
    RULES = "rules"


# ---------------------------------------------------------------------------
# Simple clickable button
# ---------------------------------------------------------------------------
class _Btn:
    __slots__ = ("rect", "text", "font", "bg", "hover", "fg", "radius", "_hot")

    def __init__(
        self,
        rect: tuple[int, int, int, int],
        text: str,
        font: pygame.font.Font,
        *,
        bg: tuple = COL_SURFACE0,
        hover: tuple = COL_SURFACE1,
        fg: tuple = COL_TEXT,
        radius: int = 8,
    ) -> None:
        self.rect = pygame.Rect(rect)
        self.text = text
        self.font = font
        self.bg = bg
        self.hover = hover
        self.fg = fg
        self.radius = radius
        self._hot = False

    def draw(self, surf: pygame.Surface) -> None:
        c = self.hover if self._hot else self.bg
        pygame.draw.rect(surf, c, self.rect, border_radius=self.radius)
        lbl = self.font.render(self.text, True, self.fg)
        surf.blit(
            lbl,
            (
                self.rect.centerx - lbl.get_width() // 2,
                self.rect.centery - lbl.get_height() // 2,
            ),
        )

    def motion(self, pos: tuple[int, int]) -> None:
        self._hot = self.rect.collidepoint(pos)

    def hit(self, pos: tuple[int, int]) -> bool:
        return self.rect.collidepoint(pos)


# ---------------------------------------------------------------------------
# Centring helpers
# ---------------------------------------------------------------------------
def _cx(w: int) -> int:
    return (WIN_W - w) // 2


def _blit_center(surf: pygame.Surface, rendered: pygame.Surface, y: int) -> None:
    surf.blit(rendered, (_cx(rendered.get_width()), y))


# ---------------------------------------------------------------------------
# Main application
# ---------------------------------------------------------------------------
class PygameApp:
    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng

        pygame.init()
        self._surf = pygame.display.set_mode((WIN_W, WIN_H))
        pygame.display.set_caption("Target Number")
        self._clock = pygame.time.Clock()

        # Fonts
        self._f_big = pygame.font.SysFont("Helvetica", 38, bold=True)
        self._f_title = pygame.font.SysFont("Helvetica", 22, bold=True)
        self._f_cell = pygame.font.SysFont("Helvetica", 34, bold=True)
        self._f_op = pygame.font.SysFont("Helvetica", 26, bold=True)
        self._f_body = pygame.font.SysFont("Helvetica", 16)
        self._f_btn = pygame.font.SysFont("Helvetica", 17, bold=True)
        self._f_btn_sm = pygame.font.SysFont("Helvetica", 14, bold=True)
        self._f_small = pygame.font.SysFont("Helvetica", 13)

        self._screen = _Screen.MENU
        self._game: GamePlay | None = None
        self._status_msg: str = ""
        self._show_solution = False
        # Outcome waiting to be announced, and when to announce it.
        self._pending_outcome: Outcome | None = None
        self._outcome_due = 0.0
        self._banner: Outcome | None = None

        self._build_menu_btns()
        self._build_rules_btns()
        self._build_game_btns()

    # ── buttons ─────────────────────────────────────────────────────────────

    def _build_menu_btns(self) -> None:
        bw_lg = 220
        self._play_btn = _Btn(
            (_cx(bw_lg), 300, bw_lg, 50),
            "P L A Y",
            self._f_btn,
            bg=COL_BLUE,
            hover=COL_LAVENDER,
            fg=COL_BASE,
        )
        self._rules_btn = _Btn(
            (_cx(bw_lg), 364, bw_lg, 42),
            "HOW TO PLAY",
            self._f_btn_sm,
            bg=COL_YELLOW,
            hover=(255, 240, 200),
            fg=COL_BASE,
        )
        self._quit_btn = _Btn(
            (_cx(bw_lg), 420, bw_lg, 42),
            "Q U I T",
            self._f_btn_sm,
            bg=COL_RED,
            hover=(255, 170, 185),
            fg=COL_BASE,
        )
        self._menu_all: list[_Btn] = [self._play_btn, self._rules_btn, self._quit_btn]

    def _build_rules_btns(self) -> None:
        self._rules_back = _Btn(
            (_cx(180), WIN_H - 74, 180, 46), "B A C K", self._f_btn_sm
        )

    def _build_game_btns(self) -> None:
        grid_w = GRID_COLS * CELL_PX + (GRID_COLS - 1) * CELL_GAP
        grid_h = 3 * CELL_PX + 2 * CELL_GAP

        ow, og = 70, 12
        total = len(Operation) * ow + (len(Operation) - 1) * og
        sx = _cx(total)
        oy = GRID_TOP + grid_h + 20
        self._op_btns: dict[Operation, _Btn] = {
            op: _Btn((sx + i * (ow + og), oy, ow, 56), str(op), self._f_op)
            for i, op in enumerate(Operation)
        }

        bw, gap = 100, 10
        total = 4 * bw + 3 * gap
        sx = _cx(total)
        ay = oy + 76
        self._reset_btn = _Btn(
            (sx, ay, bw, 36), "RESET (R)", self._f_btn_sm,
            bg=COL_PINK, hover=(245, 210, 227), fg=COL_BASE,
        )
        self._new_btn = _Btn(
            (sx + bw + gap, ay, bw, 36), "NEW (N)", self._f_btn_sm,
            bg=COL_BLUE, hover=COL_LAVENDER, fg=COL_BASE,
        )
        self._hint_btn = _Btn(
            (sx + 2 * (bw + gap), ay, bw, 36), "HINT (H)", self._f_btn_sm,
            bg=COL_YELLOW, hover=(255, 240, 200), fg=COL_BASE,
        )
        self._solution_btn = _Btn(
            (sx + 3 * (bw + gap), ay, bw, 36), "SOLUTION (S)", self._f_btn_sm,
            bg=COL_GREEN, hover=(190, 240, 190), fg=COL_BASE,
        )
        self._game_action_btns = [
            self._reset_btn, self._new_btn, self._hint_btn, self._solution_btn,
        ]
        self._grid_origin = (_cx(grid_w), GRID_TOP)

    # ── helpers ─────────────────────────────────────────────────────────────

    def _cell_rect(self, slot: int) -> pygame.Rect:
        ox, oy = self._grid_origin
        r, c = divmod(slot, GRID_COLS)
        return pygame.Rect(
            ox + c * (CELL_PX + CELL_GAP),
            oy + r * (CELL_PX + CELL_GAP),
            CELL_PX,
            CELL_PX,
        )

    # ── drawing ─────────────────────────────────────────────────────────────

    def _draw_menu(self) -> None:
        self._surf.fill(COL_BASE)

        _blit_center(
            self._surf,
            self._f_big.render("TARGET  NUMBER", True, COL_TEXT),
            120,
        )
        _blit_center(
            self._surf,
            self._f_body.render("Combine the numbers to hit the target", True, COL_SUBTEXT),
            200,
        )

        for btn in self._menu_all:
            btn.draw(self._surf)

    def _draw_rules(self) -> None:
        self._surf.fill(COL_BASE)
        _blit_center(
            self._surf,
            self._f_big.render("HOW TO PLAY", True, COL_TEXT),
            40,
        )
        lines = [
            "Pick a number, an operation, then a second number.",
            "The first cell takes the result; the second is used up.",
            "",
            "Each of  +  -  ×  ÷  can be used once,",
            "so every round has exactly four moves.",
            "",
            "Results must be whole numbers from 1 to 100,",
            "and subtraction must stay positive.",
            "",
            "Hit the target with your last move to win.",
        ]
        y = 130
        for line in lines:
            if line:
                _blit_center(self._surf, self._f_body.render(line, True, COL_SUBTEXT), y)
            y += 28
        self._rules_back.draw(self._surf)

    def _draw_game(self) -> None:
        self._surf.fill(COL_BASE)
        game = self._game
        assert game is not None
        state = game.state
        anchor = state.anchor

        # header
        _blit_center(
            self._surf,
            self._f_title.render(f"Target: {state.target}", True, COL_TEXT),
            24,
        )
        _blit_center(
            self._surf,
            self._f_body.render(f"Moves left: {state.moves_left}", True, COL_PINK),
            60,
        )

        # grid bg
        ox, oy = self._grid_origin
        grid_w = GRID_COLS * CELL_PX + (GRID_COLS - 1) * CELL_GAP
        pygame.draw.rect(
            self._surf,
            COL_MANTLE,
            pygame.Rect(ox - CELL_GAP, oy - CELL_GAP, grid_w + 2 * CELL_GAP, grid_w + 2 * CELL_GAP),
            border_radius=10,
        )

        # cells
        for slot, val in enumerate(state.grid):
            rect = self._cell_rect(slot)
            if val is None:
                pygame.draw.rect(self._surf, COL_SURFACE0, rect, border_radius=6)
                continue
            col = COL_GREEN if anchor is not None and anchor.slot == slot else COL_BLUE
            pygame.draw.rect(self._surf, col, rect, border_radius=6)
            lbl = self._f_cell.render(str(val), True, COL_BASE)
            self._surf.blit(
                lbl,
                (
                    rect.centerx - lbl.get_width() // 2,
                    rect.centery - lbl.get_height() // 2,
                ),
            )

        # operation buttons
        for op, btn in self._op_btns.items():
            if op in state.used_operations:
                btn.bg, btn.hover, btn.fg = COL_MANTLE, COL_MANTLE, COL_OVERLAY0
            elif op is state.pending_operation:
                btn.bg, btn.hover, btn.fg = COL_GREEN, COL_GREEN, COL_BASE
            else:
                btn.bg, btn.hover, btn.fg = COL_SURFACE0, COL_SURFACE1, COL_TEXT
            btn.draw(self._surf)

        for btn in self._game_action_btns:
            btn.draw(self._surf)

        # history
        y = self._reset_btn.rect.bottom + 16
        for i, step in enumerate(state.history, 1):
            _blit_center(
                self._surf,
                self._f_body.render(f"{i}.  {step}", True, COL_SUBTEXT),
                y,
            )
            y += 22

        # status message
        if self._status_msg:
            _blit_center(
                self._surf,
                self._f_small.render(self._status_msg, True, COL_YELLOW),
                WIN_H - 48,
            )

        _blit_center(
            self._surf,
            self._f_small.render(
                "Click a number, an operation, then another number     Esc  menu",
                True,
                COL_OVERLAY0,
            ),
            WIN_H - 24,
        )

        if self._show_solution:
            self._draw_solution()
        elif self._banner is not None:
            self._draw_banner(self._banner)

    def _draw_overlay(self, lines: list[tuple[str, tuple]], border: tuple) -> None:
        shade = pygame.Surface((WIN_W, WIN_H), pygame.SRCALPHA)
        shade.fill((0, 0, 0, 160))
        self._surf.blit(shade, (0, 0))

        box_h = 60 + 30 * len(lines)
        box = pygame.Rect(_cx(400), (WIN_H - box_h) // 2, 400, box_h)
        pygame.draw.rect(self._surf, COL_BASE, box, border_radius=12)
        pygame.draw.rect(self._surf, border, box, width=3, border_radius=12)

        y = box.y + 24
        for text, col in lines:
            _blit_center(self._surf, self._f_title.render(text, True, col), y)
            y += 30
        _blit_center(
            self._surf,
            self._f_small.render("Click to close", True, COL_OVERLAY0),
            box.bottom - 24,
        )

    def _draw_solution(self) -> None:
        game = self._game
        assert game is not None
        steps = game.get_solution() or ()
        lines: list[tuple[str, tuple]] = [(f"Solution to reach {game.puzzle.target}", COL_TEXT)]
        lines += [(f"Step {i}:  {step}", COL_SUBTEXT) for i, step in enumerate(steps, 1)]
        self._draw_overlay(lines, COL_BLUE)

    def _draw_banner(self, outcome: Outcome) -> None:
        if outcome.won:
            lines = [("★  T A R G E T  ★", COL_GREEN), (outcome.message(), COL_TEXT)]
            self._draw_overlay(lines, COL_GREEN)
        else:
            lines = [("G A M E   O V E R", COL_RED), (f"The target was {outcome.target}", COL_TEXT)]
            self._draw_overlay(lines, COL_RED)

    # ── event handling ──────────────────────────────────────────────────────

    def _ev_menu(self, ev: pygame.event.Event) -> bool:
        if ev.type == pygame.MOUSEMOTION:
            for b in self._menu_all:
                b.motion(ev.pos)
        elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            if self._play_btn.hit(ev.pos):
                self._start_game()
            elif self._rules_btn.hit(ev.pos):
                self._screen = _Screen.RULES
            elif self._quit_btn.hit(ev.pos):
                return False
        elif ev.type == pygame.KEYDOWN:
            if ev.key == pygame.K_RETURN:
                self._start_game()
            elif ev.key in (pygame.K_q, pygame.K_ESCAPE):
                return False
        return True

    def _ev_rules(self, ev: pygame.event.Event) -> bool:
        if ev.type == pygame.MOUSEMOTION:
            self._rules_back.motion(ev.pos)
        elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            if self._rules_back.hit(ev.pos):
                self._screen = _Screen.MENU
        elif ev.type == pygame.KEYDOWN:
            if ev.key in (pygame.K_ESCAPE, pygame.K_BACKSPACE, pygame.K_m):
                self._screen = _Screen.MENU
        return True

    def _ev_game(self, ev: pygame.event.Event) -> bool:
        game = self._game
        assert game is not None
        if ev.type == pygame.MOUSEMOTION:
            for btn in (*self._game_action_btns, *self._op_btns.values()):
                btn.motion(ev.pos)
        elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            # Overlays swallow the click that closes them.
            if self._show_solution or self._banner is not None:
                self._show_solution = False
                self._banner = None
                return True
            if self._reset_btn.hit(ev.pos):
                self._do_reset()
                return True
            if self._new_btn.hit(ev.pos):
                self._start_game()
                return True
            if self._hint_btn.hit(ev.pos):
                self._do_hint()
                return True
            if self._solution_btn.hit(ev.pos):
                self._show_solution = True
                return True
            for op, btn in self._op_btns.items():
                if btn.hit(ev.pos):
                    game.select_operation(op)
                    return True
            for slot in range(len(game.state.grid)):
                if self._cell_rect(slot).collidepoint(ev.pos):
                    self._select(slot)
                    return True
        elif ev.type == pygame.KEYDOWN:
            _ops = {
                pygame.K_PLUS: Operation.ADD,
                pygame.K_KP_PLUS: Operation.ADD,
                pygame.K_MINUS: Operation.SUBTRACT,
                pygame.K_KP_MINUS: Operation.SUBTRACT,
                pygame.K_ASTERISK: Operation.MULTIPLY,
                pygame.K_KP_MULTIPLY: Operation.MULTIPLY,
                pygame.K_x: Operation.MULTIPLY,
                pygame.K_SLASH: Operation.DIVIDE,
                pygame.K_KP_DIVIDE: Operation.DIVIDE,
            }
            if pygame.K_1 <= ev.key <= pygame.K_9:
                self._select(ev.key - pygame.K_1)
            elif ev.key in _ops:
                game.select_operation(_ops[ev.key])
            elif ev.key == pygame.K_h:
                self._do_hint()
            elif ev.key == pygame.K_s:
                self._show_solution = not self._show_solution
            elif ev.key == pygame.K_r:
                self._do_reset()
            elif ev.key == pygame.K_n:
                self._start_game()
            elif ev.key in (pygame.K_m, pygame.K_ESCAPE):
                self._screen = _Screen.MENU
        return True

    # ── game actions ────────────────────────────────────────────────────────

    def _select(self, slot: int) -> None:
        game = self._game
        assert game is not None
        result = game.select_slot(slot)
        if result.error:
            self._status_msg = f"Invalid operation! {result.error}"
        else:
            self._status_msg = ""
        if result.outcome is not None:
            self._schedule_outcome(result.outcome)

    def _do_hint(self) -> None:
        game = self._game
        assert game is not None
        move = Solver.hint(game.state)
        if move is None:
            self._status_msg = (
                "The round is over" if game.is_over
                else "No winning line from here, press R to reset"
            )
            return
        result = game.play(move.anchor_slot, move.operation, move.operand_slot)
        self._status_msg = f"Hint: {result.step}"
        if result.outcome is not None:
            self._schedule_outcome(result.outcome)

    def _do_reset(self) -> None:
        game = self._game
        assert game is not None
        game.reset_puzzle()
        self._clear_overlays()
        self._status_msg = "Puzzle reset"

    def _schedule_outcome(self, outcome: Outcome) -> None:
        self._pending_outcome = outcome
        self._outcome_due = time.monotonic() + OUTCOME_DELAY

    def _clear_overlays(self) -> None:
        self._pending_outcome = None
        self._banner = None
        self._show_solution = False

    # ── game state ──────────────────────────────────────────────────────────

    def _start_game(self) -> None:
        if self._game is None:
            self._game = GamePlay(self._rng)
        else:
            self._game.start_new_game()
        self._clear_overlays()
        self._status_msg = ""
        self._screen = _Screen.PLAYING

    def _check_outcome(self) -> None:
        if self._pending_outcome is None or time.monotonic() < self._outcome_due:
            return
        self._banner = self._pending_outcome
        self._pending_outcome = None

    # ── main loop ───────────────────────────────────────────────────────────

    def run_loop(self) -> None:
        _dispatch = {
            _Screen.MENU: self._ev_menu,
            _Screen.PLAYING: self._ev_game,
            _Screen.RULES: self._ev_rules,
        }
        _draw = {
            _Screen.MENU: self._draw_menu,
            _Screen.PLAYING: self._draw_game,
            _Screen.RULES: self._draw_rules,
        }

        running = True
        while running:
            for ev in pygame.event.get():
                if ev.type == pygame.QUIT:
                    running = False
                    break
                handler = _dispatch.get(self._screen)
                if handler and not handler(ev):
                    running = False
                    break

            if self._screen == _Screen.PLAYING:
                self._check_outcome()

            drawer = _draw.get(self._screen)
            if drawer:
                drawer()
            pygame.display.flip()
            self._clock.tick(30)

        pygame.quit()


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------
def run(rng: random.Random | None = None) -> None:
    """Launch the Pygame GUI (opens directly to the menu)."""
    app = PygameApp(rng)
    app.run_loop()
