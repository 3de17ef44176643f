# ui.py
from __future__ import annotations

import logging
import math
import threading
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

import pygame
import pygame_gui

from board import Move, EMPTY, WHITE, BLACK
from bot import PlayerKind, make_player
from connectivity import winning_path
from game import NashGame, MIN_SIZE, MAX_SIZE, DEFAULT_SIZE, LINE, side_seed

log = logging.getLogger(__name__)

KIND_LABELS = {
    PlayerKind.HUMAN: "Человек",
    PlayerKind.RANDOM: "Случайный",
    PlayerKind.HEURISTIC: "Эвристика",
    PlayerKind.ROLLOUT: "Розыгрыши",
}


# ---------------- geometry helpers ----------------
def hex_corners(center, radius: float):
    cx, cy = center
    pts = []
    for i in range(6):
        ang = math.radians(60 * i - 30)  # pointy-top
        pts.append((cx + radius * math.cos(ang), cy + radius * math.sin(ang)))
    return pts


def axial_to_pixel(r: int, c: int, origin, radius: float):
    # ромб: строка сдвинута на пол-клетки вправо, соседи совпадают с board.NEIGHBORS
    ox, oy = origin
    dx = math.sqrt(3.0) * radius
    dy = 1.5 * radius
    x = ox + c * dx + r * (dx * 0.5)
    y = oy + r * dy
    return (x, y)


def point_in_poly(p, poly):
    x, y = p
    inside = False
    n = len(poly)
    for i in range(n):
        x1, y1 = poly[i]
        x2, y2 = poly[(i + 1) % n]
        cond = ((y1 > y) != (y2 > y)) and (x < (x2 - x1) * (y - y1) / (y2 - y1 + 1e-12) + x1)
        if cond:
            inside = not inside
    return inside


def fit_radius(size: int, width: int, height: int, top: int) -> float:
    """Радиус гекса, при котором доска size x size влезает в окно под панелью."""
    # ширина ромба: (size + (size-1)/2) * sqrt(3) * R, высота: (1.5*(size-1) + 2) * R
    by_w = (width - 40) / (math.sqrt(3.0) * (size + (size - 1) * 0.5))
    by_h = (height - top - 40) / (1.5 * (size - 1) + 2)
    return max(6.0, min(by_w, by_h, 30.0))


def kind_cycle(kind: PlayerKind) -> PlayerKind:
    kinds = list(PlayerKind)
    return kinds[(kinds.index(kind) + 1) % len(kinds)]


@dataclass
class Theme:
    bg: Tuple[int, int, int] = (30, 30, 35)
    panel: Tuple[int, int, int] = (24, 24, 28)
    panel_border: Tuple[int, int, int] = (60, 60, 70)

    empty: Tuple[int, int, int] = (210, 210, 210)
    grid: Tuple[int, int, int] = (70, 70, 80)

    white: Tuple[int, int, int] = (245, 240, 225)
    black: Tuple[int, int, int] = (45, 45, 55)

    side_white: Tuple[int, int, int] = (200, 170, 90)
    side_black: Tuple[int, int, int] = (90, 90, 160)
    path: Tuple[int, int, int] = (90, 210, 120)

    text: Tuple[int, int, int] = (235, 235, 235)
    muted: Tuple[int, int, int] = (180, 180, 190)


class AppUI:
    HUD_H = 140

    def __init__(self, screen: pygame.Surface, size: int = DEFAULT_SIZE,
                 kinds: Optional[Dict[int, PlayerKind]] = None, seed: Optional[int] = None):
        self.screen = screen
        self.clock = pygame.time.Clock()

        self.manager = pygame_gui.UIManager(screen.get_size())
        self.ui_elems = []

        self.font = pygame.font.SysFont("consolas", 18)
        self.big_font = pygame.font.SysFont("consolas", 30)

        self.theme = Theme()
        self.size = size
        self.seed = seed
        self.kinds: Dict[int, PlayerKind] = dict(kinds or {WHITE: PlayerKind.HUMAN, BLACK: PlayerKind.HEURISTIC})

        self.state = "menu"  # menu/how/settings/game
        self.game = NashGame(self.size)
        self.path = None

        self.radius = 22.0
        self.origin = (40, self.HUD_H + 30)
        self.cells = []  # (r,c,poly,bbox)

        # боты
        self.players = {}
        self.bot_thread: Optional[threading.Thread] = None
        self.bot_move: Optional[Tuple[int, Move]] = None  # (epoch, ход)
        self.bot_thinking = False
        self.bot_lock = threading.Lock()
        self.epoch = 0  # ответ бота от прошлой партии игнорируется

        self._build_cells()
        self._build_menu()

    # ---------- UI build ----------
    def _clear_ui(self):
        for el in self.ui_elems:
            el.kill()
        self.ui_elems.clear()

    def _button(self, rect, text, oid):
        self.ui_elems.append(pygame_gui.elements.UIButton(
            relative_rect=pygame.Rect(rect),
            text=text,
            manager=self.manager,
            object_id=oid,
        ))

    def _build_menu(self):
        self._clear_ui()
        w, _ = self.screen.get_size()
        for i, (text, oid) in enumerate([("Играть", "#btn_play"), ("Как играть", "#btn_how"),
                                         ("Настройки", "#btn_settings"), ("Выход", "#btn_exit")]):
            self._button(((w // 2 - 140, 190 + 70 * i), (280, 55)), text, oid)

    def _build_how(self):
        self._clear_ui()
        self._button(((20, 20), (120, 40)), "Назад", "#btn_back")

    def _build_settings(self):
        self._clear_ui()
        self._button(((20, 20), (120, 40)), "Назад", "#btn_back")
        self.ui_elems.append(pygame_gui.elements.UILabel(
            pygame.Rect((160, 25), (460, 30)), "Настройки (размер + игроки)", self.manager
        ))

        self._button(((20, 90), (50, 45)), "-", "#size_dec")
        self.ui_elems.append(pygame_gui.elements.UILabel(
            pygame.Rect((80, 97), (200, 30)), f"Размер доски: {self.size}", self.manager
        ))
        self._button(((290, 90), (50, 45)), "+", "#size_inc")

        self._button(((20, 160), (320, 45)), f"Белые: {KIND_LABELS[self.kinds[WHITE]]}", "#kind_white")
        self._button(((20, 220), (320, 45)), f"Чёрные: {KIND_LABELS[self.kinds[BLACK]]}", "#kind_black")

    def _build_game(self):
        self._clear_ui()

        w, _ = self.screen.get_size()
        pad = 20
        btn_w, btn_h = 160, 40
        x = w - pad - btn_w
        y0 = 20
        gap = 10

        self._button(((x, y0), (btn_w, btn_h)), "Меню", "#btn_menu")
        self._button(((x, y0 + btn_h + gap), (btn_w, btn_h)), "Новая игра", "#btn_new")

    # ---------- geometry ----------
    def _build_cells(self):
        self.cells.clear()
        w, h = self.screen.get_size()
        n = self.game.size
        self.radius = fit_radius(n, w, h, self.HUD_H)
        self.origin = (20 + math.sqrt(3.0) * self.radius * 0.5, self.HUD_H + 20 + self.radius)
        for r in range(n):
            for c in range(n):
                center = axial_to_pixel(r, c, self.origin, self.radius)
                poly = hex_corners(center, self.radius)
                xs = [p[0] for p in poly]
                ys = [p[1] for p in poly]
                bbox = pygame.Rect(min(xs), min(ys), max(xs) - min(xs), max(ys) - min(ys))
                self.cells.append((r, c, poly, bbox))

    def _pick_cell(self, pos) -> Optional[Move]:
        mx, my = pos
        for r, c, poly, bbox in self.cells:
            if not bbox.collidepoint(mx, my):
                continue
            if point_in_poly((mx, my), poly):
                return Move(r, c)
        return None

    # ---------- game flow ----------
    def _abandon_bot(self):
        with self.bot_lock:
            self.epoch += 1
            self.bot_move = None
            self.bot_thinking = False

    def _new_game(self):
        self._abandon_bot()
        self.game = NashGame(self.size)
        self.path = None
        self.players = {
            side: make_player(kind, seed=side_seed(self.seed, side))
            for side, kind in self.kinds.items() if kind.is_bot
        }
        log.info("new game: size=%d white=%s black=%s", self.size,
                 self.kinds[WHITE].value, self.kinds[BLACK].value)
        self._build_cells()
        self._start_bot_if_needed()

    def _human_turn(self) -> bool:
        return not self.game.over and not self.kinds[self.game.current].is_bot

    def _apply(self, mv: Move) -> bool:
        if not self.game.play(mv):
            return False
        if self.game.over:
            if self.game.winner != EMPTY:
                self.path = winning_path(self.game.board, self.game.winner)
            log.info("game over after %d moves, winner=%s (%s)",
                     self.game.moves_played, self.game.winner, self.game.win_kind)
        return True

    # ---------- bot async ----------
    def _start_bot_if_needed(self):
        if self.game.over:
            return
        side = self.game.current
        if not self.kinds[side].is_bot:
            return
        if self.bot_thinking:
            return

        self.bot_thinking = True
        self.bot_move = None
        player = self.players[side]
        epoch = self.epoch

        def worker(snapshot: NashGame):
            mv = None
            try:
                mv = player.choose_move(snapshot.board, snapshot.current)
            finally:
                with self.bot_lock:
                    if epoch == self.epoch:
                        self.bot_move = (epoch, mv) if mv is not None else None
                        self.bot_thinking = False

        snap = self.game.clone()
        self.bot_thread = threading.Thread(target=worker, args=(snap,), daemon=True)
        self.bot_thread.start()

    def _take_bot_move(self) -> Optional[Move]:
        with self.bot_lock:
            got, self.bot_move = self.bot_move, None
        if got is None or self.game.over:
            return None
        epoch, mv = got
        if epoch != self.epoch or not self.kinds[self.game.current].is_bot:
            return None
        return mv

    # ---------- main loop ----------
    def run(self):
        running = True
        while running:
            dt = self.clock.tick(60) / 1000.0

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                    break

                self.manager.process_events(event)

                if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    if self.state == "game" and self._human_turn() and not self.bot_thinking:
                        mv = self._pick_cell(event.pos)
                        if mv and self._apply(mv):
                            self._start_bot_if_needed()

                if event.type == pygame_gui.UI_BUTTON_PRESSED:
                    oid = event.ui_object_id

                    if oid.endswith("#btn_exit"):
                        running = False

                    elif oid.endswith("#btn_play"):
                        self.state = "game"
                        self._build_game()
                        self._new_game()

                    elif oid.endswith("#btn_how"):
                        self.state = "how"
                        self._build_how()

                    elif oid.endswith("#btn_settings"):
                        self.state = "settings"
                        self._build_settings()

                    elif oid.endswith("#btn_back") or oid.endswith("#btn_menu"):
                        self._abandon_bot()
                        self.state = "menu"
                        self._build_menu()

                    elif oid.endswith("#btn_new"):
                        self._new_game()

                    elif oid.endswith("#size_dec"):
                        self.size = max(MIN_SIZE, self.size - 1)
                        self._build_settings()
                    elif oid.endswith("#size_inc"):
                        self.size = min(MAX_SIZE, self.size + 1)
                        self._build_settings()

                    elif oid.endswith("#kind_white"):
                        self.kinds[WHITE] = kind_cycle(self.kinds[WHITE])
                        self._build_settings()
                    elif oid.endswith("#kind_black"):
                        self.kinds[BLACK] = kind_cycle(self.kinds[BLACK])
                        self._build_settings()

            self.manager.update(dt)

            if self.state == "game":
                mv = self._take_bot_move()
                if mv is not None and self._apply(mv):
                    self._start_bot_if_needed()

            self._render()

        pygame.quit()

    # ---------- rendering ----------
    def _render(self):
        self.screen.fill(self.theme.bg)

        if self.state == "menu":
            title = self.big_font.render("NASH / HEX", True, self.theme.text)
            self.screen.blit(title, (self.screen.get_width() // 2 - title.get_width() // 2, 120))

        elif self.state == "how":
            lines = [
                "Цель игры:",
                "Белые соединяют ЛЕВЫЙ и ПРАВЫЙ край.",
                "Чёрные соединяют ВЕРХ и НИЗ.",
                "Игроки по очереди занимают клетки, первыми ходят белые.",
                "Полностью занятая строка (белые) или столбец (чёрные)",
                "тоже приносит победу.",
            ]
            y = 80
            for s in lines:
                txt = self.font.render(s, True, self.theme.text)
                self.screen.blit(txt, (20, y))
                y += 26

        elif self.state == "settings":
            note = self.font.render("Розыгрыши на большой доске думают долго.", True, self.theme.muted)
            self.screen.blit(note, (20, 290))

        elif self.state == "game":
            self._draw_top_panel()
            self._draw_board()
            self._draw_game_hud()

        self.manager.draw_ui(self.screen)
        pygame.display.flip()

    def _draw_top_panel(self):
        panel = pygame.Rect(0, 0, self.screen.get_width(), self.HUD_H)
        pygame.draw.rect(self.screen, self.theme.panel, panel)
        pygame.draw.rect(self.screen, self.theme.panel_border, panel, 1)

    def _draw_board(self):
        for r, c, poly, _ in self.cells:
            v = self.game.board.cells[r][c]
            col = self.theme.empty
            if v == WHITE:
                col = self.theme.white
            elif v == BLACK:
                col = self.theme.black

            pygame.draw.polygon(self.screen, col, poly)
            pygame.draw.polygon(self.screen, self.theme.grid, poly, width=1)

        # подсветка крайних гексов: свои края у каждой стороны
        n = self.game.size
        for r, c, poly, _ in self.cells:
            if c == 0 or c == n - 1:
                pygame.draw.polygon(self.screen, self.theme.side_white, poly, width=3)
            if r == 0 or r == n - 1:
                pygame.draw.polygon(self.screen, self.theme.side_black, poly, width=3)

        on_path = set(self.path or [])
        for r, c, poly, _ in self.cells:
            if (r, c) in on_path:
                pygame.draw.polygon(self.screen, self.theme.path, poly, width=3)

        if self.game.last_move:
            mv = self.game.last_move
            for r, c, poly, _ in self.cells:
                if r == mv.r and c == mv.c:
                    pygame.draw.polygon(self.screen, (230, 80, 80), poly, width=3)
                    break

    def _draw_game_hud(self):
        x = 20
        y = 70

        def pname(p: int) -> str:
            return "Белые" if p == WHITE else "Чёрные"

        if self.game.over:
            if self.game.winner == EMPTY:
                msg = "Доска заполнена"
            elif self.game.win_kind == LINE:
                msg = f"Победа: {pname(self.game.winner)} (линия)"
            else:
                msg = f"Победа: {pname(self.game.winner)}"
        else:
            msg = f"Ход: {pname(self.game.current)}"

        self.screen.blit(self.big_font.render(msg, True, self.theme.text), (x, 18))

        legend1 = self.font.render(f"Белые ({KIND_LABELS[self.kinds[WHITE]]}): ЛЕВО ↔ ПРАВО",
                                   True, self.theme.side_white)
        legend2 = self.font.render(f"Чёрные ({KIND_LABELS[self.kinds[BLACK]]}): ВЕРХ ↔ НИЗ",
                                   True, self.theme.side_black)
        self.screen.blit(legend1, (x, y))
        self.screen.blit(legend2, (x, y + 24))

        if self.bot_thinking:
            self.screen.blit(self.font.render("Бот думает...", True, self.theme.text), (x, y + 48))
