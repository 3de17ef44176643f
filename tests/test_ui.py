import math

import pygame
import pytest

from board import Move, WHITE, BLACK
from bot import PlayerKind
from ui import AppUI, axial_to_pixel, fit_radius, hex_corners, kind_cycle, point_in_poly


@pytest.fixture
def app(monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    pygame.init()
    screen = pygame.display.set_mode((800, 600))
    ui = AppUI(screen, size=3, kinds={WHITE: PlayerKind.HUMAN, BLACK: PlayerKind.RANDOM}, seed=1)
    ui.state = "game"
    ui._new_game()
    yield ui
    pygame.quit()


def black_to_move(ui):
    assert ui._apply(Move(0, 0))
    assert ui.game.current == BLACK


def test_hex_corners_are_on_the_circle():
    pts = hex_corners((100, 50), 10)
    assert len(pts) == 6
    for x, y in pts:
        assert math.isclose(math.hypot(x - 100, y - 50), 10)


def test_point_in_hex():
    poly = hex_corners((0, 0), 10)
    assert point_in_poly((0, 0), poly)
    assert point_in_poly((5, 5), poly)
    assert not point_in_poly((20, 0), poly)


def test_board_layout_is_a_rhombus():
    origin = (10, 20)
    assert axial_to_pixel(0, 0, origin, 10) == origin
    x1, y1 = axial_to_pixel(1, 0, origin, 10)
    x2, y2 = axial_to_pixel(0, 1, origin, 10)
    assert y1 > origin[1] and x1 > origin[0]
    assert math.isclose(y2, origin[1])
    # neighbours (r+1, c-1) and (r+1, c) touch (r, c): centre distance is sqrt(3) * R
    cx, cy = axial_to_pixel(2, 2, origin, 10)
    for dr, dc in [(1, -1), (1, 0), (0, 1), (-1, 1)]:
        nx, ny = axial_to_pixel(2 + dr, 2 + dc, origin, 10)
        assert math.isclose(math.hypot(nx - cx, ny - cy), math.sqrt(3) * 10)


def test_fit_radius_shrinks_with_size():
    small = fit_radius(3, 800, 600, 140)
    big = fit_radius(15, 800, 600, 140)
    assert big < small <= 30.0
    assert big >= 6.0


def test_kind_cycle_wraps():
    k = PlayerKind.HUMAN
    seen = []
    for _ in range(4):
        k = kind_cycle(k)
        seen.append(k)
    assert seen == [PlayerKind.RANDOM, PlayerKind.HEURISTIC, PlayerKind.ROLLOUT, PlayerKind.HUMAN]


def test_bot_move_is_applied_for_the_current_game(app):
    black_to_move(app)
    app._start_bot_if_needed()
    app.bot_thread.join(timeout=10)
    assert not app.bot_thinking
    mv = app._take_bot_move()
    assert mv is not None and app.game.board.is_empty(mv.r, mv.c)
    assert app._take_bot_move() is None


def test_bot_move_from_an_abandoned_game_is_dropped(app):
    black_to_move(app)
    app._start_bot_if_needed()
    app.bot_thread.join(timeout=10)
    stale = app.bot_move
    app._new_game()
    assert app.bot_move is None
    # a late write from the old worker still carries the old epoch
    app.bot_move = stale
    assert app._take_bot_move() is None


def test_bot_move_never_lands_on_a_human_turn(app):
    assert app.game.current == WHITE
    app.bot_move = (app.epoch, Move(1, 1))
    assert app._take_bot_move() is None
    assert app.game.board.is_empty(1, 1)


@pytest.mark.filterwarnings("ignore::pytest.PytestUnhandledThreadExceptionWarning")
def test_failing_bot_does_not_leave_the_ui_thinking(app):
    class Broken:
        def choose_move(self, board, side):
            raise RuntimeError("boom")

    black_to_move(app)
    app.players[BLACK] = Broken()
    app._start_bot_if_needed()
    app.bot_thread.join(timeout=10)
    assert not app.bot_thinking
    assert app.bot_move is None
