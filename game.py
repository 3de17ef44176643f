# game.py
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from board import Board, Move, EMPTY, WHITE, BLACK, other
from connectivity import has_connection_win, has_straight_line_win

log = logging.getLogger(__name__)

MIN_SIZE, MAX_SIZE, DEFAULT_SIZE = 3, 15, 7

LINE, CONNECTION = "line", "connection"


class NashGame:
    def __init__(self, size: int = DEFAULT_SIZE):
        self.size = size
        self.reset()

    def reset(self):
        self.board = Board(self.size)
        self.current = WHITE
        self.winner: int = EMPTY
        self.win_kind: Optional[str] = None
        self.last_move: Optional[Move] = None
        self.moves_played: int = 0
        self.over = False

    def legal_moves(self) -> List[Move]:
        if self.over:
            return []
        return self.board.empty_cells()

    def play(self, mv: Move) -> bool:
        if self.over:
            return False

        p = self.current
        if not self.board.place(mv.r, mv.c, p):
            return False
        self.last_move = mv
        self.moves_played += 1

        # проверяется только тот, кто сходил: сначала полная линия, потом связь краёв
        if has_straight_line_win(self.board, p):
            self.winner, self.win_kind, self.over = p, LINE, True
        elif has_connection_win(self.board, p):
            self.winner, self.win_kind, self.over = p, CONNECTION, True
        elif self.board.is_full():
            self.over = True
        else:
            self.current = other(self.current)
        return True

    def clone(self) -> "NashGame":
        g = NashGame(self.size)
        g.board = self.board.clone()
        g.current = self.current
        g.winner = self.winner
        g.win_kind = self.win_kind
        g.last_move = self.last_move
        g.moves_played = self.moves_played
        g.over = self.over
        return g


def side_name(side: int) -> str:
    return "White" if side == WHITE else "Black"


def side_seed(seed: Optional[int], side: int) -> Optional[int]:
    # у чёрных свой поток, иначе два одинаковых бота ходят зеркально
    if seed is None:
        return None
    return seed if side == WHITE else seed + 1


def play_match(players: Dict[int, object], size: int = DEFAULT_SIZE,
               on_move: Optional[Callable[[NashGame, Move], None]] = None) -> NashGame:
    """Играет одну партию до конца. players: {WHITE: ..., BLACK: ...} с методом choose_move."""
    game = NashGame(size)
    while not game.over:
        side = game.current
        mv = players[side].choose_move(game.board, side)
        if not game.play(mv):
            log.warning("%s: illegal move (%d, %d), asking again", side_name(side), mv.r, mv.c)
            continue
        log.debug("%s plays (%d, %d)", side_name(side), mv.r, mv.c)
        if on_move is not None:
            on_move(game, mv)
    return game


@dataclass
class SeriesResult:
    games: int = 0
    white_wins: int = 0
    black_wins: int = 0
    undecided: int = 0

    def record(self, winner: int):
        self.games += 1
        if winner == WHITE:
            self.white_wins += 1
        elif winner == BLACK:
            self.black_wins += 1
        else:
            self.undecided += 1


def run_series(white, black, size: int = DEFAULT_SIZE, games: int = 10) -> SeriesResult:
    """Серия партий между двумя ботами, чтобы сравнить их силу."""
    res = SeriesResult()
    players = {WHITE: white, BLACK: black}
    for i in range(games):
        log.info("Game %d of %d", i + 1, games)
        g = play_match(players, size)
        res.record(g.winner)
        log.info("Game %d complete: %s after %d moves", i + 1,
                 side_name(g.winner) + " wins" if g.winner != EMPTY else "no winner", g.moves_played)
    log.info("Results after %d games: White %d, Black %d, undecided %d",
             res.games, res.white_wins, res.black_wins, res.undecided)
    return res
