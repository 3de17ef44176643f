# bot.py
from __future__ import annotations

import enum
import random
from typing import Callable, Optional, Tuple, Union

from board import Board, Move, other, progress
from connectivity import evaluate_position, has_connection_win


PLAYOUTS = 100          # случайных партий на каждый кандидатный ход
WIN_BONUS = 1_000_000_000
NEIGHBOR_WEIGHT = 10
PROGRESS_WEIGHT = 5


class NoLegalMoveError(ValueError):
    pass


def _require_move(board: Board):
    if board.is_full():
        raise NoLegalMoveError("board is full, no legal moves remain")


class RandomBot:
    """Равновероятный выбор среди пустых клеток."""

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None):
        self.rng = rng if rng is not None else random.Random(seed)

    def choose_move(self, board: Board, side: int) -> Move:
        _require_move(board)
        moves = board.empty_cells()
        return moves[self.rng.randrange(len(moves))]


def score_move(board: Board, side: int, r: int, c: int) -> int:
    """Оценка позиции, в которой камень `side` уже стоит на (r, c)."""
    score = 0
    if has_connection_win(board, side):
        score += WIN_BONUS
    score += NEIGHBOR_WEIGHT * len(board.neighbors_of(r, c, side))
    score += PROGRESS_WEIGHT * progress(side, r, c)
    score += evaluate_position(board, side)
    return score


class HeuristicBot:
    """Жадный бот на один полуход: пробует каждую пустую клетку и оценивает результат."""

    def choose_move(self, board: Board, side: int) -> Move:
        _require_move(board)
        best: Optional[Move] = None
        best_score = 0
        for mv in board.empty_cells():
            board.place(mv.r, mv.c, side)
            try:
                s = score_move(board, side, mv.r, mv.c)
            finally:
                board.clear(mv.r, mv.c)
            # строгое сравнение: при равенстве остаётся первая клетка
            if best is None or s > best_score:
                best, best_score = mv, s
        return best


class RolloutBot:
    """Для каждого хода разыгрывает PLAYOUTS случайных партий и берёт ход с наибольшим числом побед."""

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None):
        self.rng = rng if rng is not None else random.Random(seed)

    def playout(self, board: Board, side: int) -> bool:
        """Одна случайная партия на копии доски; первым ходит соперник `side`."""
        state = board.clone()
        if has_connection_win(state, side):
            return True
        mover = other(side)
        while True:
            moves = state.empty_cells()
            if not moves:
                return False
            mv = moves[self.rng.randrange(len(moves))]
            state.place(mv.r, mv.c, mover)
            if has_connection_win(state, mover):
                return mover == side
            mover = other(mover)

    def count_wins(self, board: Board, side: int) -> int:
        return sum(1 for _ in range(PLAYOUTS) if self.playout(board, side))

    def choose_move(self, board: Board, side: int) -> Move:
        _require_move(board)
        best: Optional[Move] = None
        best_wins = -1
        for mv in board.empty_cells():
            board.place(mv.r, mv.c, side)
            try:
                wins = self.count_wins(board, side)
            finally:
                board.clear(mv.r, mv.c)
            if wins > best_wins:
                best, best_wins = mv, wins
        return best


AskFn = Callable[[Board, int], Union[Move, Tuple[int, int]]]


class HumanPlayer:
    """Ход приходит снаружи (консоль, тест); спрашиваем, пока клетка не окажется свободной."""

    def __init__(self, ask: AskFn):
        self.ask = ask

    def choose_move(self, board: Board, side: int) -> Move:
        _require_move(board)
        while True:
            got = self.ask(board, side)
            mv = got if isinstance(got, Move) else Move(*got)
            if board.is_empty(mv.r, mv.c):
                return mv


class PlayerKind(enum.Enum):
    HUMAN = "human"
    RANDOM = "random"
    HEURISTIC = "heuristic"
    ROLLOUT = "rollout"

    @classmethod
    def from_index(cls, i: int) -> "PlayerKind":
        # нумерация из консольного меню: 0 человек, 1 случайный, 2 эвристика, 3 розыгрыши;
        # неизвестный номер - человек
        kinds = list(cls)
        if 0 <= i < len(kinds):
            return kinds[i]
        return cls.HUMAN

    @property
    def is_bot(self) -> bool:
        return self is not PlayerKind.HUMAN


def make_player(kind: PlayerKind, seed: Optional[int] = None, ask: Optional[AskFn] = None):
    if kind is PlayerKind.HUMAN:
        if ask is None:
            raise ValueError("human player needs an input source")
        return HumanPlayer(ask)
    if kind is PlayerKind.RANDOM:
        return RandomBot(seed=seed)
    if kind is PlayerKind.HEURISTIC:
        return HeuristicBot()
    if kind is PlayerKind.ROLLOUT:
        return RolloutBot(seed=seed)
    raise ValueError(f"unknown player kind: {kind!r}")
