# console.py
from __future__ import annotations
from typing import Callable, Dict, Tuple

from board import Board, Move, EMPTY, WHITE, BLACK
from bot import HumanPlayer
from game import NashGame, LINE, side_name

MARKS = {EMPTY: " ", WHITE: "W", BLACK: "B"}


def render(board: Board) -> str:
    n = board.size
    sep = " " + "---" * n
    lines = [" " + "".join(f" {c + 1} " for c in range(n)), sep]
    for r in range(n):
        lines.append(f"{r + 1}|" + "".join(f"{MARKS[v]} |" for v in board.cells[r]))
        lines.append(sep)
    return "\n".join(lines)


def describe_neighbors(board: Board, r: int, c: int) -> str:
    side = board.get(r, c)
    if side is None or side == EMPTY:
        return f"Cell ({r + 1},{c + 1}) is empty."
    nbs = board.neighbors_of(r, c, side)
    head = f"Neighbors of ({r + 1},{c + 1}) with {side_name(side)} stones:"
    if not nbs:
        return head + "\nNo neighbors with the same stone."
    return head + "\n" + " ".join(f"({nr + 1},{nc + 1})" for nr, nc in nbs)


def parse_move(text: str) -> Tuple[int, int]:
    """'3 4' (с единицы) -> (2, 3). Мусор -> ValueError."""
    parts = text.replace(",", " ").split()
    if len(parts) != 2:
        raise ValueError(f"expected 'row column', got {text!r}")
    return int(parts[0]) - 1, int(parts[1]) - 1


def prompt_move(read: Callable[[str], str] = input):
    def ask(board: Board, side: int) -> Move:
        msg = "Enter your move (row column): "
        while True:
            try:
                r, c = parse_move(read(msg))
            except ValueError:
                r, c = -1, -1
            if board.is_empty(r, c):
                return Move(r, c)
            msg = "Invalid move. Try again: "

    return ask


def play_console(players: Dict[int, object], size: int,
                 write: Callable[[str], None] = print) -> NashGame:
    game = NashGame(size)
    while not game.over:
        write(render(game.board))
        side = game.current
        name = side_name(side)
        write(f"{name}'s turn.")
        mv = players[side].choose_move(game.board, side)
        if not game.play(mv):
            write("Invalid move. Try again.")
            continue
        write(f"{name} places at ({mv.r + 1},{mv.c + 1})")
        write(describe_neighbors(game.board, mv.r, mv.c))

    write(render(game.board))
    if game.win_kind == LINE:
        write(f"{side_name(game.winner)} wins with a straight line!")
    elif game.winner != EMPTY:
        write(f"{side_name(game.winner)} wins!")
    else:
        write("Game over! The board is full.")
    return game


def console_human(read: Callable[[str], str] = input) -> HumanPlayer:
    return HumanPlayer(prompt_move(read))
