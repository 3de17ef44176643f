# board.py
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Tuple

EMPTY, WHITE, BLACK = 0, 1, 2
SIDES = (WHITE, BLACK)

# WHITE соединяет левый и правый край, BLACK - верхний и нижний.
# Порядок фиксирован: от него зависит воспроизводимость поиска.
NEIGHBORS = [(1, -1), (1, 0), (0, -1), (0, 1), (-1, 0), (-1, 1)]


class BoardSizeError(ValueError):
    pass


@dataclass(frozen=True)
class Move:
    r: int
    c: int


def other(side: int) -> int:
    return BLACK if side == WHITE else WHITE


def progress(side: int, r: int, c: int) -> int:
    """Насколько клетка продвинута к целевому краю стороны."""
    return c if side == WHITE else r


class Board:
    def __init__(self, size: int):
        if not isinstance(size, int) or isinstance(size, bool) or size < 1:
            raise BoardSizeError(f"board size must be a positive integer, got {size!r}")
        self.size = size
        self.cells: List[List[int]] = [[EMPTY]*size for _ in range(size)]

    def in_bounds(self, r: int, c: int) -> bool:
        return 0 <= r < self.size and 0 <= c < self.size

    def is_empty(self, r: int, c: int) -> bool:
        return self.in_bounds(r, c) and self.cells[r][c] == EMPTY

    def get(self, r: int, c: int) -> Optional[int]:
        if not self.in_bounds(r, c):
            return None
        return self.cells[r][c]

    def place(self, r: int, c: int, side: int) -> bool:
        if side not in SIDES or not self.is_empty(r, c):
            return False
        self.cells[r][c] = side
        return True

    def clear(self, r: int, c: int):
        if self.in_bounds(r, c):
            self.cells[r][c] = EMPTY

    def is_full(self) -> bool:
        return all(v != EMPTY for row in self.cells for v in row)

    def empty_cells(self) -> List[Move]:
        out = []
        for r in range(self.size):
            row = self.cells[r]
            for c in range(self.size):
                if row[c] == EMPTY:
                    out.append(Move(r, c))
        return out

    def count(self, side: int) -> int:
        return sum(row.count(side) for row in self.cells)

    def neighbors_of(self, r: int, c: int, side: int) -> List[Tuple[int, int]]:
        out = []
        for dr, dc in NEIGHBORS:
            nr, nc = r + dr, c + dc
            if self.in_bounds(nr, nc) and self.cells[nr][nc] == side:
                out.append((nr, nc))
        return out

    def clone(self) -> "Board":
        b = Board(self.size)
        b.cells = [row[:] for row in self.cells]
        return b

    def __eq__(self, other_board) -> bool:
        if not isinstance(other_board, Board):
            return NotImplemented
        return self.size == other_board.size and self.cells == other_board.cells

    def __repr__(self) -> str:
        return f"Board(size={self.size}, white={self.count(WHITE)}, black={self.count(BLACK)})"
