# connectivity.py
from __future__ import annotations
from typing import Dict, List, Optional, Tuple

from board import Board, WHITE, other, progress

Cell = Tuple[int, int]


def _start_cells(board: Board, side: int) -> List[Cell]:
    n = board.size
    if side == WHITE:
        # left -> right
        return [(r, 0) for r in range(n) if board.cells[r][0] == side]
    # top -> bottom
    return [(0, c) for c in range(n) if board.cells[0][c] == side]


def _on_far_edge(board: Board, side: int, r: int, c: int) -> bool:
    return progress(side, r, c) == board.size - 1


def _search(board: Board, side: int) -> Tuple[Optional[Cell], Dict[Cell, Optional[Cell]]]:
    """Обход в глубину по явному стеку от стартового края стороны.

    Возвращает первую найденную клетку на противоположном краю (или None)
    и словарь родителей, по которому восстанавливается путь.
    """
    n = board.size
    vis = [[False]*n for _ in range(n)]
    parent: Dict[Cell, Optional[Cell]] = {}
    stack = []

    for r, c in _start_cells(board, side):
        vis[r][c] = True
        parent[(r, c)] = None
        stack.append((r, c))

    while stack:
        r, c = stack.pop()
        if _on_far_edge(board, side, r, c):
            return (r, c), parent
        for nr, nc in board.neighbors_of(r, c, side):
            if not vis[nr][nc]:
                vis[nr][nc] = True
                parent[(nr, nc)] = (r, c)
                stack.append((nr, nc))
    return None, parent


def has_connection_win(board: Board, side: int) -> bool:
    end, _ = _search(board, side)
    return end is not None


def winning_path(board: Board, side: int) -> Optional[List[Cell]]:
    end, parent = _search(board, side)
    if end is None:
        return None
    path = []
    cur: Optional[Cell] = end
    while cur is not None:
        path.append(cur)
        cur = parent[cur]
    path.reverse()
    return path


def has_straight_line_win(board: Board, side: int) -> bool:
    n = board.size
    if side == WHITE:
        return any(all(board.cells[r][c] == side for c in range(n)) for r in range(n))
    return any(all(board.cells[r][c] == side for r in range(n)) for c in range(n))


def evaluate_position(board: Board, side: int) -> int:
    # камни ближе к целевому краю весят больше, камни соперника - в минус
    opp = other(side)
    score = 0
    for r in range(board.size):
        row = board.cells[r]
        for c in range(board.size):
            v = row[c]
            if v == side:
                score += progress(side, r, c) + 1
            elif v == opp:
                score -= progress(side, r, c) + 1
    return score
