from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional, Tuple

if TYPE_CHECKING:
    from game.ai.board import BoardState

Cell = Tuple[int, int]

WIN_LENGTH = 5

DIRECTIONS: List[Tuple[int, int]] = [
    (0, 1),   # horizontal
    (1, 0),   # vertical
    (1, 1),   # diag \
    (1, -1),  # diag /
]


def _run_length(board: BoardState, row: int, col: int, dr: int, dc: int, player) -> int:
    """Consecutive `player` stones starting from the cell after (row, col)."""
    n = board.size
    grid = board.grid
    count = 0
    r, c = row + dr, col + dc
    while 0 <= r < n and 0 <= c < n and grid[r][c] == player:
        count += 1
        r += dr
        c += dc
    return count


def fast_check(board: BoardState, row: int, col: int) -> bool:
    """
    Cheap winner check around the last move only.
    True if the stone at (row, col) belongs to a run of WIN_LENGTH or more.
    """
    if not board.in_bounds(row, col):
        return False
    player = board.grid[row][col]
    if player is None:
        return False

    for dr, dc in DIRECTIONS:
        count = 1
        count += _run_length(board, row, col, dr, dc, player)
        count += _run_length(board, row, col, -dr, -dc, player)
        if count >= WIN_LENGTH:
            return True
    return False


def detailed_check(board: BoardState, row: int, col: int) -> Optional[List[Cell]]:
    """
    Returns the winning cells through (row, col) in line order, or None.

    At most WIN_LENGTH - 1 cells are collected on each side. For an overline
    the WIN_LENGTH cells starting at the backward end of the collected run
    are reported, so the list always has exactly WIN_LENGTH entries and
    always contains (row, col).
    """
    if not board.in_bounds(row, col):
        return None
    player = board.grid[row][col]
    if player is None:
        return None

    n = board.size
    grid = board.grid
    for dr, dc in DIRECTIONS:
        line: List[Cell] = [(row, col)]

        # backward
        for i in range(1, WIN_LENGTH):
            r, c = row - dr * i, col - dc * i
            if not (0 <= r < n and 0 <= c < n) or grid[r][c] != player:
                break
            line.insert(0, (r, c))

        # forward
        for i in range(1, WIN_LENGTH):
            r, c = row + dr * i, col + dc * i
            if not (0 <= r < n and 0 <= c < n) or grid[r][c] != player:
                break
            line.append((r, c))

        if len(line) >= WIN_LENGTH:
            return line[:WIN_LENGTH]

    return None


def find_winning_line(board: BoardState) -> Optional[List[Cell]]:
    """Full scan (still fine for 15x15); used when a board arrives without a last move."""
    for r in range(board.size):
        for c in range(board.size):
            if board.grid[r][c] is None:
                continue
            line = detailed_check(board, r, c)
            if line:
                return line
    return None
