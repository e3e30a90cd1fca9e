from __future__ import annotations

from typing import Dict, Tuple

from game.ai.board import BoardState, Player
from game.ai.rules import DIRECTIONS, WIN_LENGTH

# ==================== Pattern table ====================

# (run length, open ends) -> score. Runs of WIN_LENGTH or more score
# FIVE_SCORE whatever their ends; missing keys score 0.
FIVE_SCORE = 100_000

PATTERN_SCORES: Dict[Tuple[int, int], int] = {
    (4, 2): 50_000,
    (4, 1): 5_000,
    (4, 0): 100,
    (3, 2): 3_000,
    (3, 1): 300,
    (3, 0): 50,
    (2, 2): 100,
    (2, 1): 30,
    (2, 0): 5,
    (1, 2): 10,
    (1, 1): 3,
    (1, 0): 0,
}


def pattern_score(count: int, open_ends: int) -> int:
    if count >= WIN_LENGTH:
        return FIVE_SCORE
    return PATTERN_SCORES.get((count, open_ends), 0)


# ==================== Line analysis ====================


def analyze_line(board: BoardState, row: int, col: int, dr: int, dc: int, player: Player) -> Tuple[int, int]:
    """
    Returns (count, open_ends) for the run of `player` through (row, col).

    (row, col) itself is counted once whatever it holds, so the same call
    scores a hypothetical stone. An end is open only when the next cell is
    on the board AND empty; the edge and either player's stone both block.
    """
    n = board.size
    grid = board.grid
    count = 1
    open_ends = 0

    # forward
    r, c = row + dr, col + dc
    while 0 <= r < n and 0 <= c < n and grid[r][c] == player:
        count += 1
        r += dr
        c += dc
    if 0 <= r < n and 0 <= c < n and grid[r][c] is None:
        open_ends += 1

    # backward
    r, c = row - dr, col - dc
    while 0 <= r < n and 0 <= c < n and grid[r][c] == player:
        count += 1
        r -= dr
        c -= dc
    if 0 <= r < n and 0 <= c < n and grid[r][c] is None:
        open_ends += 1

    return count, open_ends


def score_line(board: BoardState, row: int, col: int, dr: int, dc: int, player: Player) -> int:
    count, open_ends = analyze_line(board, row, col, dr, dc, player)
    return pattern_score(count, open_ends)


def score_cell(board: BoardState, row: int, col: int, player: Player) -> int:
    """Sum of score_line over the four axes."""
    return sum(score_line(board, row, col, dr, dc, player) for dr, dc in DIRECTIONS)


def evaluate_board(board: BoardState, maximizer: Player) -> int:
    """
    Static evaluation from `maximizer`'s point of view: every maximizer
    stone adds its cell score, every opponent stone subtracts its own.
    Runs are scored once per stone they contain.
    """
    score = 0
    for r in range(board.size):
        for c in range(board.size):
            stone = board.grid[r][c]
            if stone is None:
                continue
            if stone == maximizer:
                score += score_cell(board, r, c, stone)
            else:
                score -= score_cell(board, r, c, stone)
    return score
