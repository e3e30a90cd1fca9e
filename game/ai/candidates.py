from __future__ import annotations

from typing import Dict, List, NamedTuple

from game.ai.board import BoardState, Cell, Player
from game.ai.patterns import score_cell

SEARCH_RADIUS = 2
# Own threats weigh slightly more than blocks.
OFFENSE_BIAS = 1.1


class CandidateMove(NamedTuple):
    row: int
    col: int
    score: float

    @property
    def cell(self) -> Cell:
        return (self.row, self.col)


def score_candidate(board: BoardState, row: int, col: int, maximizer: Player) -> float:
    """Heuristic for move ordering: own pattern potential + blocking value."""
    return score_cell(board, row, col, maximizer) * OFFENSE_BIAS + score_cell(board, row, col, maximizer.opponent)


def generate_candidates(board: BoardState, maximizer: Player, radius: int = SEARCH_RADIUS) -> List[CandidateMove]:
    """
    Empty cells within Chebyshev distance `radius` of any stone, sorted by
    descending score. Ties keep discovery order (row-major over stones).
    Returns ALL of them: callers truncate the fan-out.
    Empty board -> [] (the opening is the selector's job).
    """
    n = board.size
    grid = board.grid
    found: Dict[Cell, CandidateMove] = {}

    for r in range(n):
        for c in range(n):
            if grid[r][c] is None:
                continue
            for dr in range(-radius, radius + 1):
                for dc in range(-radius, radius + 1):
                    rr, cc = r + dr, c + dc
                    if not (0 <= rr < n and 0 <= cc < n) or grid[rr][cc] is not None:
                        continue
                    if (rr, cc) in found:
                        continue
                    found[(rr, cc)] = CandidateMove(rr, cc, score_candidate(board, rr, cc, maximizer))

    return sorted(found.values(), key=lambda m: m.score, reverse=True)
