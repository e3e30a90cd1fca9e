from __future__ import annotations

import logging
import math
import random
import time
from typing import Any, Dict, Optional, Union

from game.ai.board import BoardState, Cell
from game.ai.candidates import generate_candidates
from game.ai.conf import engine_setting
from game.ai.difficulty import Difficulty, get_difficulty_config, parse_difficulty
from game.ai.minimax_engine import NODE_FAN_OUT, SearchEngine

logger = logging.getLogger(__name__)

ROOT_FAN_OUT = 15
RANDOM_POOL = 5

NEIGHBOUR_OFFSETS = [(-1, -1), (-1, 0), (-1, 1), (0, -1), (0, 1), (1, -1), (1, 0), (1, 1)]


class MoveSelector:
    """
    Chooses the move for the side to move on a BoardState.

    Policy, in order: center on an empty history, a random neighbour of the
    opponent's first stone, a weak random pick (easy mode only), else a
    root search over the best ROOT_FAN_OUT candidates.

    All randomness goes through `rng`, so passing `random.Random(seed)`
    makes the choice reproducible.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        root_fan_out: int = ROOT_FAN_OUT,
        node_fan_out: int = NODE_FAN_OUT,
        random_pool: int = RANDOM_POOL,
    ):
        if rng is None:
            rng = random.Random(engine_setting("RANDOM_SEED"))
        self.rng = rng
        self.root_fan_out = root_fan_out
        self.node_fan_out = node_fan_out
        self.random_pool = random_pool
        self.last_evaluated = 0
        self.last_score: Optional[float] = None

    def get_move(self, board: BoardState, difficulty: Union[Difficulty, str, None] = None) -> Optional[Cell]:
        """
        Returns the chosen cell, or None when no legal move is left.
        The board is left exactly as it was on entry.
        """
        config = get_difficulty_config(difficulty)
        self.last_evaluated = 0
        self.last_score = None

        if not board.history:
            return board.center

        if len(board.history) == 1:
            return self._opening_reply(board)

        me = board.current_player
        candidates = generate_candidates(board, me)
        if not candidates:
            r, c = board.center
            return (r, c) if board.grid[r][c] is None else None

        if config.random_move_probability and self.rng.random() < config.random_move_probability:
            pick = self.rng.choice(candidates[: self.random_pool])
            return pick.cell

        start = time.perf_counter()
        engine = SearchEngine(board, me, node_fan_out=self.node_fan_out)

        best_move = candidates[0].cell
        best_score = -math.inf
        for r, c, _ in candidates[: self.root_fan_out]:
            board.make(r, c, me)
            try:
                score = engine.search(config.depth - 1, -math.inf, math.inf, False, (r, c))
            finally:
                board.unmake(r, c)

            # strict comparison: ties keep the better-ordered candidate
            if score > best_score:
                best_score = score
                best_move = (r, c)

        self.last_evaluated = engine.evaluated
        self.last_score = best_score
        logger.debug(
            "AI evaluated %d positions in %.0fms (depth=%d, move=%s, score=%s)",
            engine.evaluated,
            (time.perf_counter() - start) * 1000,
            config.depth,
            best_move,
            best_score,
        )
        return best_move

    def _opening_reply(self, board: BoardState) -> Optional[Cell]:
        last = board.last_move
        n = board.size
        options = []
        for dr, dc in NEIGHBOUR_OFFSETS:
            r = max(0, min(n - 1, last.row + dr))
            c = max(0, min(n - 1, last.col + dc))
            # clamping can land back on the stone itself (edge / corner)
            if board.grid[r][c] is None:
                options.append((r, c))
        if not options:
            return None
        return self.rng.choice(options)


def choose_move(board: BoardState, difficulty: Union[Difficulty, str, None] = None, rng: Optional[random.Random] = None) -> Dict[str, Any]:
    """
    One-shot helper used by the API: pick a move for the side to move and
    describe it.
    """
    level = parse_difficulty(difficulty)
    selector = MoveSelector(rng=rng)
    move = selector.get_move(board, level)
    return {
        "move": {"row": move[0], "col": move[1]} if move else None,
        "player": board.current_player.value,
        "difficulty": level.value,
        "depth": get_difficulty_config(level).depth,
        "evaluated": selector.last_evaluated,
    }
