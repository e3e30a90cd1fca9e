import math
from typing import Optional

from game.ai.board import BoardState, Cell, Player
from game.ai.candidates import generate_candidates
from game.ai.patterns import evaluate_board
from game.ai.rules import fast_check

# ==================== Constants & Configuration ====================

# Terminal score; remaining depth is added so faster wins (and slower
# losses) are preferred.
WIN_SCORE = 100_000

# Candidates searched at every interior node.
NODE_FAN_OUT = 10


# ==================== Core Search Algorithm ====================


class SearchEngine:
    """
    Depth-limited minimax with alpha-beta pruning, from `maximizer`'s view.

    The board is shared by every frame: each candidate is made on the board,
    searched, then unmade before the next one is tried, so nothing is copied
    per node. This makes a search non-reentrant: no other code may touch the
    board until `search` returns.

    `evaluated` counts visited nodes. It is diagnostic only.
    """

    def __init__(
        self,
        board: BoardState,
        maximizer: Player,
        node_fan_out: int = NODE_FAN_OUT,
        pruning: bool = True,
    ):
        self.board = board
        self.maximizer = maximizer
        self.node_fan_out = node_fan_out
        self.pruning = pruning
        self.evaluated = 0

    def search(
        self,
        depth: int,
        alpha: float = -math.inf,
        beta: float = math.inf,
        maximizing: bool = True,
        last_move: Optional[Cell] = None,
    ) -> float:
        self.evaluated += 1
        board = self.board

        # The side to move has just been beaten by the previous move.
        if last_move is not None and fast_check(board, last_move[0], last_move[1]):
            return -(WIN_SCORE + depth) if maximizing else WIN_SCORE + depth

        if depth == 0:
            return evaluate_board(board, self.maximizer)

        moves = generate_candidates(board, self.maximizer)[: self.node_fan_out]
        if not moves:
            return 0

        player = self.maximizer if maximizing else self.maximizer.opponent

        if maximizing:
            value = -math.inf
            for r, c, _ in moves:
                board.make(r, c, player)
                try:
                    score = self.search(depth - 1, alpha, beta, False, (r, c))
                finally:
                    board.unmake(r, c)

                value = max(value, score)
                alpha = max(alpha, value)
                if self.pruning and beta <= alpha:
                    break
        else:
            value = math.inf
            for r, c, _ in moves:
                board.make(r, c, player)
                try:
                    score = self.search(depth - 1, alpha, beta, True, (r, c))
                finally:
                    board.unmake(r, c)

                value = min(value, score)
                beta = min(beta, value)
                if self.pruning and beta <= alpha:
                    break

        return value
