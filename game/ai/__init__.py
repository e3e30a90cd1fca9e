"""
Caro (five-in-a-row) engine: board model, win detection, pattern
evaluation, candidate generation and alpha-beta search.
"""

from game.ai.board import BoardState, GameResult, Move, Outcome, Player
from game.ai.candidates import CandidateMove, generate_candidates
from game.ai.difficulty import Difficulty, DifficultyConfig, get_difficulty_config
from game.ai.exceptions import ConfigurationError, EngineError, IllegalMoveError
from game.ai.minimax_engine import SearchEngine
from game.ai.patterns import evaluate_board, score_cell, score_line
from game.ai.rules import WIN_LENGTH, detailed_check, fast_check
from game.ai.selector import MoveSelector, choose_move

__all__ = [
    "BoardState",
    "CandidateMove",
    "ConfigurationError",
    "Difficulty",
    "DifficultyConfig",
    "EngineError",
    "GameResult",
    "IllegalMoveError",
    "Move",
    "MoveSelector",
    "Outcome",
    "Player",
    "SearchEngine",
    "WIN_LENGTH",
    "choose_move",
    "detailed_check",
    "evaluate_board",
    "fast_check",
    "generate_candidates",
    "get_difficulty_config",
    "score_cell",
    "score_line",
]
