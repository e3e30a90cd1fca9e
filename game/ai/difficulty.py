# game/ai/difficulty.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Union

from game.ai.conf import engine_setting
from game.ai.exceptions import ConfigurationError


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass(frozen=True)
class DifficultyConfig:
    depth: int
    random_move_probability: float  # chance of a weak random pick instead of searching


DIFFICULTY_MAP: Dict[Difficulty, DifficultyConfig] = {
    Difficulty.EASY: DifficultyConfig(depth=1, random_move_probability=0.3),
    Difficulty.MEDIUM: DifficultyConfig(depth=2, random_move_probability=0.0),
    Difficulty.HARD: DifficultyConfig(depth=3, random_move_probability=0.0),
}


def parse_difficulty(difficulty: Union[Difficulty, str, None]) -> Difficulty:
    if not difficulty:
        difficulty = engine_setting("DEFAULT_DIFFICULTY")
    if isinstance(difficulty, Difficulty):
        return difficulty
    try:
        return Difficulty(str(difficulty).lower())
    except ValueError:
        choices = ", ".join(d.value for d in Difficulty)
        raise ConfigurationError(f"Unknown difficulty {difficulty!r} (expected one of: {choices})") from None


def get_difficulty_config(difficulty: Union[Difficulty, str, None]) -> DifficultyConfig:
    return DIFFICULTY_MAP[parse_difficulty(difficulty)]
