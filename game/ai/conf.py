# game/ai/conf.py
from __future__ import annotations

from typing import Any, Dict

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

DEFAULTS: Dict[str, Any] = {
    "BOARD_SIZE": 15,
    "MIN_BOARD_SIZE": 5,
    "MAX_BOARD_SIZE": 25,
    "DEFAULT_DIFFICULTY": "medium",
    "RANDOM_SEED": None,
}


def engine_setting(name: str) -> Any:
    """
    Read one CARO_ENGINE setting, falling back to DEFAULTS.
    Works before settings are configured (scripts, shell benchmarks).
    """
    try:
        overrides = getattr(settings, "CARO_ENGINE", None) or {}
    except ImproperlyConfigured:
        overrides = {}
    return overrides.get(name, DEFAULTS[name])


def validate_engine_settings() -> None:
    """
    Fail at startup on a bad CARO_ENGINE block instead of on the first
    request. Raises ImproperlyConfigured.
    """
    from game.ai.difficulty import Difficulty
    from game.ai.rules import WIN_LENGTH

    def _is_int(value) -> bool:
        return isinstance(value, int) and not isinstance(value, bool)

    low = engine_setting("MIN_BOARD_SIZE")
    high = engine_setting("MAX_BOARD_SIZE")
    if not (_is_int(low) and _is_int(high)) or not WIN_LENGTH <= low <= high:
        raise ImproperlyConfigured(
            f"CARO_ENGINE MIN_BOARD_SIZE/MAX_BOARD_SIZE must be integers with {WIN_LENGTH} <= min <= max, "
            f"got {low!r}/{high!r}"
        )

    size = engine_setting("BOARD_SIZE")
    if not _is_int(size) or not low <= size <= high:
        raise ImproperlyConfigured(f"CARO_ENGINE BOARD_SIZE must be in [{low}, {high}], got {size!r}")

    difficulty = engine_setting("DEFAULT_DIFFICULTY")
    if difficulty not in [d.value for d in Difficulty]:
        raise ImproperlyConfigured(f"CARO_ENGINE DEFAULT_DIFFICULTY {difficulty!r} is not a known difficulty")

    seed = engine_setting("RANDOM_SEED")
    if seed is not None and not _is_int(seed):
        raise ImproperlyConfigured(f"CARO_ENGINE RANDOM_SEED must be an integer or None, got {seed!r}")
