# game/ai/exceptions.py


class EngineError(Exception):
    """Base class for every error raised by the Caro engine."""


class ConfigurationError(EngineError):
    """
    Caller contract violation: malformed board (non-square rows, size
    mismatch, unknown symbols) or an unknown difficulty.
    """


class IllegalMoveError(EngineError):
    """Move on an occupied / out-of-bounds cell, or after the game ended."""
