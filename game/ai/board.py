from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple

from game.ai.conf import engine_setting
from game.ai.exceptions import ConfigurationError, IllegalMoveError
from game.ai.rules import WIN_LENGTH, detailed_check, find_winning_line

Cell = Tuple[int, int]

EMPTY_SYMBOLS = ("", None, ".", " ")


class Player(str, Enum):
    FIRST = "X"
    SECOND = "O"

    @property
    def opponent(self) -> "Player":
        return Player.SECOND if self is Player.FIRST else Player.FIRST

    @classmethod
    def from_symbol(cls, value) -> Optional["Player"]:
        """Map a board symbol ("", None, "X", "O", ...) to a Player or None."""
        if isinstance(value, cls):
            return value
        if value in EMPTY_SYMBOLS:
            return None
        try:
            return cls(str(value).upper())
        except ValueError:
            raise ConfigurationError(f"Unknown board symbol {value!r}") from None


@dataclass(frozen=True)
class Move:
    row: int
    col: int
    player: Player

    @property
    def cell(self) -> Cell:
        return (self.row, self.col)


class Outcome(str, Enum):
    ONGOING = "ongoing"
    WIN = "win"
    DRAW = "draw"


@dataclass(frozen=True)
class GameResult:
    outcome: Outcome = Outcome.ONGOING
    winner: Optional[Player] = None
    winning_cells: Tuple[Cell, ...] = ()

    @property
    def is_over(self) -> bool:
        return self.outcome != Outcome.ONGOING

    @classmethod
    def ongoing(cls) -> "GameResult":
        return cls()

    @classmethod
    def win(cls, player: Player, cells: Sequence[Cell]) -> "GameResult":
        if len(cells) != WIN_LENGTH:
            raise ValueError(f"A win reports exactly {WIN_LENGTH} cells, got {len(cells)}")
        return cls(Outcome.WIN, player, tuple(cells))

    @classmethod
    def draw(cls) -> "GameResult":
        return cls(Outcome.DRAW)


def _validate_size(size) -> int:
    low = engine_setting("MIN_BOARD_SIZE")
    high = engine_setting("MAX_BOARD_SIZE")
    if not isinstance(size, int) or isinstance(size, bool) or not low <= size <= high:
        raise ConfigurationError(f"Board size must be an integer in [{low}, {high}], got {size!r}")
    return size


class BoardState:
    """
    Square Caro board + move history + side to move.

    Two ways to mutate it:

    - `play` / `undo`: the authoritative session path. Validates the move,
      records it in the history, and updates `result` / `current_player`.
    - `make` / `unmake`: the search path. Only touches the grid so one board
      can be shared by every frame of a recursive search without copying.

    Not reentrant: a board must never be searched by two callers at once.
    Use `copy()` to hand an isolated board to another worker.
    """

    def __init__(self, size: Optional[int] = None):
        self.size = _validate_size(engine_setting("BOARD_SIZE") if size is None else size)
        self.grid: List[List[Optional[Player]]] = []
        self.history: List[Move] = []
        self.current_player = Player.FIRST
        self.result = GameResult.ongoing()
        self.reset()

    # ---------- construction ----------

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence], current_player: Optional[Player] = None) -> "BoardState":
        """
        Build a board from a matrix of symbols ("" / "X" / "O").

        The exact move order is unknown, so stones are recorded in the history
        in row-major order. The side to move is inferred from stone counts
        unless `current_player` is given.
        """
        if not isinstance(rows, (list, tuple)) or not rows:
            raise ConfigurationError("Board must be a non-empty list of rows")
        n = len(rows)
        if any(not isinstance(row, (list, tuple)) or len(row) != n for row in rows):
            raise ConfigurationError(f"Board must be square ({n}x{n})")

        board = cls(n)
        counts = {Player.FIRST: 0, Player.SECOND: 0}
        for r, row in enumerate(rows):
            for c, value in enumerate(row):
                player = Player.from_symbol(value)
                if player is None:
                    continue
                board.grid[r][c] = player
                board.history.append(Move(r, c, player))
                counts[player] += 1

        if current_player is None:
            diff = counts[Player.FIRST] - counts[Player.SECOND]
            if diff == 0:
                current_player = Player.FIRST
            elif diff == 1:
                current_player = Player.SECOND
            else:
                raise ConfigurationError(
                    f"Cannot infer side to move from {counts[Player.FIRST]} X / {counts[Player.SECOND]} O stones"
                )
        board.current_player = current_player

        line = find_winning_line(board)
        if line:
            r, c = line[0]
            board.result = GameResult.win(board.grid[r][c], line)
        elif board.is_full():
            board.result = GameResult.draw()
        return board

    @classmethod
    def from_moves(cls, moves: Iterable[Cell], size: Optional[int] = None) -> "BoardState":
        """Replay (row, col) pairs through `play`, X moving first."""
        board = cls(size)
        for row, col in moves:
            board.play(row, col)
        return board

    def copy(self) -> "BoardState":
        other = BoardState(self.size)
        other.grid = [list(row) for row in self.grid]
        other.history = list(self.history)
        other.current_player = self.current_player
        other.result = self.result
        return other

    def reset(self, size: Optional[int] = None) -> None:
        if size is not None:
            self.size = _validate_size(size)
        self.grid = [[None] * self.size for _ in range(self.size)]
        self.history = []
        self.current_player = Player.FIRST
        self.result = GameResult.ongoing()

    # ---------- queries ----------

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    @property
    def center(self) -> Cell:
        return (self.size // 2, self.size // 2)

    @property
    def last_move(self) -> Optional[Move]:
        return self.history[-1] if self.history else None

    @property
    def game_over(self) -> bool:
        return self.result.is_over

    def is_empty(self) -> bool:
        return all(cell is None for row in self.grid for cell in row)

    def is_full(self) -> bool:
        return all(cell is not None for row in self.grid for cell in row)

    def empty_cells(self) -> List[Cell]:
        return [
            (r, c)
            for r in range(self.size)
            for c in range(self.size)
            if self.grid[r][c] is None
        ]

    def to_rows(self) -> List[List[str]]:
        return [[cell.value if cell else "" for cell in row] for row in self.grid]

    # ---------- search path ----------

    def make(self, row: int, col: int, player: Player) -> None:
        if self.grid[row][col] is not None:
            raise IllegalMoveError(f"Cell ({row}, {col}) already occupied")
        self.grid[row][col] = player

    def unmake(self, row: int, col: int) -> None:
        self.grid[row][col] = None

    # ---------- session path ----------

    def play(self, row: int, col: int) -> GameResult:
        """Apply the current player's move and return the resulting GameResult."""
        if self.result.is_over:
            raise IllegalMoveError("Game already ended")
        if not self.in_bounds(row, col):
            raise IllegalMoveError(f"Cell ({row}, {col}) is out of bounds")

        player = self.current_player
        self.make(row, col, player)
        self.history.append(Move(row, col, player))

        line = detailed_check(self, row, col)
        if line:
            self.result = GameResult.win(player, line)
        elif self.is_full():
            self.result = GameResult.draw()
        else:
            self.current_player = player.opponent
        return self.result

    def undo(self) -> bool:
        """
        Take back the last two plies (the player's move and the reply).
        Returns False when there is nothing to undo.
        """
        if not self.history:
            return False

        popped = None
        for _ in range(min(2, len(self.history))):
            popped = self.history.pop()
            self.grid[popped.row][popped.col] = None

        self.current_player = popped.player
        self.result = GameResult.ongoing()
        return True

    def __repr__(self) -> str:
        return f"<BoardState {self.size}x{self.size} moves={len(self.history)} to_move={self.current_player.value}>"
