"""
utils.py - Constants, enumerations and window helpers for Connect Four

This module holds the fixed board geometry, the player and result enums, and
the single window routine that both win detection and the search heuristic
are built on.
"""

from enum import Enum, auto
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import numpy as np

# Board geometry
ROWS = 6
COLS = 7
CONNECT_N = 4  # Pieces in a row needed to win
CENTER_COL = COLS // 2

# Search configuration
DEFAULT_SEARCH_DEPTH = 4

# Heuristic weights, from the automated player's point of view
CENTER_PIECE_BONUS = 3
OPPONENT_THREE_SCORE = -500
OWN_THREE_SCORE = 50
OPPONENT_TWO_SCORE = -50
PIECE_WEIGHT = 5

Cell = Tuple[int, int]
Window = Tuple[Cell, ...]


class Player(Enum):
    """Players, doubling as cell contents."""
    EMPTY = 0
    ONE = 1    # Moves first
    TWO = 2

    # Roles in a human-versus-engine game
    HUMAN = 1
    AI = 2

    def other(self) -> 'Player':
        """Get the opposing player (EMPTY stays EMPTY)."""
        if self == Player.ONE:
            return Player.TWO
        if self == Player.TWO:
            return Player.ONE
        return Player.EMPTY

    def __str__(self):
        if self == Player.EMPTY:
            return " "
        return "X" if self == Player.ONE else "O"


class GameResult(Enum):
    """Outcome of a position."""
    IN_PROGRESS = auto()
    PLAYER_ONE_WIN = auto()
    PLAYER_TWO_WIN = auto()
    DRAW = auto()

    def is_game_over(self) -> bool:
        return self != GameResult.IN_PROGRESS

    @property
    def winner(self) -> Optional[Player]:
        if self == GameResult.PLAYER_ONE_WIN:
            return Player.ONE
        if self == GameResult.PLAYER_TWO_WIN:
            return Player.TWO
        return None

    @classmethod
    def win_for(cls, player: Player) -> 'GameResult':
        if player == Player.ONE:
            return cls.PLAYER_ONE_WIN
        if player == Player.TWO:
            return cls.PLAYER_TWO_WIN
        raise ValueError(f"No win result for {player!r}")


class Direction(Enum):
    """Scan directions for windows, as (row, col) steps with row 0 at the top."""
    HORIZONTAL = (0, 1)       # left to right
    VERTICAL = (1, 0)         # top to bottom
    DIAGONAL_DOWN = (1, 1)    # towards bottom-right
    ANTI_DIAGONAL = (1, -1)   # towards bottom-left


def is_valid_position(row: int, col: int) -> bool:
    """Check that a cell lies on the board."""
    return 0 <= row < ROWS and 0 <= col < COLS


def _build_windows() -> Tuple[Window, ...]:
    windows = []
    for row in range(ROWS):
        for col in range(COLS):
            for direction in Direction:
                dr, dc = direction.value
                end_row = row + (CONNECT_N - 1) * dr
                end_col = col + (CONNECT_N - 1) * dc
                if not is_valid_position(end_row, end_col):
                    continue
                windows.append(tuple((row + i * dr, col + i * dc)
                                     for i in range(CONNECT_N)))
    return tuple(windows)


# Every in-bounds window, ordered by start cell (row-major) then direction
WINDOWS: Tuple[Window, ...] = _build_windows()

WINDOWS_THROUGH: Dict[Cell, Tuple[Window, ...]] = {
    (row, col): tuple(w for w in WINDOWS if (row, col) in w)
    for row in range(ROWS) for col in range(COLS)
}


def _build_scoring_lines() -> Tuple[Tuple[Cell, ...], ...]:
    lines = []
    for row in range(ROWS):
        for col in range(COLS):
            for direction in Direction:
                dr, dc = direction.value
                lines.append(tuple((row + i * dr, col + i * dc)
                                   for i in range(CONNECT_N)
                                   if is_valid_position(row + i * dr, col + i * dc)))
    return tuple(lines)


# A run of up to four cells from every start cell in every direction, clipped
# at the edges. The heuristic scores clipped runs; win detection never does.
SCORING_LINES: Tuple[Tuple[Cell, ...], ...] = _build_scoring_lines()


def window_values(cells: Sequence[Sequence[int]], window: Window) -> List[int]:
    return [cells[r][c] for r, c in window]


def find_window(cells: Sequence[Sequence[int]],
                predicate: Callable[[List[int]], bool],
                through: Optional[Cell] = None) -> Optional[Window]:
    """
    Find the first window whose cell values satisfy a predicate.

    Args:
        cells: Grid values indexed as cells[row][col]
        predicate: Called with the list of values in each window
        through: If given, only windows containing this cell are checked

    Returns:
        The first matching window, or None
    """
    candidates = WINDOWS if through is None else WINDOWS_THROUGH.get(through, ())
    for window in candidates:
        if predicate(window_values(cells, window)):
            return window
    return None


def is_connected(values: List[int]) -> bool:
    """Predicate: all values belong to the same non-empty player."""
    first = values[0]
    return first != Player.EMPTY.value and all(v == first for v in values)


def parse_position(position: str) -> np.ndarray:
    """
    Parse a comma-separated position string into a grid.

    The string holds ROWS * COLS values of 0, 1 or 2, row-major with the
    top row first.

    Raises:
        ValueError: If the string has the wrong length or bad values
    """
    try:
        values = [int(v) for v in position.replace(' ', '').split(',') if v != '']
    except ValueError:
        raise ValueError(f"Position contains a non-integer value: {position!r}") from None
    if len(values) != ROWS * COLS:
        raise ValueError(f"Position string must have {ROWS * COLS} values, got {len(values)}")
    allowed = {p.value for p in Player}
    bad = sorted(set(values) - allowed)
    if bad:
        raise ValueError(f"Position contains invalid cell values: {bad}")
    return np.array(values, dtype=np.int8).reshape(ROWS, COLS)


def render_board_ascii(grid: np.ndarray) -> str:
    """
    Render a grid as ASCII art, with column numbers underneath.

    Args:
        grid: ROWS x COLS array of Player values
    """
    border = "|" + "-" * (COLS * 2 - 1) + "|"
    lines = [border]
    for row in range(ROWS):
        lines.append("|" + " ".join(str(Player(int(v))) for v in grid[row]) + "|")
    lines.append(border)
    lines.append("|" + " ".join(str(c) for c in range(COLS)) + "|")
    return "\n".join(lines)
