"""
board.py - Board representation and core game mechanics for Connect Four

This module implements the Board class which owns the grid, validates and
executes moves, supports undo for search, and reports wins and draws.
The board does not track whose turn it is; callers alternate players.
"""

from typing import List, Optional

import numpy as np

from connect_four.observers import DebugObserver, GameObserver
from connect_four.utils import (ROWS, COLS, Player, GameResult, Cell,
                                find_window, is_connected, is_valid_position,
                                render_board_ascii)


class Board:
    """
    A 6x7 Connect Four board.

    Row 0 is the top of the board; pieces drop towards row ROWS - 1. The grid
    is only changed through make_move and undo_move, so every column stays
    filled from the bottom up.
    """

    def __init__(self, observer: Optional[GameObserver] = None):
        """
        Initialize an empty board.

        Args:
            observer: Receives move, undo, win and draw events
                (defaults to a DebugObserver)
        """
        self.observer = observer if observer is not None else DebugObserver()
        self.reset()

    def reset(self) -> None:
        """Clear every cell."""
        self.grid = np.zeros((ROWS, COLS), dtype=np.int8)

    @classmethod
    def from_grid(cls, grid, observer: Optional[GameObserver] = None) -> 'Board':
        """
        Build a board from an existing position.

        Args:
            grid: ROWS x COLS array-like of 0, 1 and 2, top row first
            observer: Observer for the new board

        Raises:
            ValueError: If the shape or values are wrong, or a piece floats
                above an empty cell
        """
        array = np.asarray(grid)
        if array.shape != (ROWS, COLS):
            raise ValueError(f"Grid must have shape {(ROWS, COLS)}, got {array.shape}")
        if not np.isin(array, [p.value for p in Player]).all():
            raise ValueError("Grid contains values other than 0, 1 and 2")
        for col in range(COLS):
            occupied = array[:, col] != Player.EMPTY.value
            # once a column has a piece, every cell below it must be filled
            top = int(np.argmax(occupied)) if occupied.any() else ROWS
            if not occupied[top:].all():
                raise ValueError(f"Column {col} has a piece above an empty cell")
        board = cls(observer=observer)
        board.grid = array.astype(np.int8, copy=True)
        return board

    def copy(self) -> 'Board':
        """Create an independent board with the same position and observer."""
        new_board = Board(observer=self.observer)
        new_board.grid = self.grid.copy()
        return new_board

    def get_cell(self, row: int, col: int) -> Player:
        """
        Get the contents of one cell.

        Raises:
            IndexError: If the cell is off the board
        """
        if not is_valid_position(row, col):
            raise IndexError(f"Cell ({row}, {col}) is off the board")
        return Player(int(self.grid[row, col]))

    def column_height(self, column: int) -> int:
        """Number of pieces in a column (0 for an off-board column)."""
        if not 0 <= column < COLS:
            return 0
        return int(np.count_nonzero(self.grid[:, column]))

    def is_valid_move(self, column: int) -> bool:
        """
        Check if a piece can be dropped into a column.

        Args:
            column: The column to check (0-indexed)

        Returns:
            True if the column is on the board and not full
        """
        return 0 <= column < COLS and self.grid[0, column] == Player.EMPTY.value

    def get_valid_moves(self) -> List[int]:
        """Columns that still have room, in ascending order."""
        return [col for col in range(COLS) if self.grid[0, col] == Player.EMPTY.value]

    def make_move(self, column: int, player: Player) -> bool:
        """
        Drop a piece for a player into a column.

        Args:
            column: The column to play (0-indexed)
            player: Player.ONE or Player.TWO

        Returns:
            True if the piece was placed, False if the move was rejected
        """
        if player not in (Player.ONE, Player.TWO):
            self.observer.on_rejected_move(column, player, "not a player")
            return False
        if not 0 <= column < COLS:
            self.observer.on_rejected_move(column, player, "column out of range")
            return False

        for row in range(ROWS - 1, -1, -1):
            if self.grid[row, column] == Player.EMPTY.value:
                self.grid[row, column] = player.value
                self.observer.on_move(row, column, player)
                self._check_after_move(row, column, player)
                return True

        self.observer.on_rejected_move(column, player, "column is full")
        return False

    def _check_after_move(self, row: int, column: int, player: Player) -> None:
        cells = self.grid.tolist()
        if find_window(cells, is_connected, through=(row, column)) is not None:
            self.observer.on_win(player, row, column)
        elif self.is_full():
            self.observer.on_draw()

    def undo_move(self, column: int) -> None:
        """
        Remove the top piece of a column.

        Does nothing if the column is empty or off the board. Undos must come
        in the reverse order of the moves they retract.
        """
        if not 0 <= column < COLS:
            return
        for row in range(ROWS):
            value = self.grid[row, column]
            if value != Player.EMPTY.value:
                self.grid[row, column] = Player.EMPTY.value
                self.observer.on_undo(row, column, Player(int(value)))
                return

    def is_full(self) -> bool:
        return bool((self.grid[0] != Player.EMPTY.value).all())

    def get_winning_line(self) -> List[Cell]:
        """
        Get the first four-in-a-row on the board.

        Returns:
            List of (row, col) positions, or an empty list if nobody has won
        """
        window = find_window(self.grid.tolist(), is_connected)
        return list(window) if window is not None else []

    def get_winner(self) -> Optional[Player]:
        """
        Scan the whole board for four in a row.

        Returns:
            The player owning the first line found, or None
        """
        line = self.get_winning_line()
        if not line:
            return None
        row, col = line[0]
        return Player(int(self.grid[row, col]))

    def get_outcome(self) -> GameResult:
        winner = self.get_winner()
        if winner is not None:
            return GameResult.win_for(winner)
        if self.is_full():
            return GameResult.DRAW
        return GameResult.IN_PROGRESS

    def is_game_over(self) -> bool:
        """True if someone has four in a row or the board is full."""
        return self.is_full() or self.get_winner() is not None

    def get_board(self) -> np.ndarray:
        """
        Get a snapshot of the grid.

        Returns:
            A copy of the ROWS x COLS array; changing it does not affect the board
        """
        return self.grid.copy()

    def move_count(self) -> int:
        return int(np.count_nonzero(self.grid))

    def render(self) -> str:
        return render_board_ascii(self.grid)

    def __eq__(self, other):
        if not isinstance(other, Board):
            return NotImplemented
        return bool(np.array_equal(self.grid, other.grid))

    __hash__ = None

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"Board(moves={self.move_count()}, result={self.get_outcome().name})"
