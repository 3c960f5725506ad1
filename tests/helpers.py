"""Shared board builders for the test suite."""

import math
import random

import numpy as np

from connect_four.ai.evaluator import evaluate_grid
from connect_four.game.board import Board
from connect_four.observers import NullObserver
from connect_four.utils import ROWS, COLS, Player

_A = [1, 2, 1, 2, 1, 2, 1]
_B = [2, 1, 2, 1, 2, 1, 2]

# Full board with no four-in-a-row anywhere: rows A A B B A A
DRAW_PATTERN = np.array([_A, _A, _B, _B, _A, _A], dtype=np.int8)


def empty_board() -> Board:
    return Board(observer=NullObserver())


def random_board(rng: random.Random, moves: int) -> Board:
    """Play up to `moves` random legal moves, stopping before the game ends."""
    board = empty_board()
    player = Player.HUMAN
    for _ in range(moves):
        column = rng.choice(board.get_valid_moves())
        board.make_move(column, player)
        if board.is_game_over():
            board.undo_move(column)
            break
        player = player.other()
    return board


def fill_column_by_column(board: Board, pattern: np.ndarray) -> None:
    """Drop pieces so that the board ends up equal to a full pattern."""
    for col in range(COLS):
        for row in range(ROWS - 1, -1, -1):
            board.make_move(col, Player(int(pattern[row, col])))


def plain_minimax(board: Board, depth: int, maximizing: bool, max_depth: int, counter=None):
    """Exhaustive minimax without pruning, ties to the lowest column."""
    if counter is not None:
        counter[0] += 1
    if depth == max_depth or board.is_game_over():
        return evaluate_grid(board.grid), None

    best_score = -math.inf if maximizing else math.inf
    best_column = None
    for column in board.get_valid_moves():
        board.make_move(column, Player.AI if maximizing else Player.HUMAN)
        score, _ = plain_minimax(board, depth + 1, not maximizing, max_depth, counter)
        board.undo_move(column)
        if (maximizing and score > best_score) or (not maximizing and score < best_score):
            best_score = score
            best_column = column
    if best_column is None:
        return evaluate_grid(board.grid), None
    return best_score, best_column
