"""
evaluator.py - Static position evaluation for the minimax search

Scores a grid from the automated player's point of view. The functions here
are pure: they only read the grid they are given.
"""

from typing import Sequence

import numpy as np

from connect_four.utils import (ROWS, CENTER_COL, SCORING_LINES, Player,
                                CENTER_PIECE_BONUS, OPPONENT_THREE_SCORE,
                                OWN_THREE_SCORE, OPPONENT_TWO_SCORE, PIECE_WEIGHT,
                                window_values)


def score_window(values: Sequence[int], ai_player: Player = Player.AI,
                 human_player: Player = Player.HUMAN) -> int:
    """
    Score one window of up to four cells.

    Args:
        values: The cell values in the window
        ai_player: The side being maximized
        human_player: The opponent

    Returns:
        -500 for an opponent three with one gap, +50 for our own three with
        one gap, -50 for an opponent two with two gaps, otherwise five points
        per own piece minus five per opponent piece
    """
    ai_count = human_count = empty_count = 0
    for value in values:
        if value == ai_player.value:
            ai_count += 1
        elif value == human_player.value:
            human_count += 1
        else:
            empty_count += 1

    if human_count == 3 and empty_count == 1:
        return OPPONENT_THREE_SCORE
    if ai_count == 3 and empty_count == 1:
        return OWN_THREE_SCORE
    if human_count == 2 and empty_count == 2:
        return OPPONENT_TWO_SCORE
    return PIECE_WEIGHT * ai_count - PIECE_WEIGHT * human_count


def center_bonus(cells: Sequence[Sequence[int]], ai_player: Player = Player.AI) -> int:
    return CENTER_PIECE_BONUS * sum(
        1 for row in range(ROWS) if cells[row][CENTER_COL] == ai_player.value)


def evaluate_grid(grid, ai_player: Player = Player.AI,
                  human_player: Player = Player.HUMAN) -> int:
    """
    Heuristic score of a whole grid.

    The sum of the centre-column bonus and the score of a four-cell run
    starting at every cell in all four directions. Runs that leave the board
    are clipped and score the on-board cells only. Wins are not
    special-cased; a completed line scores like any other.

    Args:
        grid: ROWS x COLS numpy array or nested list
        ai_player: The side being maximized
        human_player: The opponent
    """
    cells = grid.tolist() if isinstance(grid, np.ndarray) else grid
    score = center_bonus(cells, ai_player)
    for line in SCORING_LINES:
        score += score_window(window_values(cells, line), ai_player, human_player)
    return score
