"""
minimax.py - Minimax algorithm with alpha-beta pruning for Connect Four

This module provides a MinimaxPlayer that picks moves for the automated side
by searching a live Board to a fixed depth. Moves are applied to the board
and undone again as the search goes, so after choose_move returns the board
holds exactly the position it had before the call.

Columns are tried in ascending order and a later column only replaces the
current best when it scores strictly better, so ties go to the lowest column
and the result is deterministic.
"""

import math
from typing import TYPE_CHECKING, NamedTuple, Optional

from connect_four.ai.evaluator import evaluate_grid
from connect_four.observers import DebugObserver, SearchObserver
from connect_four.utils import DEFAULT_SEARCH_DEPTH, Player

if TYPE_CHECKING:
    from connect_four.game.board import Board


class Move(NamedTuple):
    """Result of one search step; column is None when there is nothing to play."""
    score: float
    column: Optional[int]


class MinimaxPlayer:
    """
    Chooses moves for one side of a Board using minimax with alpha-beta pruning.

    The player keeps a reference to the board it plays on but no state about
    the game itself; each choose_move call starts from the board as it is.
    """

    def __init__(self, board: 'Board', depth: int = DEFAULT_SEARCH_DEPTH,
                 ai_player: Player = Player.AI, human_player: Player = Player.HUMAN,
                 observer: Optional[SearchObserver] = None):
        """
        Initialize the minimax player.

        Args:
            board: The live board to search on
            depth: Search horizon in plies (higher = stronger but slower)
            ai_player: The side this player moves for (maximized)
            human_player: The opponent (minimized)
            observer: Receives search progress (defaults to a DebugObserver)
        """
        if depth < 1:
            raise ValueError(f"Search depth must be at least 1, got {depth}")
        if ai_player == human_player or Player.EMPTY in (ai_player, human_player):
            raise ValueError("ai_player and human_player must be two different players")
        self.board = board
        self.depth = depth
        self.ai_player = ai_player
        self.human_player = human_player
        self.observer = observer if observer is not None else DebugObserver()
        self.nodes_evaluated = 0  # For performance tracking
        self.last_score: Optional[float] = None

    def evaluate(self) -> int:
        """Heuristic score of the current board for the automated side."""
        return evaluate_grid(self.board.grid, self.ai_player, self.human_player)

    def choose_move(self, depth: Optional[int] = None) -> Optional[int]:
        """
        Get the best column for the automated side.

        Args:
            depth: Horizon for this call only (defaults to the player's depth)

        Returns:
            A legal column, or None if the board is full or already decided
        """
        max_depth = self.depth if depth is None else depth
        if max_depth < 1:
            raise ValueError(f"Search depth must be at least 1, got {max_depth}")

        self.nodes_evaluated = 0
        self.observer.on_search_start(max_depth)
        best = self.search(0, -math.inf, math.inf, True, max_depth)
        self.last_score = best.score
        self.observer.on_best_move(best.column, best.score, self.nodes_evaluated)
        return best.column

    def search(self, depth: int, alpha: float, beta: float, maximizing: bool,
               max_depth: int = DEFAULT_SEARCH_DEPTH) -> Move:
        """
        Minimax with alpha-beta pruning.

        Args:
            depth: Plies already played below the root
            alpha: Best score the maximizer can already guarantee
            beta: Best score the minimizer can already guarantee
            maximizing: True when the automated side is to move
            max_depth: The horizon at which positions are scored statically

        Returns:
            The score of this node and the column that achieves it
        """
        self.nodes_evaluated += 1
        board = self.board

        if depth == max_depth or board.is_game_over():
            return Move(self.evaluate(), None)

        columns = board.get_valid_moves()
        if not columns:
            return Move(self.evaluate(), None)

        if maximizing:
            best_score = -math.inf
            best_column = None

            for column in columns:
                board.make_move(column, self.ai_player)
                score = self.search(depth + 1, alpha, beta, False, max_depth).score
                board.undo_move(column)

                if score > best_score:
                    best_score = score
                    best_column = column

                alpha = max(alpha, score)
                # Beta cutoff
                if beta <= alpha:
                    break

        else:  # Minimizing
            best_score = math.inf
            best_column = None

            for column in columns:
                board.make_move(column, self.human_player)
                score = self.search(depth + 1, alpha, beta, True, max_depth).score
                board.undo_move(column)

                if score < best_score:
                    best_score = score
                    best_column = column

                beta = min(beta, score)
                # Alpha cutoff
                if beta <= alpha:
                    break

        self.observer.on_node(depth, maximizing, best_score, best_column)
        return Move(best_score, best_column)
