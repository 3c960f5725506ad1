"""
connect_four/ai/__init__.py - Move selection for the automated player

This package provides the static evaluator and the minimax search.
"""

from connect_four.ai.evaluator import evaluate_grid, score_window
from connect_four.ai.minimax import MinimaxPlayer, Move

__all__ = ['MinimaxPlayer', 'Move', 'evaluate_grid', 'score_window']
