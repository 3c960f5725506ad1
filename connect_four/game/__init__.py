"""
connect_four.game - Core game mechanics for Connect Four

This package contains the board representation, the human-versus-engine
game session and the Gymnasium environment.
"""

from connect_four.game.board import Board
from connect_four.game.rules import ConnectFourGame, ConnectFourEnv

__all__ = ['Board', 'ConnectFourGame', 'ConnectFourEnv']
