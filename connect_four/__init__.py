"""
connect_four - Connect Four game engine with a minimax opponent

This package provides the board engine, a fixed-depth alpha-beta search for
the automated player, a game session that owns turn order, a Gymnasium
environment and a small command-line interface.
"""

# Version number
__version__ = '0.1.0'
