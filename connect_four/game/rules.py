"""
rules.py - Game sessions and a Gymnasium environment for Connect Four

This module provides:
1. ConnectFourGame, which owns the turn order for a human-versus-engine game
2. ConnectFourEnv, a gymnasium environment where the agent plays the human
   side against the minimax engine
"""

from typing import Any, Dict, List, Optional, Tuple, Union

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from connect_four.ai.minimax import MinimaxPlayer
from connect_four.debug import debug
from connect_four.game.board import Board
from connect_four.observers import DebugObserver, GameObserver, SearchObserver
from connect_four.utils import ROWS, COLS, DEFAULT_SEARCH_DEPTH, Player, GameResult


class ConnectFourGame:
    """
    A human-versus-engine game.

    The board only knows about pieces; this class decides whose turn it is,
    keeps the move history for undo, and asks the MinimaxPlayer for replies.
    """

    def __init__(self, depth: int = DEFAULT_SEARCH_DEPTH, ai_first: bool = False,
                 observer: Optional[Union[GameObserver, SearchObserver]] = None):
        """
        Initialize a new game.

        Args:
            depth: Search depth of the engine
            ai_first: Whether the engine makes the first move
            observer: Shared board/search observer (defaults to DebugObserver)
        """
        observer = observer if observer is not None else DebugObserver()
        self.board = Board(observer=observer)
        self.engine = MinimaxPlayer(self.board, depth=depth, observer=observer)
        self.ai_first = ai_first
        self.history: List[Tuple[int, Player]] = []
        self.current_player = Player.HUMAN
        self.reset(ai_first)

    def reset(self, ai_first: Optional[bool] = None) -> None:
        """Start over with an empty board."""
        if ai_first is not None:
            self.ai_first = ai_first
        debug.debug(f"Resetting game (engine moves first: {self.ai_first})", "game")
        self.board.reset()
        self.history = []
        self.current_player = Player.AI if self.ai_first else Player.HUMAN

    def get_current_player(self) -> Player:
        return self.current_player

    def make_move(self, column: int) -> bool:
        """
        Play a column for whoever is to move.

        Returns:
            True if the move was made, False if it was illegal or the game is over
        """
        if self.is_game_over():
            debug.debug(f"Ignoring move {column}: game is over", "game")
            return False

        player = self.current_player
        if not self.board.make_move(column, player):
            return False

        self.history.append((column, player))
        debug.debug(f"{player.name} played column {column}", "game")

        result = self.get_result()
        if result.is_game_over():
            debug.info(f"Game over: {result.name}", "game")
        else:
            self.current_player = player.other()
        return True

    def play_human_move(self, column: int) -> bool:
        """Play a column for the human; False if it is not the human's turn."""
        if self.current_player != Player.HUMAN:
            debug.warning("Human move requested on the engine's turn", "game")
            return False
        return self.make_move(column)

    def play_ai_move(self) -> Optional[int]:
        """
        Let the engine choose and play a column.

        Returns:
            The column played, or None if the engine has nothing to play
        """
        if self.current_player != Player.AI or self.is_game_over():
            return None
        column = self.engine.choose_move()
        if column is None or not self.make_move(column):
            return None
        return column

    def undo_move(self) -> bool:
        """
        Take back the last move and give the turn back to whoever made it.

        Returns:
            True if a move was undone, False if there was nothing to undo
        """
        if not self.history:
            debug.debug("No moves to undo", "game")
            return False
        column, player = self.history.pop()
        self.board.undo_move(column)
        self.current_player = player
        debug.debug(f"Undid {player.name} move in column {column}", "game")
        return True

    def undo_turn(self) -> int:
        """
        Undo moves until it is the human's turn again, taking back at least
        the human's own last move.

        Returns:
            Number of moves undone (0 if the human has not moved yet)
        """
        if all(player != Player.HUMAN for _, player in self.history):
            return 0
        undone = 0
        while self.history:
            _, player = self.history[-1]
            self.undo_move()
            undone += 1
            if player == Player.HUMAN:
                break
        return undone

    def get_result(self) -> GameResult:
        return self.board.get_outcome()

    def is_game_over(self) -> bool:
        return self.board.is_game_over()

    def get_winner(self) -> Optional[Player]:
        return self.board.get_winner()

    def get_valid_moves(self) -> List[int]:
        if self.is_game_over():
            return []
        return self.board.get_valid_moves()

    def get_moves(self) -> List[int]:
        """Columns played so far, in order."""
        return [column for column, _ in self.history]

    def render(self) -> str:
        return self.board.render()


class ConnectFourEnv(gym.Env):
    """
    Connect Four environment following the Gymnasium interface.

    The agent plays Player.HUMAN; after each agent move the minimax engine
    answers for Player.AI within the same step.
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self, render_mode: Optional[str] = None,
                 opponent_depth: int = DEFAULT_SEARCH_DEPTH,
                 opponent_first: bool = False):
        """
        Initialize the environment.

        Args:
            render_mode: "ascii" to return the board from render(), "human"
                to print it after every step
            opponent_depth: Search depth of the engine opponent
            opponent_first: Whether the engine opens each episode
        """
        if render_mode is not None and render_mode not in self.metadata['render_modes']:
            raise ValueError(f"Unsupported render mode: {render_mode}")
        debug.debug("Initializing ConnectFourEnv", "env")

        self.action_space = spaces.Discrete(COLS)
        # 6x7 board with values 0 (empty), 1 (agent) and 2 (engine)
        self.observation_space = spaces.Box(low=0, high=2, shape=(ROWS, COLS), dtype=np.int8)

        self.render_mode = render_mode
        self.opponent_first = opponent_first
        self.game = ConnectFourGame(depth=opponent_depth, ai_first=opponent_first)
        self.last_opponent_move: Optional[int] = None

        self.reward_win = 1.0
        self.reward_lose = -1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01  # Small negative reward to encourage faster wins

    def reset(self, seed: Optional[int] = None,
              options: Optional[Dict[str, Any]] = None) -> Tuple[np.ndarray, Dict]:
        """
        Start a new episode.

        Args:
            seed: Random seed (the engine itself is deterministic)
            options: May contain 'opponent_first' to override the default

        Returns:
            Initial observation and info dictionary
        """
        super().reset(seed=seed)
        opponent_first = self.opponent_first
        if options and 'opponent_first' in options:
            opponent_first = bool(options['opponent_first'])
        debug.debug(f"Resetting environment (opponent first: {opponent_first})", "env")

        self.game.reset(ai_first=opponent_first)
        self.last_opponent_move = None
        if opponent_first:
            self.last_opponent_move = self.game.play_ai_move()

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Play the agent's column and the engine's reply.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        column = int(action)
        debug.debug(f"Environment step with action {column}", "env")

        if self.game.is_game_over() or not self.game.board.is_valid_move(column):
            debug.warning(f"Invalid action: {column}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        self.game.play_human_move(column)
        self.last_opponent_move = None
        if not self.game.is_game_over():
            self.last_opponent_move = self.game.play_ai_move()

        result = self.game.get_result()
        terminated = result.is_game_over()
        reward = self._reward_for(result) if terminated else self.reward_step
        if terminated:
            debug.info(f"Episode over: {result.name}", "env")

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), reward, terminated, False, self._get_info()

    def _reward_for(self, result: GameResult) -> float:
        if result.winner == Player.HUMAN:
            return self.reward_win
        if result.winner == Player.AI:
            return self.reward_lose
        return self.reward_draw

    def render(self) -> Optional[Union[str, np.ndarray]]:
        if self.render_mode == "ascii":
            return self.game.render()
        if self.render_mode == "human":
            print(self.game.render())
        return None

    def _get_observation(self) -> np.ndarray:
        return self.game.board.get_board()

    def _get_info(self) -> Dict:
        return {
            'valid_moves': self.game.get_valid_moves(),
            'current_player': self.game.get_current_player().value,
            'game_result': self.game.get_result().name,
            'moves_made': len(self.game.history),
            'winning_line': self.game.board.get_winning_line(),
            'opponent_move': self.last_opponent_move,
        }
