"""
cli.py - Command-line interface for the Connect Four engine

This module lets you play against the minimax engine in a terminal, analyze
a given board position, and benchmark the search.
"""

import argparse
import random
import sys
from typing import List, Optional

from connect_four.ai.evaluator import evaluate_grid
from connect_four.ai.minimax import MinimaxPlayer
from connect_four.debug import debug, DebugLevel
from connect_four.game.board import Board
from connect_four.game.rules import ConnectFourGame
from connect_four.observers import NullObserver
from connect_four.utils import COLS, DEFAULT_SEARCH_DEPTH, Player, parse_position

QUIT, UNDO, RESTART = -1, -2, -3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Connect Four against a minimax engine',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
    Examples:

    # Play a game (you are X and move first)
    python run.py play

    # Let the engine open, searching six plies deep
    python run.py play --ai-first --depth 6

    # Analyze a position (42 values, top row first)
    python run.py analyze --position 0,0,0,0,0,0,0,...,1,1,1,0,2,2,0

    # Time the search on 50 random positions
    python run.py benchmark --iterations 50
    """)
    parser.add_argument('--debug', action='store_true',
                        help='Enable debug output (same as --debug_level debug)')
    parser.add_argument('--debug_level',
                        choices=[level.name.lower() for level in DebugLevel],
                        default='warning',
                        help='Verbosity: none, error, warning, info, debug, trace')
    parser.add_argument('--log_file', type=str, default=None,
                        help='Also write diagnostics to this file')
    parser.add_argument('--depth', type=int, default=DEFAULT_SEARCH_DEPTH,
                        help=f'Search depth in plies (default: {DEFAULT_SEARCH_DEPTH})')

    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    play_parser = subparsers.add_parser('play', help='Play a game interactively')
    play_parser.add_argument('--ai-first', action='store_true',
                             help='Let the engine make the first move')

    analyze_parser = subparsers.add_parser('analyze', help='Analyze a board position')
    analyze_parser.add_argument('--position', type=str, required=True,
                                help='Comma-separated cell values (0 empty, 1 human, 2 engine)')

    benchmark_parser = subparsers.add_parser('benchmark', help='Benchmark the search')
    benchmark_parser.add_argument('--iterations', type=int, default=20,
                                  help='Number of positions to search')
    benchmark_parser.add_argument('--seed', type=int, default=None,
                                  help='Seed for the random positions')
    return parser


class SimpleCLI:
    """Simple command-line interface for the Connect Four engine."""

    def __init__(self, argv: Optional[List[str]] = None):
        self.argv = argv
        self.args = None
        self.game: Optional[ConnectFourGame] = None

    def parse_args(self) -> None:
        """Parse command-line arguments and configure diagnostics."""
        self.args = build_parser().parse_args(self.argv)

        if self.args.debug:
            debug.configure(level=DebugLevel.DEBUG)
        else:
            debug.set_from_string(self.args.debug_level)
        if self.args.log_file:
            debug.configure(log_file=self.args.log_file)

    def run(self) -> int:
        """Run the CLI based on the parsed arguments; returns an exit code."""
        if not self.args:
            self.parse_args()

        if self.args.depth < 1:
            print("Depth must be at least 1.")
            return 2

        if self.args.command == 'play':
            self.play_game()
        elif self.args.command == 'analyze':
            return self.analyze_position()
        elif self.args.command == 'benchmark':
            self.benchmark()
        else:
            print("Please specify a command. Use --help for options.")
            return 1
        return 0

    def play_game(self) -> None:
        """Play a game against the engine."""
        self.game = ConnectFourGame(depth=self.args.depth, ai_first=self.args.ai_first)
        print("Starting a new Connect Four game! You are X.")
        print("Enter a column number (0-6) to move.")
        print("Other commands: 'q' to quit, 'u' to undo, 'r' to restart.")

        if self.game.get_current_player() == Player.AI:
            self.engine_turn()
        print(self.game.render())

        while not self.game.is_game_over():
            move = self.get_human_move()

            if move is None:
                continue
            if move == QUIT:
                print("Quitting game.")
                return
            if move == UNDO:
                if self.game.undo_turn():
                    print("Move undone.")
                    print(self.game.render())
                else:
                    print("No moves to undo.")
                continue
            if move == RESTART:
                self.game.reset()
                print("Game restarted.")
                if self.game.get_current_player() == Player.AI:
                    self.engine_turn()
                print(self.game.render())
                continue

            if not self.game.play_human_move(move):
                print(f"Column {move} is full.")
                continue
            print(self.game.render())

            if not self.game.is_game_over():
                self.engine_turn()
                print(self.game.render())

        print("Game over!")
        winner = self.game.get_winner()
        if winner == Player.HUMAN:
            print("You win! Congratulations!")
        elif winner == Player.AI:
            print("The engine wins! Better luck next time.")
        else:
            print("It's a draw!")

    def engine_turn(self) -> None:
        print("Engine is thinking...")
        column = self.game.play_ai_move()
        if column is None:
            print("Engine has no move.")
        else:
            print(f"Engine plays column {column}")

    def get_human_move(self) -> Optional[int]:
        """
        Read one move from standard input.

        Returns:
            Column index, a special command code, or None on invalid input
        """
        try:
            user_input = input("Your move (columns 0-6, q/u/r): ").strip().lower()
        except EOFError:
            return QUIT

        if user_input == 'q':
            return QUIT
        if user_input == 'u':
            return UNDO
        if user_input == 'r':
            return RESTART

        try:
            move = int(user_input)
        except ValueError:
            print("Invalid input. Please enter a column number or special command.")
            return None
        if not 0 <= move < COLS:
            print(f"Column must be between 0 and {COLS - 1}.")
            return None
        return move

    def analyze_position(self) -> int:
        """Print the evaluation and the engine's move for a given position."""
        try:
            board = Board.from_grid(parse_position(self.args.position))
        except ValueError as e:
            print(f"Error parsing position: {e}")
            return 1

        print("Loaded position:")
        print(board.render())

        winner = board.get_winner()
        if winner is not None:
            print(f"Winner: {winner.name} ({winner}) along {board.get_winning_line()}")
        elif board.is_full():
            print("Board is full: draw")
        else:
            print(f"Valid moves: {board.get_valid_moves()}")

        print(f"Heuristic score (engine's view): {evaluate_grid(board.grid)}")

        engine = MinimaxPlayer(board, depth=self.args.depth)
        column = engine.choose_move()
        if column is None:
            print("Engine move: none (game is over)")
        else:
            print(f"Engine move: column {column} (score {engine.last_score}, "
                  f"{engine.nodes_evaluated} nodes)")
        return 0

    def benchmark(self) -> None:
        """Time the search on random reachable positions."""
        iterations = max(1, self.args.iterations)
        rng = random.Random(self.args.seed)
        print(f"Running benchmark with {iterations} positions at depth {self.args.depth}...")

        total_time = 0.0
        total_nodes = 0
        searched = 0
        for _ in range(iterations):
            board = self.random_position(rng)
            if board.is_game_over():
                continue
            engine = MinimaxPlayer(board, depth=self.args.depth, observer=NullObserver())
            debug.start_timer("search")
            engine.choose_move()
            elapsed = debug.end_timer("search", "cli")
            total_time += elapsed or 0.0
            total_nodes += engine.nodes_evaluated
            searched += 1

        if not searched:
            print("No playable positions were generated.")
            return
        print(f"Searched {searched} positions: {total_time:.3f} seconds total, "
              f"{total_time / searched * 1000:.2f} ms per search, "
              f"{total_nodes / searched:.0f} nodes per search")
        if total_time > 0:
            print(f"{total_nodes / total_time:.0f} nodes per second")

    @staticmethod
    def random_position(rng: random.Random, max_moves: int = 20) -> Board:
        """Play random legal moves from an empty board, stopping at game over."""
        board = Board(observer=NullObserver())
        player = Player.HUMAN
        for _ in range(rng.randint(0, max_moves)):
            if board.is_game_over():
                break
            board.make_move(rng.choice(board.get_valid_moves()), player)
            player = player.other()
        return board


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    cli = SimpleCLI(argv)
    try:
        cli.parse_args()
    except ValueError as e:
        print(f"Error: {e}")
        return 2
    return cli.run()


if __name__ == "__main__":
    sys.exit(main())
