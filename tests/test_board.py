import random
import unittest

import numpy as np

from connect_four.game.board import Board
from connect_four.observers import RecordingObserver
from connect_four.utils import ROWS, COLS, WINDOWS, Player, GameResult
from tests.helpers import DRAW_PATTERN, empty_board, fill_column_by_column


class TestMoves(unittest.TestCase):
    def setUp(self):
        self.board = empty_board()

    def test_new_board_is_empty(self):
        self.assertEqual(self.board.move_count(), 0)
        self.assertEqual(self.board.get_valid_moves(), list(range(COLS)))
        self.assertFalse(self.board.is_game_over())
        self.assertIsNone(self.board.get_winner())

    def test_piece_drops_to_bottom(self):
        self.assertTrue(self.board.make_move(2, Player.HUMAN))
        self.assertEqual(self.board.get_cell(ROWS - 1, 2), Player.HUMAN)
        self.assertTrue(self.board.make_move(2, Player.AI))
        self.assertEqual(self.board.get_cell(ROWS - 2, 2), Player.AI)
        self.assertEqual(self.board.column_height(2), 2)

    def test_move_validation(self):
        self.assertTrue(self.board.is_valid_move(0))
        self.assertTrue(self.board.is_valid_move(COLS - 1))
        self.assertFalse(self.board.is_valid_move(-1))
        self.assertFalse(self.board.is_valid_move(COLS))

        for i in range(ROWS):
            self.board.make_move(4, Player.HUMAN if i % 2 == 0 else Player.AI)
        self.assertFalse(self.board.is_valid_move(4))
        self.assertNotIn(4, self.board.get_valid_moves())

    def test_rejected_moves_do_not_mutate(self):
        for i in range(ROWS):
            self.board.make_move(1, Player.HUMAN if i % 2 == 0 else Player.AI)
        before = self.board.get_board()

        self.assertFalse(self.board.make_move(1, Player.HUMAN))
        self.assertFalse(self.board.make_move(-1, Player.HUMAN))
        self.assertFalse(self.board.make_move(COLS, Player.AI))
        self.assertFalse(self.board.make_move(0, Player.EMPTY))
        np.testing.assert_array_equal(self.board.grid, before)

    def test_rejections_are_reported(self):
        observer = RecordingObserver()
        board = Board(observer=observer)
        board.make_move(9, Player.HUMAN)
        rejected = observer.of_kind('rejected')
        self.assertEqual(len(rejected), 1)
        self.assertEqual(rejected[0][1], 9)

    def test_undo_removes_top_piece(self):
        self.board.make_move(3, Player.HUMAN)
        self.board.make_move(3, Player.AI)
        self.board.undo_move(3)
        self.assertEqual(self.board.column_height(3), 1)
        self.assertEqual(self.board.get_cell(ROWS - 1, 3), Player.HUMAN)

    def test_undo_on_empty_or_missing_column_is_noop(self):
        self.board.make_move(0, Player.HUMAN)
        before = self.board.get_board()
        self.board.undo_move(5)
        self.board.undo_move(-1)
        self.board.undo_move(COLS)
        np.testing.assert_array_equal(self.board.grid, before)

    def test_get_board_returns_copy(self):
        snapshot = self.board.get_board()
        snapshot[ROWS - 1, 0] = Player.AI.value
        self.assertEqual(self.board.get_cell(ROWS - 1, 0), Player.EMPTY)

    def test_get_cell_is_bounds_checked(self):
        with self.assertRaises(IndexError):
            self.board.get_cell(ROWS, 0)
        with self.assertRaises(IndexError):
            self.board.get_cell(0, -1)


class TestGravityAndUndo(unittest.TestCase):
    def test_gravity_invariant_over_random_games(self):
        rng = random.Random(7)
        for _ in range(30):
            board = empty_board()
            player = Player.HUMAN
            while not board.is_game_over():
                self.assertTrue(board.make_move(rng.choice(board.get_valid_moves()), player))
                player = player.other()
                for col in range(COLS):
                    occupied = board.grid[:, col] != Player.EMPTY.value
                    height = board.column_height(col)
                    self.assertTrue(occupied[ROWS - height:].all())
                    self.assertFalse(occupied[:ROWS - height].any())

    def test_apply_undo_round_trip(self):
        rng = random.Random(11)
        for _ in range(25):
            board = empty_board()
            player = Player.HUMAN
            for _ in range(rng.randint(0, 30)):
                if board.is_game_over():
                    break
                board.make_move(rng.choice(board.get_valid_moves()), player)
                player = player.other()

            before = board.get_board()
            over, winner = board.is_game_over(), board.get_winner()
            for column in board.get_valid_moves():
                for mover in (Player.HUMAN, Player.AI):
                    self.assertTrue(board.make_move(column, mover))
                    board.undo_move(column)
                    np.testing.assert_array_equal(board.grid, before)
                    self.assertEqual(board.is_game_over(), over)
                    self.assertEqual(board.get_winner(), winner)


class TestWinDetection(unittest.TestCase):
    def place(self, cells, player):
        board = empty_board()
        for row, col in cells:
            board.grid[row, col] = player.value
        return board

    def test_horizontal_win(self):
        board = self.place([(ROWS - 1, c) for c in range(4)], Player.HUMAN)
        self.assertEqual(board.get_winner(), Player.HUMAN)
        self.assertTrue(board.is_game_over())

    def test_vertical_win(self):
        board = self.place([(r, 3) for r in range(ROWS - 1, ROWS - 5, -1)], Player.AI)
        self.assertEqual(board.get_winner(), Player.AI)

    def test_diagonal_wins(self):
        rising = self.place([(ROWS - 1 - i, i) for i in range(4)], Player.HUMAN)
        self.assertEqual(rising.get_winner(), Player.HUMAN)
        falling = self.place([(i, i + 3) for i in range(4)], Player.AI)
        self.assertEqual(falling.get_winner(), Player.AI)

    def test_three_with_gap_is_not_a_win(self):
        board = self.place([(ROWS - 1, 0), (ROWS - 1, 1), (ROWS - 1, 3), (ROWS - 1, 4)],
                           Player.HUMAN)
        self.assertIsNone(board.get_winner())
        self.assertFalse(board.is_game_over())

    def test_every_window_is_detected(self):
        for window in WINDOWS:
            for player in (Player.HUMAN, Player.AI):
                with self.subTest(window=window, player=player):
                    board = self.place(window, player)
                    self.assertEqual(board.get_winner(), player)
                    self.assertEqual(board.get_winning_line(), list(window))

    def test_every_window_missing_one_cell_is_not_a_win(self):
        for window in WINDOWS:
            for skip in range(4):
                cells = [cell for i, cell in enumerate(window) if i != skip]
                with self.subTest(window=window, skip=skip):
                    self.assertIsNone(self.place(cells, Player.AI).get_winner())

    def test_lines_do_not_wrap_around_edges(self):
        # the last three cells of one row plus the first of the next
        cells = [(2, 4), (2, 5), (2, 6), (3, 0)]
        self.assertIsNone(self.place(cells, Player.HUMAN).get_winner())
        # falling diagonal that would step off the right edge
        cells = [(0, 4), (1, 5), (2, 6), (3, 0)]
        self.assertIsNone(self.place(cells, Player.HUMAN).get_winner())
        # rising diagonal that would step off the left edge
        cells = [(2, 2), (3, 1), (4, 0), (5, 6)]
        self.assertIsNone(self.place(cells, Player.HUMAN).get_winner())

    def test_incremental_check_agrees_with_full_scan(self):
        rng = random.Random(3)
        for _ in range(60):
            observer = RecordingObserver()
            board = Board(observer=observer)
            player = Player.HUMAN
            while True:
                column = rng.choice(board.get_valid_moves())
                wins_before = len(observer.of_kind('win'))
                board.make_move(column, player)
                reported = len(observer.of_kind('win')) > wins_before
                self.assertEqual(reported, board.get_winner() is not None)
                if board.is_game_over():
                    break
                player = player.other()
            if reported:
                self.assertEqual(observer.of_kind('win')[-1][1], board.get_winner())


class TestDraw(unittest.TestCase):
    def test_full_board_without_line_is_draw(self):
        observer = RecordingObserver()
        board = Board(observer=observer)
        fill_column_by_column(board, DRAW_PATTERN)

        np.testing.assert_array_equal(board.grid, DRAW_PATTERN)
        self.assertTrue(board.is_full())
        self.assertTrue(board.is_game_over())
        self.assertIsNone(board.get_winner())
        self.assertEqual(board.get_outcome(), GameResult.DRAW)
        self.assertEqual(observer.of_kind('draw'), [('draw',)])
        self.assertEqual(observer.of_kind('win'), [])
        self.assertEqual(board.get_valid_moves(), [])

    def test_nearly_full_board_is_not_over(self):
        board = Board.from_grid(DRAW_PATTERN)
        board.undo_move(3)
        self.assertFalse(board.is_game_over())
        self.assertEqual(board.get_valid_moves(), [3])


class TestFromGrid(unittest.TestCase):
    def test_round_trip(self):
        board = Board.from_grid(DRAW_PATTERN)
        self.assertEqual(board, Board.from_grid(DRAW_PATTERN.tolist()))
        self.assertEqual(board.move_count(), ROWS * COLS)

    def test_rejects_bad_shape(self):
        with self.assertRaises(ValueError):
            Board.from_grid(np.zeros((ROWS, COLS - 1)))

    def test_rejects_bad_values(self):
        grid = np.zeros((ROWS, COLS), dtype=int)
        grid[ROWS - 1, 0] = 3
        with self.assertRaises(ValueError):
            Board.from_grid(grid)

    def test_rejects_floating_piece(self):
        grid = np.zeros((ROWS, COLS), dtype=int)
        grid[ROWS - 2, 0] = Player.HUMAN.value
        with self.assertRaises(ValueError):
            Board.from_grid(grid)

    def test_copy_is_independent(self):
        board = empty_board()
        board.make_move(0, Player.HUMAN)
        clone = board.copy()
        clone.make_move(0, Player.AI)
        self.assertEqual(board.column_height(0), 1)
        self.assertNotEqual(board, clone)


if __name__ == "__main__":
    unittest.main()
