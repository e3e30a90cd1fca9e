import random

from django.test import SimpleTestCase

from game.ai.board import BoardState, Outcome, Player
from game.ai.exceptions import ConfigurationError, IllegalMoveError
from game.ai.rules import WIN_LENGTH, detailed_check, fast_check

X = Player.FIRST
O = Player.SECOND

# 5x5, 13 X / 12 O, no five anywhere.
DRAW_ROWS = [
    ["X", "X", "O", "O", "X"],
    ["O", "O", "X", "X", "O"],
    ["X", "X", "O", "O", "X"],
    ["O", "O", "X", "X", "O"],
    ["X", "X", "O", "O", "X"],
]


def board_with(stones, size=15):
    board = BoardState(size)
    for (r, c), player in stones.items():
        board.make(r, c, player)
    return board


def random_board(rng, size=9, density=0.45):
    board = BoardState(size)
    for r in range(size):
        for c in range(size):
            roll = rng.random()
            if roll < density / 2:
                board.make(r, c, X)
            elif roll < density:
                board.make(r, c, O)
    return board


class WinDetectionTests(SimpleTestCase):
    def test_horizontal_five_detected_in_row_order(self):
        board = board_with({(7, c): X for c in range(3, 8)})

        self.assertTrue(fast_check(board, 7, 5))
        self.assertEqual(
            detailed_check(board, 7, 5),
            [(7, 3), (7, 4), (7, 5), (7, 6), (7, 7)],
        )

    def test_vertical_and_diagonal_fives(self):
        vertical = board_with({(r, 2): O for r in range(0, 5)})
        self.assertEqual(detailed_check(vertical, 4, 2), [(0, 2), (1, 2), (2, 2), (3, 2), (4, 2)])

        diag = board_with({(i, i): X for i in range(10, 15)})
        self.assertEqual(detailed_check(diag, 14, 14), [(10, 10), (11, 11), (12, 12), (13, 13), (14, 14)])

        anti = board_with({(3 + i, 7 - i): X for i in range(5)})
        self.assertTrue(fast_check(anti, 5, 5))
        self.assertEqual(detailed_check(anti, 5, 5), [(3, 7), (4, 6), (5, 5), (6, 4), (7, 3)])

    def test_four_is_not_a_win(self):
        board = board_with({(7, c): X for c in range(3, 7)})
        self.assertFalse(fast_check(board, 7, 3))
        self.assertIsNone(detailed_check(board, 7, 3))

    def test_opponent_stone_breaks_the_run(self):
        stones = {(7, c): X for c in range(2, 8)}
        stones[(7, 4)] = O
        board = board_with(stones)
        self.assertFalse(fast_check(board, 7, 6))

    def test_empty_and_out_of_bounds_cells(self):
        board = board_with({(0, 0): X})
        self.assertFalse(fast_check(board, 5, 5))
        self.assertIsNone(detailed_check(board, 5, 5))
        self.assertFalse(fast_check(board, -1, 0))
        self.assertIsNone(detailed_check(board, 0, 15))

    def test_overline_reports_exactly_five_cells_containing_the_move(self):
        board = board_with({(0, c): X for c in range(6)})

        self.assertEqual(detailed_check(board, 0, 5), [(0, 1), (0, 2), (0, 3), (0, 4), (0, 5)])
        self.assertEqual(detailed_check(board, 0, 2), [(0, 0), (0, 1), (0, 2), (0, 3), (0, 4)])
        for c in range(6):
            self.assertTrue(fast_check(board, 0, c))

    def test_fast_check_agrees_with_detailed_check(self):
        rng = random.Random(7)
        for _ in range(25):
            board = random_board(rng, density=0.7)
            for r in range(board.size):
                for c in range(board.size):
                    line = detailed_check(board, r, c)
                    agrees = line is not None and len(line) >= WIN_LENGTH and (r, c) in line
                    self.assertEqual(fast_check(board, r, c), agrees, (r, c, board.to_rows()))


class BoardStateTests(SimpleTestCase):
    def test_new_board_defaults(self):
        board = BoardState()
        self.assertEqual(board.size, 15)
        self.assertTrue(board.is_empty())
        self.assertEqual(board.current_player, X)
        self.assertEqual(board.result.outcome, Outcome.ONGOING)
        self.assertEqual(board.center, (7, 7))

    def test_play_alternates_and_records_history(self):
        board = BoardState()
        board.play(7, 7)
        board.play(7, 8)

        self.assertEqual(board.grid[7][7], X)
        self.assertEqual(board.grid[7][8], O)
        self.assertEqual([m.cell for m in board.history], [(7, 7), (7, 8)])
        self.assertEqual(board.last_move.player, O)
        self.assertEqual(board.current_player, X)

    def test_play_rejects_occupied_and_out_of_bounds(self):
        board = BoardState()
        board.play(7, 7)
        with self.assertRaises(IllegalMoveError):
            board.play(7, 7)
        with self.assertRaises(IllegalMoveError):
            board.play(15, 0)
        self.assertEqual(len(board.history), 1)

    def test_winning_move_ends_the_game(self):
        board = BoardState()
        for c in range(4):
            board.play(7, c)
            board.play(8, c)
        result = board.play(7, 4)

        self.assertEqual(result.outcome, Outcome.WIN)
        self.assertEqual(result.winner, X)
        self.assertEqual(result.winning_cells, ((7, 0), (7, 1), (7, 2), (7, 3), (7, 4)))
        self.assertTrue(board.game_over)
        self.assertEqual(board.current_player, X)
        with self.assertRaises(IllegalMoveError):
            board.play(0, 0)

    def test_full_board_without_five_is_a_draw(self):
        xs = [(r, c) for r in range(5) for c in range(5) if DRAW_ROWS[r][c] == "X"]
        os_ = [(r, c) for r in range(5) for c in range(5) if DRAW_ROWS[r][c] == "O"]
        moves = []
        for i, cell in enumerate(xs):
            moves.append(cell)
            if i < len(os_):
                moves.append(os_[i])

        board = BoardState.from_moves(moves, size=5)

        self.assertEqual(board.result.outcome, Outcome.DRAW)
        self.assertIsNone(board.result.winner)
        self.assertTrue(board.is_full())

    def test_undo_takes_back_two_plies(self):
        board = BoardState.from_moves([(7, 7), (7, 8), (8, 8)])

        self.assertTrue(board.undo())
        self.assertEqual([m.cell for m in board.history], [(7, 7)])
        self.assertIsNone(board.grid[7][8])
        self.assertIsNone(board.grid[8][8])
        self.assertEqual(board.current_player, O)

        self.assertTrue(board.undo())
        self.assertTrue(board.is_empty())
        self.assertEqual(board.current_player, X)
        self.assertFalse(board.undo())

    def test_undo_reopens_a_finished_game(self):
        board = BoardState()
        for c in range(4):
            board.play(7, c)
            board.play(8, c)
        board.play(7, 4)

        board.undo()
        self.assertFalse(board.game_over)
        self.assertEqual(board.current_player, O)
        self.assertIsNone(board.grid[7][4])

    def test_from_rows_infers_side_to_move_and_result(self):
        rows = [[""] * 15 for _ in range(15)]
        rows[7][7] = "X"
        board = BoardState.from_rows(rows)
        self.assertEqual(board.current_player, O)
        self.assertEqual(board.last_move.cell, (7, 7))

        draw = BoardState.from_rows(DRAW_ROWS)
        self.assertEqual(draw.result.outcome, Outcome.DRAW)

        rows = [[""] * 15 for _ in range(15)]
        for c in range(5):
            rows[0][c] = "X"
        for c in range(4):
            rows[1][c] = "O"
        won = BoardState.from_rows(rows)
        self.assertEqual(won.result.winner, X)
        self.assertEqual(len(won.result.winning_cells), WIN_LENGTH)

    def test_from_rows_accepts_a_boards_own_grid(self):
        board = BoardState.from_moves([(7, 7), (7, 8)])
        again = BoardState.from_rows(board.grid)

        self.assertEqual(again.to_rows(), board.to_rows())
        self.assertEqual(again.grid[7][7], X)
        self.assertEqual(again.grid[7][8], O)
        self.assertEqual(again.current_player, X)
        self.assertIs(Player.from_symbol(O), O)

    def test_from_rows_rejects_malformed_boards(self):
        with self.assertRaises(ConfigurationError):
            BoardState.from_rows([["", ""], [""]])
        with self.assertRaises(ConfigurationError):
            BoardState.from_rows([[""] * 15 for _ in range(14)])
        with self.assertRaises(ConfigurationError):
            BoardState.from_rows([["?"] * 5 for _ in range(5)])
        with self.assertRaises(ConfigurationError):
            BoardState.from_rows([[""] * 4 for _ in range(4)])

        rows = [[""] * 15 for _ in range(15)]
        rows[0][0] = rows[0][1] = "X"
        with self.assertRaises(ConfigurationError):
            BoardState.from_rows(rows)

    def test_make_never_overwrites(self):
        board = board_with({(3, 3): X})
        with self.assertRaises(IllegalMoveError):
            board.make(3, 3, O)
        self.assertEqual(board.grid[3][3], X)

    def test_reset_and_copy(self):
        board = BoardState.from_moves([(7, 7), (7, 8)])
        clone = board.copy()
        clone.play(0, 0)
        self.assertIsNone(board.grid[0][0])
        self.assertEqual(len(board.history), 2)

        board.reset(size=9)
        self.assertEqual(board.size, 9)
        self.assertTrue(board.is_empty())
        self.assertEqual(board.history, [])
        with self.assertRaises(ConfigurationError):
            board.reset(size=3)
