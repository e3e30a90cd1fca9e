import random

from django.test import SimpleTestCase

from game.ai.board import BoardState, Player
from game.ai.candidates import generate_candidates
from game.ai.patterns import FIVE_SCORE, evaluate_board, pattern_score, score_cell, score_line
from game.ai.rules import DIRECTIONS
from game.tests_rules import board_with, random_board

X = Player.FIRST
O = Player.SECOND


class PatternTableTests(SimpleTestCase):
    def test_every_band(self):
        expected = {
            (4, 2): 50000, (4, 1): 5000, (4, 0): 100,
            (3, 2): 3000, (3, 1): 300, (3, 0): 50,
            (2, 2): 100, (2, 1): 30, (2, 0): 5,
            (1, 2): 10, (1, 1): 3, (1, 0): 0,
        }
        for (count, open_ends), score in expected.items():
            with self.subTest(count=count, open_ends=open_ends):
                self.assertEqual(pattern_score(count, open_ends), score)

    def test_five_and_overline_ignore_open_ends(self):
        for count in (5, 6, 9):
            for open_ends in (0, 1, 2):
                self.assertEqual(pattern_score(count, open_ends), FIVE_SCORE)

    def test_bands_keep_their_ordering(self):
        self.assertGreater(pattern_score(4, 2), pattern_score(4, 1))
        self.assertGreater(pattern_score(4, 1), pattern_score(3, 2))
        self.assertGreater(pattern_score(3, 2), pattern_score(3, 1))
        self.assertGreater(pattern_score(3, 1), pattern_score(2, 2))


class ScoreLineTests(SimpleTestCase):
    def test_lone_stone_in_open_space(self):
        board = board_with({(7, 7): X})
        self.assertEqual(score_line(board, 7, 7, 0, 1, X), 10)
        self.assertEqual(score_cell(board, 7, 7, X), 40)

    def test_board_edge_counts_as_blocked(self):
        board = board_with({(0, 0): X})
        self.assertEqual(score_line(board, 0, 0, 0, 1, X), 3)
        self.assertEqual(score_line(board, 0, 0, 1, 0, X), 3)
        self.assertEqual(score_line(board, 0, 0, 1, 1, X), 3)
        # (1, -1) leaves the board on both sides
        self.assertEqual(score_line(board, 0, 0, 1, -1, X), 0)
        self.assertEqual(score_cell(board, 0, 0, X), 9)

    def test_opponent_stone_counts_as_blocked(self):
        board = board_with({(7, 7): X, (7, 8): O})
        self.assertEqual(score_line(board, 7, 7, 0, 1, X), 3)

        board = board_with({(7, 5): X, (7, 6): X, (7, 7): X, (7, 4): O, (7, 8): O})
        self.assertEqual(score_line(board, 7, 6, 0, 1, X), 50)

    def test_empty_cell_is_scored_as_if_played(self):
        board = board_with({(7, 5): X, (7, 6): X, (7, 7): X})
        # (7, 8) would complete an open four
        self.assertEqual(score_line(board, 7, 8, 0, 1, X), 50000)
        self.assertIsNone(board.grid[7][8])

    def test_reflection_symmetry(self):
        rng = random.Random(11)
        for _ in range(10):
            board = random_board(rng)
            for r in range(board.size):
                for c in range(board.size):
                    for player in (X, O):
                        for dr, dc in DIRECTIONS:
                            self.assertEqual(
                                score_line(board, r, c, dr, dc, player),
                                score_line(board, r, c, -dr, -dc, player),
                            )


class EvaluateBoardTests(SimpleTestCase):
    def test_empty_board_is_neutral(self):
        self.assertEqual(evaluate_board(BoardState(), X), 0)

    def test_open_four_is_in_the_fifty_thousand_band(self):
        board = board_with({(7, c): X for c in range(5, 9)})

        # per stone: open four (50000) + three lone axes (3 * 10)
        self.assertEqual(evaluate_board(board, X), 4 * 50030)
        self.assertEqual(evaluate_board(board, O), -4 * 50030)
        self.assertGreaterEqual(evaluate_board(board, X), 4 * 50000)

    def test_opponent_stones_subtract(self):
        board = board_with({(7, 7): X, (2, 2): O})
        self.assertEqual(evaluate_board(board, X), 0)

        board = board_with({(7, 7): X, (7, 8): X, (2, 2): O})
        self.assertGreater(evaluate_board(board, X), 0)
        self.assertLess(evaluate_board(board, O), 0)


class CandidateGeneratorTests(SimpleTestCase):
    def test_empty_board_has_no_candidates(self):
        self.assertEqual(generate_candidates(BoardState(), X), [])

    def test_single_stone_neighbourhood(self):
        board = board_with({(7, 7): X})
        candidates = generate_candidates(board, O)

        cells = [m.cell for m in candidates]
        self.assertEqual(len(cells), 24)
        self.assertEqual(len(set(cells)), 24)
        self.assertNotIn((7, 7), cells)

        adjacent = {(7 + dr, 7 + dc) for dr in (-1, 0, 1) for dc in (-1, 0, 1)} - {(7, 7)}
        self.assertEqual(set(cells[:8]), adjacent)

        scores = [m.score for m in candidates]
        self.assertEqual(scores, sorted(scores, reverse=True))

    def test_equal_scores_keep_row_major_discovery_order(self):
        board = board_with({(7, 7): X})
        cells = [m.cell for m in generate_candidates(board, O)]

        # all eight neighbours score the same, so do all sixteen cells at distance 2
        self.assertEqual(
            cells[:8],
            [(6, 6), (6, 7), (6, 8), (7, 6), (7, 8), (8, 6), (8, 7), (8, 8)],
        )
        self.assertEqual(
            cells[8:],
            [(5, 5), (5, 6), (5, 7), (5, 8), (5, 9),
             (6, 5), (6, 9),
             (7, 5), (7, 9),
             (8, 5), (8, 9),
             (9, 5), (9, 6), (9, 7), (9, 8), (9, 9)],
        )

    def test_score_favours_own_threats(self):
        board = board_with({(7, 7): X})
        top = generate_candidates(board, X)[0]
        # own two (130) * 1.1 + blocking value (33)
        self.assertAlmostEqual(top.score, 130 * 1.1 + 33)

    def test_corner_stone_is_clipped_to_the_board(self):
        board = board_with({(0, 0): X})
        cells = {m.cell for m in generate_candidates(board, O)}
        expected = {(r, c) for r in range(3) for c in range(3)} - {(0, 0)}
        self.assertEqual(cells, expected)

    def test_candidates_are_empty_and_near_a_stone(self):
        rng = random.Random(3)
        for _ in range(15):
            board = random_board(rng, size=11, density=0.12)
            stones = [(r, c) for r in range(board.size) for c in range(board.size) if board.grid[r][c]]
            for move in generate_candidates(board, X):
                self.assertIsNone(board.grid[move.row][move.col])
                self.assertTrue(
                    any(max(abs(move.row - r), abs(move.col - c)) <= 2 for r, c in stones),
                    move,
                )
