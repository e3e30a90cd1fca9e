import math
import random
from unittest.mock import patch

from django.test import SimpleTestCase

from game.ai.board import BoardState, Player
from game.ai.candidates import generate_candidates
from game.ai.difficulty import DIFFICULTY_MAP, Difficulty, get_difficulty_config
from game.ai.exceptions import ConfigurationError
from game.ai.minimax_engine import WIN_SCORE, SearchEngine
from game.ai.patterns import evaluate_board
from game.ai.selector import MoveSelector, choose_move
from game.tests_rules import DRAW_ROWS, board_with

X = Player.FIRST
O = Player.SECOND


class FixedRoll(random.Random):
    """Random source whose `random()` always returns `roll`."""

    def __init__(self, roll, seed=0):
        super().__init__(seed)
        self.roll = roll

    def random(self):
        return self.roll


def rows_with(stones, size=15):
    rows = [[""] * size for _ in range(size)]
    for (r, c), symbol in stones.items():
        rows[r][c] = symbol
    return rows


def o_can_win_at_3_7():
    # O has a four blocked by X on the left: (3, 7) is the only winning cell.
    stones = {(3, c): "O" for c in range(3, 7)}
    stones.update({(3, 2): "X", (10, 1): "X", (10, 4): "X", (12, 8): "X", (13, 13): "X"})
    return BoardState.from_rows(rows_with(stones))


def o_must_block_at_5_9():
    stones = {(5, c): "X" for c in range(5, 9)}
    stones.update({(12, 12): "X", (5, 4): "O", (9, 9): "O", (10, 2): "O", (1, 1): "O"})
    return BoardState.from_rows(rows_with(stones))


class DifficultyTests(SimpleTestCase):
    def test_depth_table(self):
        self.assertEqual(DIFFICULTY_MAP[Difficulty.EASY].depth, 1)
        self.assertEqual(DIFFICULTY_MAP[Difficulty.MEDIUM].depth, 2)
        self.assertEqual(DIFFICULTY_MAP[Difficulty.HARD].depth, 3)
        self.assertEqual(DIFFICULTY_MAP[Difficulty.EASY].random_move_probability, 0.3)
        self.assertEqual(DIFFICULTY_MAP[Difficulty.HARD].random_move_probability, 0.0)

    def test_lookup_by_name(self):
        self.assertEqual(get_difficulty_config("HARD").depth, 3)
        self.assertEqual(get_difficulty_config(None), DIFFICULTY_MAP[Difficulty.MEDIUM])
        with self.assertRaises(ConfigurationError):
            get_difficulty_config("nightmare")


class SearchEngineTests(SimpleTestCase):
    def test_alpha_beta_matches_plain_minimax(self):
        rng = random.Random(5)
        for _ in range(6):
            board = BoardState(9)
            player = X
            last = None
            for _ in range(rng.randint(3, 6)):
                empty = board.empty_cells()
                last = rng.choice(empty)
                board.make(last[0], last[1], player)
                player = player.opponent
            before = board.to_rows()

            for depth in (1, 2, 3):
                pruned = SearchEngine(board, player, node_fan_out=5)
                plain = SearchEngine(board, player, node_fan_out=5, pruning=False)

                value = pruned.search(depth, -math.inf, math.inf, True, last)
                expected = plain.search(depth, -math.inf, math.inf, True, last)

                self.assertEqual(value, expected)
                self.assertLessEqual(pruned.evaluated, plain.evaluated)
                self.assertEqual(board.to_rows(), before)

    def test_terminal_score_prefers_fast_results(self):
        board = board_with({(7, c): X for c in range(5)})

        engine = SearchEngine(board, O)
        self.assertEqual(engine.search(3, maximizing=True, last_move=(7, 4)), -(WIN_SCORE + 3))

        engine = SearchEngine(board, X)
        self.assertEqual(engine.search(2, maximizing=False, last_move=(7, 4)), WIN_SCORE + 2)
        self.assertEqual(engine.evaluated, 1)

    def test_depth_zero_is_static_evaluation(self):
        board = board_with({(7, 7): X, (7, 8): X, (8, 8): O})
        engine = SearchEngine(board, X)
        self.assertEqual(engine.search(0, last_move=(8, 8)), evaluate_board(board, X))

    def test_no_candidates_is_neutral(self):
        self.assertEqual(SearchEngine(BoardState(), X).search(2), 0)


class MoveSelectorTests(SimpleTestCase):
    def test_first_move_is_the_center(self):
        board = BoardState()
        self.assertEqual(MoveSelector(rng=random.Random(1)).get_move(board, "hard"), (7, 7))

        small = BoardState(9)
        self.assertEqual(MoveSelector().get_move(small), (4, 4))

    def test_first_reply_is_next_to_the_opponent(self):
        neighbours = {(7 + dr, 7 + dc) for dr in (-1, 0, 1) for dc in (-1, 0, 1)} - {(7, 7)}
        for seed in range(20):
            board = BoardState.from_moves([(7, 7)])
            move = MoveSelector(rng=random.Random(seed)).get_move(board, "medium")
            self.assertIn(move, neighbours)
            self.assertEqual(len(board.history), 1)

    def test_first_reply_in_a_corner_never_lands_on_the_stone(self):
        for seed in range(30):
            board = BoardState.from_moves([(0, 0)])
            move = MoveSelector(rng=random.Random(seed)).get_move(board)
            self.assertIn(move, {(0, 1), (1, 0), (1, 1)})

    def test_depth_one_takes_the_immediate_win(self):
        board = o_can_win_at_3_7()
        self.assertEqual(board.current_player, O)
        before = board.to_rows()

        selector = MoveSelector(rng=FixedRoll(0.99))
        move = selector.get_move(board, Difficulty.EASY)

        self.assertEqual(move, (3, 7))
        self.assertEqual(selector.last_score, WIN_SCORE)
        self.assertEqual(board.to_rows(), before)

    def test_hard_also_takes_the_win(self):
        board = o_can_win_at_3_7()
        self.assertEqual(MoveSelector().get_move(board, "hard"), (3, 7))

    def test_medium_blocks_an_opponent_four(self):
        board = o_must_block_at_5_9()
        self.assertEqual(board.current_player, O)
        before = board.to_rows()

        move = MoveSelector().get_move(board, "medium")

        self.assertEqual(move, (5, 9))
        self.assertEqual(board.to_rows(), before)

    def test_easy_random_pick_comes_from_the_top_five(self):
        board = BoardState.from_moves([(7, 7), (7, 8), (8, 8)])
        top_five = [m.cell for m in generate_candidates(board, O)[:5]]

        for seed in range(10):
            move = MoveSelector(rng=FixedRoll(0.0, seed)).get_move(board, "easy")
            self.assertIn(move, top_five)

    def test_same_seed_same_move(self):
        board = BoardState.from_moves([(7, 7), (7, 8), (8, 8), (6, 6)])
        first = [MoveSelector(rng=random.Random(42)).get_move(board, "easy") for _ in range(5)]
        self.assertEqual(len(set(first)), 1)

    def test_tied_root_values_keep_the_first_candidate(self):
        board = BoardState.from_moves([(7, 7), (7, 8), (8, 8)])
        candidates = generate_candidates(board, O)

        with patch.object(SearchEngine, "search", return_value=0) as search:
            move = MoveSelector(rng=FixedRoll(0.99)).get_move(board, "medium")

        self.assertEqual(move, candidates[0].cell)
        self.assertEqual(search.call_count, min(15, len(candidates)))

    def test_tie_after_the_first_candidate_keeps_the_earlier_one(self):
        board = BoardState.from_moves([(7, 7), (7, 8), (8, 8)])
        candidates = generate_candidates(board, O)
        # second and third candidates tie for the best value
        values = iter([5, 9, 9] + [0] * 20)

        with patch.object(SearchEngine, "search", side_effect=lambda *args, **kwargs: next(values)):
            move = MoveSelector().get_move(board, "medium")

        self.assertEqual(move, candidates[1].cell)

    def test_full_board_has_no_legal_move(self):
        board = BoardState.from_rows(DRAW_ROWS)
        self.assertIsNone(MoveSelector().get_move(board, "medium"))

    def test_choose_move_payload(self):
        board = BoardState.from_moves([(7, 7), (7, 8), (8, 8)])
        payload = choose_move(board, "medium", rng=random.Random(0))

        self.assertEqual(payload["player"], "O")
        self.assertEqual(payload["difficulty"], "medium")
        self.assertEqual(payload["depth"], 2)
        self.assertGreater(payload["evaluated"], 0)
        row, col = payload["move"]["row"], payload["move"]["col"]
        self.assertIsNone(board.grid[row][col])
