from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient


def five_for_x():
    moves = []
    for c in range(4):
        moves.append({"row": 7, "col": c})
        moves.append({"row": 8, "col": c})
    moves.append({"row": 7, "col": 4})
    return moves


class AIMoveApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.url = "/api/game/ai/move/"

    def test_health(self):
        response = self.client.get("/api/game/health/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {"status": "ok"})

    def test_empty_game_plays_center(self):
        response = self.client.post(self.url, {"moves": [], "difficulty": "hard"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["move"], {"row": 7, "col": 7})
        self.assertEqual(response.data["player"], "X")
        self.assertEqual(response.data["depth"], 3)

    def test_reply_next_to_first_stone(self):
        response = self.client.post(
            self.url,
            {"board_size": 9, "moves": [{"row": 4, "col": 4}]},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        move = response.data["move"]
        self.assertEqual(response.data["player"], "O")
        self.assertEqual(response.data["difficulty"], "medium")
        self.assertLessEqual(max(abs(move["row"] - 4), abs(move["col"] - 4)), 1)
        self.assertNotEqual((move["row"], move["col"]), (4, 4))

    def test_takes_the_win(self):
        moves = [
            {"row": 0, "col": 0}, {"row": 3, "col": 3},
            {"row": 14, "col": 14}, {"row": 3, "col": 4},
            {"row": 0, "col": 14}, {"row": 3, "col": 5},
            {"row": 3, "col": 2}, {"row": 3, "col": 6},
            {"row": 14, "col": 0},
        ]
        response = self.client.post(self.url, {"moves": moves, "difficulty": "medium"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["move"], {"row": 3, "col": 7})

    def test_occupied_cell_in_history_is_rejected(self):
        response = self.client.post(
            self.url,
            {"moves": [{"row": 7, "col": 7}, {"row": 7, "col": 7}]},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("moves", response.data)

    def test_out_of_bounds_move_is_rejected(self):
        response = self.client.post(
            self.url,
            {"board_size": 9, "moves": [{"row": 9, "col": 0}]},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_bad_board_size_and_difficulty(self):
        response = self.client.post(self.url, {"board_size": 3}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("board_size", response.data)

        response = self.client.post(self.url, {"difficulty": "nightmare"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("difficulty", response.data)

    def test_finished_game_conflict(self):
        response = self.client.post(self.url, {"moves": five_for_x()}, format="json")
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)


class GameStateApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.url = "/api/game/state/"

    def test_ongoing_state(self):
        response = self.client.post(
            self.url,
            {"board_size": 9, "moves": [{"row": 4, "col": 4}, {"row": 4, "col": 5}]},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["result"], "ongoing")
        self.assertEqual(response.data["turn"], "X")
        self.assertIsNone(response.data["winner"])
        self.assertEqual(response.data["winning_line"], [])
        self.assertEqual(response.data["move_count"], 2)
        self.assertEqual(response.data["board"][4][4], "X")
        self.assertEqual(response.data["board"][4][5], "O")
        self.assertEqual(len(response.data["board"]), 9)

    def test_win_reports_the_line(self):
        response = self.client.post(self.url, {"moves": five_for_x()}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["result"], "win")
        self.assertEqual(response.data["winner"], "X")
        self.assertEqual(
            response.data["winning_line"],
            [{"row": 7, "col": c} for c in range(5)],
        )

    def test_move_after_the_end_is_rejected(self):
        moves = five_for_x() + [{"row": 0, "col": 0}]
        response = self.client.post(self.url, {"moves": moves}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
