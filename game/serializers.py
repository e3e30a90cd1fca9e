from rest_framework import serializers

from game.ai.board import BoardState
from game.ai.conf import engine_setting
from game.ai.difficulty import Difficulty
from game.ai.exceptions import IllegalMoveError


class CellSerializer(serializers.Serializer):
    row = serializers.IntegerField(min_value=0)
    col = serializers.IntegerField(min_value=0)


class GamePositionSerializer(serializers.Serializer):
    """
    A position as the ordered list of moves played so far (X first).
    `validated_data["board"]` is the replayed BoardState.
    """

    board_size = serializers.IntegerField(required=False)
    moves = CellSerializer(many=True, required=False)

    def validate_board_size(self, value):
        low = engine_setting("MIN_BOARD_SIZE")
        high = engine_setting("MAX_BOARD_SIZE")
        if not low <= value <= high:
            raise serializers.ValidationError(f"board_size must be between {low} and {high}.")
        return value

    def validate(self, attrs):
        size = attrs.get("board_size") or engine_setting("BOARD_SIZE")
        moves = [(m["row"], m["col"]) for m in attrs.get("moves", [])]
        try:
            attrs["board"] = BoardState.from_moves(moves, size=size)
        except IllegalMoveError as exc:
            raise serializers.ValidationError({"moves": str(exc)})
        attrs["board_size"] = size
        return attrs


class AIMoveRequestSerializer(GamePositionSerializer):
    difficulty = serializers.ChoiceField(
        choices=[d.value for d in Difficulty],
        required=False,
    )


class GameStateSerializer(serializers.Serializer):
    board = serializers.ListField(child=serializers.ListField(child=serializers.CharField(allow_blank=True)))
    turn = serializers.CharField()
    result = serializers.CharField()
    winner = serializers.CharField(allow_null=True)
    winning_line = CellSerializer(many=True)
    move_count = serializers.IntegerField()

    @staticmethod
    def payload_for(board: BoardState) -> dict:
        result = board.result
        return {
            "board": board.to_rows(),
            "turn": board.current_player.value,
            "result": result.outcome.value,
            "winner": result.winner.value if result.winner else None,
            "winning_line": [{"row": r, "col": c} for r, c in result.winning_cells],
            "move_count": len(board.history),
        }
