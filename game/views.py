# game/views.py
import logging

from rest_framework import permissions, status
from rest_framework.renderers import JSONRenderer
from rest_framework.response import Response
from rest_framework.views import APIView

from .ai.selector import choose_move
from .serializers import AIMoveRequestSerializer, GamePositionSerializer, GameStateSerializer

logger = logging.getLogger(__name__)


class JsonAPIView(APIView):
    renderer_classes = [JSONRenderer]
    permission_classes = [permissions.AllowAny]


class HealthView(JsonAPIView):
    def get(self, request):
        return Response({"status": "ok"})


class AIMoveView(JsonAPIView):
    """
    POST /api/game/ai/move/
    Body JSON:
    {
      "board_size": 15,                          # optional
      "moves": [{"row": 7, "col": 7}, ...],      # X moves first
      "difficulty": "easy" | "medium" | "hard"   # optional
    }
    The engine plays for the side to move after `moves`.
    """

    def post(self, request):
        ser = AIMoveRequestSerializer(data=request.data)
        if not ser.is_valid():
            logger.warning("Rejected AI move request: %s", ser.errors)
            return Response(ser.errors, status=status.HTTP_400_BAD_REQUEST)

        board = ser.validated_data["board"]
        if board.game_over:
            return Response({"detail": "Game already ended"}, status=status.HTTP_409_CONFLICT)

        payload = choose_move(board, ser.validated_data.get("difficulty"))
        return Response(payload, status=status.HTTP_200_OK)


class GameStateView(JsonAPIView):
    """
    POST /api/game/state/
    Replays `moves` and returns the board with the authoritative result
    (winner + winning line, or draw).
    """

    def post(self, request):
        ser = GamePositionSerializer(data=request.data)
        if not ser.is_valid():
            logger.warning("Rejected game state request: %s", ser.errors)
            return Response(ser.errors, status=status.HTTP_400_BAD_REQUEST)

        board = ser.validated_data["board"]
        data = GameStateSerializer(GameStateSerializer.payload_for(board)).data
        return Response(data, status=status.HTTP_200_OK)
