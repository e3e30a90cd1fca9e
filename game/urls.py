# game/urls.py
from django.urls import path
from .views import HealthView, AIMoveView, GameStateView

urlpatterns = [
    path("health/", HealthView.as_view(), name="health"),
    path("ai/move/", AIMoveView.as_view(), name="ai-move"),
    path("state/", GameStateView.as_view(), name="game-state"),
]
