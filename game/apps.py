from django.apps import AppConfig


class GameConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "game"
    verbose_name = "Caro engine"

    def ready(self):
        from game.ai.conf import validate_engine_settings

        validate_engine_settings()
