"""
Django settings for the Caro project.

Everything deployment-specific comes from the environment so the same file
serves local runs, tests and production.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "dev-insecure-caro-key")

DEBUG = os.getenv("DJANGO_DEBUG", "0") == "1"

ALLOWED_HOSTS = [h for h in os.getenv("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",") if h]


INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "rest_framework",
    "game",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "caro.urls"

ASGI_APPLICATION = "caro.asgi.application"
WSGI_APPLICATION = "caro.wsgi.application"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "db.sqlite3",
    }
}

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

REST_FRAMEWORK = {
    "DEFAULT_RENDERER_CLASSES": ["rest_framework.renderers.JSONRenderer"],
    "DEFAULT_PARSER_CLASSES": ["rest_framework.parsers.JSONParser"],
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": ["rest_framework.permissions.AllowAny"],
    "UNAUTHENTICATED_USER": None,
}


def _env_int(name, default=None):
    value = os.getenv(name)
    return int(value) if value not in (None, "") else default


# Engine tuning (read through game.ai.conf.engine_setting)
CARO_ENGINE = {
    "BOARD_SIZE": _env_int("CARO_BOARD_SIZE", 15),
    "MIN_BOARD_SIZE": 5,
    "MAX_BOARD_SIZE": 25,
    "DEFAULT_DIFFICULTY": os.getenv("CARO_DEFAULT_DIFFICULTY", "medium"),
    "RANDOM_SEED": _env_int("CARO_RANDOM_SEED"),
}


LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "[{asctime}] {levelname} {name}: {message}", "style": "{"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple"},
    },
    "root": {"handlers": ["console"], "level": "WARNING"},
    "loggers": {
        "game": {
            "handlers": ["console"],
            "level": os.getenv("CARO_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
    },
}
