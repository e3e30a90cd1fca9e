import importlib
import os
from unittest.mock import patch

from django.core.exceptions import ImproperlyConfigured
from django.test import SimpleTestCase, override_settings

from game.ai.conf import DEFAULTS, engine_setting, validate_engine_settings


def engine_conf(**overrides):
    conf = dict(DEFAULTS)
    conf.update(overrides)
    return conf


class EngineSettingsTests(SimpleTestCase):
    @override_settings(CARO_ENGINE=engine_conf(BOARD_SIZE=19))
    def test_override_is_read(self):
        self.assertEqual(engine_setting("BOARD_SIZE"), 19)
        validate_engine_settings()

    @override_settings(CARO_ENGINE={})
    def test_missing_keys_fall_back_to_defaults(self):
        self.assertEqual(engine_setting("DEFAULT_DIFFICULTY"), "medium")
        validate_engine_settings()

    def test_bad_board_size_fails_at_startup(self):
        for size in (3, 40, "15", None):
            with self.subTest(size=size), override_settings(CARO_ENGINE=engine_conf(BOARD_SIZE=size)):
                with self.assertRaises(ImproperlyConfigured):
                    validate_engine_settings()

    @override_settings(CARO_ENGINE=engine_conf(MIN_BOARD_SIZE=4))
    def test_min_size_below_the_winning_run(self):
        with self.assertRaises(ImproperlyConfigured):
            validate_engine_settings()

    @override_settings(CARO_ENGINE=engine_conf(DEFAULT_DIFFICULTY="nightmare"))
    def test_unknown_default_difficulty(self):
        with self.assertRaises(ImproperlyConfigured):
            validate_engine_settings()

    @override_settings(CARO_ENGINE=engine_conf(RANDOM_SEED="abc"))
    def test_non_integer_seed(self):
        with self.assertRaises(ImproperlyConfigured):
            validate_engine_settings()


class ProjectSettingsTests(SimpleTestCase):
    def test_debug_is_off_unless_enabled(self):
        import caro.settings as project_settings

        try:
            with patch.dict(os.environ, {}, clear=False):
                os.environ.pop("DJANGO_DEBUG", None)
                self.assertFalse(importlib.reload(project_settings).DEBUG)

            with patch.dict(os.environ, {"DJANGO_DEBUG": "1"}):
                self.assertTrue(importlib.reload(project_settings).DEBUG)
        finally:
            importlib.reload(project_settings)
