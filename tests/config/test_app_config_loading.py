import os
import tempfile
import textwrap
import unittest
from pathlib import Path
from unittest.mock import patch

from app_config import (
    AppConfigurationError,
    load_app_config,
    pomodoro_config_from_settings,
    resolve_config_path,
)


def _write_text(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


class AppConfigLoadingTests(unittest.TestCase):
    def test_load_app_config_reads_all_sections(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            _write_text(
                config_path,
                textwrap.dedent(
                    """
                    [pomodoro]
                    work_seconds = 3
                    short_break_seconds = 2
                    long_break_seconds = 5
                    total_sessions = 2

                    [ui_server]
                    enabled = false
                    port = 9001
                    ws_path = "/events"

                    [logging]
                    level = "debug"
                    """
                ).strip(),
            )

            app_config = load_app_config(str(config_path))

            self.assertEqual(str(config_path), app_config.source_file)
            self.assertEqual(3, app_config.pomodoro.work_seconds)
            self.assertEqual(2, app_config.pomodoro.short_break_seconds)
            self.assertEqual(5, app_config.pomodoro.long_break_seconds)
            self.assertEqual(2, app_config.pomodoro.total_sessions)
            self.assertFalse(app_config.ui_server.enabled)
            self.assertEqual(9001, app_config.ui_server.port)
            self.assertEqual("/events", app_config.ui_server.ws_path)
            self.assertEqual("DEBUG", app_config.logging.level)

    def test_missing_sections_use_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            _write_text(config_path, "")

            app_config = load_app_config(str(config_path))

            self.assertEqual(1500, app_config.pomodoro.work_seconds)
            self.assertEqual(300, app_config.pomodoro.short_break_seconds)
            self.assertEqual(900, app_config.pomodoro.long_break_seconds)
            self.assertEqual(4, app_config.pomodoro.total_sessions)
            self.assertTrue(app_config.ui_server.enabled)
            self.assertEqual("127.0.0.1", app_config.ui_server.host)
            self.assertEqual("INFO", app_config.logging.level)

    def test_minutes_override_seconds(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            _write_text(
                config_path,
                textwrap.dedent(
                    """
                    [pomodoro]
                    work_seconds = 10
                    work_minutes = 50
                    long_break_minutes = 30
                    """
                ).strip(),
            )

            settings = load_app_config(str(config_path)).pomodoro
            pomodoro_config = pomodoro_config_from_settings(settings)

            self.assertEqual(3000, pomodoro_config.work_seconds)
            self.assertEqual(300, pomodoro_config.short_break_seconds)
            self.assertEqual(1800, pomodoro_config.long_break_seconds)

    def test_invalid_values_are_rejected(self) -> None:
        invalid_configs = [
            "[pomodoro]\nwork_seconds = 0",
            "[pomodoro]\ntotal_sessions = -1",
            "[pomodoro]\nshort_break_seconds = \"soon\"",
            "[pomodoro]\nlong_break_seconds = true",
            "[ui_server]\nenabled = \"maybe\"",
            "[logging]\nlevel = \"chatty\"",
            "pomodoro = 5",
            "[pomodoro\n",
        ]
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            for content in invalid_configs:
                with self.subTest(content=content):
                    _write_text(config_path, content)
                    with self.assertRaises(AppConfigurationError):
                        load_app_config(str(config_path))

    def test_missing_file_is_an_error(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            with self.assertRaises(AppConfigurationError):
                load_app_config(str(Path(temp_dir) / "missing.toml"))

    def test_directory_is_not_a_config_file(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            with self.assertRaises(AppConfigurationError):
                load_app_config(temp_dir)

    def test_resolve_config_path_prefers_explicit_then_env(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            env_path = str(Path(temp_dir) / "env.toml")
            explicit = str(Path(temp_dir) / "explicit.toml")
            with patch.dict(os.environ, {"APP_CONFIG_FILE": env_path}):
                self.assertEqual(Path(explicit), resolve_config_path(explicit))
                self.assertEqual(Path(env_path), resolve_config_path())

    def test_resolve_config_path_defaults_to_cwd(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            self.assertEqual((Path.cwd() / "config.toml").resolve(), resolve_config_path())


if __name__ == "__main__":
    unittest.main()
