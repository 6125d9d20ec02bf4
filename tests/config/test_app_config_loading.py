import os
import sys
import tempfile
import textwrap
import unittest
from pathlib import Path
from unittest.mock import patch

from app_config import (
    AppConfigurationError,
    load_app_config,
    resolve_config_path,
)


def _write_text(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


class AppConfigLoadingTests(unittest.TestCase):
    def _load(self, content: str):
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            _write_text(config_path, textwrap.dedent(content).strip() + "\n")
            return load_app_config(str(config_path))

    def test_load_app_config_resolves_relative_paths(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            root = Path(temp_dir)
            config_path = root / "config.toml"
            _write_text(
                config_path,
                textwrap.dedent(
                    """
                    [timer]
                    settings_file = "state/settings.json"

                    [ui_server]
                    ui_root = "web"
                    """
                ).strip(),
            )

            app_config = load_app_config(str(config_path))

            self.assertEqual(str(config_path), app_config.source_file)
            self.assertEqual(
                str((root / "state/settings.json").resolve()),
                app_config.timer.settings_file,
            )
            self.assertEqual(
                str((root / "web").resolve()),
                app_config.ui_server.ui_root,
            )

    def test_empty_config_uses_defaults(self) -> None:
        app_config = self._load("")

        self.assertEqual(20, app_config.timer.work_minutes)
        self.assertEqual(20, app_config.timer.break_seconds)
        self.assertTrue(app_config.timer.auto_start_next)
        self.assertEqual(200, app_config.timer.pulse_interval_ms)
        self.assertEqual("", app_config.timer.settings_file)
        self.assertTrue(app_config.notifications.enabled)
        self.assertEqual("Break Alarm", app_config.notifications.app_name)
        self.assertTrue(app_config.break_display.enabled)
        self.assertEqual(8765, app_config.ui_server.port)
        self.assertEqual("", app_config.ui_server.ui_root)
        self.assertEqual("INFO", app_config.logging.level)

    def test_timer_section_is_parsed(self) -> None:
        app_config = self._load(
            """
            [timer]
            work_minutes = 25.5
            break_seconds = 45
            auto_start_next = "off"
            pulse_interval_ms = 100
            """
        )

        self.assertEqual(25.5, app_config.timer.work_minutes)
        self.assertEqual(45, app_config.timer.break_seconds)
        self.assertFalse(app_config.timer.auto_start_next)
        self.assertEqual(100, app_config.timer.pulse_interval_ms)

    def test_rejects_wrongly_typed_values(self) -> None:
        cases = {
            "work_minutes": '[timer]\nwork_minutes = "soon"',
            "auto_start_next": "[timer]\nauto_start_next = 3",
            "port": "[ui_server]\nport = true",
            "host": "[ui_server]\nhost = 42",
            "section": 'timer = "fast"',
        }
        for name, content in cases.items():
            with self.subTest(case=name):
                with self.assertRaises(AppConfigurationError):
                    self._load(content)

    def test_rejects_non_positive_pulse_interval(self) -> None:
        with self.assertRaises(AppConfigurationError) as context:
            self._load("[timer]\npulse_interval_ms = 0")

        self.assertIn("timer.pulse_interval_ms", str(context.exception))

    def test_log_level_is_normalized_and_validated(self) -> None:
        self.assertEqual("DEBUG", self._load('[logging]\nlevel = "debug"').logging.level)

        with self.assertRaises(AppConfigurationError):
            self._load('[logging]\nlevel = "chatty"')

    def test_missing_or_invalid_file_raises(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            with self.assertRaises(AppConfigurationError):
                load_app_config(str(Path(temp_dir) / "missing.toml"))

            broken = Path(temp_dir) / "broken.toml"
            _write_text(broken, "[timer\n")
            with self.assertRaises(AppConfigurationError):
                load_app_config(str(broken))

    def test_resolve_config_path_prefers_environment_variable(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "custom.toml"
            _write_text(config_path, "")

            with patch.dict(os.environ, {"APP_CONFIG_FILE": str(config_path)}):
                resolved = resolve_config_path()

        self.assertEqual(config_path, resolved)

    def test_resolve_config_path_uses_executable_dir_fallback_in_frozen_mode(self) -> None:
        with tempfile.TemporaryDirectory() as cwd_dir, tempfile.TemporaryDirectory() as exe_dir:
            cwd = Path(cwd_dir)
            executable_dir_config = Path(exe_dir) / "config.toml"
            _write_text(executable_dir_config, "[timer]\nwork_minutes = 20\n")
            executable = Path(exe_dir) / "main"

            with patch.dict(os.environ, {}, clear=True):
                with patch("app_config.Path.cwd", return_value=cwd):
                    with patch.object(sys, "frozen", True, create=True):
                        with patch.object(sys, "executable", str(executable), create=True):
                            resolved = resolve_config_path()

            self.assertEqual(executable_dir_config.resolve(), resolved)


if __name__ == "__main__":
    unittest.main()
