import json
import tempfile
import unittest
from pathlib import Path

from break_timer import BreakSettings, BreakTimerController, JsonSettingsStore


class JsonSettingsStoreTests(unittest.TestCase):
    def test_save_then_load_round_trips_settings(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            store = JsonSettingsStore(Path(temp_dir) / "nested" / "settings.json")
            store.save(BreakSettings(work_minutes=30, break_seconds=45, auto_start_next=False))

            loaded = store.load()

        self.assertEqual(
            {"work_minutes": 30, "break_seconds": 45, "auto_start_next": False},
            loaded,
        )

    def test_load_returns_none_for_missing_file(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            store = JsonSettingsStore(Path(temp_dir) / "settings.json")
            self.assertIsNone(store.load())

    def test_load_tolerates_corrupt_or_non_object_files(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "settings.json"
            store = JsonSettingsStore(path)

            path.write_text("{not json", encoding="utf-8")
            with self.assertLogs("settings_store", level="WARNING"):
                self.assertIsNone(store.load())

            path.write_text("[1, 2, 3]", encoding="utf-8")
            with self.assertLogs("settings_store", level="WARNING"):
                self.assertIsNone(store.load())

    def test_load_drops_unknown_fields(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "settings.json"
            path.write_text(
                json.dumps({"work_minutes": 25, "theme": "dark"}),
                encoding="utf-8",
            )

            loaded = JsonSettingsStore(path).load()

        self.assertEqual({"work_minutes": 25}, loaded)

    def test_save_failure_is_logged_not_raised(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            # A directory cannot be written as a file.
            store = JsonSettingsStore(Path(temp_dir))
            with self.assertLogs("settings_store", level="WARNING"):
                store.save(BreakSettings())

    def test_saves_only_on_settings_events(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "settings.json"
            store = JsonSettingsStore(path)
            controller = BreakTimerController()
            controller.subscribe(store.handle_event)

            controller.skip_to_break()
            self.assertFalse(path.exists())

            controller.update_settings({"break_seconds": 60})
            saved = json.loads(path.read_text(encoding="utf-8"))

        self.assertEqual(60, saved["break_seconds"])


if __name__ == "__main__":
    unittest.main()
