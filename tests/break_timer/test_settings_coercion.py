import json
import unittest

from break_timer.settings import BreakSettings, coerce_flag, coerce_number, merge_settings


class SettingsCoercionTests(unittest.TestCase):
    def test_merge_keeps_fields_missing_from_partial(self) -> None:
        current = BreakSettings(work_minutes=45, break_seconds=90, auto_start_next=False)

        merged = merge_settings(current, {"break_seconds": 30})

        self.assertEqual(BreakSettings(45, 30, False), merged)

    def test_merge_ignores_unknown_keys(self) -> None:
        merged = merge_settings(BreakSettings(), {"theme": "dark"})
        self.assertEqual(BreakSettings(), merged)

    def test_fractional_minutes_are_kept(self) -> None:
        merged = merge_settings(BreakSettings(), {"work_minutes": "1.5"})

        self.assertEqual(1.5, merged.work_minutes)
        self.assertEqual(90_000, merged.work_duration_ms)

    def test_integral_values_are_normalized_to_int(self) -> None:
        value = coerce_number(25.0, default=20, minimum=1, maximum=180)
        self.assertIsInstance(value, int)
        self.assertEqual(25, value)

    def test_coerce_flag_accepts_common_spellings(self) -> None:
        self.assertTrue(coerce_flag("yes", default=False))
        self.assertTrue(coerce_flag(" ON ", default=False))
        self.assertFalse(coerce_flag("false", default=True))
        self.assertFalse(coerce_flag(0, default=True))
        self.assertTrue(coerce_flag(1, default=False))

    def test_coerce_flag_falls_back_to_default(self) -> None:
        self.assertTrue(coerce_flag("maybe", default=True))
        self.assertFalse(coerce_flag(None, default=False))
        self.assertTrue(coerce_flag(float("nan"), default=True))

    def test_oversized_json_integers_clamp_instead_of_raising(self) -> None:
        huge = "1" + "0" * 400
        partial = json.loads(f'{{"work_minutes": {huge}, "auto_start_next": {huge}}}')

        merged = merge_settings(BreakSettings(), partial)

        self.assertEqual(180, merged.work_minutes)
        self.assertTrue(merged.auto_start_next)

    def test_duration_for_phase(self) -> None:
        settings = BreakSettings(work_minutes=2, break_seconds=7)

        self.assertEqual(120_000, settings.duration_ms("work"))
        self.assertEqual(7_000, settings.duration_ms("break"))


if __name__ == "__main__":
    unittest.main()
