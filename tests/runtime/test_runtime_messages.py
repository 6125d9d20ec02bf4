import unittest

from break_timer import BreakSettings, TimerSnapshot
from runtime.messages import format_remaining, status_message


class RuntimeMessagesTests(unittest.TestCase):
    def test_format_remaining_rounds_partial_seconds_up(self) -> None:
        self.assertEqual("20:00", format_remaining(1_200_000))
        self.assertEqual("00:01", format_remaining(1))
        self.assertEqual("01:30", format_remaining(89_001))
        self.assertEqual("00:00", format_remaining(0))
        self.assertEqual("00:00", format_remaining(-500))

    def test_status_message_mentions_phase_and_state(self) -> None:
        snapshot = TimerSnapshot(
            phase="break",
            remaining_ms=15_000,
            running=True,
            settings=BreakSettings(),
        )

        self.assertEqual("On break, 00:15 left (running)", status_message(snapshot))


if __name__ == "__main__":
    unittest.main()
