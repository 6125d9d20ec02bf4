import json
import unittest

from app_config_schema import UIServerSettings
from server import UIServer, UIServerConfig


class UIServerCommandTests(unittest.TestCase):
    def setUp(self) -> None:
        self.received: list[dict[str, object]] = []
        self.server = UIServer(
            UIServerConfig.from_settings(UIServerSettings()),
            command_sink=self.received.append,
        )

    def test_valid_command_is_forwarded_to_sink(self) -> None:
        reply = self.server.handle_client_message(
            json.dumps({"command": "update_settings", "settings": {"break_seconds": 30}})
        )

        self.assertIsNone(reply)
        self.assertEqual(
            [{"command": "update_settings", "settings": {"break_seconds": 30}}],
            self.received,
        )

    def test_malformed_json_returns_error_event(self) -> None:
        reply = self.server.handle_client_message("{not json")

        self.assertIsNotNone(reply)
        payload = json.loads(reply)
        self.assertEqual("error", payload["type"])
        self.assertEqual("Malformed command", payload["message"])
        self.assertEqual([], self.received)

    def test_message_without_command_returns_error_event(self) -> None:
        for message in ('["start"]', '{"settings": {}}', '{"command": 3}'):
            with self.subTest(message=message):
                reply = self.server.handle_client_message(message)
                self.assertEqual("Missing command", json.loads(reply)["message"])
        self.assertEqual([], self.received)

    def test_commands_are_dropped_without_sink(self) -> None:
        self.server.set_command_sink(None)

        with self.assertLogs("ui_server", level="WARNING"):
            reply = self.server.handle_client_message('{"command": "start"}')

        self.assertIsNone(reply)

    def test_stop_before_start_is_a_no_op(self) -> None:
        self.server.stop(timeout_seconds=0.1)

        self.assertFalse(self.server.is_running)

    def test_publish_before_start_keeps_sticky_state(self) -> None:
        self.server.publish("running", running=True)

        self.assertFalse(self.server.is_running)
        self.assertEqual(
            [True],
            [json.loads(item)["running"] for item in self.server._sticky.snapshot()],
        )


if __name__ == "__main__":
    unittest.main()
