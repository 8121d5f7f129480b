import datetime as dt
import json
import unittest

from server.events import StickyEventStore, make_event, parse_command


class ServerEventsTests(unittest.TestCase):
    def test_make_event_serializes_timestamp_and_payload(self) -> None:
        now = dt.datetime(2026, 2, 21, 10, 0, tzinfo=dt.timezone.utc)
        raw = make_event(
            "timer-update",
            now_fn=lambda: now,
            state={"type": "Working"},
            remaining=1500,
        )
        payload = json.loads(raw)

        self.assertEqual("timer-update", payload["type"])
        self.assertEqual(now.isoformat(), payload["timestamp"])
        self.assertEqual({"type": "Working"}, payload["state"])
        self.assertEqual(1500, payload["remaining"])

    def test_sticky_store_ignores_non_sticky_events(self) -> None:
        store = StickyEventStore()
        store.remember("hello", '{"type":"hello"}')
        store.remember("command_result", '{"type":"command_result"}')
        self.assertEqual([], store.snapshot())

    def test_sticky_store_overwrites_latest_timer_update(self) -> None:
        store = StickyEventStore()
        store.remember("timer-update", '{"type":"timer-update","remaining":10}')
        store.remember("timer-update", '{"type":"timer-update","remaining":9}')
        snapshot = store.snapshot()

        self.assertEqual(1, len(snapshot))
        self.assertEqual(9, json.loads(snapshot[0])["remaining"])


class ParseCommandTests(unittest.TestCase):
    def test_extracts_command_name(self) -> None:
        self.assertEqual("start_pomodoro", parse_command('{"command": " start_pomodoro "}'))
        self.assertEqual("stop_pomodoro", parse_command(b'{"command": "stop_pomodoro"}'))

    def test_rejects_malformed_messages(self) -> None:
        for raw in ("not json", "[]", "{}", '{"command": 3}', '{"command": "  "}'):
            with self.subTest(raw=raw):
                with self.assertRaises(ValueError):
                    parse_command(raw)


if __name__ == "__main__":
    unittest.main()
