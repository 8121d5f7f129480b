import json
import unittest

from pomodoro.phase import (
    IDLE,
    LONG_BREAK,
    SHORT_BREAK,
    WORKING,
    Paused,
    phase_from_payload,
    phase_to_payload,
)
from pomodoro.snapshot import TimerSnapshot


class PhasePayloadTests(unittest.TestCase):
    def test_plain_phases_carry_only_a_type(self) -> None:
        self.assertEqual({"type": "Idle"}, phase_to_payload(IDLE))
        self.assertEqual({"type": "Working"}, phase_to_payload(WORKING))
        self.assertEqual({"type": "ShortBreak"}, phase_to_payload(SHORT_BREAK))
        self.assertEqual({"type": "LongBreak"}, phase_to_payload(LONG_BREAK))

    def test_paused_carries_suspended_phase(self) -> None:
        payload = phase_to_payload(Paused(resume_phase=LONG_BREAK))
        self.assertEqual({"type": "Paused", "value": {"type": "LongBreak"}}, payload)
        self.assertEqual(Paused(resume_phase=LONG_BREAK), phase_from_payload(payload))

    def test_decode_rejects_invalid_payloads(self) -> None:
        invalid = [
            {"type": "Running"},
            {},
            {"type": "Paused"},
            {"type": "Paused", "value": {"type": "Idle"}},
            {"type": "Paused", "value": {"type": "Paused", "value": {"type": "Working"}}},
        ]
        for payload in invalid:
            with self.subTest(payload=payload):
                with self.assertRaises(ValueError):
                    phase_from_payload(payload)

    def test_paused_cannot_wrap_idle_or_paused(self) -> None:
        with self.assertRaises(ValueError):
            Paused(resume_phase=IDLE)
        with self.assertRaises(ValueError):
            Paused(resume_phase=Paused(resume_phase=WORKING))


class TimerSnapshotTests(unittest.TestCase):
    def test_payload_matches_timer_update_contract(self) -> None:
        snapshot = TimerSnapshot(
            phase=Paused(resume_phase=WORKING),
            remaining_seconds=873,
            completed_sessions=5,
            total_sessions=4,
            duration_seconds=1500,
        )

        payload = json.loads(json.dumps(snapshot.to_payload()))

        self.assertEqual(
            {
                "state": {"type": "Paused", "value": {"type": "Working"}},
                "remaining": 873,
                "completed_sessions": 5,
                "total_sessions": 4,
                "duration": 1500,
            },
            payload,
        )

    def test_idle_payload_omits_duration(self) -> None:
        snapshot = TimerSnapshot(
            phase=IDLE,
            remaining_seconds=0,
            completed_sessions=0,
            total_sessions=4,
        )
        self.assertNotIn("duration", snapshot.to_payload())
        self.assertNotIn("value", snapshot.to_payload()["state"])

    def test_phase_helpers(self) -> None:
        running = TimerSnapshot(WORKING, 10, 0, 4, 10)
        paused = TimerSnapshot(Paused(resume_phase=SHORT_BREAK), 10, 0, 4, 300)

        self.assertTrue(running.is_running)
        self.assertEqual("Working", running.phase_tag)
        self.assertIsNone(running.phase_detail)
        self.assertFalse(paused.is_running)
        self.assertEqual("Paused", paused.phase_tag)
        self.assertEqual(SHORT_BREAK, paused.phase_detail)


if __name__ == "__main__":
    unittest.main()
