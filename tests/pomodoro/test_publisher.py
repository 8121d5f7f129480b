import logging
import threading
import unittest

from pomodoro.errors import ListenerDeliveryError
from pomodoro.phase import WORKING
from pomodoro.publisher import SnapshotPublisher
from pomodoro.snapshot import TimerSnapshot


def _snapshot(remaining: int = 10) -> TimerSnapshot:
    return TimerSnapshot(
        phase=WORKING,
        remaining_seconds=remaining,
        completed_sessions=0,
        total_sessions=4,
        duration_seconds=10,
    )


class SnapshotPublisherTests(unittest.TestCase):
    def test_delivers_in_registration_order(self) -> None:
        publisher = SnapshotPublisher()
        trace: list[tuple[str, int]] = []
        publisher.subscribe(lambda s: trace.append(("a", s.remaining_seconds)))
        publisher.subscribe(lambda s: trace.append(("b", s.remaining_seconds)))

        publisher.publish(_snapshot(3))
        publisher.publish(_snapshot(2))

        self.assertEqual([("a", 3), ("b", 3), ("a", 2), ("b", 2)], trace)

    def test_listener_added_mid_publish_only_sees_later_publishes(self) -> None:
        publisher = SnapshotPublisher()
        late: list[TimerSnapshot] = []

        def registrar(snapshot):
            if not late and snapshot.remaining_seconds == 3:
                publisher.subscribe(late.append)

        publisher.subscribe(registrar)
        publisher.publish(_snapshot(3))
        self.assertEqual([], late)

        publisher.publish(_snapshot(2))
        self.assertEqual([2], [item.remaining_seconds for item in late])

    def test_listener_removed_mid_publish_still_gets_current_publish(self) -> None:
        publisher = SnapshotPublisher()
        second: list[TimerSnapshot] = []
        handles = {}

        def first(snapshot):
            handles["second"]()

        publisher.subscribe(first)
        handles["second"] = publisher.subscribe(second.append)

        publisher.publish(_snapshot(3))
        publisher.publish(_snapshot(2))
        self.assertEqual([3], [item.remaining_seconds for item in second])

    def test_failing_listener_is_isolated_and_logged(self) -> None:
        publisher = SnapshotPublisher(logger=logging.getLogger("test.publisher"))
        received: list[TimerSnapshot] = []

        def broken(snapshot):
            raise ValueError("bad listener")

        publisher.subscribe(broken)
        publisher.subscribe(received.append)

        with self.assertLogs("test.publisher", level="ERROR") as logs:
            delivered = publisher.publish(_snapshot())

        self.assertEqual(1, delivered)
        self.assertEqual(1, len(received))
        self.assertIn("bad listener", logs.output[0])

    def test_unsubscribe_is_idempotent(self) -> None:
        publisher = SnapshotPublisher()
        unsubscribe = publisher.subscribe(lambda s: None)
        self.assertEqual(1, publisher.listener_count)
        unsubscribe()
        unsubscribe()
        self.assertEqual(0, publisher.listener_count)

    def test_same_callable_can_subscribe_twice(self) -> None:
        publisher = SnapshotPublisher()
        received: list[TimerSnapshot] = []
        first = publisher.subscribe(received.append)
        publisher.subscribe(received.append)

        publisher.publish(_snapshot())
        first()
        publisher.publish(_snapshot())
        self.assertEqual(3, len(received))

    def test_concurrent_registration_during_publish(self) -> None:
        publisher = SnapshotPublisher()
        counts: list[int] = []
        publisher.subscribe(lambda s: counts.append(s.remaining_seconds))
        stop = threading.Event()

        def churn():
            while not stop.is_set():
                publisher.subscribe(lambda s: None)()

        worker = threading.Thread(target=churn)
        worker.start()
        try:
            for remaining in range(100, 0, -1):
                publisher.publish(_snapshot(remaining))
        finally:
            stop.set()
            worker.join(timeout=5)

        self.assertEqual(list(range(100, 0, -1)), counts)


class ListenerDeliveryErrorTests(unittest.TestCase):
    def test_wraps_listener_and_cause(self) -> None:
        def listener(snapshot):
            pass

        cause = KeyError("x")
        error = ListenerDeliveryError(listener, cause)
        self.assertIs(listener, error.listener)
        self.assertIs(cause, error.error)
        self.assertIn("listener", str(error))


if __name__ == "__main__":
    unittest.main()
