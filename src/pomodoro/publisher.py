"""Ordered, thread-safe fan-out of timer snapshots to registered listeners."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from .errors import ListenerDeliveryError
from .snapshot import TimerSnapshot

SnapshotListener = Callable[[TimerSnapshot], None]


class _Subscription:
    __slots__ = ("listener",)

    def __init__(self, listener: SnapshotListener):
        self.listener = listener


class SnapshotPublisher:
    """Delivers each snapshot synchronously, in registration order.

    The subscriber list is copied under a lock at the start of every publish,
    so a listener added or removed mid-publish only affects later publishes.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self._logger = logger or logging.getLogger("pomodoro.publisher")
        self._lock = threading.Lock()
        self._subscriptions: list[_Subscription] = []

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register `listener` and return a callable that unregisters it."""
        subscription = _Subscription(listener)
        with self._lock:
            self._subscriptions.append(subscription)

        def unsubscribe() -> None:
            with self._lock:
                if subscription in self._subscriptions:
                    self._subscriptions.remove(subscription)

        return unsubscribe

    @property
    def listener_count(self) -> int:
        with self._lock:
            return len(self._subscriptions)

    def publish(self, snapshot: TimerSnapshot) -> int:
        """Deliver `snapshot` to the current listeners; return how many succeeded."""
        with self._lock:
            subscriptions = tuple(self._subscriptions)

        delivered = 0
        for subscription in subscriptions:
            try:
                subscription.listener(snapshot)
            except Exception as error:
                failure = ListenerDeliveryError(subscription.listener, error)
                self._logger.error("%s", failure, exc_info=error)
                continue
            delivered += 1
        return delivered
