"""Repeating tick sources that drive the countdown."""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Optional, Protocol

from .constants import TICK_INTERVAL_SECONDS

TickCallback = Callable[[], None]


class TickSource(Protocol):
    """A cancellable periodic callback; at most one schedule is active at a time."""

    @property
    def is_active(self) -> bool:
        ...

    def start(self, callback: TickCallback) -> None:
        ...

    def cancel(self) -> None:
        ...


class MonotonicTickSource:
    """Daemon-thread ticker aligned to `time.monotonic` deadlines.

    Deadlines advance by a fixed interval from the moment `start` is called,
    so slow callbacks do not shift later ticks. `cancel` never joins the
    worker thread; a worker that was already waking up may still invoke its
    callback once, which the owner filters out.
    """

    def __init__(
        self,
        interval_seconds: float = TICK_INTERVAL_SECONDS,
        *,
        logger: Optional[logging.Logger] = None,
        name: str = "pomodoro-ticks",
    ):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be greater than zero")

        self._interval_seconds = float(interval_seconds)
        self._logger = logger or logging.getLogger("pomodoro.ticks")
        self._name = name
        self._lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None
        self._stop_event: Optional[threading.Event] = None

    @property
    def is_active(self) -> bool:
        with self._lock:
            return self._stop_event is not None and not self._stop_event.is_set()

    def start(self, callback: TickCallback) -> None:
        stop_event = threading.Event()
        thread = threading.Thread(
            target=self._run,
            args=(callback, stop_event),
            daemon=True,
            name=self._name,
        )
        with self._lock:
            previous = self._stop_event
            self._stop_event = stop_event
            self._thread = thread
        if previous is not None:
            previous.set()
        thread.start()

    def cancel(self) -> None:
        with self._lock:
            stop_event = self._stop_event
            self._stop_event = None
            self._thread = None
        if stop_event is not None:
            stop_event.set()

    def _run(self, callback: TickCallback, stop_event: threading.Event) -> None:
        deadline = time.monotonic() + self._interval_seconds
        while not stop_event.wait(max(0.0, deadline - time.monotonic())):
            try:
                callback()
            except Exception as error:
                self._logger.error("Tick callback failed: %s", error, exc_info=True)
            deadline += self._interval_seconds
