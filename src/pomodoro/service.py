"""Thread-safe pomodoro engine: command handling, tick scheduling, and publishing."""

from __future__ import annotations

import contextlib
import functools
import logging
import threading
from typing import Iterator, Optional

from .clock import MonotonicTickSource, TickSource
from .errors import AlreadyRunning
from .publisher import SnapshotListener, SnapshotPublisher
from .scheduler import PomodoroConfig
from .snapshot import TimerSnapshot
from .state import TimerStateMachine


class _ArrivalOrderLock:
    """Mutex that admits waiting threads strictly in the order they arrived."""

    def __init__(self):
        self._condition = threading.Condition(threading.Lock())
        self._next_ticket = 0
        self._now_serving = 0
        self._abandoned: set[int] = set()

    def __enter__(self) -> None:
        with self._condition:
            ticket = self._next_ticket
            self._next_ticket += 1
            try:
                while ticket != self._now_serving:
                    self._condition.wait()
            except BaseException:
                # The ticket will never be used; let its turn pass.
                self._abandoned.add(ticket)
                self._skip_abandoned_locked()
                raise

    def __exit__(self, *exc_info) -> None:
        with self._condition:
            self._now_serving += 1
            self._skip_abandoned_locked()

    def _skip_abandoned_locked(self) -> None:
        while self._now_serving in self._abandoned:
            self._abandoned.discard(self._now_serving)
            self._now_serving += 1
        self._condition.notify_all()


class PomodoroEngine:
    """Owns one timer state machine and serializes every mutation.

    Commands and ticks share a single arrival-ordered lock. Snapshots are
    published while that lock is held, so listeners never see a half-applied
    transition and always observe transitions in the order they happened.
    Listeners must not call engine commands synchronously; doing so from the
    publishing thread raises `RuntimeError`, which the publisher isolates.
    """

    def __init__(
        self,
        config: Optional[PomodoroConfig] = None,
        *,
        tick_source: Optional[TickSource] = None,
        publisher: Optional[SnapshotPublisher] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._logger = logger or logging.getLogger("pomodoro")
        self._machine = TimerStateMachine(config, logger=self._logger)
        self._tick_source = tick_source or MonotonicTickSource()
        self._publisher = publisher or SnapshotPublisher()
        self._lock = _ArrivalOrderLock()
        self._tick_generation = 0
        self._publishing_thread: Optional[int] = None

    @property
    def config(self) -> PomodoroConfig:
        return self._machine.config

    def subscribe(self, listener: SnapshotListener):
        """Register a snapshot listener; returns an unsubscribe callable."""
        return self._publisher.subscribe(listener)

    def snapshot(self) -> TimerSnapshot:
        with self._serialized():
            return self._machine.snapshot()

    def start(self) -> TimerSnapshot:
        """Begin a work phase; raises `AlreadyRunning` unless idle."""
        with self._serialized():
            try:
                self._machine.start()
            except AlreadyRunning as error:
                self._logger.warning("Start rejected: %s", error)
                raise
            self._start_ticks_locked()
            return self._publish_locked()

    def stop(self) -> TimerSnapshot:
        with self._serialized():
            changed = self._machine.stop()
            self._cancel_ticks_locked()
            if changed:
                return self._publish_locked()
            return self._machine.snapshot()

    def pause(self) -> TimerSnapshot:
        return self.try_pause()[1]

    def resume(self) -> TimerSnapshot:
        return self.try_resume()[1]

    def try_pause(self) -> tuple[bool, TimerSnapshot]:
        """Pause a running phase; the flag is False when nothing was running."""
        with self._serialized():
            if not self._machine.pause():
                return False, self._machine.snapshot()
            self._cancel_ticks_locked()
            return True, self._publish_locked()

    def try_resume(self) -> tuple[bool, TimerSnapshot]:
        """Resume a paused phase; the flag is False when nothing was paused."""
        with self._serialized():
            if not self._machine.resume():
                return False, self._machine.snapshot()
            self._start_ticks_locked()
            return True, self._publish_locked()

    def close(self) -> None:
        """Cancel any pending ticks without changing the timer state."""
        with self._serialized():
            self._cancel_ticks_locked()

    def _on_tick(self, generation: int) -> None:
        with self._serialized():
            if generation != self._tick_generation:
                return
            if self._machine.tick():
                self._publish_locked()

    @contextlib.contextmanager
    def _serialized(self) -> Iterator[None]:
        if self._publishing_thread == threading.get_ident():
            raise RuntimeError(
                "Pomodoro commands cannot be issued from inside a snapshot listener"
            )
        with self._lock:
            yield

    def _start_ticks_locked(self) -> None:
        self._tick_generation += 1
        self._tick_source.start(functools.partial(self._on_tick, self._tick_generation))

    def _cancel_ticks_locked(self) -> None:
        self._tick_generation += 1
        self._tick_source.cancel()

    def _publish_locked(self) -> TimerSnapshot:
        snapshot = self._machine.snapshot()
        self._publishing_thread = threading.get_ident()
        try:
            self._publisher.publish(snapshot)
        finally:
            self._publishing_thread = None
        return snapshot
