"""Snapshot listener that reports countdown motion and phase changes to the log."""

from __future__ import annotations

import logging
import threading
from typing import Optional

from pomodoro import Phase, TimerSnapshot

from .messages import status_message


class SnapshotLogListener:
    """Logs every snapshot at DEBUG and each phase change at INFO."""

    def __init__(self, logger: logging.Logger):
        self._logger = logger
        self._lock = threading.Lock()
        self._last_phase: Optional[Phase] = None

    def __call__(self, snapshot: TimerSnapshot) -> None:
        self._logger.debug("timer-update: %s", snapshot.to_payload())
        with self._lock:
            changed = snapshot.phase != self._last_phase
            self._last_phase = snapshot.phase
        if changed:
            self._logger.info("Phase change: %s", status_message(snapshot))
