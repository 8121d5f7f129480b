"""Phase tags, default durations, and reason constants used by the timer engine."""

from __future__ import annotations

DEFAULT_WORK_SECONDS = 25 * 60
DEFAULT_SHORT_BREAK_SECONDS = 5 * 60
DEFAULT_LONG_BREAK_SECONDS = 15 * 60
DEFAULT_TOTAL_SESSIONS = 4

TICK_INTERVAL_SECONDS = 1.0

PHASE_IDLE = "Idle"
PHASE_WORKING = "Working"
PHASE_SHORT_BREAK = "ShortBreak"
PHASE_LONG_BREAK = "LongBreak"
PHASE_PAUSED = "Paused"

REASON_STARTED = "started"
REASON_STOPPED = "stopped"
REASON_PAUSED = "paused"
REASON_RESUMED = "resumed"
REASON_ALREADY_RUNNING = "already_running"
REASON_NOT_RUNNING = "not_running"
REASON_NOT_PAUSED = "not_paused"
REASON_SNAPSHOT = "snapshot"
REASON_UNSUPPORTED_COMMAND = "unsupported_command"
