"""Canonical command names accepted from the UI layer."""

from __future__ import annotations

COMMAND_START_POMODORO = "start_pomodoro"
COMMAND_STOP_POMODORO = "stop_pomodoro"
COMMAND_PAUSE_POMODORO = "pause_pomodoro"
COMMAND_RESUME_POMODORO = "resume_pomodoro"
COMMAND_GET_STATE = "get_state"

COMMAND_NAME_ORDER: tuple[str, ...] = (
    COMMAND_START_POMODORO,
    COMMAND_STOP_POMODORO,
    COMMAND_PAUSE_POMODORO,
    COMMAND_RESUME_POMODORO,
    COMMAND_GET_STATE,
)

COMMAND_NAMES: frozenset[str] = frozenset(COMMAND_NAME_ORDER)
