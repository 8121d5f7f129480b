"""Dispatcher that executes named UI commands against the pomodoro engine."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from contracts.command_contract import (
    COMMAND_GET_STATE,
    COMMAND_PAUSE_POMODORO,
    COMMAND_RESUME_POMODORO,
    COMMAND_START_POMODORO,
    COMMAND_STOP_POMODORO,
)
from pomodoro import AlreadyRunning, PomodoroEngine, TimerSnapshot
from pomodoro.constants import (
    REASON_ALREADY_RUNNING,
    REASON_NOT_PAUSED,
    REASON_NOT_RUNNING,
    REASON_PAUSED,
    REASON_RESUMED,
    REASON_SNAPSHOT,
    REASON_STARTED,
    REASON_STOPPED,
    REASON_UNSUPPORTED_COMMAND,
)


@dataclass(frozen=True)
class CommandResult:
    """Result envelope returned to the UI after running a command."""
    command: str
    accepted: bool
    reason: str
    snapshot: TimerSnapshot

    def to_payload(self) -> dict[str, Any]:
        return {
            "command": self.command,
            "accepted": self.accepted,
            "reason": self.reason,
            **self.snapshot.to_payload(),
        }


class RuntimeCommandDispatcher:
    """Routes `start_pomodoro`, `stop_pomodoro`, and friends to the engine."""

    def __init__(self, engine: PomodoroEngine, *, logger: Optional[logging.Logger] = None):
        self._engine = engine
        self._logger = logger or logging.getLogger("runtime")

    def dispatch(self, command: Any) -> CommandResult:
        if not isinstance(command, str):
            command = str(command)

        if command == COMMAND_START_POMODORO:
            try:
                snapshot = self._engine.start()
            except AlreadyRunning as error:
                return CommandResult(command, False, REASON_ALREADY_RUNNING, error.snapshot)
            return CommandResult(command, True, REASON_STARTED, snapshot)

        if command == COMMAND_STOP_POMODORO:
            return CommandResult(command, True, REASON_STOPPED, self._engine.stop())

        if command == COMMAND_PAUSE_POMODORO:
            changed, snapshot = self._engine.try_pause()
            reason = REASON_PAUSED if changed else REASON_NOT_RUNNING
            return CommandResult(command, True, reason, snapshot)

        if command == COMMAND_RESUME_POMODORO:
            changed, snapshot = self._engine.try_resume()
            reason = REASON_RESUMED if changed else REASON_NOT_PAUSED
            return CommandResult(command, True, reason, snapshot)

        if command == COMMAND_GET_STATE:
            return CommandResult(command, True, REASON_SNAPSHOT, self._engine.snapshot())

        self._logger.warning("Unsupported command: %s", command)
        return CommandResult(
            command,
            False,
            REASON_UNSUPPORTED_COMMAND,
            self._engine.snapshot(),
        )
