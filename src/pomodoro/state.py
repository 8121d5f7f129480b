"""Single-threaded timer state machine; callers serialize access."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .errors import AlreadyRunning
from .phase import IDLE, WORKING, Idle, Paused, Phase, RunningPhase, Working, is_running
from .scheduler import PomodoroConfig, next_phase
from .snapshot import TimerSnapshot


@dataclass
class TimerState:
    """Mutable aggregate owned by exactly one state machine."""
    total_sessions: int
    phase: Phase = IDLE
    remaining_seconds: int = 0
    completed_sessions: int = 0

    @property
    def resume_phase(self) -> Optional[RunningPhase]:
        if isinstance(self.phase, Paused):
            return self.phase.resume_phase
        return None

    @property
    def is_running(self) -> bool:
        return is_running(self.phase)


class TimerStateMachine:
    """Applies start/stop/pause/resume/tick transitions to a `TimerState`.

    Every transition method returns True when the observable state changed,
    so the owner knows whether a snapshot must be published.
    """

    def __init__(
        self,
        config: Optional[PomodoroConfig] = None,
        *,
        logger: Optional[logging.Logger] = None,
    ):
        self._config = config or PomodoroConfig()
        self._logger = logger or logging.getLogger("pomodoro")
        self._state = TimerState(total_sessions=self._config.total_sessions)

    @property
    def config(self) -> PomodoroConfig:
        return self._config

    @property
    def state(self) -> TimerState:
        return self._state

    def snapshot(self) -> TimerSnapshot:
        state = self._state
        duration: Optional[int] = None
        if is_running(state.phase):
            duration = self._config.duration_for(state.phase)
        elif isinstance(state.phase, Paused):
            duration = self._config.duration_for(state.phase.resume_phase)
        return TimerSnapshot(
            phase=state.phase,
            remaining_seconds=state.remaining_seconds,
            completed_sessions=state.completed_sessions,
            total_sessions=state.total_sessions,
            duration_seconds=duration,
        )

    def start(self) -> bool:
        state = self._state
        if not isinstance(state.phase, Idle):
            raise AlreadyRunning(self.snapshot())

        state.phase = WORKING
        state.remaining_seconds = self._config.work_seconds
        self._logger.info(
            "Pomodoro started: work=%ss sessions_before_long_break=%s",
            state.remaining_seconds,
            state.total_sessions,
        )
        return True

    def stop(self) -> bool:
        state = self._state
        if isinstance(state.phase, Idle):
            return False

        self._logger.info(
            "Pomodoro stopped: phase=%s remaining=%ss completed_sessions=%s",
            state.phase.tag,
            state.remaining_seconds,
            state.completed_sessions,
        )
        state.phase = IDLE
        state.remaining_seconds = 0
        state.completed_sessions = 0
        return True

    def pause(self) -> bool:
        state = self._state
        if not is_running(state.phase):
            return False

        state.phase = Paused(resume_phase=state.phase)
        self._logger.info(
            "Pomodoro paused: phase=%s remaining=%ss",
            state.phase.resume_phase.tag,
            state.remaining_seconds,
        )
        return True

    def resume(self) -> bool:
        state = self._state
        if not isinstance(state.phase, Paused):
            return False

        state.phase = state.phase.resume_phase
        self._logger.info(
            "Pomodoro resumed: phase=%s remaining=%ss",
            state.phase.tag,
            state.remaining_seconds,
        )
        return True

    def tick(self) -> bool:
        """Consume one second; roll over to the next phase on reaching zero."""
        state = self._state
        if not is_running(state.phase):
            return False

        if state.remaining_seconds > 0:
            state.remaining_seconds -= 1
        if state.remaining_seconds == 0:
            self._rollover()
        return True

    def _rollover(self) -> None:
        state = self._state
        finished = state.phase
        following, duration = next_phase(
            finished,
            state.completed_sessions,
            state.total_sessions,
            config=self._config,
        )
        if isinstance(finished, Working):
            state.completed_sessions += 1
        state.phase = following
        state.remaining_seconds = duration
        self._logger.info(
            "Pomodoro rollover: %s -> %s (%ss) completed_sessions=%s/%s",
            finished.tag,
            following.tag,
            duration,
            state.completed_sessions,
            state.total_sessions,
        )
