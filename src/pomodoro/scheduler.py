"""Pure phase-boundary decisions for the pomodoro cycle."""

from __future__ import annotations

from dataclasses import dataclass

from .constants import (
    DEFAULT_LONG_BREAK_SECONDS,
    DEFAULT_SHORT_BREAK_SECONDS,
    DEFAULT_TOTAL_SESSIONS,
    DEFAULT_WORK_SECONDS,
)
from .phase import LONG_BREAK, SHORT_BREAK, WORKING, LongBreak, RunningPhase, ShortBreak, Working


@dataclass(frozen=True)
class PomodoroConfig:
    """Phase durations and the number of work sessions per long break."""
    work_seconds: int = DEFAULT_WORK_SECONDS
    short_break_seconds: int = DEFAULT_SHORT_BREAK_SECONDS
    long_break_seconds: int = DEFAULT_LONG_BREAK_SECONDS
    total_sessions: int = DEFAULT_TOTAL_SESSIONS

    def __post_init__(self) -> None:
        for field_name in (
            "work_seconds",
            "short_break_seconds",
            "long_break_seconds",
            "total_sessions",
        ):
            value = getattr(self, field_name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ValueError(f"{field_name} must be a positive integer, got: {value!r}")

    @classmethod
    def from_minutes(
        cls,
        work_minutes: int,
        short_break_minutes: int,
        long_break_minutes: int,
        total_sessions: int,
    ) -> "PomodoroConfig":
        return cls(
            work_seconds=int(work_minutes) * 60,
            short_break_seconds=int(short_break_minutes) * 60,
            long_break_seconds=int(long_break_minutes) * 60,
            total_sessions=int(total_sessions),
        )

    def duration_for(self, phase: RunningPhase) -> int:
        if isinstance(phase, Working):
            return self.work_seconds
        if isinstance(phase, ShortBreak):
            return self.short_break_seconds
        if isinstance(phase, LongBreak):
            return self.long_break_seconds
        raise ValueError(f"Phase has no duration: {phase!r}")


def next_phase(
    current: RunningPhase,
    completed_sessions: int,
    total_sessions: int,
    *,
    config: PomodoroConfig | None = None,
) -> tuple[RunningPhase, int]:
    """Return the phase that follows `current` and its full duration in seconds.

    `completed_sessions` is the count before `current` finished. Leaving
    `Working` lands on a long break when the session that just ended is a
    multiple of `total_sessions`; breaks always lead back to `Working`.
    """
    if total_sessions <= 0:
        raise ValueError(f"total_sessions must be positive, got: {total_sessions}")
    durations = config or PomodoroConfig(total_sessions=total_sessions)

    if isinstance(current, Working):
        if (completed_sessions + 1) % total_sessions == 0:
            following: RunningPhase = LONG_BREAK
        else:
            following = SHORT_BREAK
    elif isinstance(current, (ShortBreak, LongBreak)):
        following = WORKING
    else:
        raise ValueError(f"Cannot schedule after non-running phase: {current!r}")

    return following, durations.duration_for(following)
