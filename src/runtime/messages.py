"""Human-readable status text for timer snapshots."""

from __future__ import annotations

from pomodoro import Idle, LongBreak, Paused, ShortBreak, TimerSnapshot, Working


def format_duration(seconds: int) -> str:
    """Format a duration in seconds as `MM:SS`."""
    minutes, remainder = divmod(max(0, int(seconds)), 60)
    return f"{minutes:02d}:{remainder:02d}"


def _phase_label(phase) -> str:
    if isinstance(phase, Working):
        return "Focus"
    if isinstance(phase, ShortBreak):
        return "Short break"
    if isinstance(phase, LongBreak):
        return "Long break"
    return "Ready"


def status_message(snapshot: TimerSnapshot) -> str:
    """Build a one-line status for logs and the UI."""
    phase = snapshot.phase
    progress = f"{snapshot.completed_sessions}/{snapshot.total_sessions} sessions"
    if isinstance(phase, Idle):
        return "Ready"
    if isinstance(phase, Paused):
        return (
            f"{_phase_label(phase.resume_phase)} paused "
            f"({format_duration(snapshot.remaining_seconds)} remaining, {progress})"
        )
    return (
        f"{_phase_label(phase)} "
        f"({format_duration(snapshot.remaining_seconds)} remaining, {progress})"
    )
