from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable

if TYPE_CHECKING:
    from .snapshot import TimerSnapshot


class PomodoroError(Exception):
    """Base exception for the pomodoro engine."""


class AlreadyRunning(PomodoroError):
    """Raised when `start` is requested while a countdown is not idle."""

    def __init__(self, snapshot: "TimerSnapshot"):
        super().__init__(
            f"Pomodoro already running: phase={snapshot.phase_tag} "
            f"remaining={snapshot.remaining_seconds}s"
        )
        self.snapshot = snapshot


class ListenerDeliveryError(PomodoroError):
    """A snapshot listener failed; logged by the publisher, never raised to the engine."""

    def __init__(self, listener: Callable[..., Any], error: BaseException):
        name = getattr(listener, "__qualname__", None) or repr(listener)
        super().__init__(f"Listener {name} failed: {error}")
        self.listener = listener
        self.error = error
