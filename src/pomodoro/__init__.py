from .clock import MonotonicTickSource, TickSource
from .errors import AlreadyRunning, ListenerDeliveryError, PomodoroError
from .phase import (
    IDLE,
    LONG_BREAK,
    SHORT_BREAK,
    WORKING,
    Idle,
    LongBreak,
    Paused,
    Phase,
    RunningPhase,
    ShortBreak,
    Working,
    phase_from_payload,
    phase_to_payload,
)
from .publisher import SnapshotListener, SnapshotPublisher
from .scheduler import PomodoroConfig, next_phase
from .service import PomodoroEngine
from .snapshot import TimerSnapshot
from .state import TimerState, TimerStateMachine

__all__ = [
    "AlreadyRunning",
    "IDLE",
    "Idle",
    "LONG_BREAK",
    "ListenerDeliveryError",
    "LongBreak",
    "MonotonicTickSource",
    "Paused",
    "Phase",
    "PomodoroConfig",
    "PomodoroEngine",
    "PomodoroError",
    "RunningPhase",
    "SHORT_BREAK",
    "ShortBreak",
    "SnapshotListener",
    "SnapshotPublisher",
    "TickSource",
    "TimerSnapshot",
    "TimerState",
    "TimerStateMachine",
    "WORKING",
    "Working",
    "next_phase",
    "phase_from_payload",
    "phase_to_payload",
]
