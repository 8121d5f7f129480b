"""Immutable observable state emitted to listeners as `timer-update` payloads."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .phase import Paused, Phase, RunningPhase, is_running, phase_to_payload


@dataclass(frozen=True)
class TimerSnapshot:
    """Point-in-time copy of the timer state."""
    phase: Phase
    remaining_seconds: int
    completed_sessions: int
    total_sessions: int
    duration_seconds: Optional[int] = None

    @property
    def phase_tag(self) -> str:
        return self.phase.tag

    @property
    def phase_detail(self) -> Optional[RunningPhase]:
        if isinstance(self.phase, Paused):
            return self.phase.resume_phase
        return None

    @property
    def is_running(self) -> bool:
        return is_running(self.phase)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "state": phase_to_payload(self.phase),
            "remaining": self.remaining_seconds,
            "completed_sessions": self.completed_sessions,
            "total_sessions": self.total_sessions,
        }
        if self.duration_seconds is not None:
            payload["duration"] = self.duration_seconds
        return payload
