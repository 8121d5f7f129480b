"""Closed set of timer phases, with `Paused` remembering what it suspended."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Mapping, Union

from .constants import (
    PHASE_IDLE,
    PHASE_LONG_BREAK,
    PHASE_PAUSED,
    PHASE_SHORT_BREAK,
    PHASE_WORKING,
)


@dataclass(frozen=True)
class Idle:
    """No countdown configured."""
    tag: ClassVar[str] = PHASE_IDLE


@dataclass(frozen=True)
class Working:
    tag: ClassVar[str] = PHASE_WORKING


@dataclass(frozen=True)
class ShortBreak:
    tag: ClassVar[str] = PHASE_SHORT_BREAK


@dataclass(frozen=True)
class LongBreak:
    tag: ClassVar[str] = PHASE_LONG_BREAK


RunningPhase = Union[Working, ShortBreak, LongBreak]


@dataclass(frozen=True)
class Paused:
    """Suspended countdown; `resume_phase` is the phase to continue into."""
    resume_phase: RunningPhase
    tag: ClassVar[str] = PHASE_PAUSED

    def __post_init__(self) -> None:
        if not is_running(self.resume_phase):
            raise ValueError(
                f"Paused can only suspend a running phase, got: {self.resume_phase!r}"
            )


Phase = Union[Idle, Working, ShortBreak, LongBreak, Paused]

IDLE = Idle()
WORKING = Working()
SHORT_BREAK = ShortBreak()
LONG_BREAK = LongBreak()

_RUNNING_BY_TAG: dict[str, RunningPhase] = {
    PHASE_WORKING: WORKING,
    PHASE_SHORT_BREAK: SHORT_BREAK,
    PHASE_LONG_BREAK: LONG_BREAK,
}


def is_running(phase: object) -> bool:
    """True for the phases that consume ticks."""
    return isinstance(phase, (Working, ShortBreak, LongBreak))


def phase_to_payload(phase: Phase) -> dict[str, Any]:
    """Encode a phase as `{"type": tag}` plus `"value"` for `Paused`."""
    payload: dict[str, Any] = {"type": phase.tag}
    if isinstance(phase, Paused):
        payload["value"] = phase_to_payload(phase.resume_phase)
    return payload


def phase_from_payload(payload: Mapping[str, Any]) -> Phase:
    """Decode a phase previously encoded by `phase_to_payload`."""
    if not isinstance(payload, Mapping):
        raise ValueError("Phase payload must be a mapping.")

    tag = payload.get("type")
    if tag == PHASE_IDLE:
        return IDLE
    if tag in _RUNNING_BY_TAG:
        return _RUNNING_BY_TAG[tag]
    if tag == PHASE_PAUSED:
        inner = phase_from_payload(payload.get("value") or {})
        if not is_running(inner):
            raise ValueError(f"Paused value must be a running phase, got: {inner.tag}")
        return Paused(resume_phase=inner)
    raise ValueError(f"Unknown phase type: {tag!r}")
