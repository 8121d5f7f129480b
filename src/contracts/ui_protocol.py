"""Websocket event names exchanged with the UI layer."""

from __future__ import annotations

# Websocket event types
EVENT_HELLO = "hello"
EVENT_TIMER_UPDATE = "timer-update"
EVENT_COMMAND_RESULT = "command_result"
EVENT_ERROR = "error"

STICKY_EVENT_TYPES: frozenset[str] = frozenset({EVENT_TIMER_UPDATE})

STICKY_EVENT_ORDER: tuple[str, ...] = (EVENT_TIMER_UPDATE,)
