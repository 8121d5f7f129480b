from __future__ import annotations

from typing import Any, Optional, Protocol

from contracts.ui_protocol import EVENT_TIMER_UPDATE
from pomodoro import TimerSnapshot


class UIServerLike(Protocol):
    def publish(self, event_type: str, **payload: Any) -> None:
        ...


class RuntimeUIPublisher:
    """Engine listener that forwards snapshots to the UI server as events."""

    def __init__(self, ui_server: Optional[UIServerLike]):
        self._ui_server = ui_server

    def __call__(self, snapshot: TimerSnapshot) -> None:
        self.publish_timer_update(snapshot)

    def publish(self, event_type: str, **payload: Any) -> None:
        if self._ui_server:
            self._ui_server.publish(event_type, **payload)

    def publish_timer_update(self, snapshot: TimerSnapshot) -> None:
        self.publish(EVENT_TIMER_UPDATE, **snapshot.to_payload())
