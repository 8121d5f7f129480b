"""Runtime orchestration: wires the engine to its listeners and the UI server."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Optional

from pomodoro import PomodoroEngine
from server import UIServer, UIServerConfig

from .commands import RuntimeCommandDispatcher
from .ticks import SnapshotLogListener
from .ui import RuntimeUIPublisher

UIServerFactory = Callable[[UIServerConfig, Callable[[str], dict[str, Any]]], UIServer]


def _default_ui_server_factory(
    config: UIServerConfig,
    command_handler: Callable[[str], dict[str, Any]],
) -> UIServer:
    return UIServer(
        config,
        command_handler=command_handler,
        logger=logging.getLogger("ui_server"),
    )


@dataclass(frozen=True)
class RuntimeBootstrap:
    """Dependency bundle required to construct the runtime engine."""
    logger: logging.Logger
    engine: PomodoroEngine
    ui_server_config: Optional[UIServerConfig] = None
    ui_server_factory: UIServerFactory = _default_ui_server_factory


class RuntimeEngine:
    """Keeps the pomodoro engine, its listeners, and the UI server alive until stopped."""

    def __init__(self, bootstrap: RuntimeBootstrap):
        self._bootstrap = bootstrap
        self._logger = bootstrap.logger
        self._engine = bootstrap.engine
        self._dispatcher = RuntimeCommandDispatcher(self._engine, logger=self._logger)
        self._stop_requested = threading.Event()
        self._unsubscribers: list[Callable[[], None]] = []

        config = bootstrap.ui_server_config
        self._ui_server: Optional[UIServer] = None
        if config is not None and config.enabled:
            self._ui_server = bootstrap.ui_server_factory(config, self.handle_command)
        self._ui = RuntimeUIPublisher(self._ui_server)

    @property
    def dispatcher(self) -> RuntimeCommandDispatcher:
        return self._dispatcher

    def handle_command(self, command: str) -> dict[str, Any]:
        result = self._dispatcher.dispatch(command)
        self._logger.info(
            "Command %s: accepted=%s reason=%s",
            result.command,
            result.accepted,
            result.reason,
        )
        return result.to_payload()

    def request_stop(self) -> None:
        self._stop_requested.set()

    def run(self) -> int:
        self._unsubscribers.append(
            self._engine.subscribe(SnapshotLogListener(logging.getLogger("runtime.ticks")))
        )
        self._unsubscribers.append(self._engine.subscribe(self._ui))

        try:
            self._ui.publish_timer_update(self._engine.snapshot())
            if self._ui_server is not None:
                self._logger.info("Starting UI server...")
                self._ui_server.start()

            self._logger.info("Ready. Waiting for commands.")
            while not self._stop_requested.wait(timeout=0.5):
                continue
            self._logger.info("Shutdown requested.")
            return 0
        except KeyboardInterrupt:
            self._logger.info("Shutdown requested by keyboard interrupt.")
            return 0
        except Exception as error:
            self._logger.error("Unexpected error: %s", error, exc_info=True)
            return 1
        finally:
            self._shutdown()

    def _shutdown(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()

        self._logger.info("Cancelling pomodoro ticks...")
        self._engine.close()

        if self._ui_server is not None:
            self._logger.info("Stopping UI server...")
            try:
                self._ui_server.stop(timeout_seconds=5.0)
            except Exception as error:
                self._logger.error("Error stopping UI server: %s", error, exc_info=True)
