import logging
import signal
import sys
from typing import Optional

from app_config import (
    AppConfigurationError,
    load_app_config,
    pomodoro_config_from_settings,
)
from pomodoro import MonotonicTickSource, PomodoroEngine
from runtime import RuntimeBootstrap, RuntimeEngine
from server import ServerConfigurationError, UIServerConfig


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Configure logging for the application."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    return logging.getLogger("focusify")


def setup_signal_handlers(runtime: RuntimeEngine) -> None:
    """Set up graceful shutdown on SIGTERM and SIGINT."""

    def signal_handler(signum: int, frame) -> None:
        del frame
        logging.getLogger("focusify").info(
            "Signal %s received, stopping.", signal.Signals(signum).name
        )
        runtime.request_stop()

    signal.signal(signal.SIGTERM, signal_handler)
    signal.signal(signal.SIGINT, signal_handler)


def main(argv: Optional[list[str]] = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    config_path = args[0] if args else None

    logger = setup_logging()
    try:
        app_config = load_app_config(config_path)
        pomodoro_config = pomodoro_config_from_settings(app_config.pomodoro)
        ui_server_config = UIServerConfig.from_settings(app_config.ui_server)
    except (AppConfigurationError, ServerConfigurationError, ValueError) as error:
        logger.error("Configuration error: %s", error)
        return 1

    logging.getLogger().setLevel(app_config.logging.level)
    logger.info("Loaded configuration from %s", app_config.source_file)

    engine = PomodoroEngine(
        pomodoro_config,
        tick_source=MonotonicTickSource(logger=logging.getLogger("pomodoro.ticks")),
        logger=logging.getLogger("pomodoro"),
    )
    runtime = RuntimeEngine(
        RuntimeBootstrap(
            logger=logging.getLogger("runtime"),
            engine=engine,
            ui_server_config=ui_server_config,
        )
    )
    setup_signal_handlers(runtime)
    return runtime.run()


if __name__ == "__main__":
    raise SystemExit(main())
