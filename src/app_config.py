from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping

try:  # Python 3.11+
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - fallback for older runtimes
    import tomli as tomllib  # type: ignore

from app_config_parser import parse_app_config
from app_config_schema import (
    DEFAULT_CONFIG_FILE,
    AppConfig,
    AppConfigurationError,
    LoggingSettings,
    PomodoroSettings,
    UIServerSettings,
)
from pomodoro import PomodoroConfig

__all__ = [
    "AppConfig",
    "AppConfigurationError",
    "LoggingSettings",
    "PomodoroSettings",
    "UIServerSettings",
    "load_app_config",
    "pomodoro_config_from_settings",
    "resolve_config_path",
]


def resolve_config_path(config_path: str | None = None) -> Path:
    env_path = os.getenv("APP_CONFIG_FILE")
    raw = config_path or env_path or DEFAULT_CONFIG_FILE
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = (Path.cwd() / path).resolve()
    return path


def load_app_config(config_path: str | None = None) -> AppConfig:
    path = resolve_config_path(config_path)
    if not path.exists():
        raise AppConfigurationError(f"Config file not found: {path}")
    if not path.is_file():
        raise AppConfigurationError(f"Config path is not a file: {path}")

    try:
        with open(path, "rb") as fh:
            raw = tomllib.load(fh)
    except Exception as error:
        raise AppConfigurationError(f"Failed to parse config TOML: {error}") from error

    if not isinstance(raw, Mapping):
        raise AppConfigurationError("Root config TOML object must be a table.")

    return parse_app_config(raw, source_file=str(path))


def pomodoro_config_from_settings(settings: PomodoroSettings) -> PomodoroConfig:
    return PomodoroConfig(
        work_seconds=settings.work_seconds,
        short_break_seconds=settings.short_break_seconds,
        long_break_seconds=settings.long_break_seconds,
        total_sessions=settings.total_sessions,
    )
