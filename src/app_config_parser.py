"""Typed parser for config.toml sections into immutable app settings."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from app_config_schema import (
    AppConfig,
    AppConfigurationError,
    LoggingSettings,
    PomodoroSettings,
    UIServerSettings,
)

_DURATION_FIELDS: tuple[str, ...] = ("work", "short_break", "long_break")


def parse_app_config(raw: Mapping[str, Any], *, source_file: str) -> AppConfig:
    """Parse raw TOML mappings into strongly typed application settings."""
    return AppConfig(
        pomodoro=_parse_pomodoro_settings(_section(raw, "pomodoro")),
        ui_server=_parse_ui_server_settings(_section(raw, "ui_server")),
        logging=_parse_logging_settings(_section(raw, "logging")),
        source_file=source_file,
    )


def _parse_pomodoro_settings(section: Mapping[str, Any]) -> PomodoroSettings:
    defaults = PomodoroSettings()
    durations: dict[str, int] = {}
    for name in _DURATION_FIELDS:
        seconds_key = f"{name}_seconds"
        minutes_key = f"{name}_minutes"
        if minutes_key in section:
            value = _as_int(section[minutes_key], f"pomodoro.{minutes_key}") * 60
            field = f"pomodoro.{minutes_key}"
        else:
            value = _as_int(
                section.get(seconds_key, getattr(defaults, seconds_key)),
                f"pomodoro.{seconds_key}",
            )
            field = f"pomodoro.{seconds_key}"
        durations[seconds_key] = _positive(value, field)

    total_sessions = _positive(
        _as_int(
            section.get("total_sessions", defaults.total_sessions),
            "pomodoro.total_sessions",
        ),
        "pomodoro.total_sessions",
    )
    return PomodoroSettings(total_sessions=total_sessions, **durations)


def _parse_ui_server_settings(section: Mapping[str, Any]) -> UIServerSettings:
    return UIServerSettings(
        enabled=_as_bool(section.get("enabled", True), "ui_server.enabled"),
        host=_as_str(section.get("host", "127.0.0.1"), "ui_server.host"),
        port=_as_int(section.get("port", 8765), "ui_server.port"),
        ws_path=_as_str(section.get("ws_path", "/ws"), "ui_server.ws_path"),
    )


def _parse_logging_settings(section: Mapping[str, Any]) -> LoggingSettings:
    level = (_as_optional_str(section.get("level"), "logging.level") or "INFO").upper()
    if not isinstance(logging.getLevelName(level), int):
        raise AppConfigurationError(f"logging.level is not a known level: {level}")
    return LoggingSettings(level=level)


def _section(root: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    raw = root.get(name, {})
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise AppConfigurationError(f"[{name}] must be a table.")
    return raw


def _positive(value: int, field: str) -> int:
    if value <= 0:
        raise AppConfigurationError(f"{field} must be greater than zero.")
    return value


def _as_str(value: Any, field: str) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    raise AppConfigurationError(f"{field} must be a string.")


def _as_optional_str(value: Any, field: str) -> Optional[str]:
    text = _as_str(value, field)
    if not text:
        return None
    return text


def _as_bool(value: Any, field: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "1", "yes", "on"):
            return True
        if lowered in ("false", "0", "no", "off"):
            return False
    raise AppConfigurationError(f"{field} must be a boolean.")


def _as_int(value: Any, field: str) -> int:
    if isinstance(value, bool):
        raise AppConfigurationError(f"{field} must be an integer.")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError as error:
            raise AppConfigurationError(f"{field} must be an integer.") from error
    raise AppConfigurationError(f"{field} must be an integer.")
