from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .projector import DEFAULT_GOAL_SESSIONS

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


@dataclass(frozen=True, slots=True)
class Config:
    discord_token: str
    guild_id: int
    timezone: ZoneInfo
    goal_sessions: int = DEFAULT_GOAL_SESSIONS
    log_level: int = logging.INFO


def _required_env(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise ValueError(f"Missing required environment variable: {name}")
    return value.strip()


def _positive_int(name: str, raw: str) -> int:
    try:
        parsed = int(raw)
    except ValueError as exc:
        raise ValueError(f"Environment variable {name} must be an integer") from exc

    if parsed <= 0:
        raise ValueError(f"Environment variable {name} must be positive")
    return parsed


def _timezone_from_env(name: str, default: str) -> ZoneInfo:
    tz_name = (os.getenv(name) or default).strip()
    try:
        return ZoneInfo(tz_name)
    except ZoneInfoNotFoundError as exc:
        raise ValueError(f"Invalid timezone in {name}: {tz_name}") from exc


def _log_level_from_env(name: str, default: str) -> int:
    level = (os.getenv(name) or default).strip().upper()
    if level not in _LOG_LEVELS:
        raise ValueError(f"{name} must be one of {', '.join(sorted(_LOG_LEVELS))}")
    return logging.getLevelName(level)


def load_config() -> Config:
    goal_raw = os.getenv("GOAL_SESSIONS") or str(DEFAULT_GOAL_SESSIONS)

    return Config(
        discord_token=_required_env("DISCORD_TOKEN"),
        guild_id=_positive_int("GUILD_ID", _required_env("GUILD_ID")),
        timezone=_timezone_from_env("TIMEZONE", "UTC"),
        goal_sessions=_positive_int("GOAL_SESSIONS", goal_raw.strip()),
        log_level=_log_level_from_env("LOG_LEVEL", "INFO"),
    )
