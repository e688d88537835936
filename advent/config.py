"""Environment-driven settings for the calendar (ADVENT_* variables plus PORT/FLASK_DEBUG)."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Mapping, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dateutil import parser as date_parser

from advent.errors import ConfigError
from advent.service import DEFAULT_PLACEHOLDER, DEFAULT_TOTAL_DAYS

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_START_DATE = "Dec 1"
DEFAULT_PORT = 8080

# Leap year so "Feb 29" parses; build_calendar rejects it for other years.
_START_DATE_DEFAULT = datetime(2000, 1, 1)


def _env_flag(environ: Mapping[str, str], name: str, default: bool) -> bool:
    """Parse truthy feature-toggle values from the environment."""
    value = environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_str(environ: Mapping[str, str], name: str) -> Optional[str]:
    value = environ.get(name)
    if value is None:
        return None
    return value.strip() or None


def _env_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = _env_str(environ, name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from exc


def _env_path(environ: Mapping[str, str], name: str, default: Path) -> Path:
    raw = _env_str(environ, name)
    return Path(raw).expanduser() if raw else default


@dataclass(frozen=True)
class CalendarSettings:
    year: int
    total_days: int = DEFAULT_TOTAL_DAYS
    start_month: int = 12
    start_day: int = 1
    placeholder: str = DEFAULT_PLACEHOLDER
    content_dir: Path = PROJECT_ROOT / "content"
    template_dir: Path = PROJECT_ROOT / "templates"
    static_dir: Optional[Path] = PROJECT_ROOT / "static"
    timezone: Optional[str] = None
    log_level: str = "INFO"
    port: int = DEFAULT_PORT
    debug: bool = False

    @property
    def tzinfo(self) -> Optional[ZoneInfo]:
        return load_timezone(self.timezone)

    def now(self) -> datetime:
        return datetime.now(self.tzinfo)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "CalendarSettings":
        """Read settings from `environ` (defaults to os.environ); raise ConfigError on bad values."""
        environ = os.environ if environ is None else environ

        timezone_name = _env_str(environ, "ADVENT_TIMEZONE")
        tz = load_timezone(timezone_name)
        year = _env_int(environ, "ADVENT_YEAR", datetime.now(tz).year)

        total_days = _env_int(environ, "ADVENT_TOTAL_DAYS", DEFAULT_TOTAL_DAYS)
        if total_days < 1:
            raise ConfigError(f"ADVENT_TOTAL_DAYS must be at least 1, got {total_days}")

        start_month, start_day = parse_start_date(_env_str(environ, "ADVENT_START_DATE") or DEFAULT_START_DATE)

        log_level = (_env_str(environ, "ADVENT_LOG_LEVEL") or "INFO").upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ConfigError(f"ADVENT_LOG_LEVEL must be a logging level name, got {log_level!r}")

        static_raw = environ.get("ADVENT_STATIC_DIR")
        if static_raw is None:
            static_dir: Optional[Path] = PROJECT_ROOT / "static"
        else:
            static_dir = Path(static_raw.strip()).expanduser() if static_raw.strip() else None

        port = DEFAULT_PORT
        port_raw = _env_str(environ, "PORT")
        if port_raw:
            try:
                port = int(port_raw)
            except ValueError:
                print(f"⚠️ Invalid PORT value: {port_raw!r}. Using default {DEFAULT_PORT}.")

        return cls(
            year=year,
            total_days=total_days,
            start_month=start_month,
            start_day=start_day,
            placeholder=environ.get("ADVENT_PLACEHOLDER") or DEFAULT_PLACEHOLDER,
            content_dir=_env_path(environ, "ADVENT_CONTENT_DIR", PROJECT_ROOT / "content"),
            template_dir=_env_path(environ, "ADVENT_TEMPLATE_DIR", PROJECT_ROOT / "templates"),
            static_dir=static_dir,
            timezone=timezone_name,
            log_level=log_level,
            port=port,
            debug=_env_flag(environ, "FLASK_DEBUG", False),
        )


def parse_start_date(raw: str) -> tuple[int, int]:
    """Turn "Dec 13", "13 December" or "2025-12-13" into (month, day); any year given is ignored."""
    try:
        parsed = date_parser.parse(raw, default=_START_DATE_DEFAULT)
    except (ValueError, OverflowError) as exc:
        raise ConfigError(f"ADVENT_START_DATE is not a recognisable date: {raw!r}") from exc
    return parsed.month, parsed.day


def load_timezone(name: Optional[str]) -> Optional[ZoneInfo]:
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigError(f"ADVENT_TIMEZONE is not a known timezone: {name!r}") from exc
