"""Calendar builder: date assignment plus safe loading of per-day content files."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, tzinfo
from pathlib import Path
from typing import List, Optional, Union

from flask import current_app, has_app_context

from advent.errors import ConfigError, ValidationError
from advent.models import Calendar, Day

DEFAULT_TOTAL_DAYS = 25
DEFAULT_START_MONTH = 12
DEFAULT_START_DAY = 1
DEFAULT_PLACEHOLDER = "Happy Advent! 🎄"
CONTENT_FILENAME_TEMPLATE = "day{number}.txt"

LOADED = "loaded"
MISSING = "missing"
UNREADABLE = "unreadable"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContentResult:
    """Outcome of reading one day's file; `text` is empty unless loaded."""

    status: str
    text: str = ""
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == LOADED

    def text_or(self, placeholder: str) -> str:
        return self.text if self.ok else placeholder


def resolve_content_path(content_dir: Union[str, Path], number: int, total_days: int) -> Path:
    """Return the canonical path for a day's file, refusing anything outside the content root."""
    if isinstance(number, bool) or not isinstance(number, int):
        raise ValidationError(f"Invalid day number: {number!r}")
    if not 1 <= number <= total_days:
        raise ValidationError(f"Invalid day number: {number} (must be between 1 and {total_days})")

    root = Path(content_dir).expanduser().resolve()
    candidate = (root / CONTENT_FILENAME_TEMPLATE.format(number=number)).resolve()
    if not candidate.is_relative_to(root):
        raise ValidationError(f"Content path for day {number} escapes the content directory")
    return candidate


def load_day_content(content_dir: Union[str, Path], number: int, total_days: int) -> ContentResult:
    path = resolve_content_path(content_dir, number, total_days)
    try:
        with path.open("r", encoding="utf-8", newline="") as handle:
            return ContentResult(status=LOADED, text=handle.read())
    except FileNotFoundError:
        return ContentResult(status=MISSING)
    except (OSError, UnicodeDecodeError) as exc:
        return ContentResult(status=UNREADABLE, error=str(exc))


def build_calendar(
    year: int,
    content_dir: Union[str, Path],
    *,
    total_days: int = DEFAULT_TOTAL_DAYS,
    start_month: int = DEFAULT_START_MONTH,
    start_day: int = DEFAULT_START_DAY,
    placeholder: str = DEFAULT_PLACEHOLDER,
    tz: Optional[tzinfo] = None,
    now: Optional[datetime] = None,
) -> Calendar:
    """Build the day list for `year`, loading content from `content_dir`.

    Day 1 falls on `start_month/start_day` at midnight and every following day
    is one calendar day later, so long runs roll over into the next month.
    Missing files fall back to `placeholder`; unreadable or rejected files do
    too, but are logged.
    """
    if total_days < 1:
        raise ConfigError(f"Calendar needs at least one day, got {total_days}")
    try:
        first = datetime(year, start_month, start_day, tzinfo=tz)
    except ValueError as exc:
        raise ConfigError(f"Invalid calendar start {year}-{start_month}-{start_day}: {exc}") from exc

    now = now or datetime.now(tz)
    days: List[Day] = []
    for offset in range(total_days):
        number = offset + 1
        date = first + timedelta(days=offset)
        days.append(
            Day(
                number=number,
                date=date,
                unlocked=now >= date,
                content=_content_for_day(content_dir, number, total_days, placeholder),
            )
        )
    return Calendar(year=year, days=tuple(days))


def _content_for_day(content_dir: Union[str, Path], number: int, total_days: int, placeholder: str) -> str:
    try:
        result = load_day_content(content_dir, number, total_days)
    except ValidationError as exc:
        _log_warning("Rejected content file for day %d: %s", number, exc)
        return placeholder

    if result.status == UNREADABLE:
        _log_warning("Content file for day %d is unreadable, using placeholder: %s", number, result.error)
    elif result.status == MISSING:
        _log_debug("No content file for day %d, using placeholder", number)
    return result.text_or(placeholder)


def _active_logger() -> logging.Logger:
    if has_app_context():
        return current_app.logger
    return logger


def _log_warning(message: str, *args) -> None:
    _active_logger().warning(message, *args)


def _log_debug(message: str, *args) -> None:
    _active_logger().debug(message, *args)
