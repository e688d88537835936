from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from advent.config import PROJECT_ROOT, CalendarSettings, parse_start_date
from advent.errors import ConfigError
from advent.service import DEFAULT_PLACEHOLDER


def test_from_env_defaults():
    settings = CalendarSettings.from_env({})

    assert settings.year == datetime.now().year
    assert settings.total_days == 25
    assert (settings.start_month, settings.start_day) == (12, 1)
    assert settings.placeholder == DEFAULT_PLACEHOLDER
    assert settings.content_dir == PROJECT_ROOT / "content"
    assert settings.template_dir == PROJECT_ROOT / "templates"
    assert settings.static_dir == PROJECT_ROOT / "static"
    assert settings.timezone is None
    assert settings.port == 8080
    assert settings.debug is False


def test_from_env_twelve_day_revision(tmp_path):
    settings = CalendarSettings.from_env(
        {
            "ADVENT_YEAR": "2024",
            "ADVENT_TOTAL_DAYS": "12",
            "ADVENT_START_DATE": "Dec 13",
            "ADVENT_PLACEHOLDER": "Merry Christmas! 🎄",
            "ADVENT_CONTENT_DIR": str(tmp_path),
            "ADVENT_STATIC_DIR": "",
            "ADVENT_TIMEZONE": "Europe/London",
            "ADVENT_LOG_LEVEL": "debug",
            "PORT": "9000",
            "FLASK_DEBUG": "yes",
        }
    )

    assert settings.year == 2024
    assert settings.total_days == 12
    assert (settings.start_month, settings.start_day) == (12, 13)
    assert settings.placeholder == "Merry Christmas! 🎄"
    assert settings.content_dir == Path(tmp_path)
    assert settings.static_dir is None
    assert settings.tzinfo is not None
    assert settings.log_level == "DEBUG"
    assert settings.port == 9000
    assert settings.debug is True


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Dec 13", (12, 13)),
        ("13 December", (12, 13)),
        ("2031-12-01", (12, 1)),
    ],
)
def test_parse_start_date(raw, expected):
    assert parse_start_date(raw) == expected


@pytest.mark.parametrize(
    "environ",
    [
        {"ADVENT_TOTAL_DAYS": "twelve"},
        {"ADVENT_TOTAL_DAYS": "0"},
        {"ADVENT_YEAR": "next"},
        {"ADVENT_START_DATE": "not a date"},
        {"ADVENT_TIMEZONE": "Mars/Olympus_Mons"},
        {"ADVENT_LOG_LEVEL": "chatty"},
    ],
)
def test_from_env_rejects_bad_values(environ):
    with pytest.raises(ConfigError):
        CalendarSettings.from_env(environ)


def test_invalid_port_falls_back_to_default(capsys):
    settings = CalendarSettings.from_env({"PORT": "eighty"})

    assert settings.port == 8080
    assert "Invalid PORT value" in capsys.readouterr().out
