from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import Callable

import pytest

from advent.config import PROJECT_ROOT, CalendarSettings
from app import create_app

YEAR = 2025
# Midday on December 10th: days 1-10 of a Dec 1 calendar are open.
MID_ADVENT = datetime(YEAR, 12, 10, 12, 0)


class FakeClock:
    """Settable stand-in for datetime.now used by the router."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    path = tmp_path / "content"
    path.mkdir()
    return path


@pytest.fixture
def write_content(content_dir: Path) -> Callable[[int, str], Path]:
    def _write(number: int, text: str) -> Path:
        target = content_dir / f"day{number}.txt"
        target.write_text(text, encoding="utf-8")
        return target

    return _write


@pytest.fixture
def settings(content_dir: Path) -> CalendarSettings:
    return CalendarSettings(
        year=YEAR,
        content_dir=content_dir,
        template_dir=PROJECT_ROOT / "templates",
        static_dir=None,
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(MID_ADVENT)


@pytest.fixture
def make_client(settings: CalendarSettings, clock: FakeClock):
    def _make(**overrides):
        app = create_app(replace(settings, **overrides), clock=clock)
        app.config["TESTING"] = True
        return app.test_client()

    return _make


@pytest.fixture
def client(make_client):
    return make_client()
