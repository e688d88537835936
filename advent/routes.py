"""Calendar Blueprint: the home grid plus the unlock-gated single-day page."""

from __future__ import annotations

import re
from datetime import datetime
from typing import Callable

from flask import Blueprint, current_app, render_template
from jinja2 import TemplateError

from advent.errors import AccessDenied, RenderError, ValidationError
from advent.models import Calendar

Clock = Callable[[], datetime]

INDEX_TEMPLATE = "index.html"
DAY_TEMPLATE = "day.html"

_DAY_NUMBER_PATTERN = re.compile(r"[+-]?[0-9]+")


def create_calendar_blueprint(calendar: Calendar, clock: Clock) -> Blueprint:
    """Factory so the app can inject the prebuilt calendar and its clock."""

    bp = Blueprint("calendar", __name__)

    def _render(template_name: str, **context) -> str:
        try:
            return render_template(template_name, **context)
        except TemplateError as exc:
            current_app.logger.exception("Rendering %s failed", template_name)
            raise RenderError(f"Could not render {template_name}: {exc}") from exc

    @bp.get("/")
    def home():
        view = calendar.public_view(clock())
        return _render(
            INDEX_TEMPLATE,
            calendar=view,
            days=view.days,
            total_days=view.total_days,
            unlocked_count=view.unlocked_count,
        )

    @bp.get("/day/", defaults={"raw_number": ""})
    @bp.get("/day/<raw_number>")
    def view_day(raw_number: str):
        number = parse_day_number(raw_number, calendar.total_days)
        day = calendar.at(clock()).get(number)
        if not day.unlocked:
            raise AccessDenied(f"Day {number} is not yet unlocked")
        return _render(DAY_TEMPLATE, day=day, total_days=calendar.total_days)

    return bp


def parse_day_number(raw_value: str, total_days: int) -> int:
    """Parse a day number from the URL, raising ValidationError unless it lies in 1..total_days."""
    raw_value = raw_value or ""
    if not _DAY_NUMBER_PATTERN.fullmatch(raw_value):
        raise ValidationError("Invalid day number")
    try:
        number = int(raw_value)
    except ValueError as exc:
        raise ValidationError("Invalid day number") from exc
    if not 1 <= number <= total_days:
        raise ValidationError("Invalid day number")
    return number
