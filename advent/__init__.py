"""Countdown calendar package: builder, models and the Flask blueprint."""

from .errors import AccessDenied, AdventError, ConfigError, RenderError, ValidationError
from .models import Calendar, Day
from .routes import create_calendar_blueprint
from .service import build_calendar, load_day_content

__all__ = [
    "AccessDenied",
    "AdventError",
    "Calendar",
    "ConfigError",
    "Day",
    "RenderError",
    "ValidationError",
    "build_calendar",
    "create_calendar_blueprint",
    "load_day_content",
]
