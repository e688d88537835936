"""Flask entrypoint for the countdown calendar.

Local run:
  python app.py                      (PORT defaults to 8080)
  gunicorn 'app:create_app()'

All settings come from ADVENT_* environment variables; see advent/config.py.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional

from flask import Flask, jsonify, request
from jinja2 import TemplateError

from advent import AdventError, Calendar, ConfigError, build_calendar, create_calendar_blueprint
from advent.config import CalendarSettings
from advent.routes import DAY_TEMPLATE, INDEX_TEMPLATE

REQUIRED_TEMPLATES = (INDEX_TEMPLATE, DAY_TEMPLATE)


# ====== Template filters ======
def day_label(value: datetime) -> str:
    """Format a day's date like '13 Dec'."""
    return f"{value.day} {value:%b}"


def _wants_json() -> bool:
    accepts = request.accept_mimetypes
    return (
        request.headers.get("X-Requested-With") == "XMLHttpRequest"
        or accepts["application/json"] > accepts["text/html"]
    )


def handle_advent_error(err: AdventError):
    if _wants_json():
        return jsonify(err.payload), err.status_code
    return err.message, err.status_code, {"Content-Type": "text/plain; charset=utf-8"}


def _check_templates(app: Flask) -> None:
    """Compile every template up front so a broken directory stops startup."""
    template_dir = app.template_folder
    names = set(app.jinja_env.list_templates())
    missing = [name for name in REQUIRED_TEMPLATES if name not in names]
    if missing:
        raise ConfigError(f"Template directory {template_dir} is missing: {', '.join(missing)}")
    for name in sorted(names):
        try:
            app.jinja_env.get_template(name)
        except TemplateError as exc:
            raise ConfigError(f"Template {name} in {template_dir} failed to parse: {exc}") from exc


# ====== App factory ======
def create_app(
    settings: Optional[CalendarSettings] = None,
    *,
    calendar: Optional[Calendar] = None,
    clock: Optional[Callable[[], datetime]] = None,
) -> Flask:
    """Build the Flask app; raises ConfigError instead of starting with bad settings or templates."""
    settings = settings or CalendarSettings.from_env()

    template_dir = settings.template_dir.resolve()
    if not template_dir.is_dir():
        raise ConfigError(f"Template directory not found: {template_dir}")

    static_dir = settings.static_dir.resolve() if settings.static_dir else None
    app = Flask(
        __name__,
        template_folder=str(template_dir),
        static_folder=str(static_dir) if static_dir else None,
        static_url_path="/static",
    )
    app.logger.setLevel(settings.log_level)
    app.config["ADVENT_SETTINGS"] = settings

    app.add_template_filter(day_label, "day_label")
    app.register_error_handler(AdventError, handle_advent_error)

    _check_templates(app)

    clock = clock or settings.now
    if calendar is None:
        with app.app_context():
            calendar = build_calendar(
                settings.year,
                settings.content_dir,
                total_days=settings.total_days,
                start_month=settings.start_month,
                start_day=settings.start_day,
                placeholder=settings.placeholder,
                tz=settings.tzinfo,
                now=clock(),
            )
    app.config["ADVENT_CALENDAR"] = calendar

    app.register_blueprint(create_calendar_blueprint(calendar, clock))

    app.logger.info(
        "Calendar %s ready: %d days, %d unlocked, content from %s",
        calendar.year,
        calendar.total_days,
        calendar.unlocked_count,
        settings.content_dir,
    )
    return app


# ====== Entrypoint ======
if __name__ == "__main__":
    settings = CalendarSettings.from_env()
    app = create_app(settings)
    print(f"Starting countdown calendar on :{settings.port}")
    print(f"Visit http://localhost:{settings.port}")
    app.run(host="0.0.0.0", port=settings.port, debug=settings.debug)
