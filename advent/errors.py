"""Error taxonomy shared by the calendar builder, router and app factory."""

from __future__ import annotations

from typing import Any, Dict, Optional


class AdventError(Exception):
    """Base error; `status_code` is the HTTP status the router answers with."""

    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None, payload: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.payload = payload or {"status": "error", "reason": message}


class ValidationError(AdventError):
    """Malformed or out-of-range day number, or a path escaping the content root."""

    status_code = 400


class AccessDenied(AdventError):
    """The requested day has not unlocked yet."""

    status_code = 403


class RenderError(AdventError):
    status_code = 500


class ConfigError(AdventError):
    """Bad settings or template directory; raised at startup so the app never boots."""

    status_code = 500
