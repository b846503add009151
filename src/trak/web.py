"""Request-scoped context, auth guard and JSON error handling for the API."""

from __future__ import annotations

from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from enum import Enum
from functools import wraps
from typing import Any, Callable, TypeVar

from flask import Flask, current_app, g, jsonify, session
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from .context import AppContext
from .services import auth
from .services.auth import UserNotFound
from .services.habits import HabitNotFound

F = TypeVar("F", bound=Callable[..., Any])

CONTEXT_KEY = "trak"


class Unauthorized(Exception):
    """Raised when a route needs a signed-in user and there is none."""


def base_context() -> AppContext:
    return current_app.extensions[CONTEXT_KEY]


def current_context() -> AppContext:
    """Return the context bound to this request's user (possibly anonymous)."""

    if "trak_context" not in g:
        ctx = base_context()
        user_id = session.get("user_id")
        user = auth.get_user(user_id, ctx.session_factory) if user_id is not None else None
        if user_id is not None and user is None:
            session.pop("user_id", None)
        g.trak_context = ctx.for_user(user)
    return g.trak_context


def login_required(view: F) -> F:
    """Reject the request with 401 unless a user is signed in."""

    @wraps(view)
    def wrapped(*args, **kwargs):
        if current_context().current_user is None:
            raise Unauthorized()
        return view(*args, **kwargs)

    return wrapped  # type: ignore[return-value]


def to_jsonable(value: Any) -> Any:
    """Convert dataclasses, models, enums and dates into JSON-ready values."""

    if is_dataclass(value) and not isinstance(value, type):
        return to_jsonable(asdict(value))
    if hasattr(value, "model_dump"):
        return to_jsonable(value.model_dump())
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, dict):
        return {key: to_jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(item) for item in value]
    return value


def _error(message: str, status: int, **extra: Any):
    payload = {"error": message, **extra}
    return jsonify(payload), status


def register_error_handlers(app: Flask) -> None:
    """Map service exceptions onto JSON error responses."""

    @app.errorhandler(Unauthorized)
    def _unauthorized(exc: Unauthorized):
        return _error("Authentication required", 401)

    @app.errorhandler(ValidationError)
    def _invalid_payload(exc: ValidationError):
        errors: dict[str, list[str]] = {}
        for error in exc.errors(include_url=False):
            loc = error.get("loc", ())
            key = str(loc[0]) if loc else "__root__"
            errors.setdefault(key, []).append(error.get("msg", "Invalid value"))
        return _error("Invalid payload", 400, fields=errors)

    @app.errorhandler(ValueError)
    def _bad_request(exc: ValueError):
        return _error(str(exc), 400)

    def _not_found(exc: LookupError):
        return _error(str(exc), 404)

    app.register_error_handler(HabitNotFound, _not_found)
    app.register_error_handler(UserNotFound, _not_found)

    @app.errorhandler(HTTPException)
    def _http_error(exc: HTTPException):
        return _error(exc.description or exc.name, exc.code or 500)


__all__ = [
    "Unauthorized",
    "current_context",
    "login_required",
    "register_error_handlers",
    "to_jsonable",
]
