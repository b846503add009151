"""Trak habit and journal tracker application factory."""

from __future__ import annotations

from importlib import import_module
from typing import Iterable

from flask import Flask

from .config import BaseConfig, DevConfig, TestConfig
from .context import AppContext, create_app_context

_CONFIG_MAP = {
    "development": DevConfig,
    "testing": TestConfig,
    "default": BaseConfig,
}


def _resolve_config(name: str | None) -> type[BaseConfig]:
    """Return the config class for the provided environment name."""

    if not name:
        return BaseConfig
    return _CONFIG_MAP.get(name.lower(), BaseConfig)


def _blueprint_paths() -> Iterable[str]:
    yield "trak.blueprints.auth"
    yield "trak.blueprints.habits"
    yield "trak.blueprints.journal"
    yield "trak.blueprints.dashboard"


def create_app(config_name: str | None = None, *, config: BaseConfig | None = None) -> Flask:
    """Create and configure the Flask application instance."""

    from . import cli
    from .logging_config import setup_logging
    from .web import CONTEXT_KEY, register_error_handlers

    app = Flask(__name__, instance_relative_config=True)
    config_obj = config or _resolve_config(config_name)()
    app.config.from_object(config_obj)
    app.config["TRAK_CONFIG"] = config_obj

    if not config_obj.TESTING:
        setup_logging(config_obj)

    app.extensions[CONTEXT_KEY] = create_app_context(config_obj)
    _register_blueprints(app)
    register_error_handlers(app)
    cli.init_app(app)
    return app


def _register_blueprints(app: Flask) -> None:
    """Import and register all blueprints declared in `_blueprint_paths`."""

    for dotted_path in _blueprint_paths():
        module = import_module(dotted_path)
        app.register_blueprint(getattr(module, "bp"))


__all__ = ["AppContext", "BaseConfig", "DevConfig", "TestConfig", "create_app", "create_app_context"]
