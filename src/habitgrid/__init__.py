"""HabitGrid application factory."""

from __future__ import annotations

import logging
from importlib import import_module
from typing import Iterable

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from . import cli as _cli
from .config import BaseConfig, DevConfig, TestConfig
from .errors import HabitGridError, PersistenceError
from .logging_config import get_logger, setup_logging

_CONFIG_MAP = {
    "development": DevConfig,
    "testing": TestConfig,
    "default": BaseConfig,
}

logger = get_logger(__name__)


def _resolve_config(name: str | None) -> type[BaseConfig]:
    """Return the config class for the provided environment name."""

    if not name:
        return BaseConfig
    return _CONFIG_MAP.get(name.lower(), BaseConfig)


def _blueprint_paths() -> Iterable[str]:
    """Yield blueprint import paths in registration order."""

    yield "habitgrid.blueprints.home"
    yield "habitgrid.blueprints.habits"
    yield "habitgrid.blueprints.calendar"


def create_app(config_name: str | None = None) -> Flask:
    """Create and configure the Flask application instance."""

    app = Flask(__name__, instance_relative_config=True)
    config_obj = _resolve_config(config_name)()
    app.config.from_object(config_obj)
    app.config["HABITGRID_CONFIG"] = config_obj
    app.json.sort_keys = False

    setup_logging(config_obj)
    _register_blueprints(app)
    _register_error_handlers(app)

    # Imported lazily so model classes can be used without building an engine.
    from .extensions import init_db

    init_db(app)
    _cli.init_app(app)

    logger.info("HabitGrid app created", extra={"database_url": config_obj.DATABASE_URL})
    return app


def _register_blueprints(app: Flask) -> None:
    """Import and register all blueprints declared in `_blueprint_paths`."""

    for dotted_path in _blueprint_paths():
        module = import_module(dotted_path)
        blueprint = getattr(module, "bp")
        app.register_blueprint(blueprint)


def _register_error_handlers(app: Flask) -> None:
    """Map the error taxonomy onto JSON responses."""

    @app.errorhandler(HabitGridError)
    def _handle_app_error(exc: HabitGridError):
        # Storage failures already carry their traceback from the repository log.
        level = logging.ERROR if isinstance(exc, PersistenceError) else logging.INFO
        logger.log(level, "Request rejected: %s", exc.message, extra={"status": exc.status_code})
        return jsonify({"error": exc.public_message}), exc.status_code

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        if isinstance(exc, HTTPException):
            if request.path.startswith("/calendar"):
                return exc
            return jsonify({"error": exc.description}), exc.code
        logger.exception("Unhandled error")
        return jsonify({"error": str(exc) or exc.__class__.__name__}), 500


__all__ = ["BaseConfig", "DevConfig", "TestConfig", "create_app"]
