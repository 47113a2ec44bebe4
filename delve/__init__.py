"""
project: Delve
module: __init__.py
License: MIT

Flask application factory.

Wires the dungeon topology API onto a Flask app. Configuration is sourced
from environment variables (a local .env is loaded first when present) with
development defaults; explicit overrides passed to ``create_app`` win.
"""

import logging
import os
import uuid

from dotenv import load_dotenv
from flask import Flask, jsonify

from delve.topology import DEFAULT_ESCAPE_PATH_LENGTH, MAX_DUNGEON_HEIGHT, MAX_DUNGEON_WIDTH, GenerationConfig
from delve.topology.errors import ConfigurationError

__version__ = "0.1.0"


def _env_int(key: str, default: int) -> int:
    raw = os.getenv(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{key} must be an integer (was {raw!r})") from None


def create_app(overrides=None):
    """Return a configured Flask app with the dungeon blueprint registered."""
    # Load .env if present so DELVE_* settings can be supplied without
    # exporting shell variables during development.
    load_dotenv()
    app = Flask(__name__, instance_relative_config=True)
    app.config.update(
        DELVE_DEFAULT_WIDTH=_env_int("DELVE_DEFAULT_WIDTH", 20),
        DELVE_DEFAULT_HEIGHT=_env_int("DELVE_DEFAULT_HEIGHT", 20),
        DELVE_DEFAULT_MIN_PATH=_env_int("DELVE_DEFAULT_MIN_PATH", DEFAULT_ESCAPE_PATH_LENGTH),
        DELVE_MAX_WIDTH=_env_int("DELVE_MAX_WIDTH", MAX_DUNGEON_WIDTH),
        DELVE_MAX_HEIGHT=_env_int("DELVE_MAX_HEIGHT", MAX_DUNGEON_HEIGHT),
        DELVE_GENERATION=GenerationConfig.from_env(),
        DELVE_DISABLE_CACHE=os.getenv("DELVE_DISABLE_CACHE", "0") == "1",
    )
    if overrides:
        app.config.update(overrides)

    from delve.routes.dungeon_api import bp_dungeon

    app.register_blueprint(bp_dungeon)

    @app.errorhandler(500)
    def internal_error(e):
        error_id = uuid.uuid4().hex[:8]
        logging.exception("Unhandled exception (id=%s)", error_id)
        return jsonify({"error": "internal server error", "error_id": error_id}), 500

    return app
