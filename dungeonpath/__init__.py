"""
project: dungeonpath
module: __init__.py
License: MIT

Flask application factory and configuration.

The dungeon graph generator itself lives in ``dungeonpath.dungeon`` and has no
web dependency; this module wires a small read-only JSON surface around it so
an external materialization client can fetch generated graphs. Configuration
is sourced from environment variables (optionally via a .env file) with
reasonable defaults for development. A local ``instance/`` directory holds
runtime data such as the rotating log file.
"""

import logging
import os
import uuid

from dotenv import load_dotenv
from flask import Flask, jsonify

# Load .env if present so `SECRET_KEY`, `DUNGEON_*` etc. can be supplied
# without exporting shell variables during development.
load_dotenv()

app = Flask(__name__, instance_relative_config=True)

try:
    os.makedirs(app.instance_path, exist_ok=True)
except OSError:
    # Read-only checkouts can still serve generation requests
    pass

app.config.update(
    SECRET_KEY=os.getenv("SECRET_KEY", "dev-secret-change-me"),
    # Dungeon generation feature flags
    DUNGEON_DISABLE_CACHE=bool(os.getenv("DUNGEON_DISABLE_CACHE", "0") == "1"),
    DUNGEON_CACHE_MAX=int(os.getenv("DUNGEON_CACHE_MAX", "8")),
    # Upper bound for path lengths requested over HTTP (0 disables the cap)
    DUNGEON_API_MAX_PATH_LENGTH=int(os.getenv("DUNGEON_API_MAX_PATH_LENGTH", "24")),
)

from dungeonpath.routes.dungeon_api import bp_dungeon  # noqa: E402
from dungeonpath.routes.seed_api import bp_seed  # noqa: E402

app.register_blueprint(bp_dungeon)
app.register_blueprint(bp_seed)


def create_app():
    """Return the Flask app instance with blueprints registered."""
    return app


@app.errorhandler(500)
def internal_error(e):
    error_id = uuid.uuid4().hex[:8]
    logging.exception("Unhandled exception (id=%s)", error_id)
    return jsonify({"error": "internal", "error_id": error_id}), 500
