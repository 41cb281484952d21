"""
project: dungeonpath
module: dungeon_api.py
License: MIT

Dungeon graph API routes.

Read-only endpoints handing a generated graph to the materialization client:
the graph itself, an ASCII debug rendering and the generation metrics. Every
endpoint takes ``seed`` plus any ``DungeonConfig`` field as query arguments.
"""

import threading

from flask import Blueprint, Response, current_app, jsonify, request

from dungeonpath.dungeon import Dungeon, DungeonConfig, MainPathInfeasible
from dungeonpath.logging_utils import get_logger
from dungeonpath.routes.seed_api import coerce_seed

log = get_logger("dungeon_api")

# Simple in-process cache (seed, config)->Dungeon instance, lock-guarded for threaded dev servers.
_dungeon_cache = {}
_dungeon_cache_lock = threading.Lock()


def _cache_key(config: DungeonConfig):
    return tuple(sorted(config.to_dict().items()))


def get_cached_dungeon(config: DungeonConfig) -> Dungeon:
    """Return the dungeon for ``config``, generating it on first use.

    Raises MainPathInfeasible like ``Dungeon`` itself; failures are not cached.
    """
    config = config.validated()
    if current_app.config.get("DUNGEON_DISABLE_CACHE"):
        return Dungeon(config)
    key = _cache_key(config)
    with _dungeon_cache_lock:
        dungeon = _dungeon_cache.get(key)
        if dungeon is not None:
            return dungeon
    dungeon = Dungeon(config)
    cache_max = current_app.config.get("DUNGEON_CACHE_MAX", 8)
    with _dungeon_cache_lock:
        _dungeon_cache[key] = dungeon
        while len(_dungeon_cache) > cache_max:
            first_key = next(iter(_dungeon_cache.keys()))
            if first_key == key:
                break
            _dungeon_cache.pop(first_key, None)
    return dungeon


_LENGTH_FIELDS = (
    "min_main_path_length",
    "max_main_path_length",
    "min_secondary_path_length",
    "max_secondary_path_length",
)


def _config_from_request() -> DungeonConfig:
    args = request.args.to_dict()
    # Text seeds resolve like POST /api/dungeon/seed; cached entries are keyed by seed.
    seed = coerce_seed(args.pop("seed", None))
    config = DungeonConfig.from_mapping(args)
    config.seed = seed
    # Lookahead cost is exponential in length; cap what anonymous callers may ask for.
    limit = current_app.config.get("DUNGEON_API_MAX_PATH_LENGTH")
    if limit:
        for name in _LENGTH_FIELDS:
            setattr(config, name, min(getattr(config, name), limit))
    return config


def _generate():
    """Return (dungeon, None) or (None, error_response)."""
    try:
        config = _config_from_request()
    except ValueError as exc:
        return None, (jsonify({"error": "invalid_parameter", "detail": str(exc)}), 400)
    try:
        return get_cached_dungeon(config), None
    except MainPathInfeasible as exc:
        log.warn(event="graph_request_failed", seed=exc.seed, requested=exc.requested, achieved=exc.achieved)
        return None, (jsonify(exc.to_dict()), 422)


bp_dungeon = Blueprint("dungeon", __name__)


@bp_dungeon.route("/api/dungeon/graph", methods=["GET"])
def dungeon_graph():
    """
    Return the generated dungeon graph.
    Response: { seed, config, main_path: [node...], secondary_paths: { "<id>": [node...] } }
    node: { position: [x, y], path_id, doors: [...], locks: [...], has_key }
    """
    dungeon, error = _generate()
    if error:
        return error
    return jsonify(dungeon.to_dict())


@bp_dungeon.route("/api/dungeon/render", methods=["GET"])
def dungeon_render():
    dungeon, error = _generate()
    if error:
        return error
    return Response(dungeon.render() + "\n", mimetype="text/plain")


@bp_dungeon.route("/api/dungeon/gen/metrics", methods=["GET"])
def dungeon_generation_metrics():
    """Return generation metrics for the requested seed/config.

    Response: { seed: int, metrics: {...} }
    """
    dungeon, error = _generate()
    if error:
        return error
    return jsonify({"seed": dungeon.seed, "metrics": dungeon.metrics})
