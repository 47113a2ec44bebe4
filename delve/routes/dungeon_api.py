"""
project: Delve
module: dungeon_api.py
License: MIT

Dungeon topology API routes.

Generates validated room graphs on request and returns them in the export
shape collaborators consume (ids, coordinates, room type, passage flags,
description and contents slots).
"""

import hashlib
import os
import random
import threading

from flask import Blueprint, current_app, jsonify, request

from delve.logging_utils import get_logger
from delve.topology import GenerationConfig, GridBounds, generate, graph_to_dict
from delve.topology.errors import ConfigurationError, GenerationFailure

bp_dungeon = Blueprint("dungeon_api", __name__)
log = get_logger("delve.api")

SEED_MAX = 2**63 - 1
_OVERRIDE_FIELDS = (
    "branch_probability",
    "max_branch_depth",
    "max_branch_rooms",
    "loop_probability",
    "path_slack",
    "max_attempts",
)

# Simple in-process cache (seed, bounds) -> RoomGraph. Graphs are frozen so
# sharing them between requests is safe; the lock only guards the dict.
_graph_cache = {}
_graph_cache_lock = threading.Lock()
_GRAPH_CACHE_MAX = 8  # small LRU-ish manual cap


def _coerce_seed(payload_seed):
    """Convert provided seed (int or str) into a bounded non-negative int."""
    if payload_seed is None:
        return random.randint(1, 1_000_000)
    if isinstance(payload_seed, bool):
        raise ConfigurationError("seed must be an integer or string")
    if isinstance(payload_seed, int):
        return payload_seed % SEED_MAX
    if isinstance(payload_seed, str):
        s = payload_seed.strip()
        if not s:
            return random.randint(1, 1_000_000)
        if s.isdigit():
            return int(s) % SEED_MAX
        h = hashlib.sha256(s.encode("utf-8")).digest()
        return int.from_bytes(h[:8], "big") % SEED_MAX
    raise ConfigurationError("seed must be an integer or string")


def _int_field(source, key, default) -> int:
    """Read an integer from JSON (int only) or query args (digit strings)."""
    value = source.get(key, default)
    if isinstance(value, bool):
        raise ConfigurationError(f"{key} must be an integer (was {value!r})")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise ConfigurationError(f"{key} must be an integer (was {value!r})")


def _bounds_from(source) -> GridBounds:
    cfg = current_app.config
    width = _int_field(source, "width", cfg["DELVE_DEFAULT_WIDTH"])
    height = _int_field(source, "height", cfg["DELVE_DEFAULT_HEIGHT"])
    min_path = _int_field(source, "min_path_length", cfg["DELVE_DEFAULT_MIN_PATH"])
    return GridBounds(width, height, min_path, max_width=cfg["DELVE_MAX_WIDTH"], max_height=cfg["DELVE_MAX_HEIGHT"])


def _config_from(payload) -> GenerationConfig:
    base = current_app.config["DELVE_GENERATION"].to_dict()
    for key in _OVERRIDE_FIELDS:
        if key in payload:
            base[key] = payload[key]
    return GenerationConfig(**base)


def _response(graph):
    return {
        "seed": graph.seed,
        "attempts": graph.attempts,
        "metrics": graph.metrics,
        "dungeon": graph_to_dict(graph),
    }


def get_cached_graph(seed: int, bounds: GridBounds, config: GenerationConfig):
    if current_app.config.get("DELVE_DISABLE_CACHE") or os.environ.get("DELVE_DISABLE_CACHE") == "1":
        return generate(bounds, seed, config, log=log)
    key = (seed, bounds, tuple(sorted(config.to_dict().items())))
    with _graph_cache_lock:
        graph = _graph_cache.get(key)
        if graph is not None:
            return graph
    graph = generate(bounds, seed, config, log=log)
    with _graph_cache_lock:
        if len(_graph_cache) >= _GRAPH_CACHE_MAX:
            _graph_cache.pop(next(iter(_graph_cache)))
        _graph_cache[key] = graph
    return graph


@bp_dungeon.errorhandler(ConfigurationError)
def _configuration_error(e):
    return jsonify({"error": str(e)}), 400


@bp_dungeon.errorhandler(GenerationFailure)
def _generation_failure(e):
    return jsonify({"error": str(e), "seed": e.seed, "attempts": e.attempts, "reasons": e.reasons}), 422


@bp_dungeon.route("/api/dungeon/generate", methods=["POST"])
def api_generate():
    """Generate a dungeon topology.

    Body JSON (all optional):
      { "width", "height", "min_path_length", "seed": <int|str|null>,
        "branch_probability", "max_branch_depth", "max_branch_rooms",
        "loop_probability", "path_slack", "max_attempts" }

    Response: { "seed", "attempts", "metrics", "dungeon" }
    """
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        raise ConfigurationError("request body must be a JSON object")
    bounds = _bounds_from(data)
    config = _config_from(data)
    seed = _coerce_seed(data.get("seed"))
    graph = get_cached_graph(seed, bounds, config)
    return jsonify(_response(graph))


@bp_dungeon.route("/api/dungeon/<int:seed>")
def api_dungeon_for_seed(seed):
    """Return the dungeon for ``seed``; query args width, height, min_path_length."""
    bounds = _bounds_from(request.args)
    graph = get_cached_graph(seed, bounds, current_app.config["DELVE_GENERATION"])
    return jsonify(_response(graph))


@bp_dungeon.route("/api/dungeon/config")
def api_config():
    cfg = current_app.config
    return jsonify(
        {
            "width": cfg["DELVE_DEFAULT_WIDTH"],
            "height": cfg["DELVE_DEFAULT_HEIGHT"],
            "min_path_length": cfg["DELVE_DEFAULT_MIN_PATH"],
            "max_width": cfg["DELVE_MAX_WIDTH"],
            "max_height": cfg["DELVE_MAX_HEIGHT"],
            "generation": cfg["DELVE_GENERATION"].to_dict(),
        }
    )
