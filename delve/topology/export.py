"""JSON export and import of finished topologies.

The exported shape is the stable contract for collaborators: dungeon theme, room
id, coordinates, kind as a string, the four passage flags, plus name,
description and contents slots filled in by other components. Loading
rebuilds the graph, re-runs every structural and connectivity check and
freezes the result.
"""

from __future__ import annotations

import json
import os
from typing import Any, Dict

from .bounds import GridBounds
from .cells import Cell, Direction
from .connectivity import ConnectivityValidator
from .entities import entity_from_dict, entity_to_dict
from .errors import ConfigurationError, InvariantViolation, SerializationError
from .graph import RoomGraph
from .rooms import RoomKind

_FLAG_KEYS = {
    Direction.NORTH: "connected_north",
    Direction.EAST: "connected_east",
    Direction.SOUTH: "connected_south",
    Direction.WEST: "connected_west",
}


def room_to_dict(room) -> Dict[str, Any]:
    data = {
        "id": room.id,
        "x": room.x,
        "y": room.y,
        "type": room.kind.value,
        "name": room.name,
        "description": room.description,
    }
    for d, key in _FLAG_KEYS.items():
        data[key] = room.is_open(d)
    data["contents"] = [entity_to_dict(e) for e in room.contents]
    return data


def graph_to_dict(graph: RoomGraph) -> Dict[str, Any]:
    return {
        "width": graph.width,
        "height": graph.height,
        "min_path_length": graph.bounds.min_path_length,
        "seed": graph.seed,
        "theme": graph.theme,
        "entrance_id": graph.entrance_id,
        "exit_id": graph.exit_id,
        "main_path": list(graph.main_path),
        "rooms": [room_to_dict(r) for r in graph.rooms],
    }


def graph_to_json(graph: RoomGraph, indent: int | None = 2) -> str:
    return json.dumps(graph_to_dict(graph), indent=indent)


def save_graph(graph: RoomGraph, path: str) -> str:
    parent = os.path.dirname(os.path.abspath(path))
    os.makedirs(parent, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(graph_to_json(graph))
    return path


def graph_from_dict(data: Dict[str, Any], max_width: int | None = None, max_height: int | None = None) -> RoomGraph:
    if not isinstance(data, dict):
        raise SerializationError("dungeon export must be a JSON object")
    try:
        extra = {}
        if max_width is not None:
            extra["max_width"] = max_width
        if max_height is not None:
            extra["max_height"] = max_height
        bounds = GridBounds(int(data["width"]), int(data["height"]), int(data.get("min_path_length", 1)), **extra)
    except KeyError as e:
        raise SerializationError(f"missing field {e.args[0]!r}") from e
    except (TypeError, ValueError, ConfigurationError) as e:
        raise SerializationError(f"invalid dungeon dimensions: {e}") from e

    graph = RoomGraph(bounds)
    rooms = data.get("rooms")
    if not isinstance(rooms, list) or not rooms:
        raise SerializationError("dungeon export has no rooms")
    try:
        for rd in rooms:
            room = graph.add_room(Cell(int(rd["x"]), int(rd["y"])), RoomKind(rd.get("type", "Normal")), room_id=str(rd["id"]))
            room.name = rd.get("name") or ""
            room.description = rd.get("description") or ""
            for d, key in _FLAG_KEYS.items():
                if rd.get(key):
                    room._open.add(d)
            for ed in rd.get("contents") or []:
                room.add_entity(entity_from_dict(ed))
        graph.main_path = tuple(str(i) for i in data.get("main_path") or ())
        report = ConnectivityValidator(bounds.min_path_length).validate(graph)
    except SerializationError:
        raise
    except KeyError as e:
        raise SerializationError(f"room record missing field {e.args[0]!r}") from e
    except InvariantViolation as e:
        raise SerializationError(f"inconsistent topology: {e}") from e
    except (TypeError, ValueError) as e:
        raise SerializationError(f"invalid room record: {e}") from e
    if not report.ok:
        raise SerializationError(f"inconsistent topology: {report.reason}")
    theme = data.get("theme")
    if theme is not None and not isinstance(theme, str):
        raise SerializationError("theme must be a string")
    graph.theme = theme or ""
    if data.get("seed") is not None:
        graph.seed = int(data["seed"])
    return graph.freeze()


def load_graph(path: str, **kwargs) -> RoomGraph:
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise SerializationError(f"{path} is not valid JSON: {e}") from e
    return graph_from_dict(data, **kwargs)


__all__ = ["graph_to_dict", "graph_to_json", "save_graph", "graph_from_dict", "load_graph", "room_to_dict"]
