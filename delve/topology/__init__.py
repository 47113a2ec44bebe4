"""Public topology package interface.

``generate(GridBounds(...), seed)`` returns a frozen RoomGraph or raises
GenerationFailure; everything else here is the read surface collaborators
consume.
"""

from .bounds import DEFAULT_ESCAPE_PATH_LENGTH, MAX_DUNGEON_HEIGHT, MAX_DUNGEON_WIDTH, GridBounds
from .cells import DIRECTIONS, Cell, Direction
from .config import GenerationConfig
from .entities import (
    Enemy,
    GenericEntity,
    MagicalLockPick,
    Treasure,
    TreasureChest,
    TreasureType,
)
from .errors import (
    ConfigurationError,
    GenerationFailure,
    InvariantViolation,
    SerializationError,
    TopologyError,
)
from .export import graph_from_dict, graph_to_dict, graph_to_json, load_graph, save_graph
from .graph import RoomGraph
from .pipeline import generate
from .rooms import Room, RoomKind

__all__ = [
    "generate",
    "GridBounds",
    "GenerationConfig",
    "RoomGraph",
    "Room",
    "RoomKind",
    "Cell",
    "Direction",
    "DIRECTIONS",
    "Enemy",
    "GenericEntity",
    "MagicalLockPick",
    "Treasure",
    "TreasureChest",
    "TreasureType",
    "TopologyError",
    "ConfigurationError",
    "GenerationFailure",
    "InvariantViolation",
    "SerializationError",
    "graph_to_dict",
    "graph_to_json",
    "graph_from_dict",
    "save_graph",
    "load_graph",
    "DEFAULT_ESCAPE_PATH_LENGTH",
    "MAX_DUNGEON_WIDTH",
    "MAX_DUNGEON_HEIGHT",
]
