import uuid
from enum import Enum
from typing import List, Optional, Set

from .cells import DIRECTIONS, Cell, Direction
from .entities import Entity


class RoomKind(Enum):
    ENTRANCE = "Entrance"
    EXIT = "Exit"
    NORMAL = "Normal"


class Room:
    """A node of the dungeon graph.

    Identity, position, kind and passage flags are read-only here; only
    RoomGraph writes them, so both sides of an edge always change together
    and the cell index never drifts. name, description and contents are
    annotations owned by downstream collaborators.
    """

    __slots__ = ("_id", "_cell", "_kind", "name", "description", "contents", "_open")

    def __init__(self, cell: Cell, kind: RoomKind = RoomKind.NORMAL, room_id: Optional[str] = None):
        self._id = room_id or str(uuid.uuid4())
        self._cell = cell
        self._kind = kind
        self.name = ""
        self.description = ""
        self.contents: List[Entity] = []
        self._open: Set[Direction] = set()

    @property
    def id(self) -> str:
        return self._id

    @property
    def cell(self) -> Cell:
        return self._cell

    @property
    def kind(self) -> RoomKind:
        return self._kind

    @property
    def x(self) -> int:
        return self.cell.x

    @property
    def y(self) -> int:
        return self.cell.y

    @property
    def connected_north(self) -> bool:
        return Direction.NORTH in self._open

    @property
    def connected_east(self) -> bool:
        return Direction.EAST in self._open

    @property
    def connected_south(self) -> bool:
        return Direction.SOUTH in self._open

    @property
    def connected_west(self) -> bool:
        return Direction.WEST in self._open

    def is_open(self, direction: Direction) -> bool:
        return direction in self._open

    def open_directions(self) -> List[Direction]:
        return [d for d in DIRECTIONS if d in self._open]

    def add_entity(self, entity: Entity) -> None:
        if entity is None:
            raise ValueError("entity cannot be None")
        if any(e.id == entity.id for e in self.contents):
            raise ValueError(f"entity {entity.id} already present in room {self.id}")
        self.contents.append(entity)

    def remove_entity(self, entity_id: str) -> bool:
        for i, e in enumerate(self.contents):
            if e.id == entity_id:
                del self.contents[i]
                return True
        return False

    def __repr__(self):
        return f"Room({self.kind.value}, id={self.id}, at=({self.x}, {self.y}))"


__all__ = ["Room", "RoomKind"]
