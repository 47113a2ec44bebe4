"""RoomGraph: the single source of truth for a generated topology.

Rooms are indexed by id and by cell. Edges are implicit in the paired
passage flags and are only ever opened through ``connect`` so both sides
stay symmetric. Once ``freeze`` is called, topology is read-only; rooms
may still receive annotations (name, description, contents) and the graph
keeps a free-form ``theme``.
"""

from __future__ import annotations

import random
import uuid
from collections import deque
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .bounds import GridBounds
from .cells import Cell, Direction
from .errors import InvariantViolation
from .rooms import Room, RoomKind


class RoomGraph:
    def __init__(self, bounds: GridBounds, id_rng: Optional[random.Random] = None):
        self.bounds = bounds
        # Seeded graphs draw room ids from here so a seed reproduces its export.
        self._id_rng = id_rng
        self._by_id: Dict[str, Room] = {}
        self._by_cell: Dict[Cell, Room] = {}
        self._frozen = False
        self.main_path: Tuple[str, ...] = ()
        self.seed: Optional[int] = None
        self.attempt_seed: Optional[int] = None
        self.attempts = 0
        self.metrics: Dict[str, Any] = {}
        self.theme = ""

    # --- read surface -------------------------------------------------
    @property
    def width(self) -> int:
        return self.bounds.width

    @property
    def height(self) -> int:
        return self.bounds.height

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def rooms(self) -> List[Room]:
        """Rooms in creation order."""
        return list(self._by_id.values())

    def __len__(self) -> int:
        return len(self._by_id)

    def __iter__(self) -> Iterator[Room]:
        return iter(list(self._by_id.values()))

    def __contains__(self, room_id: str) -> bool:
        return room_id in self._by_id

    def get(self, room_id: str) -> Optional[Room]:
        return self._by_id.get(room_id)

    def room_at(self, cell: Cell) -> Optional[Room]:
        return self._by_cell.get(Cell(*cell))

    def _single(self, kind: RoomKind) -> Optional[Room]:
        found = [r for r in self._by_id.values() if r.kind is kind]
        return found[0] if len(found) == 1 else None

    @property
    def entrance(self) -> Optional[Room]:
        return self._single(RoomKind.ENTRANCE)

    @property
    def exit(self) -> Optional[Room]:
        return self._single(RoomKind.EXIT)

    @property
    def entrance_id(self) -> Optional[str]:
        room = self.entrance
        return room.id if room else None

    @property
    def exit_id(self) -> Optional[str]:
        room = self.exit
        return room.id if room else None

    def connected_rooms(self, room: Room) -> Dict[Direction, Room]:
        out = {}
        for d in room.open_directions():
            other = self._by_cell.get(room.cell.step(d))
            if other is not None:
                out[d] = other
        return out

    def neighbors(self, room: Room) -> List[Room]:
        return list(self.connected_rooms(room).values())

    def available_directions(self, room: Room) -> List[Direction]:
        """In-bounds directions whose cell is still unoccupied."""
        out = []
        for d, cell in room.cell.neighbors():
            if self.bounds.contains(cell) and cell not in self._by_cell:
                out.append(d)
        return out

    def edges(self) -> Iterator[Tuple[Room, Room]]:
        """Each open passage once, as (west-or-north room, other room)."""
        for room in self._by_id.values():
            for d in (Direction.EAST, Direction.SOUTH):
                if room.is_open(d):
                    other = self._by_cell.get(room.cell.step(d))
                    if other is not None:
                        yield room, other

    def distances_from(self, start: Room) -> Dict[str, int]:
        """Hop distance from ``start`` to every reachable room id."""
        dist = {start.id: 0}
        q = deque([start])
        while q:
            cur = q.popleft()
            for nxt in self.neighbors(cur):
                if nxt.id not in dist:
                    dist[nxt.id] = dist[cur.id] + 1
                    q.append(nxt)
        return dist

    def shortest_path(self, start: Room, goal: Room) -> List[Room]:
        prev: Dict[str, Optional[Room]] = {start.id: None}
        q = deque([start])
        while q:
            cur = q.popleft()
            if cur.id == goal.id:
                break
            for nxt in self.neighbors(cur):
                if nxt.id not in prev:
                    prev[nxt.id] = cur
                    q.append(nxt)
        if goal.id not in prev:
            return []
        path = [goal]
        while prev[path[-1].id] is not None:
            path.append(prev[path[-1].id])
        path.reverse()
        return path

    # --- mutation (generation only) -----------------------------------
    def _check_mutable(self):
        if self._frozen:
            raise InvariantViolation("topology is frozen; rooms and passages can no longer change")

    def add_room(self, cell: Cell, kind: RoomKind = RoomKind.NORMAL, room_id: Optional[str] = None) -> Room:
        self._check_mutable()
        cell = Cell(*cell)
        if not self.bounds.contains(cell):
            raise InvariantViolation(f"cell {tuple(cell)} lies outside the {self.width}x{self.height} grid")
        if cell in self._by_cell:
            raise InvariantViolation(f"cell {tuple(cell)} is already occupied by {self._by_cell[cell]!r}")
        if room_id is None and self._id_rng is not None:
            room_id = str(uuid.UUID(int=self._id_rng.getrandbits(128), version=4))
        room = Room(cell, kind, room_id)
        if room.id in self._by_id:
            raise InvariantViolation(f"duplicate room id {room.id}")
        self._by_id[room.id] = room
        self._by_cell[cell] = room
        return room

    def connect(self, room: Room, direction: Direction) -> Room:
        """Open the passage from ``room`` toward ``direction`` on both sides."""
        self._check_mutable()
        other = self._by_cell.get(room.cell.step(direction))
        if other is None:
            raise InvariantViolation(f"no room {direction.name.lower()} of {room!r} to connect to")
        room._open.add(direction)
        other._open.add(direction.opposite)
        return other

    def set_kind(self, room: Room, kind: RoomKind) -> None:
        self._check_mutable()
        room._kind = kind

    def freeze(self) -> "RoomGraph":
        self._frozen = True
        return self

    def __repr__(self):
        return f"RoomGraph({self.width}x{self.height}, rooms={len(self)}, frozen={self._frozen})"


__all__ = ["RoomGraph"]
