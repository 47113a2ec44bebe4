import random
from collections import deque
from typing import Dict

from .cells import Direction
from .graph import RoomGraph
from .rooms import Room


def _relax(graph: RoomGraph, dist: Dict[str, int], a: Room, b: Room) -> None:
    """Update a BFS distance map in place after the edge a-b was opened.

    A new edge only shortens routes when its ends differ by more than one
    hop; the update then spreads from the far end and stops wherever a
    distance does not improve.
    """
    if a.id not in dist and b.id not in dist:
        return
    da, db = dist.get(a.id), dist.get(b.id)
    if db is None or (da is not None and da < db):
        near, far = a, b
    else:
        near, far = b, a
    if far.id in dist and dist[far.id] <= dist[near.id] + 1:
        return
    dist[far.id] = dist[near.id] + 1
    q = deque([far])
    while q:
        cur = q.popleft()
        step = dist[cur.id] + 1
        for nxt in graph.neighbors(cur):
            if nxt.id not in dist or dist[nxt.id] > step:
                dist[nxt.id] = step
                q.append(nxt)


class LoopConnector:
    """Open extra passages between adjacent, already placed rooms.

    Only adds edges, so reachability can only grow. A candidate edge is
    refused when it would bring the Exit closer to the Entrance than the
    minimum path length.
    """

    def __init__(self, rng: random.Random, probability: float, min_path_length: int, log=None):
        self.rng = rng
        self.probability = probability
        self.min_path_length = min_path_length
        self.log = log
        self.rejected = 0

    def connect(self, graph: RoomGraph) -> int:
        entrance, exit_room = graph.entrance, graph.exit
        from_entrance = graph.distances_from(entrance)
        from_exit = graph.distances_from(exit_room)
        far = len(graph) + 1
        added = 0
        for room in graph.rooms:
            for direction in (Direction.EAST, Direction.SOUTH):
                other = graph.room_at(room.cell.step(direction))
                if other is None or room.is_open(direction):
                    continue
                if self.rng.random() >= self.probability:
                    continue
                shortcut = min(
                    from_entrance.get(room.id, far) + 1 + from_exit.get(other.id, far),
                    from_entrance.get(other.id, far) + 1 + from_exit.get(room.id, far),
                )
                if shortcut < self.min_path_length:
                    self.rejected += 1
                    continue
                graph.connect(room, direction)
                added += 1
                _relax(graph, from_entrance, room, other)
                _relax(graph, from_exit, room, other)
        if self.log:
            self.log.debug(event="loops_added", edges=added, rejected=self.rejected)
        return added


__all__ = ["LoopConnector"]
