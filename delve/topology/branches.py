import random
from collections import deque
from typing import Optional

from .graph import RoomGraph


class BranchGenerator:
    """Grow side corridors off existing rooms.

    Every room gets one chance to sprout, in creation order; new branch rooms
    join the queue one level deeper, so corridors extend recursively until
    ``max_depth``. Only unoccupied cells are used, so branches never touch
    existing rooms and never shorten the Entrance-to-Exit route.
    """

    def __init__(self, rng: random.Random, probability: float, max_depth: int, max_rooms: Optional[int] = None, log=None):
        self.rng = rng
        self.probability = probability
        self.max_depth = max_depth
        self.max_rooms = max_rooms
        self.log = log
        self.saturated = 0

    def grow(self, graph: RoomGraph) -> int:
        added = 0
        queue = deque((room, 0) for room in graph.rooms)
        while queue:
            if self.max_rooms is not None and added >= self.max_rooms:
                break
            room, depth = queue.popleft()
            if depth >= self.max_depth:
                continue
            if self.rng.random() >= self.probability:
                continue
            options = graph.available_directions(room)
            if not options:
                # Packed neighbourhood: no-op for this room.
                self.saturated += 1
                continue
            direction = self.rng.choice(options)
            new_room = graph.add_room(room.cell.step(direction))
            graph.connect(room, direction)
            queue.append((new_room, depth + 1))
            added += 1
        if self.log:
            self.log.debug(event="branches_added", rooms=added, saturated=self.saturated)
        return added


__all__ = ["BranchGenerator"]
