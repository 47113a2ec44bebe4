"""Main path carving.

Randomized depth-first carving from a border Entrance: step into a random
unoccupied neighbour, backtrack on dead ends, and stop once the path is at
its target length or at the first dead end after the minimum is met. The
room on top of the stack becomes the Exit. Cells left behind while
backtracking stay in the graph as reachable spurs.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Optional

from .bounds import GridBounds
from .cells import Cell
from .graph import RoomGraph
from .rooms import Room, RoomKind


@dataclass
class CarveResult:
    ok: bool
    main_path: List[str] = field(default_factory=list)
    backtracks: int = 0
    target_length: int = 0
    reason: Optional[str] = None

    @property
    def length(self) -> int:
        """Hop count of the main path."""
        return max(0, len(self.main_path) - 1)


class PathCarver:
    def __init__(self, bounds: GridBounds, rng: random.Random, path_slack: int = 10, log=None):
        self.bounds = bounds
        self.rng = rng
        self.path_slack = path_slack
        self.log = log

    def entrance_candidates(self) -> List[Cell]:
        # Corners always qualify because min_path_length <= max_manhattan_path.
        need = self.bounds.min_path_length
        return [c for c in self.bounds.border_cells() if self.bounds.farthest_corner_distance(c) >= need]

    def carve(self, graph: RoomGraph) -> CarveResult:
        minimum = self.bounds.min_path_length
        target = minimum + self.rng.randint(0, self.path_slack)
        start = self.rng.choice(self.entrance_candidates())
        entrance = graph.add_room(start, RoomKind.ENTRANCE)
        if self.log:
            self.log.debug(event="entrance_placed", x=start.x, y=start.y, target_length=target)

        stack: List[Room] = [entrance]
        backtracks = 0
        while len(stack) - 1 < target:
            current = stack[-1]
            options = graph.available_directions(current)
            if not options:
                if len(stack) - 1 >= minimum:
                    break
                stack.pop()
                backtracks += 1
                if not stack:
                    return CarveResult(
                        ok=False,
                        backtracks=backtracks,
                        target_length=target,
                        reason=f"grid exhausted before reaching path length {minimum}",
                    )
                continue
            direction = self.rng.choice(options)
            room = graph.add_room(current.cell.step(direction))
            graph.connect(current, direction)
            stack.append(room)

        exit_room = stack[-1]
        graph.set_kind(exit_room, RoomKind.EXIT)
        graph.main_path = tuple(r.id for r in stack)
        if self.log:
            self.log.debug(event="exit_placed", x=exit_room.x, y=exit_room.y, length=len(stack) - 1, backtracks=backtracks)
        return CarveResult(ok=True, main_path=list(graph.main_path), backtracks=backtracks, target_length=target)


__all__ = ["PathCarver", "CarveResult"]
