"""Structural and reachability checks run before a graph is released.

``check_structure`` covers the invariants whose failure means a logic
defect (it raises InvariantViolation). ``ConnectivityValidator.validate``
covers the two properties an unlucky random draw can miss, full
reachability and minimum Entrance-to-Exit distance, and reports them as a
value so the pipeline can retry.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .cells import DIRECTIONS
from .errors import InvariantViolation
from .graph import RoomGraph
from .rooms import RoomKind


@dataclass
class ValidationReport:
    ok: bool
    total_rooms: int
    reachable_rooms: int
    exit_distance: Optional[int]
    reason: Optional[str] = None


def check_structure(graph: RoomGraph) -> None:
    bounds = graph.bounds
    entrances = [r for r in graph.rooms if r.kind is RoomKind.ENTRANCE]
    exits = [r for r in graph.rooms if r.kind is RoomKind.EXIT]
    if len(entrances) != 1:
        raise InvariantViolation(f"expected exactly one Entrance, found {len(entrances)}")
    if len(exits) != 1:
        raise InvariantViolation(f"expected exactly one Exit, found {len(exits)}")
    if bounds.width > bounds.max_width or bounds.height > bounds.max_height:
        raise InvariantViolation(f"grid {bounds.width}x{bounds.height} exceeds the configured maximum")
    seen = {}
    for room in graph.rooms:
        if not bounds.contains(room.cell):
            raise InvariantViolation(f"{room!r} lies outside the grid")
        if room.cell in seen:
            raise InvariantViolation(f"{room!r} shares its cell with {seen[room.cell]!r}")
        seen[room.cell] = room
        if graph.room_at(room.cell) is not room:
            raise InvariantViolation(f"cell index out of sync for {room!r}")
    for room in graph.rooms:
        for d in DIRECTIONS:
            other = graph.room_at(room.cell.step(d))
            if other is None:
                if room.is_open(d):
                    raise InvariantViolation(f"{room!r} has an open {d.name.lower()} passage into an empty cell")
            elif room.is_open(d) != other.is_open(d.opposite):
                raise InvariantViolation(f"asymmetric passage between {room!r} and {other!r}")


class ConnectivityValidator:
    def __init__(self, min_path_length: int):
        self.min_path_length = min_path_length

    def validate(self, graph: RoomGraph) -> ValidationReport:
        check_structure(graph)
        total = len(graph)
        dist = graph.distances_from(graph.entrance)
        exit_distance = dist.get(graph.exit_id)
        reasons: List[str] = []
        if len(dist) != total:
            reasons.append(f"{total - len(dist)} of {total} rooms unreachable from the Entrance")
        if exit_distance is None:
            reasons.append("Exit unreachable from the Entrance")
        elif exit_distance < self.min_path_length:
            reasons.append(f"Exit only {exit_distance} hops from the Entrance (minimum {self.min_path_length})")
        return ValidationReport(
            ok=not reasons,
            total_rooms=total,
            reachable_rooms=len(dist),
            exit_distance=exit_distance,
            reason="; ".join(reasons) or None,
        )


__all__ = ["ConnectivityValidator", "ValidationReport", "check_structure"]
