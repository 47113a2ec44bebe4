from enum import Enum
from typing import Iterator, NamedTuple, Tuple


class Direction(Enum):
    NORTH = (0, -1)
    EAST = (1, 0)
    SOUTH = (0, 1)
    WEST = (-1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]


_OPPOSITES = {
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
    Direction.EAST: Direction.WEST,
    Direction.WEST: Direction.EAST,
}

# Fixed scan order; generation draws depend on it.
DIRECTIONS: Tuple[Direction, ...] = (Direction.NORTH, Direction.EAST, Direction.SOUTH, Direction.WEST)


class Cell(NamedTuple):
    """Integer grid coordinate. North is toward y - 1."""

    x: int
    y: int

    def step(self, direction: Direction) -> "Cell":
        return Cell(self.x + direction.dx, self.y + direction.dy)

    def neighbors(self) -> Iterator[Tuple[Direction, "Cell"]]:
        for d in DIRECTIONS:
            yield d, self.step(d)

    def manhattan(self, other: "Cell") -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)


__all__ = ["Direction", "DIRECTIONS", "Cell"]
