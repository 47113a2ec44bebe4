"""Grid bounds and their validation.

Checked once, up front: dimensions in [1, max] and a minimum escape path
that is satisfiable at all.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List

from .cells import Cell
from .errors import ConfigurationError

MAX_DUNGEON_WIDTH = 100
MAX_DUNGEON_HEIGHT = 100
DEFAULT_ESCAPE_PATH_LENGTH = 15  # hops from Entrance to Exit


def _require_int(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{name} must be an integer (was {value!r})")
    return value


@dataclass(frozen=True)
class GridBounds:
    width: int
    height: int
    min_path_length: int = DEFAULT_ESCAPE_PATH_LENGTH
    max_width: int = MAX_DUNGEON_WIDTH
    max_height: int = MAX_DUNGEON_HEIGHT

    def __post_init__(self):
        for name in ("width", "height", "min_path_length", "max_width", "max_height"):
            _require_int(name, getattr(self, name))
        if self.max_width < 1 or self.max_height < 1:
            raise ConfigurationError("maximum dimensions must be positive")
        if not 1 <= self.width <= self.max_width:
            raise ConfigurationError(f"width must be between 1 and {self.max_width} (was {self.width})")
        if not 1 <= self.height <= self.max_height:
            raise ConfigurationError(f"height must be between 1 and {self.max_height} (was {self.height})")
        if self.min_path_length < 1:
            raise ConfigurationError(f"min_path_length must be positive (was {self.min_path_length})")
        if self.min_path_length > self.max_manhattan_path:
            raise ConfigurationError(
                f"min_path_length {self.min_path_length} is unsatisfiable in a "
                f"{self.width}x{self.height} grid (maximum {self.max_manhattan_path})"
            )

    @property
    def max_manhattan_path(self) -> int:
        return (self.width - 1) + (self.height - 1)

    @property
    def area(self) -> int:
        return self.width * self.height

    def contains(self, cell: Cell) -> bool:
        return 0 <= cell.x < self.width and 0 <= cell.y < self.height

    def cells(self) -> Iterator[Cell]:
        for y in range(self.height):
            for x in range(self.width):
                yield Cell(x, y)

    def corners(self) -> List[Cell]:
        w, h = self.width - 1, self.height - 1
        return [Cell(0, 0), Cell(w, 0), Cell(0, h), Cell(w, h)]

    def border_cells(self) -> List[Cell]:
        """Border cells in row-major order, each listed once."""
        return [c for c in self.cells() if c.x in (0, self.width - 1) or c.y in (0, self.height - 1)]

    def farthest_corner_distance(self, cell: Cell) -> int:
        return max(cell.manhattan(c) for c in self.corners())


__all__ = ["GridBounds", "MAX_DUNGEON_WIDTH", "MAX_DUNGEON_HEIGHT", "DEFAULT_ESCAPE_PATH_LENGTH"]
