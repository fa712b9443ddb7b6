from __future__ import annotations
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterator, List, Tuple

from ..errors import InvalidDimensions

MIN_SIDE = 3


class Cell(IntEnum):
    EMPTY = 0
    FLOOR = 1
    WALL = 2


GLYPHS = {Cell.EMPTY: " ", Cell.FLOOR: ".", Cell.WALL: "#"}


def check_dimensions(width: int, height: int) -> None:
    """Reject grids with no room for a 1-cell border around an interior."""
    if width < MIN_SIDE or height < MIN_SIDE:
        raise InvalidDimensions(
            f"Grid must be at least {MIN_SIDE}x{MIN_SIDE} to hold a border and interior, got {width}x{height}"
        )


@dataclass
class Grid:
    """Occupancy grid produced by a generation run.

    Coordinates are (x, y) with (0,0) at top-left; x grows to the right, y grows down.
    ``spawn`` is the cell the first walker started on.
    """

    width: int
    height: int
    cells: List[List[Cell]]  # cells[y][x]
    spawn: Tuple[int, int] = (0, 0)

    def __post_init__(self) -> None:
        check_dimensions(self.width, self.height)

    @classmethod
    def filled(cls, width: int, height: int, value: Cell = Cell.WALL) -> "Grid":
        check_dimensions(width, height)
        cells = [[value for _ in range(width)] for _ in range(height)]
        return cls(width, height, cells, (width // 2, height // 2))

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_border(self, x: int, y: int) -> bool:
        return x in (0, self.width - 1) or y in (0, self.height - 1)

    def get(self, x: int, y: int) -> Cell:
        return self.cells[y][x]

    def set(self, x: int, y: int, value: Cell) -> None:
        self.cells[y][x] = value

    def is_floor(self, x: int, y: int) -> bool:
        return self.cells[y][x] == Cell.FLOOR

    def neighbors4(self, x: int, y: int) -> Iterator[Tuple[int, int]]:
        for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)):
            nx, ny = x + dx, y + dy
            if self.in_bounds(nx, ny):
                yield nx, ny

    def count(self, value: Cell) -> int:
        return sum(row.count(value) for row in self.cells)

    @property
    def interior_size(self) -> int:
        return (self.width - 2) * (self.height - 2)

    def floor_fraction(self) -> float:
        """FLOOR cells as a fraction of the walkable interior."""
        return self.count(Cell.FLOOR) / float(self.interior_size)

    def copy(self) -> "Grid":
        return Grid(self.width, self.height, [row[:] for row in self.cells], self.spawn)

    def to_text(self) -> str:
        return "\n".join("".join(GLYPHS[c] for c in row) for row in self.cells)


@dataclass(frozen=True)
class ScaledGrid:
    """Read-only, upscaled copy of a :class:`Grid` used for presentation."""

    width: int
    height: int
    factor: int
    rows: Tuple[Tuple[Cell, ...], ...]  # rows[y][x]
    spawn: Tuple[int, int] = field(default=(0, 0))

    def get(self, x: int, y: int) -> Cell:
        return self.rows[y][x]

    def to_lists(self) -> List[List[Cell]]:
        return [list(row) for row in self.rows]
