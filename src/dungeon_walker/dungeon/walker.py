from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Tuple

from ..rng import RandomLike


class Direction(Enum):
    """Unit step a walker takes each iteration."""

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


DIRECTIONS: Tuple[Direction, ...] = tuple(Direction)


def random_direction(rng: RandomLike) -> Direction:
    return rng.choice(DIRECTIONS)


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


@dataclass(frozen=True)
class Walker:
    x: int
    y: int
    direction: Direction

    @property
    def position(self) -> Tuple[int, int]:
        return (self.x, self.y)

    def turned(self, direction: Direction) -> "Walker":
        return replace(self, direction=direction)

    def spawn(self, direction: Direction) -> "Walker":
        """A child walker on this walker's cell heading somewhere new."""
        return Walker(self.x, self.y, direction)

    def stepped(self, width: int, height: int) -> "Walker":
        """Advance one step, staying off the outer border of a width x height grid."""
        return replace(
            self,
            x=clamp(self.x + self.direction.dx, 1, width - 2),
            y=clamp(self.y + self.direction.dy, 1, height - 2),
        )
