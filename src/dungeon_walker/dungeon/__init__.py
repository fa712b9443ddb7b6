from .factory import DungeonFactory
from .scaling import scale_grid
from .tiles import Cell, Grid, ScaledGrid
from .walk import DrunkardWalkGenerator, GenerationStats, generate
from .walker import DIRECTIONS, Direction, Walker

__all__ = [
    "Cell",
    "DIRECTIONS",
    "Direction",
    "DrunkardWalkGenerator",
    "DungeonFactory",
    "GenerationStats",
    "Grid",
    "ScaledGrid",
    "Walker",
    "generate",
    "scale_grid",
]
