from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Protocol, Sequence, Set, Tuple

from ..config.models import TileMapping
from ..dungeon.scaling import scale_grid
from ..dungeon.tiles import Cell, Grid, ScaledGrid
from ..errors import InvalidConfig

logger = logging.getLogger(__name__)


class TileSurface(Protocol):
    """A tile layer an engine can paint.

    Implementations: :class:`RecordingTileSurface` for tests and headless tools,
    ``ArcadeTileSurface`` for the real window.
    """

    def create_blank_layer(self, width: int, height: int, tile_size: int) -> None:
        ...

    def put_tiles_at(self, indices: Sequence[Sequence[int]], origin_x: int, origin_y: int) -> None:
        ...

    def set_collision(self, tile_index: int) -> None:
        ...

    @property
    def width_in_pixels(self) -> int:
        ...

    @property
    def height_in_pixels(self) -> int:
        ...


class RecordingTileSurface:
    """Headless surface that keeps painted indices in memory. No GL context needed."""

    def __init__(self) -> None:
        self.width = 0
        self.height = 0
        self.tile_size = 0
        self.tiles: List[List[int]] = []
        self.collidable: Set[int] = set()
        self.put_calls = 0

    def create_blank_layer(self, width: int, height: int, tile_size: int) -> None:
        self.width, self.height, self.tile_size = width, height, tile_size
        self.tiles = [[-1 for _ in range(width)] for _ in range(height)]

    def put_tiles_at(self, indices: Sequence[Sequence[int]], origin_x: int, origin_y: int) -> None:
        self.put_calls += 1
        for dy, row in enumerate(indices):
            for dx, index in enumerate(row):
                x, y = origin_x + dx, origin_y + dy
                if 0 <= x < self.width and 0 <= y < self.height:
                    self.tiles[y][x] = index

    def set_collision(self, tile_index: int) -> None:
        self.collidable.add(tile_index)

    def tile_at(self, x: int, y: int) -> int:
        return self.tiles[y][x]

    def is_collidable(self, x: int, y: int) -> bool:
        return self.tiles[y][x] in self.collidable

    @property
    def width_in_pixels(self) -> int:
        return self.width * self.tile_size

    @property
    def height_in_pixels(self) -> int:
        return self.height * self.tile_size


@dataclass(frozen=True)
class TileMapInfo:
    """What the scene needs after painting: map size and where to drop the player."""

    width_px: int
    height_px: int
    tile_size: int
    spawn_px: Tuple[float, float]

    def camera_center(self, target: Tuple[float, float], viewport: Tuple[float, float]) -> Tuple[float, float]:
        """Centre a camera on ``target`` without showing anything outside the map.

        On an axis where the map is smaller than the viewport, the camera sits on the map's centre.
        """
        out = []
        for pos, view, size in zip(target, viewport, (self.width_px, self.height_px)):
            half = view / 2
            if size <= view:
                out.append(size / 2)
            else:
                out.append(max(half, min(size - half, pos)))
        return out[0], out[1]


class TileEmitter:
    """Upscale an occupancy grid and hand it to a :class:`TileSurface`.

    The emitter only produces data: painting and collision bookkeeping stay with
    the surface.
    """

    def __init__(self, mapping: Optional[TileMapping] = None, factor: int = 2, tile_size: int = 48) -> None:
        if factor < 1:
            raise InvalidConfig(f"Scale factor must be >= 1, got {factor}")
        if tile_size < 1:
            raise InvalidConfig(f"Tile size must be >= 1, got {tile_size}")
        self.mapping = mapping or TileMapping()
        self.factor = factor
        self.tile_size = tile_size
        self._lookup: Dict[Cell, int] = {
            Cell.EMPTY: self.mapping.empty,
            Cell.FLOOR: self.mapping.floor,
            Cell.WALL: self.mapping.wall,
        }

    def tile_indices(self, scaled: ScaledGrid) -> List[List[int]]:
        lookup = self._lookup
        return [[lookup[cell] for cell in row] for row in scaled.rows]

    def emit(self, grid: Grid, surface: TileSurface) -> TileMapInfo:
        scaled = scale_grid(grid, self.factor)
        surface.create_blank_layer(scaled.width, scaled.height, self.tile_size)
        surface.put_tiles_at(self.tile_indices(scaled), 0, 0)
        # Walls are the only blocking tile
        surface.set_collision(self.mapping.wall)
        width_px, height_px = surface.width_in_pixels, surface.height_in_pixels
        logger.debug(
            "TileEmitter: painted %dx%d tiles (factor=%d) -> %dx%d px",
            scaled.width,
            scaled.height,
            self.factor,
            width_px,
            height_px,
        )
        return TileMapInfo(
            width_px=width_px,
            height_px=height_px,
            tile_size=self.tile_size,
            spawn_px=(width_px / 2, height_px / 2),
        )
