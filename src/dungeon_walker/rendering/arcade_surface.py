from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Set, Tuple

from ..config.models import SheetSettings

logger = logging.getLogger(__name__)

# Used when no tileset image is configured: index -> RGBA
FALLBACK_COLORS: Dict[int, Tuple[int, int, int, int]] = {
    6: (120, 110, 95, 255),
    20: (45, 40, 50, 255),
}
DEFAULT_COLOR = (200, 0, 200, 255)


def sheet_columns(image_width: int, sheet: SheetSettings) -> int:
    """Number of frames per row in a sheet with an outer margin and inner spacing."""
    usable = image_width - 2 * sheet.margin + sheet.spacing
    return max(1, usable // (sheet.frame_size + sheet.spacing))


def frame_box(index: int, columns: int, sheet: SheetSettings) -> Tuple[int, int, int, int]:
    """Pixel box (left, top, right, bottom) of frame ``index`` counted row by row from the top-left."""
    col, row = index % columns, index // columns
    step = sheet.frame_size + sheet.spacing
    left = sheet.margin + col * step
    top = sheet.margin + row * step
    return left, top, left + sheet.frame_size, top + sheet.frame_size


class ArcadeTileSurface:
    """Tile surface backed by arcade sprite lists, one list per tile index.

    Import is deferred to runtime to keep tests headless.
    """

    def __init__(self, tileset: Optional[SheetSettings] = None) -> None:
        try:
            import arcade  # type: ignore
        except Exception as e:  # pragma: no cover - runtime only
            raise RuntimeError("ArcadeTileSurface requires the 'arcade' package at runtime") from e
        self._arcade = arcade
        self.tileset = tileset or SheetSettings()
        self._image = arcade.load_image(self.tileset.path) if self.tileset.path else None
        self._columns = sheet_columns(self._image.width, self.tileset) if self._image is not None else 1
        self._textures: Dict[int, object] = {}
        self._lists: Dict[int, object] = {}
        self.collidable: Set[int] = set()
        self.width = 0
        self.height = 0
        self.tile_size = self.tileset.frame_size

    def create_blank_layer(self, width: int, height: int, tile_size: int) -> None:  # pragma: no cover - requires arcade
        self.width, self.height, self.tile_size = width, height, tile_size
        self._lists = {}

    def _texture(self, index: int):  # pragma: no cover - requires arcade
        if index not in self._textures:
            box = frame_box(index, self._columns, self.tileset)
            self._textures[index] = self._arcade.Texture(self._image.crop(box))
        return self._textures[index]

    def _make_sprite(self, index: int):  # pragma: no cover - requires arcade
        arcade = self._arcade
        if self._image is None:
            color = FALLBACK_COLORS.get(index, DEFAULT_COLOR)
            return arcade.SpriteSolidColor(self.tile_size, self.tile_size, color=color)
        sprite = arcade.Sprite(self._texture(index))
        sprite.width = self.tile_size
        sprite.height = self.tile_size
        return sprite

    def put_tiles_at(self, indices: Sequence[Sequence[int]], origin_x: int, origin_y: int) -> None:  # pragma: no cover - requires arcade
        ts = self.tile_size
        for dy, row in enumerate(indices):
            for dx, index in enumerate(row):
                if index < 0:
                    continue
                x, y = origin_x + dx, origin_y + dy
                sprite = self._make_sprite(index)
                # Grid rows grow downwards, arcade's y axis grows upwards
                sprite.center_x = x * ts + ts / 2
                sprite.center_y = (self.height - 1 - y) * ts + ts / 2
                if index not in self._lists:
                    self._lists[index] = self._arcade.SpriteList(use_spatial_hash=True)
                self._lists[index].append(sprite)
        logger.info("ArcadeTileSurface: %d sprite lists built", len(self._lists))

    def set_collision(self, tile_index: int) -> None:
        self.collidable.add(tile_index)

    @property
    def width_in_pixels(self) -> int:
        return self.width * self.tile_size

    @property
    def height_in_pixels(self) -> int:
        return self.height * self.tile_size

    def collision_lists(self) -> List[object]:
        return [lst for index, lst in self._lists.items() if index in self.collidable]

    def draw(self) -> None:  # pragma: no cover - visual
        for lst in self._lists.values():
            lst.draw()
