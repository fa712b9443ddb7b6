from __future__ import annotations

import logging
from typing import Optional

try:
    import arcade  # type: ignore
except Exception:  # pragma: no cover - optional for test envs
    arcade = None

from ..config.models import GenerationSettings
from ..dungeon.factory import DungeonFactory
from ..rendering.arcade_surface import ArcadeTileSurface, frame_box, sheet_columns
from ..rendering.tilemap import TileEmitter, TileMapInfo

logger = logging.getLogger(__name__)

WINDOW_SIZE = (1280, 720)
PLAYER_COLOR = (60, 180, 255, 255)


class DungeonWindow:
    """Arcade window that shows one generated dungeon with the player at its centre.

    Note: This class is only created if Arcade is available. Tests focus on the
    generation and emission layers, not rendering.
    """

    def __init__(self, settings: GenerationSettings):
        if arcade is None:
            raise RuntimeError("Arcade package is not installed; cannot create window")
        self.settings = settings
        grid = DungeonFactory.generate(settings)
        self.surface = ArcadeTileSurface(settings.tileset)
        emitter = TileEmitter(settings.tiles, settings.scale, settings.tileset.frame_size)
        self.info: TileMapInfo = emitter.emit(grid, self.surface)

        self._window = arcade.Window(*WINDOW_SIZE, title="Dungeon Walker")
        self._window.on_draw = self.on_draw
        self._window.on_update = self.on_update
        self.camera = arcade.Camera2D()

        self.player = self._make_player()
        self.player.center_x, self.player.center_y = self.info.spawn_px
        self.player_list = arcade.SpriteList()
        self.player_list.append(self.player)
        self.physics = arcade.PhysicsEngineSimple(self.player, self.surface.collision_lists())
        logger.info("Arcade window initialized, map %dx%d px", self.info.width_px, self.info.height_px)

    def _make_player(self):  # pragma: no cover - requires arcade
        sheet = self.settings.characters
        if sheet.path:
            image = arcade.load_image(sheet.path)
            box = frame_box(0, sheet_columns(image.width, sheet), sheet)
            return arcade.Sprite(arcade.Texture(image.crop(box)))
        return arcade.SpriteSolidColor(sheet.frame_size, sheet.frame_size, color=PLAYER_COLOR)

    def run(self):  # pragma: no cover - visual
        arcade.run()

    def on_update(self, delta_time: float):  # pragma: no cover - visual
        self.physics.update()
        self.camera.position = self.info.camera_center(
            (self.player.center_x, self.player.center_y),
            (self._window.width, self._window.height),
        )

    def on_draw(self):  # pragma: no cover - visual
        self._window.clear()
        with self.camera.activate():
            self.surface.draw()
            self.player_list.draw()


def run(settings: Optional[GenerationSettings] = None):  # pragma: no cover - manual usage
    """Launch the viewer window."""
    if arcade is None:
        raise RuntimeError("Arcade is not installed. Please install 'arcade' to run the app.")
    win = DungeonWindow(settings or GenerationSettings())
    win.run()
