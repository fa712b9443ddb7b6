from dungeon_walker.config.models import GenerationSettings
from dungeon_walker.dungeon.factory import DungeonFactory
from dungeon_walker.dungeon.pathfinding import floor_regions
from dungeon_walker.dungeon.tiles import Cell
from dungeon_walker.rendering.tilemap import RecordingTileSurface, TileEmitter


def test_seeded_settings_are_reproducible():
    settings = GenerationSettings(width=30, height=24, seed="catacomb")
    a = DungeonFactory.generate(settings)
    b = DungeonFactory.generate(settings)
    assert a.cells == b.cells
    assert len(floor_regions(a)) == 1


def test_settings_drive_walk_options():
    settings = GenerationSettings.from_mapping({"width": 9, "height": 9, "seed": 3, "walk": {"max_iterations": 0}})
    grid = DungeonFactory.generate(settings)
    assert grid.count(Cell.WALL) == 81


def test_generate_scale_and_emit_pipeline():
    settings = GenerationSettings(width=16, height=12, seed=99, scale=3)
    grid = DungeonFactory.generate(settings)
    scaled = DungeonFactory.scaled(settings, grid)
    assert (scaled.width, scaled.height) == (48, 36)

    surface = RecordingTileSurface()
    emitter = TileEmitter(settings.tiles, settings.scale, settings.tileset.frame_size)
    info = emitter.emit(grid, surface)
    assert (info.width_px, info.height_px) == (48 * 48, 36 * 48)
    cx, cy = grid.spawn
    assert surface.tile_at(cx * 3, cy * 3) == settings.tiles.floor
