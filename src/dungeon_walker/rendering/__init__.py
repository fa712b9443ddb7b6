from .tilemap import RecordingTileSurface, TileEmitter, TileMapInfo, TileSurface

__all__ = ["RecordingTileSurface", "TileEmitter", "TileMapInfo", "TileSurface"]
