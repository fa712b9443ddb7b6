from .arcade_app import DungeonWindow, run

__all__ = ["DungeonWindow", "run"]
