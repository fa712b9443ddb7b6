class DungeonError(Exception):
    """Base error for dungeon generation exceptions."""


class InvalidDimensions(DungeonError):
    """Raised when a grid is too small to hold a 1-cell border plus an interior."""


class InvalidConfig(DungeonError):
    """Raised when generation or scaling options are out of range."""


class GenerationCancelled(DungeonError):
    """Raised when a caller cancels a generation run between iterations."""
