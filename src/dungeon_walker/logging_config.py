import logging
import os

LOG_LEVEL_ENV = "DW_LOG_LEVEL"
LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"


def resolve_level(default_level: int = logging.INFO, debug: bool = False) -> int:
    """Pick the root log level.

    ``debug`` wins; otherwise DW_LOG_LEVEL (e.g. "debug", "WARNING") is used when
    it names a real level, falling back to ``default_level``.
    """
    if debug:
        return logging.DEBUG
    level_name = os.getenv(LOG_LEVEL_ENV)
    if level_name:
        level = getattr(logging, level_name.upper(), None)
        if isinstance(level, int):
            return level
    return default_level


def configure_logging(default_level: int = logging.INFO, debug: bool = False) -> int:
    level = resolve_level(default_level, debug)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    # pyglet/arcade are chatty at DEBUG; keep them at WARNING unless asked otherwise
    for name in ("arcade", "pyglet"):
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
    return level
