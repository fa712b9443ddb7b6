from .loader import build_settings, from_env, load_defaults, load_yaml_file
from .models import GenerationSettings, SheetSettings, TileMapping, WalkConfig

__all__ = [
    "GenerationSettings",
    "SheetSettings",
    "TileMapping",
    "WalkConfig",
    "build_settings",
    "from_env",
    "load_defaults",
    "load_yaml_file",
]
