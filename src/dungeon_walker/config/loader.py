from __future__ import annotations

import logging
import os
from importlib.resources import files as resource_files
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

import yaml
from pydantic.alias_generators import to_snake

from ..errors import InvalidConfig
from .models import GenerationSettings

logger = logging.getLogger(__name__)

SETTINGS_FILE_ENV = "DW_SETTINGS_FILE"


def _optional_float(value: str) -> Optional[float]:
    return None if value.strip().lower() in {"none", "null", "off"} else float(value)


# env var -> (path into the settings mapping, caster)
ENV_MAPPING: Dict[str, Tuple[Tuple[str, ...], Callable[[str], Any]]] = {
    "DW_WIDTH": (("width",), int),
    "DW_HEIGHT": (("height",), int),
    "DW_SEED": (("seed",), str),
    "DW_SCALE": (("scale",), int),
    "DW_DIRECTION_CHANGE_PROBABILITY": (("walk", "direction_change_probability"), float),
    "DW_SPAWN_PROBABILITY": (("walk", "spawn_probability"), float),
    "DW_DESTROY_PROBABILITY": (("walk", "destroy_probability"), float),
    "DW_MAX_WALKERS": (("walk", "max_walkers"), int),
    "DW_MAX_ITERATIONS": (("walk", "max_iterations"), int),
    "DW_FILL_TARGET": (("walk", "fill_target"), _optional_float),
    "DW_TILESET": (("tileset", "path"), str),
    "DW_CHARACTERS": (("characters", "path"), str),
}


def merge(base: Dict[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """Recursively merge ``override`` into a copy of ``base``."""
    out = dict(base)
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(out.get(key), Mapping):
            out[key] = merge(dict(out[key]), value)
        else:
            out[key] = value
    return out


def _parse_yaml(text: str, origin: str) -> Dict[str, Any]:
    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise InvalidConfig(f"Could not parse settings YAML from {origin}: {exc}") from exc
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise InvalidConfig(f"Settings YAML from {origin} must be a mapping, got {type(raw).__name__}")
    walk = raw.get("walk")
    if isinstance(walk, dict):
        # camelCase and snake_case spellings must land on the same key before merging
        raw["walk"] = {to_snake(str(k)): v for k, v in walk.items()}
    return raw


def load_defaults() -> Dict[str, Any]:
    """Load the embedded default resource at dungeon_walker/config/defaults.yaml."""
    data = resource_files("dungeon_walker.config").joinpath("defaults.yaml").read_text(encoding="utf-8")
    logger.debug("Loaded embedded default settings resource")
    return _parse_yaml(data, "defaults.yaml")


def load_yaml_file(path: Path | str) -> Dict[str, Any]:
    path = Path(path).expanduser()
    if not path.exists():
        raise FileNotFoundError(f"Settings file not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        data = f.read()
    logger.debug("Loaded settings from path: %s", path)
    return _parse_yaml(data, str(path))


def from_env(env: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Collect DW_* overrides as a nested mapping; malformed values are logged and skipped."""
    env = os.environ if env is None else env
    out: Dict[str, Any] = {}
    for env_key, (path, caster) in ENV_MAPPING.items():
        raw = env.get(env_key)
        if raw is None or raw == "":
            continue
        try:
            value = caster(raw)
        except ValueError as exc:
            logger.error("Invalid env for %s=%r: %s", env_key, raw, exc)
            continue
        node = out
        for part in path[:-1]:
            node = node.setdefault(part, {})
        node[path[-1]] = value
    return out


def discover_settings_file(env: Optional[Mapping[str, str]] = None) -> Optional[Path]:
    env = os.environ if env is None else env
    env_path = env.get(SETTINGS_FILE_ENV)
    if env_path:
        return Path(env_path).expanduser().resolve()
    return None


def build_settings(
    *,
    file_path: Optional[Path | str] = None,
    env: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> GenerationSettings:
    """Assemble settings with precedence defaults < file < env < overrides."""
    data = load_defaults()
    chosen = Path(file_path).expanduser() if file_path is not None else discover_settings_file(env)
    if chosen is not None:
        data = merge(data, load_yaml_file(chosen))
    data = merge(data, from_env(env))
    if overrides:
        data = merge(data, {k: v for k, v in overrides.items() if v is not None})
    settings = GenerationSettings.from_mapping(data)
    logger.info(
        "Settings: %dx%d scale=%d seed=%r iterations=%d",
        settings.width,
        settings.height,
        settings.scale,
        settings.seed,
        settings.walk.max_iterations,
    )
    return settings


__all__ = [
    "ENV_MAPPING",
    "SETTINGS_FILE_ENV",
    "build_settings",
    "discover_settings_file",
    "from_env",
    "load_defaults",
    "load_yaml_file",
    "merge",
]
