from __future__ import annotations

from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from ..errors import InvalidConfig


def _invalid(model: str, exc: ValidationError) -> InvalidConfig:
    problems = "; ".join(
        f"{'.'.join(str(p) for p in err['loc']) or model}: {err['msg']}" for err in exc.errors()
    )
    return InvalidConfig(f"Invalid {model}: {problems}")


class WalkConfig(BaseModel):
    """Options for a single drunkard's-walk run.

    Keys are accepted in snake_case or camelCase (``spawnProbability``).
    """

    model_config = ConfigDict(frozen=True, extra="forbid", alias_generator=to_camel, populate_by_name=True)

    direction_change_probability: float = Field(
        0.5, ge=0.0, le=1.0, description="Per-iteration, per-walker chance of picking a new direction"
    )
    spawn_probability: float = Field(
        0.05, ge=0.0, le=1.0, description="Per-iteration, per-walker chance of spawning a clone"
    )
    destroy_probability: float = Field(
        0.05, ge=0.0, le=1.0, description="Per-iteration chance that one walker is removed"
    )
    max_walkers: int = Field(10, ge=1, description="Population cap")
    max_iterations: int = Field(500, ge=0, description="Number of walk iterations per run")
    fill_target: Optional[float] = Field(
        None, gt=0.0, le=1.0, description="Stop early once this fraction of the interior is floor"
    )

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "WalkConfig":
        try:
            return cls.model_validate(dict(data or {}))
        except ValidationError as exc:
            raise _invalid("walk config", exc) from exc


class TileMapping(BaseModel):
    """Cell value -> tileset index. -1 means "paint nothing"."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    empty: int = -1
    floor: int = 6
    wall: int = 20

    @field_validator("floor", "wall")
    @classmethod
    def painted_tiles_need_index(cls, v: int) -> int:
        if v < 0:
            raise ValueError("floor and wall tiles must map to a real tile index")
        return v


class SheetSettings(BaseModel):
    """A tileset or spritesheet laid out as a grid of equal frames."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    path: Optional[str] = None
    frame_size: int = Field(48, ge=1)
    margin: int = Field(1, ge=0)
    spacing: int = Field(2, ge=0)


class GenerationSettings(BaseModel):
    """Everything needed to build, scale and paint one dungeon.

    Width and height are not range-checked here; the generator owns the
    dimension check and raises :class:`InvalidDimensions`.
    """

    model_config = ConfigDict(extra="forbid")

    width: int = 50
    height: int = 50
    seed: Optional[Union[int, str]] = None
    scale: int = Field(2, ge=1, description="Upscale factor applied before painting")
    walk: WalkConfig = Field(default_factory=WalkConfig)
    tiles: TileMapping = Field(default_factory=TileMapping)
    tileset: SheetSettings = Field(default_factory=SheetSettings)
    characters: SheetSettings = Field(default_factory=lambda: SheetSettings(frame_size=64))

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "GenerationSettings":
        try:
            return cls.model_validate(dict(data or {}))
        except ValidationError as exc:
            raise _invalid("generation settings", exc) from exc


__all__ = ["WalkConfig", "TileMapping", "SheetSettings", "GenerationSettings"]
