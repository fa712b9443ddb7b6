from __future__ import annotations

import textwrap

import pytest
from pydantic import ValidationError

from dungeon_walker.config import GenerationSettings, WalkConfig, build_settings, from_env, load_defaults
from dungeon_walker.config.loader import merge
from dungeon_walker.errors import InvalidConfig


def write_yaml(tmp_path, body: str):
    path = tmp_path / "settings.yaml"
    path.write_text(textwrap.dedent(body), encoding="utf-8")
    return path


def test_embedded_defaults_match_model_defaults():
    settings = GenerationSettings.from_mapping(load_defaults())
    assert settings.walk == WalkConfig()
    assert (settings.width, settings.height, settings.scale) == (50, 50, 2)
    assert (settings.tiles.empty, settings.tiles.floor, settings.tiles.wall) == (-1, 6, 20)
    assert settings.tileset.frame_size == 48
    assert settings.characters.frame_size == 64
    assert (settings.characters.margin, settings.characters.spacing) == (1, 2)


def test_walk_defaults():
    cfg = WalkConfig()
    assert cfg.direction_change_probability == 0.5
    assert cfg.spawn_probability == 0.05
    assert cfg.destroy_probability == 0.05
    assert cfg.max_walkers == 10
    assert cfg.max_iterations == 500
    assert cfg.fill_target is None


def test_build_settings_without_sources_uses_defaults():
    settings = build_settings(env={})
    assert settings.width == 50
    assert settings.seed is None
    assert settings.walk.max_iterations == 500


def test_yaml_file_overrides_defaults(tmp_path):
    path = write_yaml(
        tmp_path,
        """
        width: 64
        seed: crypt-7
        walk:
          maxWalkers: 4
          spawn_probability: 0.1
        """,
    )
    settings = build_settings(file_path=path, env={})
    assert settings.width == 64
    assert settings.height == 50
    assert settings.seed == "crypt-7"
    assert settings.walk.max_walkers == 4
    assert settings.walk.spawn_probability == 0.1
    assert settings.walk.destroy_probability == 0.05


def test_settings_file_discovered_from_env(tmp_path):
    path = write_yaml(tmp_path, "height: 33\n")
    settings = build_settings(env={"DW_SETTINGS_FILE": str(path)})
    assert settings.height == 33


def test_env_beats_file_and_overrides_beat_env(tmp_path):
    path = write_yaml(tmp_path, "width: 64\nwalk:\n  max_iterations: 100\n")
    env = {"DW_WIDTH": "70", "DW_MAX_ITERATIONS": "250", "DW_FILL_TARGET": "0.3"}
    settings = build_settings(file_path=path, env=env, overrides={"width": 80, "height": None})
    assert settings.width == 80
    assert settings.height == 50
    assert settings.walk.max_iterations == 250
    assert settings.walk.fill_target == 0.3


def test_malformed_env_values_are_skipped():
    out = from_env({"DW_WIDTH": "wide", "DW_HEIGHT": "40", "DW_SEED": ""})
    assert out == {"height": 40}


def test_env_fill_target_can_be_cleared():
    assert from_env({"DW_FILL_TARGET": "none"}) == {"walk": {"fill_target": None}}


def test_out_of_range_file_value_raises_invalid_config(tmp_path):
    path = write_yaml(tmp_path, "walk:\n  destroy_probability: 1.2\n")
    with pytest.raises(InvalidConfig) as exc:
        build_settings(file_path=path, env={})
    assert "walk" in str(exc.value)


def test_broken_yaml_raises_invalid_config(tmp_path):
    path = write_yaml(tmp_path, "walk: [unclosed\n")
    with pytest.raises(InvalidConfig):
        build_settings(file_path=path, env={})


def test_non_mapping_yaml_raises_invalid_config(tmp_path):
    path = write_yaml(tmp_path, "- 1\n- 2\n")
    with pytest.raises(InvalidConfig):
        build_settings(file_path=path, env={})


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        build_settings(file_path=tmp_path / "nope.yaml", env={})


def test_direct_construction_validates():
    with pytest.raises(ValidationError):
        WalkConfig(spawn_probability=1.5)
    with pytest.raises(ValidationError):
        GenerationSettings(scale=0)


def test_walk_config_is_frozen():
    cfg = WalkConfig()
    with pytest.raises(ValidationError):
        cfg.max_walkers = 0


def test_negative_wall_tile_rejected():
    with pytest.raises(InvalidConfig):
        GenerationSettings.from_mapping({"tiles": {"wall": -1}})


def test_merge_is_recursive_and_non_destructive():
    base = {"a": 1, "walk": {"x": 1, "y": 2}}
    out = merge(base, {"walk": {"y": 3}, "b": 2})
    assert out == {"a": 1, "b": 2, "walk": {"x": 1, "y": 3}}
    assert base == {"a": 1, "walk": {"x": 1, "y": 2}}
