"""Tests for config loading and validation."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from configs.loader import ConfigLoader, ConfigValidationError, SimulationConfig


def test_load_yaml_config_under_simulation_key(tmp_path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        "simulation:\n  width: 12\n  height: 8\n  fertile_ratio: 1\n  seed: 3\n",
        encoding="utf-8",
    )

    config = ConfigLoader.load(config_path)

    assert (config.width, config.height) == (12, 8)
    assert config.fertile_ratio == 1
    assert config.seed == 3
    assert config.start_energy == SimulationConfig().start_energy


def test_load_flat_json_config(tmp_path) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"initial_animals": 5, "start_energy": 30}), encoding="utf-8")

    config = ConfigLoader.load(config_path)

    assert config.initial_animals == 5
    assert config.reproduction_cost == 15


def test_bundled_default_config_is_valid() -> None:
    config = ConfigLoader.load(Path(__file__).resolve().parents[1] / "configs" / "default_simulation.yaml")

    assert config.to_dict()["days"] == 200


def test_unknown_field_is_rejected(tmp_path) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"width": 5, "jungle": 2}), encoding="utf-8")

    with pytest.raises(ConfigValidationError, match="Unknown config field"):
        ConfigLoader.load(config_path)


def test_missing_file_and_bad_extension(tmp_path) -> None:
    with pytest.raises(ConfigValidationError, match="not found"):
        ConfigLoader.load(tmp_path / "nope.yaml")

    other = tmp_path / "config.toml"
    other.write_text("width = 3\n", encoding="utf-8")
    with pytest.raises(ConfigValidationError, match="Unsupported config extension"):
        ConfigLoader.load(other)


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"width": 0}, "Grid dimensions"),
        ({"height": -2}, "Grid dimensions"),
        ({"fertile_ratio": 1.5}, "fertile_ratio"),
        ({"fertile_ratio": -0.1}, "fertile_ratio"),
        ({"start_energy": 0}, "start_energy"),
        ({"mutation_count": 40}, "mutation_count"),
        ({"width": True}, "expected int"),
        ({"width": 2.5}, "expected int"),
        ({"fertile_ratio": "half"}, "expected float"),
    ],
)
def test_invalid_values_are_rejected(overrides: dict, message: str) -> None:
    with pytest.raises(ConfigValidationError, match=message):
        SimulationConfig(**overrides)


def test_replace_applies_non_null_overrides() -> None:
    config = SimulationConfig(days=10, seed=1)

    updated = config.replace(days=3, seed=None)

    assert updated.days == 3
    assert updated.seed == 1
    assert config.days == 10
