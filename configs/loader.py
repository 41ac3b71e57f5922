"""Configuration loading and validation utilities for simulation runs."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Mapping

import yaml


class ConfigValidationError(ValueError):
    """Raised when a simulation config fails validation."""


@dataclass(frozen=True)
class SimulationConfig:
    """Validated, immutable simulation parameters.

    Values are checked on construction; invalid settings raise
    ``ConfigValidationError`` instead of being clamped.
    """

    width: int = 30
    height: int = 30
    fertile_ratio: float = 0.25
    initial_animals: int = 20
    start_energy: int = 40
    move_energy: int = 1
    plant_energy: int = 20
    genotype_length: int = 32
    mutation_count: int = 1
    seed: int = 0
    days: int = 100

    def __post_init__(self) -> None:
        for item in fields(self):
            value = getattr(self, item.name)
            if item.type in ("int", int):
                if isinstance(value, bool) or not isinstance(value, int):
                    raise ConfigValidationError(
                        f"Field '{item.name}' expected int, got {type(value).__name__}."
                    )
            elif isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigValidationError(
                    f"Field '{item.name}' expected float, got {type(value).__name__}."
                )

        if self.width <= 0 or self.height <= 0:
            raise ConfigValidationError(
                f"Grid dimensions must be > 0, got width={self.width} height={self.height}."
            )
        if not 0.0 <= float(self.fertile_ratio) <= 1.0:
            raise ConfigValidationError(f"fertile_ratio must be in [0.0, 1.0], got {self.fertile_ratio}.")
        if self.initial_animals < 0:
            raise ConfigValidationError("initial_animals must be >= 0")
        if self.start_energy <= 0:
            raise ConfigValidationError("start_energy must be > 0")
        if self.move_energy < 0:
            raise ConfigValidationError("move_energy must be >= 0")
        if self.plant_energy < 0:
            raise ConfigValidationError("plant_energy must be >= 0")
        if self.genotype_length <= 0:
            raise ConfigValidationError("genotype_length must be > 0")
        if not 0 <= self.mutation_count <= self.genotype_length:
            raise ConfigValidationError(
                f"mutation_count must be in [0, {self.genotype_length}], got {self.mutation_count}."
            )
        if self.days < 0:
            raise ConfigValidationError("days must be >= 0")

    @property
    def reproduction_cost(self) -> int:
        """Energy each parent pays for a child (half the start energy)."""
        return self.start_energy // 2

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "SimulationConfig":
        """Build a config from a raw mapping, rejecting unknown keys."""
        if not isinstance(payload, Mapping):
            raise ConfigValidationError("Simulation config must be a mapping.")
        known = {item.name for item in fields(cls)}
        extras = sorted(key for key in payload if key not in known)
        if extras:
            raise ConfigValidationError(f"Unknown config field(s): {extras}.")
        return cls(**dict(payload))

    def replace(self, **overrides: Any) -> "SimulationConfig":
        """Return a validated copy with ``overrides`` applied."""
        payload = self.to_dict()
        payload.update({key: value for key, value in overrides.items() if value is not None})
        return SimulationConfig.from_mapping(payload)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class ConfigLoader:
    """Load and validate simulation configuration files (YAML or JSON)."""

    @staticmethod
    def load(path: str | Path) -> SimulationConfig:
        """Load a single simulation config from ``path``.

        The file may hold the parameters at top level or under a
        ``simulation`` key.
        """
        payload = _read_config_payload(Path(path))
        if not isinstance(payload, Mapping):
            raise ConfigValidationError("Top-level config must be a mapping.")
        if "simulation" in payload and isinstance(payload["simulation"], Mapping):
            if len(payload) != 1:
                extras = sorted(key for key in payload if key != "simulation")
                raise ConfigValidationError(f"Unknown top-level field(s): {extras}.")
            payload = payload["simulation"]
        return SimulationConfig.from_mapping(payload)


def _read_config_payload(config_path: Path) -> Any:
    """Read raw config payload from JSON or YAML file."""
    if not config_path.exists():
        raise ConfigValidationError(f"Config file not found: {config_path}")

    suffix = config_path.suffix.lower()
    content = config_path.read_text(encoding="utf-8")

    if suffix == ".json":
        try:
            return json.loads(content)
        except json.JSONDecodeError as exc:
            raise ConfigValidationError(f"Failed to parse JSON config '{config_path}': {exc}") from exc

    if suffix in {".yaml", ".yml"}:
        try:
            return yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise ConfigValidationError(f"Failed to parse YAML config '{config_path}': {exc}") from exc

    raise ConfigValidationError(f"Unsupported config extension: {suffix}")
