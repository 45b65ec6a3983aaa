"""Configuration loading and validation for foraging simulations."""

from __future__ import annotations

import dataclasses
import json
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml


class ConfigValidationError(ValueError):
    """Raised when a config file or value fails validation."""


@dataclass(frozen=True)
class SimulationConfig:
    """Validated simulation parameters.

    Defaults reproduce the reference setup: 20 agents with a 9-cell eye
    foraging 40 food items, replaced every 2500 ticks.
    """

    seed: int = 0
    generations: int = 10

    # World
    population_size: int = 20
    food_count: int = 40
    food_size: float = 0.01

    # Physics
    initial_speed: float = 0.0002
    speed_min: float = 0.001
    speed_max: float = 0.005
    speed_accel: float = 0.2
    rotation_accel: float = math.pi / 2

    # Eye
    fov_range: float = 0.25
    fov_angle: float = math.pi + math.pi / 4
    eye_cells: int = 9

    # Evolution
    generation_length: int = 2500
    mutation_chance: float = 0.01
    mutation_coeff: float = 0.3

    def to_dict(self) -> dict[str, Any]:
        """Return a plain dictionary view of the configuration."""
        return dataclasses.asdict(self)


_FIELD_TYPES: dict[str, type] = {
    field.name: int if field.type in ("int", int) else float
    for field in dataclasses.fields(SimulationConfig)
}


class ConfigLoader:
    """Load and validate simulation config files (YAML or JSON)."""

    @staticmethod
    def load(path: str | Path) -> SimulationConfig:
        """Load a single simulation config from ``path``.

        Missing keys fall back to ``SimulationConfig`` defaults.

        Args:
            path: Path to a YAML or JSON config file.

        Returns:
            A validated ``SimulationConfig`` instance.
        """
        payload = _read_config_payload(path)
        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise ConfigValidationError("Config file must contain a mapping object.")
        return _validate_and_build(payload)

    @staticmethod
    def from_mapping(payload: Mapping[str, Any]) -> SimulationConfig:
        """Validate an in-memory mapping with the same rules as :meth:`load`."""
        return _validate_and_build(payload)


def _read_config_payload(path: str | Path) -> Any:
    """Read raw config payload from JSON or YAML file."""
    config_path = Path(path)
    if not config_path.exists():
        raise ConfigValidationError(f"Config file not found: {config_path}")

    suffix = config_path.suffix.lower()
    content = config_path.read_text(encoding="utf-8")

    try:
        if suffix == ".json":
            return json.loads(content)
        if suffix in {".yaml", ".yml"}:
            return yaml.safe_load(content)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigValidationError(f"Failed to parse config '{config_path}': {exc}") from exc

    raise ConfigValidationError(f"Unsupported config extension: {suffix}")


def _validate_and_build(payload: Mapping[str, Any]) -> SimulationConfig:
    """Validate raw mapping and build ``SimulationConfig``."""
    unknown = sorted(key for key in payload if key not in _FIELD_TYPES)
    if unknown:
        raise ConfigValidationError(f"Unknown config keys: {', '.join(unknown)}")

    values: dict[str, Any] = {}
    for key, raw in payload.items():
        expected = _FIELD_TYPES[key]
        if isinstance(raw, bool) or not isinstance(raw, (int, float)):
            raise ConfigValidationError(f"{key} must be a number, got {raw!r}")
        if expected is int and float(raw) != int(raw):
            raise ConfigValidationError(f"{key} must be an integer, got {raw!r}")
        values[key] = expected(raw)

    config = SimulationConfig(**values)

    if config.population_size <= 0:
        raise ConfigValidationError("population_size must be > 0")
    if config.food_count < 0:
        raise ConfigValidationError("food_count must be >= 0")
    if config.generations < 0:
        raise ConfigValidationError("generations must be >= 0")
    if config.generation_length <= 0:
        raise ConfigValidationError("generation_length must be > 0")
    if not 0.0 <= config.mutation_chance <= 1.0:
        raise ConfigValidationError("mutation_chance must be in [0.0, 1.0]")
    if config.mutation_coeff < 0.0:
        raise ConfigValidationError("mutation_coeff must be >= 0")
    for key in ("initial_speed", "speed_min", "speed_accel", "rotation_accel", "food_size"):
        if getattr(config, key) < 0.0:
            raise ConfigValidationError(f"{key} must be >= 0")
    if config.speed_min > config.speed_max:
        raise ConfigValidationError("speed_min must be <= speed_max")
    if config.fov_range <= 0.0 or config.fov_angle <= 0.0 or config.eye_cells <= 0:
        raise ConfigValidationError("fov_range, fov_angle and eye_cells must be > 0")

    return config
