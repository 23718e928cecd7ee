"""Config — load simulation parameters from YAML files.

``WorldConfig`` is the generation envelope a World is sampled from;
``SimulationConfig`` wraps it with the seed and viewer settings used by
the engine and the Pygame client.  Both are plain dataclasses so tests
and the viewer can build them in memory without touching YAML.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from rescomp.core.errors import ConfigError


@dataclass
class WorldConfig:
    """Parameter envelope for generating a random World.

    Every ``min_*``/``max_*`` pair is an inclusive range sampled
    uniformly.  ``max_resource`` and ``max_regen_rate`` double as the
    capacity of every generated cell.

    Attributes:
        width: Number of grid columns.
        height: Number of grid rows.
        min_resource: Lowest initial cell resource.
        max_resource: Highest initial cell resource and cell capacity.
        min_regen_rate: Lowest initial cell regeneration rate.
        max_regen_rate: Highest initial rate and the rate cap.
        min_agents: Lowest initial agent count.
        max_agents: Highest initial agent count.
        min_consumption_rate: Lowest agent consumption per tick.
        max_consumption_rate: Highest agent consumption per tick.
        agent_hp: Initial health of every agent.
    """

    width: int = 20
    height: int = 20

    # Cells
    min_resource: int = 0
    max_resource: int = 50
    min_regen_rate: int = 0
    max_regen_rate: int = 2

    # Agents
    min_agents: int = 10
    max_agents: int = 40
    min_consumption_rate: int = 1
    max_consumption_rate: int = 5
    agent_hp: int = 10

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> WorldConfig:
        """Build a config from a mapping, defaulting missing keys.

        Raises:
            ConfigError: If the mapping contains unknown keys, or a value
                that is not an integer (floats, booleans and blank YAML
                entries are all rejected).
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            msg = f"unknown world config keys: {', '.join(unknown)}"
            raise ConfigError(msg)
        for key, value in data.items():
            if isinstance(value, bool) or not isinstance(value, int):
                msg = f"{key} must be an integer, got {value!r}"
                raise ConfigError(msg)
        return cls(**dict(data))

    def validate(self) -> None:
        """Check the envelope can produce a valid World.

        Raises:
            ConfigError: On a non-positive grid size or agent bound, a
                negative value, a ``min`` above its ``max``, or an
                initial health below 1.
        """
        for name in ("width", "height", "min_agents", "max_agents"):
            if getattr(self, name) <= 0:
                msg = f"{name} must be positive, got {getattr(self, name)}"
                raise ConfigError(msg)

        for f in fields(self):
            if getattr(self, f.name) < 0:
                msg = f"{f.name} must be >= 0, got {getattr(self, f.name)}"
                raise ConfigError(msg)

        for stem in ("resource", "regen_rate", "agents", "consumption_rate"):
            lo = getattr(self, f"min_{stem}")
            hi = getattr(self, f"max_{stem}")
            if lo > hi:
                msg = f"min_{stem} ({lo}) exceeds max_{stem} ({hi})"
                raise ConfigError(msg)

        if self.agent_hp < 1:
            msg = f"agent_hp must be at least 1, got {self.agent_hp}"
            raise ConfigError(msg)


@dataclass
class SimulationConfig:
    """Top-level simulation configuration.

    Attributes:
        seed: RNG seed for deterministic replay.
        ticks_per_second: Viewer tick rate.
        cell_size: Viewer pixel size per grid cell.
        world: Generation envelope for the World.
    """

    seed: int = 42
    ticks_per_second: float = 5.0
    cell_size: int = 25
    world: WorldConfig = field(default_factory=WorldConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> SimulationConfig:
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML config file.

        Returns:
            A populated SimulationConfig instance.

        Raises:
            FileNotFoundError: If the config file does not exist.
            ConfigError: If the ``world`` section has unknown keys or
                non-integer values.
        """
        path = Path(path)
        with path.open("r") as f:
            data = yaml.safe_load(f) or {}

        return cls(
            seed=data.get("seed", cls.seed),
            ticks_per_second=data.get("ticks_per_second", cls.ticks_per_second),
            cell_size=data.get("cell_size", cls.cell_size),
            world=WorldConfig.from_dict(data.get("world") or {}),
        )
