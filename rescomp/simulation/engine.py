"""SimulationEngine — the host-side tick loop.

Owns the current World, the seeded random generator it was sampled from,
and a tick counter.  The viewer and the headless runner both drive the
simulation through this class.  A reset builds a brand-new World and
swaps it in; the old World has no further effect.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import numpy as np
from numpy.random import Generator

from rescomp.simulation.config import SimulationConfig, WorldConfig
from rescomp.world.generator import build_world
from rescomp.world.world import World

logger = logging.getLogger(__name__)


@dataclass
class SimulationEngine:
    """Drives the simulation forward tick by tick.

    Attributes:
        config: Loaded simulation configuration.
        world: The current World.
        rng: Master seeded random generator.
        tick: Ticks run since the last reset.
    """

    config: SimulationConfig
    world: World = field(init=False)
    rng: Generator = field(init=False)
    tick: int = 0

    def __post_init__(self) -> None:
        """Seed the RNG and build the initial world from config."""
        self.rng = np.random.default_rng(self.config.seed)
        self.world = build_world(self.config.world, self.rng)

    def step(self) -> None:
        """Advance the simulation by one tick."""
        self.world.update()
        self.tick += 1

    def run(self, ticks: int) -> None:
        """Run the simulation for a fixed number of ticks.

        Args:
            ticks: Number of ticks to advance.
        """
        for _ in range(ticks):
            self.step()

    def reset(self, world_config: WorldConfig | None = None) -> None:
        """Replace the world with a freshly generated one.

        The new world is drawn from the engine's generator, so successive
        resets produce different worlds while a whole session stays
        reproducible from the seed.  If generation fails, the current
        world and tick count are kept.

        Args:
            world_config: New generation envelope.  Defaults to the one
                currently in ``config``.

        Raises:
            ConfigError: If ``world_config`` fails validation.
        """
        world_config = world_config or self.config.world
        world = build_world(world_config, self.rng)
        self.config.world = world_config
        self.world = world
        self.tick = 0
        logger.info("Reset world (%d agents)", len(world.agents))
