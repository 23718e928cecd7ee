"""Random World generation from a ``WorldConfig`` envelope.

Generation is a pure function of the config and the injected random
generator: the same seed always yields the same World.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rescomp.agents.agent import Agent
from rescomp.world.cell import Cell
from rescomp.world.world import World

if TYPE_CHECKING:
    from numpy.random import Generator

    from rescomp.simulation.config import WorldConfig

logger = logging.getLogger(__name__)


def build_world(config: WorldConfig, rng: Generator) -> World:
    """Sample a fresh World from a generation envelope.

    Cells are created in id order, each drawing its resource and then its
    regeneration rate.  The agent count is drawn next, followed by a cell
    id and a consumption rate for each agent.  All ranges are inclusive.

    Args:
        config: Generation envelope.
        rng: Seeded random generator.

    Returns:
        A new World with every agent alive at full health.

    Raises:
        ConfigError: If the envelope fails validation.
    """
    config.validate()

    cells: list[Cell] = []
    for cid in range(config.width * config.height):
        resource = int(
            rng.integers(config.min_resource, config.max_resource, endpoint=True),
        )
        rate = int(
            rng.integers(config.min_regen_rate, config.max_regen_rate, endpoint=True),
        )
        cells.append(
            Cell(
                id=cid,
                cur_resource=resource,
                max_resource=config.max_resource,
                regen_rate=rate,
                max_regen_rate=config.max_regen_rate,
            ),
        )

    n_agents = int(
        rng.integers(config.min_agents, config.max_agents, endpoint=True),
    )
    agents: list[Agent] = []
    for aid in range(n_agents):
        cid = int(rng.integers(0, len(cells)))
        rate = int(
            rng.integers(
                config.min_consumption_rate,
                config.max_consumption_rate,
                endpoint=True,
            ),
        )
        agents.append(
            Agent(
                id=aid,
                cid=cid,
                consumption_rate=rate,
                health_point=config.agent_hp,
            ),
        )

    world = World(
        width=config.width,
        height=config.height,
        cells=cells,
        agents=agents,
        max_agents=config.max_agents,
    )
    logger.info(
        "Built %dx%d world with %d agents",
        config.width,
        config.height,
        n_agents,
    )
    return world
