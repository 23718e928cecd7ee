"""World grid — cells, agents and the per-tick update.

The World owns a fixed, flat list of cells (``id = y * width + x``) and a
fixed list of agents.  Dead agents are never removed, so agent ids stay
valid for the lifetime of the World.

One tick runs in this order:

1. Regenerate every cell.
2. Share each occupied cell's resource among the alive agents on it.
3. For each alive agent, in id order: move if hungry, metabolise, and
   recycle the corpse into the cell if the agent died.

Agents are fed *before* they move, so a hungry agent that migrates pays
the movement cost without any resource from its new cell this tick.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from rescomp.agents.agent import Agent
from rescomp.core.errors import NotAliveError
from rescomp.core.updatable import Updatable
from rescomp.world.cell import Cell

logger = logging.getLogger(__name__)

CORPSE_RESOURCE_BONUS = 5
CORPSE_REGEN_BONUS = 1

# Neighbour order is N, S, W, E; movement ties go to the earliest.
_NEIGHBOUR_OFFSETS = ((0, -1), (0, 1), (-1, 0), (1, 0))


def _step_all(items: Iterable[Updatable]) -> None:
    """Advance every item by one step."""
    for item in items:
        item.step()


@dataclass
class World:
    """A 2D grid of resource cells populated by agents.

    Attributes:
        width: Number of columns in the grid.
        height: Number of rows in the grid.
        cells: Flat list of cells indexed by ``y * width + x``.
        agents: All agents ever created, alive or dead, in id order.
        max_agents: Upper agent-count bound the World was generated with.
    """

    width: int
    height: int
    cells: list[Cell] = field(repr=False)
    agents: list[Agent] = field(default_factory=list, repr=False)
    max_agents: int = 0

    def __post_init__(self) -> None:
        """Check that the grid is complete and every agent is on it."""
        expected = self.width * self.height
        if len(self.cells) != expected:
            msg = (
                f"{self.width}x{self.height} world needs {expected} cells, "
                f"got {len(self.cells)}"
            )
            raise ValueError(msg)
        for agent in self.agents:
            if not 0 <= agent.cid < expected:
                msg = f"agent {agent.id} placed on invalid cell {agent.cid}"
                raise ValueError(msg)

    # -- Spatial queries -----------------------------------------------------

    @property
    def size(self) -> tuple[int, int]:
        """Return ``(width, height)``."""
        return self.width, self.height

    def cell(self, cid: int) -> Cell:
        """Return the cell with id ``cid``.

        Raises:
            IndexError: If ``cid`` is not a cell id of this world.
        """
        if not 0 <= cid < len(self.cells):
            msg = f"cell id {cid} out of range for {self.width}x{self.height}"
            raise IndexError(msg)
        return self.cells[cid]

    def cell_id(self, x: int, y: int) -> int:
        """Return the id of the cell at ``(x, y)``.

        Raises:
            IndexError: If coordinates are out of bounds.
        """
        if not (0 <= x < self.width and 0 <= y < self.height):
            msg = f"({x}, {y}) out of bounds for {self.width}x{self.height}"
            raise IndexError(msg)
        return y * self.width + x

    def cell_at(self, x: int, y: int) -> Cell:
        """Return the cell at grid coordinates ``(x, y)``."""
        return self.cells[self.cell_id(x, y)]

    def coords(self, cid: int) -> tuple[int, int]:
        """Return the ``(x, y)`` coordinates of cell ``cid``."""
        return cid % self.width, cid // self.width

    def neighbours(self, cid: int) -> list[Cell]:
        """Return the cells above, below, left and right of ``cid``.

        Cells outside the grid are omitted; the N, S, W, E order of the
        remaining cells is preserved.
        """
        x, y = self.coords(cid)
        result: list[Cell] = []
        for dx, dy in _NEIGHBOUR_OFFSETS:
            nx, ny = x + dx, y + dy
            if 0 <= nx < self.width and 0 <= ny < self.height:
                result.append(self.cells[ny * self.width + nx])
        return result

    def neighbour_resources(self, cid: int) -> list[tuple[int, int]]:
        """Return ``(cell_id, cur_resource)`` for each neighbour of ``cid``."""
        return [(cell.id, cell.cur_resource) for cell in self.neighbours(cid)]

    # -- Read-only summaries -------------------------------------------------

    def alive_agents(self) -> list[Agent]:
        """Return the agents that are still alive, in id order."""
        return [agent for agent in self.agents if agent.is_alive]

    def alive_count(self) -> int:
        """Return the number of living agents."""
        return sum(1 for agent in self.agents if agent.is_alive)

    def total_resource(self) -> int:
        """Return the resource held across all cells."""
        return sum(cell.cur_resource for cell in self.cells)

    def resource_grid(self) -> NDArray[np.int64]:
        """Return current cell resource as a ``(height, width)`` array."""
        flat = np.fromiter(
            (cell.cur_resource for cell in self.cells),
            dtype=np.int64,
            count=len(self.cells),
        )
        return flat.reshape(self.height, self.width)

    def population_grid(self) -> NDArray[np.int64]:
        """Return the number of alive agents per cell as a 2D array."""
        counts = np.zeros(len(self.cells), dtype=np.int64)
        for agent in self.agents:
            if agent.is_alive:
                counts[agent.cid] += 1
        return counts.reshape(self.height, self.width)

    # -- Tick ----------------------------------------------------------------

    def update(self) -> None:
        """Advance the world by one tick.

        Never raises on a validly constructed world: agent errors that
        arise mid-tick are routine outcomes and are dropped.
        """
        _step_all(self.cells)

        self._allocate_resources()

        for agent in self.agents:
            if agent.is_alive:
                self._step_agent(agent)

    # Worlds satisfy the Updatable protocol too.
    step = update

    def _allocate_resources(self) -> None:
        """Split each occupied cell's resource among its alive residents.

        Every resident is offered ``total // n``.  The division remainder
        and any share an agent did not need stay in the cell; only what
        agents actually claimed is removed.
        """
        residents: dict[int, list[Agent]] = defaultdict(list)
        for agent in self.agents:
            if agent.is_alive:
                residents[agent.cid].append(agent)

        for cid, group in residents.items():
            cell = self.cells[cid]
            total = cell.cur_resource
            if total == 0:
                continue
            base_share, unclaimed = divmod(total, len(group))
            for agent in group:
                unclaimed += agent.retrieve_resource(base_share)
            cell.take_up_to(total - unclaimed)

    def _step_agent(self, agent: Agent) -> None:
        """Move a hungry agent, metabolise it, and recycle it if it dies."""
        try:
            if agent.is_hungry():
                target = agent.decide_move(self.neighbour_resources(agent.cid))
                if target is not None:
                    agent.move_to(target)
                    if not agent.is_alive:
                        self._recycle_corpse(agent, cause="movement")
                        return
            agent.step()
        except NotAliveError:
            logger.debug("Skipped dead agent %d", agent.id)
            return
        if not agent.is_alive:
            self._recycle_corpse(agent, cause="starvation")

    def _recycle_corpse(self, agent: Agent, *, cause: str) -> None:
        """Feed a dead agent back into the cell it died in."""
        cell = self.cells[agent.cid]
        cell.add_resource(CORPSE_RESOURCE_BONUS)
        cell.increase_rate(CORPSE_REGEN_BONUS)
        logger.debug(
            "Agent %d died of %s on cell %d",
            agent.id,
            cause,
            agent.cid,
        )
