"""Agent -- a mobile consumer that lives off the resource of its cell.

Each tick the World offers an agent a share of its cell's resource.  An
agent whose share falls short of its consumption rate is *hungry*: it
looks at the four adjacent cells and greedily steps toward the richest
one, paying a fixed health cost for the move.  Metabolism then costs one
more health point if the agent is still underfed.

Dead agents are soft-deleted: they stay in the World's agent list with
their last position and health frozen, and every mutating operation
except ``retrieve_resource`` refuses to touch them.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from rescomp.core.errors import NotAliveError

# -- Constants ---------------------------------------------------------------

MOVEMENT_COST = 1  # HP lost per move
STARVATION_DAMAGE = 1  # HP lost per underfed tick


@dataclass
class Agent:
    """A single agent.

    Attributes:
        id: Stable index of the agent in the World's agent list.
        cid: Id of the cell the agent occupies.
        consumption_rate: Resource needed per tick to avoid starving.
        allocated_resource: Resource granted this tick (reset every tick).
        health_point: Remaining health; the agent dies at 0.
        alive: False once the agent has died.  Never flips back.
    """

    id: int
    cid: int
    consumption_rate: int
    allocated_resource: int = 0
    health_point: int = 1
    alive: bool = True

    @property
    def is_alive(self) -> bool:
        """Return True if this agent is still alive."""
        return self.alive

    def is_hungry(self) -> bool:
        """Return True if this tick's allocation did not cover the need."""
        return self.allocated_resource < self.consumption_rate

    def retrieve_resource(self, offered: int) -> int:
        """Claim up to ``consumption_rate`` from an offered share.

        The claimed amount replaces any previous allocation.

        Args:
            offered: Resource offered to this agent.

        Returns:
            The part of ``offered`` the agent did not claim.
        """
        take = min(offered, self.consumption_rate)
        self.allocated_resource = take
        return offered - take

    def decide_move(self, neighbours: Sequence[tuple[int, int]]) -> int | None:
        """Pick the richest neighbouring cell to move to.

        The first neighbour holding the strictly greatest resource wins,
        so callers supply neighbours in a fixed order (N, S, W, E) to
        keep tie-breaks deterministic.

        Args:
            neighbours: ``(cell_id, resource)`` pairs.

        Returns:
            The chosen cell id, or None if the list is empty or every
            neighbour is empty.
        """
        best_cid: int | None = None
        best_resource = 0
        for cid, resource in neighbours:
            if resource > best_resource:
                best_resource = resource
                best_cid = cid
        return best_cid

    def move_to(self, new_cid: int) -> None:
        """Move to another cell and pay the movement cost.

        Args:
            new_cid: Id of the destination cell.

        Raises:
            NotAliveError: If the agent is dead.  Nothing is changed.
        """
        if not self.alive:
            raise NotAliveError(self.id)
        self.cid = new_cid
        self._lose_health(MOVEMENT_COST)

    def step(self) -> None:
        """Metabolise: starve if underfed, then clear the allocation.

        Raises:
            NotAliveError: If the agent is dead.  Nothing is changed.
        """
        if not self.alive:
            raise NotAliveError(self.id)
        damage = STARVATION_DAMAGE if self.is_hungry() else 0
        self.allocated_resource = 0
        self._lose_health(damage)

    def _lose_health(self, amount: int) -> None:
        """Deduct health, saturating at zero, and die when it runs out."""
        self.health_point = max(0, self.health_point - amount)
        if self.health_point == 0:
            self.alive = False
