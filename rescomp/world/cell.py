"""Cell — a single resource-bearing tile in the world grid.

A cell stores a regrowing pool of resource.  All arithmetic saturates:
the pool never drops below zero nor exceeds ``max_resource``, and the
regeneration rate never exceeds ``max_regen_rate``.
"""

from __future__ import annotations

from dataclasses import dataclass

from rescomp.core.errors import InsufficientResourceError


@dataclass
class Cell:
    """A single tile in the world grid.

    Attributes:
        id: Stable index of the cell (``y * width + x``).
        cur_resource: Resource currently available (0..max_resource).
        max_resource: Capacity of the resource pool.
        regen_rate: Resource regrown per tick (0..max_regen_rate).
        max_regen_rate: Upper bound on ``regen_rate``.
    """

    id: int
    cur_resource: int = 0
    max_resource: int = 0
    regen_rate: int = 0
    max_regen_rate: int = 0

    def __post_init__(self) -> None:
        """Reject cells that start outside their bounds."""
        if not 0 <= self.cur_resource <= self.max_resource:
            msg = (
                f"cell {self.id}: cur_resource {self.cur_resource} "
                f"outside 0..{self.max_resource}"
            )
            raise ValueError(msg)
        if not 0 <= self.regen_rate <= self.max_regen_rate:
            msg = (
                f"cell {self.id}: regen_rate {self.regen_rate} "
                f"outside 0..{self.max_regen_rate}"
            )
            raise ValueError(msg)

    @property
    def fill_ratio(self) -> float:
        """Return the pool level as a fraction of capacity (0.0-1.0)."""
        if self.max_resource == 0:
            return 0.0
        return self.cur_resource / self.max_resource

    def add_resource(self, amount: int) -> None:
        """Add resource to the pool, saturating at ``max_resource``.

        Args:
            amount: Resource to add (must be >= 0).
        """
        self.cur_resource = min(self.cur_resource + amount, self.max_resource)

    def resource_consumption(self, amount: int) -> int:
        """Remove exactly ``amount`` resource from the pool.

        Args:
            amount: Resource requested.

        Returns:
            The amount removed, always equal to ``amount``.

        Raises:
            InsufficientResourceError: If the pool holds less than
                ``amount``.  The cell is left unchanged.
        """
        if self.cur_resource < amount:
            raise InsufficientResourceError(
                available=self.cur_resource,
                requested=amount,
            )
        self.cur_resource -= amount
        return amount

    def take_up_to(self, want: int) -> int:
        """Remove as much as possible, up to ``want``, and return it."""
        taken = min(want, self.cur_resource)
        self.cur_resource -= taken
        return taken

    def increase_rate(self, delta: int) -> None:
        """Raise the regeneration rate, saturating at ``max_regen_rate``."""
        self.regen_rate = min(self.regen_rate + delta, self.max_regen_rate)

    def step(self) -> None:
        """Regrow the pool by ``regen_rate``, capped at ``max_resource``."""
        self.cur_resource = min(
            self.cur_resource + self.regen_rate,
            self.max_resource,
        )
