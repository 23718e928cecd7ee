"""Error types raised by the simulation core.

Per-tick failures (``NotAliveError``, ``InsufficientResourceError``) derive
from ``SimulationError`` and are local, recoverable conditions.  The World
treats them as routine outcomes during a tick.  ``ConfigError`` signals a
bad generation envelope and is raised before any World exists.
"""

from __future__ import annotations


class SimulationError(Exception):
    """Base class for errors raised by cell and agent operations."""


class NotAliveError(SimulationError):
    """An operation that needs a living agent was invoked on a dead one.

    Attributes:
        agent_id: Id of the dead agent.
    """

    def __init__(self, agent_id: int) -> None:
        super().__init__(f"agent {agent_id} is not alive")
        self.agent_id = agent_id


class InsufficientResourceError(SimulationError):
    """A cell could not supply an exact amount of resource.

    Attributes:
        available: Resource the cell held when the request was made.
        requested: Amount that was asked for.
    """

    def __init__(self, available: int, requested: int) -> None:
        super().__init__(
            f"requested {requested} resource but only {available} available",
        )
        self.available = available
        self.requested = requested


class ConfigError(ValueError):
    """A world generation config violates its preconditions."""
