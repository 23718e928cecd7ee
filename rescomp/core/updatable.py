"""Updatable — the single-step capability shared by cells, agents and worlds."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Updatable(Protocol):
    """Anything that advances by exactly one simulation step.

    A cell regrows, an agent metabolises, and a world runs a full tick.
    Implementations may raise a ``SimulationError`` subclass when the step
    is not allowed (for example, metabolising a dead agent).
    """

    def step(self) -> None:
        """Advance by one step."""
        ...
