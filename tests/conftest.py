"""Shared fixtures for the rescomp test suite."""

from __future__ import annotations

from collections.abc import Callable

import numpy as np
import pytest
from numpy.random import Generator

from rescomp.agents.agent import Agent
from rescomp.simulation.config import SimulationConfig, WorldConfig
from rescomp.world.cell import Cell
from rescomp.world.world import World


@pytest.fixture
def rng() -> Generator:
    """A deterministic random generator for reproducible tests."""
    return np.random.default_rng(seed=12345)


@pytest.fixture
def small_world_config() -> WorldConfig:
    """A small 6x5 envelope for fast tests."""
    return WorldConfig(
        width=6,
        height=5,
        min_resource=0,
        max_resource=20,
        min_regen_rate=0,
        max_regen_rate=2,
        min_agents=5,
        max_agents=15,
        min_consumption_rate=1,
        max_consumption_rate=6,
        agent_hp=5,
    )


@pytest.fixture
def default_config() -> SimulationConfig:
    """Default simulation config (no YAML file needed)."""
    return SimulationConfig()


@pytest.fixture
def make_world() -> Callable[..., World]:
    """Factory for hand-laid worlds with uniform cell caps."""

    def _make(
        width: int,
        height: int,
        resources: list[int] | None = None,
        agents: list[Agent] | None = None,
        *,
        max_resource: int = 100,
        regen_rate: int = 0,
        max_regen_rate: int = 5,
    ) -> World:
        resources = resources or [0] * (width * height)
        cells = [
            Cell(
                id=cid,
                cur_resource=resource,
                max_resource=max_resource,
                regen_rate=regen_rate,
                max_regen_rate=max_regen_rate,
            )
            for cid, resource in enumerate(resources)
        ]
        return World(width=width, height=height, cells=cells, agents=agents or [])

    return _make
