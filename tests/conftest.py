"""Shared fixtures for the seabird test suite."""

from __future__ import annotations

import numpy as np
import pytest
from numpy.random import Generator

from seabird.simulation.config import GameConfig
from seabird.simulation.events import EventBus
from seabird.simulation.scheduler import Scheduler
from seabird.world.generator import ContentGenerator
from seabird.world.grid import Grid


@pytest.fixture
def rng() -> Generator:
    """A deterministic random generator for reproducible tests."""
    return np.random.default_rng(seed=12345)


@pytest.fixture
def grid() -> Grid:
    """The standard 8x4 board, nest at (7, 0), port at (0, 0), all water."""
    return Grid(width=8, height=4, nest=(7, 0), port=(0, 0))


@pytest.fixture
def generator(grid: Grid, rng: Generator) -> ContentGenerator:
    return ContentGenerator(grid=grid, rng=rng, fish_density=0.1, min_fish=5)


@pytest.fixture
def scheduler() -> Scheduler:
    return Scheduler()


@pytest.fixture
def events() -> EventBus:
    return EventBus()


@pytest.fixture
def default_config() -> GameConfig:
    """Default game config (no YAML file needed)."""
    return GameConfig(seed=7)


@pytest.fixture
def quiet_config() -> GameConfig:
    """Seeded config with instant flights and no boats."""
    return GameConfig(seed=7, max_boats=0, flight_step_ms=0)
