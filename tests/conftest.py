"""Shared fixtures for the Sealife test suite."""

from __future__ import annotations

import numpy as np
import pytest
from numpy.random import Generator

from sealife.simulation.config import SimulationConfig
from sealife.simulation.context import TickContext
from sealife.world.field import Field
from sealife.world.weather import Condition


@pytest.fixture
def rng() -> Generator:
    """A deterministic random generator for reproducible tests."""
    return np.random.default_rng(seed=12345)


@pytest.fixture
def small_field(rng: Generator) -> Field:
    """An empty 8x8 field for fast tests."""
    return Field(depth=8, width=8, rng=rng)


@pytest.fixture
def next_field(rng: Generator) -> Field:
    """An empty 8x8 write buffer sharing the test RNG."""
    return Field(depth=8, width=8, rng=rng)


@pytest.fixture
def noon(rng: Generator) -> TickContext:
    """A sunny midday tick context."""
    return TickContext(time_of_day=12, weather=Condition.SUNNY, rng=rng)


@pytest.fixture
def midnight(rng: Generator) -> TickContext:
    """A sunny midnight tick context."""
    return TickContext(time_of_day=0, weather=Condition.SUNNY, rng=rng)


@pytest.fixture
def small_config() -> SimulationConfig:
    """A 20x20 config dense enough that every species is present."""
    return SimulationConfig(
        seed=7,
        depth=20,
        width=20,
        creation_probabilities={
            "Shark": 0.05,
            "Barracuda": 0.05,
            "Tuna": 0.2,
            "Goldfish": 0.1,
            "Parrotfish": 0.1,
            "Algae": 0.05,
            "Seaweed": 0.05,
        },
        plant_growth_rate=10,
    )
