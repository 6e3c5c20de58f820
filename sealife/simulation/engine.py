"""Simulator — the main tick loop.

Owns the current field, the tick counter, the clock and the weather,
and advances them in the canonical tick order:

1. Tick start (step counter, time of day, weather)
2. Infection (spontaneous cases, then spread)
3. Every live organism in the current snapshot acts
4. Global plant growth into the next buffer
5. Swap buffers and notify views and stats sinks

The two Field buffers are swapped by reference; the stale one is
cleared and reused as the write target for the following tick.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Protocol

import numpy as np

from sealife.simulation.config import SimulationConfig
from sealife.simulation.context import TickContext
from sealife.simulation.growth import grow_plants
from sealife.simulation.infection import update_infection
from sealife.species.organism import create_organism
from sealife.world.field import Field
from sealife.world.location import Location
from sealife.world.weather import Weather

if TYPE_CHECKING:
    from numpy.random import Generator

    from sealife.species.descriptors import SpeciesDescriptor

logger = logging.getLogger(__name__)

DEFAULT_DEPTH = 80
DEFAULT_WIDTH = 120

DAY_START = 12
HOURS_PER_DAY = 24
HOURS_PER_STEP = 1

LONG_RUN_STEPS = 700


class FieldView(Protocol):
    """Anything that displays a field snapshot once per tick."""

    def show_status(self, step: int, field: Field) -> None:
        """Show the snapshot reached after ``step`` ticks."""


StatsSink = Callable[[Mapping[str, int]], None]


class Simulator:
    """Drives the ecosystem forward tick by tick.

    Attributes:
        config: Loaded simulation configuration.
        species: Species descriptors keyed by name, in creation order.
        rng: Master seeded random generator.
        weather: Global weather state.
        field: The current snapshot.
        step: Number of completed ticks since the last reset.
        time_of_day: Hour on the 24-hour clock.
        views: Receivers of ``(step, field)`` after every tick.
        stats_sinks: Receivers of per-species counts after every tick.
        running: Cleared by ``stop`` to end ``simulate`` between ticks.
    """

    def __init__(
        self,
        config: SimulationConfig | None = None,
        *,
        views: list[FieldView] | None = None,
        stats_sinks: list[StatsSink] | None = None,
        rng: Generator | None = None,
    ) -> None:
        """Build both field buffers, the weather and the RNG, then populate.

        Args:
            config: Simulation configuration (defaults if omitted).
            views: Initial views to notify.
            stats_sinks: Initial stats sinks to notify.
            rng: Random source for every draw.  Defaults to a generator
                seeded from ``config.seed``.
        """
        self.config = config or SimulationConfig()
        depth, width = self.config.depth, self.config.width
        if depth <= 0 or width <= 0:
            logger.warning(
                "Invalid field size %dx%d, using defaults %dx%d",
                depth,
                width,
                DEFAULT_DEPTH,
                DEFAULT_WIDTH,
            )
            depth, width = DEFAULT_DEPTH, DEFAULT_WIDTH

        self.species = self.config.species_table()
        self.rng = rng if rng is not None else np.random.default_rng(self.config.seed)
        self.weather = Weather(
            change_probability=self.config.weather_change_probability,
        )
        self.field = Field(depth=depth, width=width, rng=self.rng)
        self._next_field = Field(depth=depth, width=width, rng=self.rng)
        self.views: list[FieldView] = list(views or [])
        self.stats_sinks: list[StatsSink] = list(stats_sinks or [])
        self.step = 0
        self.time_of_day = DAY_START
        self.running = False

        self.reset()

    @property
    def producers(self) -> list[SpeciesDescriptor]:
        """Plant species used by the global growth pass, in table order."""
        return [s for s in self.species.values() if s.is_producer]

    def run_long_simulation(self) -> int:
        """Run for a reasonably long period."""
        return self.simulate(LONG_RUN_STEPS)

    def simulate(self, num_steps: int) -> int:
        """Run for up to ``num_steps`` ticks.

        Stops early, without error, once the field is no longer viable
        or ``stop`` has been called.

        Args:
            num_steps: Maximum number of ticks to advance.

        Returns:
            Number of ticks actually executed.
        """
        self.running = True
        executed = 0
        while executed < num_steps and self.running:
            if not self.field.is_viable():
                logger.debug("Field no longer viable at step %d", self.step)
                break
            self.simulate_one_step()
            executed += 1
        self.running = False
        return executed

    def stop(self) -> None:
        """Request ``simulate`` to finish after the current tick."""
        self.running = False

    def simulate_one_step(self) -> None:
        """Advance the simulation by one tick."""
        # 1. Tick start
        self.step += 1
        self.time_of_day = (self.time_of_day + HOURS_PER_STEP) % HOURS_PER_DAY
        self.weather.update(self.rng)

        # 2. Infection
        update_infection(
            self.field,
            self.rng,
            infection_probability=self.config.infection_probability,
            spread_probability=self.config.spread_probability,
        )

        # 3. Organisms act
        ctx = self.context()
        current = self.field
        next_field = self._next_field
        next_field.clear()
        for organism in list(current.organisms):
            if organism.alive:
                organism.act(current, next_field, ctx)

        # 4. Plant growth
        grow_plants(
            next_field,
            self.producers,
            self.rng,
            growth_rate=self.config.plant_growth_rate,
        )

        # 5. Swap
        self.field, self._next_field = next_field, current
        self._notify()

    def context(self) -> TickContext:
        """Return the read-only values organisms see this tick."""
        return TickContext(
            time_of_day=self.time_of_day,
            weather=self.weather.condition,
            rng=self.rng,
        )

    def reset(self) -> None:
        """Reset the clock and weather, repopulate, and notify views."""
        self.step = 0
        self.time_of_day = DAY_START
        self.weather.reset()
        self.populate()
        logger.debug("Field reset: %s", self.field.field_stats())
        self._notify()

    def populate(self) -> None:
        """Randomly seed the field using the per-species creation probabilities.

        Each cell runs through the species in table order and is taken
        by the first species whose draw succeeds; otherwise it stays
        empty.
        """
        self.field.clear()
        self._next_field.clear()
        chances = [
            (self.species[name], self.config.creation_probabilities.get(name, 0.0))
            for name in self.species
        ]
        for row in range(self.field.depth):
            for col in range(self.field.width):
                location = Location(row, col)
                for species, probability in chances:
                    if self.rng.random() < probability:
                        organism = create_organism(
                            species,
                            location,
                            self.rng,
                            random_age=True,
                        )
                        self.field.place_organism(organism, location)
                        break

    def _notify(self) -> None:
        """Send the current snapshot to every view and stats sink."""
        if self.stats_sinks:
            stats = self.field.field_stats()
            for sink in self.stats_sinks:
                sink(stats)
        for view in self.views:
            view.show_status(self.step, self.field)
