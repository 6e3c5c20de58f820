"""TickContext — the per-tick values every ``act`` call may read.

Organisms never reach back into the simulator.  Time of day, weather
and the random source arrive through this value instead, so a single
organism can be exercised in a test with a hand-built context.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from numpy.random import Generator

    from sealife.world.weather import Condition


@dataclass(frozen=True)
class TickContext:
    """Read-only state for one tick.

    Attributes:
        time_of_day: Hour on the 24-hour clock (0-23).
        weather: Weather condition for this tick.
        rng: The simulation's seeded random generator.
    """

    time_of_day: int
    weather: Condition
    rng: Generator
