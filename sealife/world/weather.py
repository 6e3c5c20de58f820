"""Weather — a small random state machine shared by the whole field.

Updated once at the start of each tick, before any organism acts.  The
only behavioural effect is that piscivores do not hunt in fog.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from numpy.random import Generator


class Condition(Enum):
    """Possible weather conditions."""

    SUNNY = auto()
    RAINY = auto()
    CLOUDY = auto()
    FOGGY = auto()


_CONDITIONS = list(Condition)


@dataclass
class Weather:
    """Current weather state.

    Attributes:
        condition: The active condition.
        change_probability: Chance per tick of re-sampling the condition.
            The re-sample is uniform over all conditions, so it may pick
            the current one again.
    """

    condition: Condition = Condition.SUNNY
    change_probability: float = 0.1

    def update(self, rng: Generator) -> None:
        """Advance the weather by one tick.

        Args:
            rng: Seeded random generator.
        """
        if rng.random() < self.change_probability:
            self.condition = _CONDITIONS[int(rng.integers(len(_CONDITIONS)))]

    def reset(self) -> None:
        """Return to clear skies."""
        self.condition = Condition.SUNNY
