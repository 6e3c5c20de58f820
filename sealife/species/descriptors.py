"""Species descriptors — fixed parameter tables for every species.

A descriptor bundles the numbers that used to be per-class constants
(breeding age, lifespan, litter size, ...) with the diet strategy that
drives the species' behaviour and the diurnal windows that gate it.
All seven species share one behaviour executor per diet, so adding a
species means adding a descriptor rather than a subclass.

Descriptors are immutable.  ``build_species_table`` applies per-species
overrides from config with ``dataclasses.replace``.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any

from sealife.species.diets import (
    DietStrategy,
    Herbivore,
    PelagicNonPredator,
    Photosynthetic,
    Piscivore,
)


@dataclass(frozen=True)
class DiurnalWindow:
    """An inclusive range of hours on the 24-hour clock.

    A window whose ``start`` is after its ``end`` wraps past midnight,
    e.g. ``DiurnalWindow(19, 5)`` covers 19:00 through 05:00.

    Attributes:
        start: First hour inside the window.
        end: Last hour inside the window.
    """

    start: int
    end: int

    def contains(self, hour: int) -> bool:
        """Return True if ``hour`` falls inside the window."""
        if self.start <= self.end:
            return self.start <= hour <= self.end
        return hour >= self.start or hour <= self.end


DAYLIGHT = DiurnalWindow(5, 20)
NIGHT = DiurnalWindow(19, 5)


@dataclass(frozen=True)
class SpeciesDescriptor:
    """Immutable parameter table for one species.

    Attributes:
        name: Species name, used for statistics and viability checks.
        diet: Behaviour executor shared by all species with this diet.
        breeding_age: Minimum age before an animal may breed.
        max_age: Age beyond which an animal dies.
        breeding_probability: Chance per eligible tick of producing a litter.
        max_litter_size: Upper bound of the uniform litter-size draw.
        food_value: For hunters, the food level restored by a kill.  For
            plants, the food level an herbivore gains by eating one.
        move_window: Hours during which the species may move (None = any).
        breed_window: Hours during which the species may breed (None = any).
    """

    name: str
    diet: DietStrategy
    breeding_age: int = 0
    max_age: int = 0
    breeding_probability: float = 0.0
    max_litter_size: int = 0
    food_value: int = 0
    move_window: DiurnalWindow | None = None
    breed_window: DiurnalWindow | None = None

    @property
    def is_producer(self) -> bool:
        """Return True for stationary, photosynthetic species."""
        return self.diet.is_producer

    def can_move_at(self, hour: int) -> bool:
        """Return True if members of this species may move at ``hour``."""
        return self.move_window is None or self.move_window.contains(hour)

    def can_breed_at(self, hour: int) -> bool:
        """Return True if members of this species may breed at ``hour``."""
        return self.breed_window is None or self.breed_window.contains(hour)


# -- Default tables ------------------------------------------------------------

_FISH_EATER = Piscivore(prey=frozenset({"Tuna"}))

SHARK = SpeciesDescriptor(
    name="Shark",
    diet=_FISH_EATER,
    breeding_age=8,
    max_age=150,
    breeding_probability=0.8,
    max_litter_size=2,
    food_value=25,
)
BARRACUDA = SpeciesDescriptor(
    name="Barracuda",
    diet=_FISH_EATER,
    breeding_age=8,
    max_age=150,
    breeding_probability=0.8,
    max_litter_size=2,
    food_value=25,
)
TUNA = SpeciesDescriptor(
    name="Tuna",
    diet=PelagicNonPredator(),
    breeding_age=6,
    max_age=80,
    breeding_probability=0.4,
    max_litter_size=3,
    move_window=DAYLIGHT,
    breed_window=DAYLIGHT,
)
GOLDFISH = SpeciesDescriptor(
    name="Goldfish",
    diet=Herbivore(),
    breeding_age=5,
    max_age=40,
    breeding_probability=0.01,
    max_litter_size=4,
    move_window=NIGHT,
)
PARROTFISH = SpeciesDescriptor(
    name="Parrotfish",
    diet=Herbivore(),
    breeding_age=5,
    max_age=40,
    breeding_probability=0.05,
    max_litter_size=4,
    breed_window=NIGHT,
)
ALGAE = SpeciesDescriptor(name="Algae", diet=Photosynthetic(), food_value=10)
SEAWEED = SpeciesDescriptor(name="Seaweed", diet=Photosynthetic(), food_value=13)

# Creation order used when seeding the field; plants are grown globally
DEFAULT_SPECIES: dict[str, SpeciesDescriptor] = {
    s.name: s for s in (SHARK, BARRACUDA, TUNA, GOLDFISH, PARROTFISH, ALGAE, SEAWEED)
}

REQUIRED_SPECIES: tuple[str, ...] = (
    "Goldfish",
    "Barracuda",
    "Shark",
    "Tuna",
    "Parrotfish",
)

_OVERRIDABLE = frozenset(
    f.name for f in fields(SpeciesDescriptor) if f.name not in ("name", "diet")
)


def build_species_table(
    overrides: dict[str, dict[str, Any]] | None = None,
) -> dict[str, SpeciesDescriptor]:
    """Return the species table with per-species parameter overrides applied.

    Args:
        overrides: Mapping of species name to ``{parameter: value}``.
            Diurnal windows are given as ``[start, end]`` pairs or null.

    Returns:
        A new mapping of species name to descriptor, in creation order.

    Raises:
        ValueError: If a species or parameter name is not recognised.
    """
    table = dict(DEFAULT_SPECIES)
    for name, params in (overrides or {}).items():
        if name not in table:
            msg = f"unknown species {name!r}"
            raise ValueError(msg)
        unknown = set(params) - _OVERRIDABLE
        if unknown:
            msg = f"unknown parameters for {name}: {sorted(unknown)}"
            raise ValueError(msg)
        changes = dict(params)
        for key in ("move_window", "breed_window"):
            if key in changes and changes[key] is not None:
                start, end = changes[key]
                changes[key] = DiurnalWindow(int(start), int(end))
        table[name] = replace(table[name], **changes)
    return table
