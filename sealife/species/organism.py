"""Organism, Animal and Plant — per-individual state.

Individuals only hold state (age, hunger, gender, infection, growth).
What they *do* each tick is decided by the diet strategy attached to
their species descriptor, so ``act`` simply delegates.

Interactions between neighbours go through capability queries
(``is_edible_by``, ``is_mate_for``, ``infectable``) instead of checks
on the concrete class of the neighbour.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from numpy.random import Generator

    from sealife.simulation.context import TickContext
    from sealife.species.descriptors import SpeciesDescriptor
    from sealife.species.diets import DietStrategy
    from sealife.world.field import Field
    from sealife.world.location import Location

MAX_GROWTH = 10


class Gender(Enum):
    """Animal gender, fixed at birth."""

    MALE = auto()
    FEMALE = auto()


@dataclass(eq=False)
class Organism:
    """Base state shared by every living thing in the field.

    Attributes:
        species: The species parameter table.
        location: Current cell, or None once dead.
        alive: Whether the organism is still alive.
    """

    species: SpeciesDescriptor
    location: Location | None
    alive: bool = True

    infectable: ClassVar[bool] = False

    def act(self, current: Field, next_field: Field, ctx: TickContext) -> None:
        """Perform one tick of behaviour.

        Reads ``current`` and writes this organism (and any offspring)
        into ``next_field``.  Organisms not placed into ``next_field``
        do not survive the tick.

        Args:
            current: The snapshot being read this tick.
            next_field: The buffer being built for the next tick.
            ctx: Per-tick time, weather and RNG.
        """
        self.species.diet.act(self, current, next_field, ctx)

    def set_dead(self) -> None:
        """Mark the organism dead and clear its location."""
        self.alive = False
        self.location = None

    def is_edible_by(self, diet: DietStrategy) -> bool:
        """Return True if a live organism of this species is food for ``diet``."""
        return self.alive and diet.accepts(self.species)

    def is_mate_for(self, other: Animal) -> bool:
        """Return True if this organism could mate with ``other``."""
        return False


@dataclass(eq=False)
class Animal(Organism):
    """A mobile organism that ages, eats, breeds and can carry infection.

    Attributes:
        gender: Fixed at birth.
        age: Ticks lived.
        food_level: Ticks of food remaining (hunting species starve at 0).
        infected: Whether the animal carries the disease.
    """

    gender: Gender = Gender.FEMALE
    age: int = 0
    food_level: int = 0
    infected: bool = False

    infectable: ClassVar[bool] = True

    @classmethod
    def from_species(
        cls,
        species: SpeciesDescriptor,
        location: Location,
        rng: Generator,
        *,
        random_age: bool = False,
    ) -> Animal:
        """Create an animal with a random gender.

        Seeded animals (``random_age=True``) get a random age below the
        species maximum and, for hunters, a random food level.  Newborns
        start at age zero and, for hunters, with a full stomach.

        Args:
            species: Species parameter table.
            location: Birth cell.
            rng: Seeded random generator.
            random_age: True when seeding the initial population.

        Returns:
            A new live Animal.
        """
        gender = Gender.MALE if rng.random() < 0.5 else Gender.FEMALE
        age = int(rng.integers(species.max_age)) if random_age else 0
        food_level = 0
        if species.diet.hunts:
            if random_age:
                food_level = int(rng.integers(1, species.food_value + 1))
            else:
                food_level = species.food_value
        return cls(
            species=species,
            location=location,
            gender=gender,
            age=age,
            food_level=food_level,
        )

    def increment_age(self) -> None:
        """Age by one tick; die when older than the species maximum."""
        self.age += 1
        if self.age > self.species.max_age:
            self.set_dead()

    def increment_hunger(self) -> None:
        """Burn one unit of food; die when none is left."""
        self.food_level -= 1
        if self.food_level <= 0:
            self.set_dead()

    def can_breed(self) -> bool:
        """Return True once the animal has reached breeding age."""
        return self.age >= self.species.breeding_age

    def is_mate_for(self, other: Animal) -> bool:
        """Return True for a live, adult, same-species animal of the other gender."""
        return (
            self.alive
            and self is not other
            and self.species.name == other.species.name
            and self.gender is not other.gender
            and self.can_breed()
        )

    def find_mate(self, field: Field) -> Organism | None:
        """Return the first suitable partner among shuffled neighbours."""
        if self.location is None:
            return None
        for loc in field.get_adjacent_locations(self.location):
            occupant = field.get_organism_at(loc)
            if occupant is not None and occupant.is_mate_for(self):
                return occupant
        return None

    def breed(self, field: Field, rng: Generator) -> int:
        """Return the number of births this tick (may be zero).

        Species whose diet needs a mate only breed with a suitable
        partner adjacent in ``field``.

        Args:
            field: Snapshot searched for a mate.
            rng: Seeded random generator.
        """
        species = self.species
        if not self.can_breed():
            return 0
        if species.diet.needs_mate and self.find_mate(field) is None:
            return 0
        if rng.random() < species.breeding_probability:
            return int(rng.integers(species.max_litter_size)) + 1
        return 0

    def spawn_young(self, location: Location, rng: Generator) -> Animal:
        """Create a newborn of the same species at ``location``."""
        return Animal.from_species(self.species, location, rng)


@dataclass(eq=False)
class Plant(Organism):
    """A stationary producer that grows in place until eaten.

    Attributes:
        growth: Growth stage, from 1 up to ``MAX_GROWTH``.
    """

    growth: int = 1

    def grow(self) -> None:
        """Advance one growth stage, up to the maximum."""
        if self.alive and self.growth < MAX_GROWTH:
            self.growth += 1


def create_organism(
    species: SpeciesDescriptor,
    location: Location,
    rng: Generator,
    *,
    random_age: bool = False,
) -> Organism:
    """Create a Plant or Animal depending on the species' diet.

    Args:
        species: Species parameter table.
        location: Cell for the new organism.
        rng: Seeded random generator (unused for plants).
        random_age: Forwarded to ``Animal.from_species``.
    """
    if species.is_producer:
        return Plant(species=species, location=location)
    return Animal.from_species(species, location, rng, random_age=random_age)
