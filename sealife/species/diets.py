"""Diet strategies — the behaviour executors shared across species.

Each species descriptor points at one of a closed set of strategies:

- **Piscivore**: hunts fish (sharks, barracudas).  Starves without
  food, needs a mate to breed and does not hunt in fog.
- **Herbivore**: grazes plants (goldfish, parrotfish).  Breeds alone.
- **PelagicNonPredator**: roams and breeds with a mate, never feeds
  (tuna).
- **Photosynthetic**: stationary producers (algae, seaweed).  They only
  grow in place.  New plants come from the global growth pass.

Every ``act`` follows the same template: age (and hunger), death check,
then breeding, feeding and movement, writing only into the next buffer.

Claiming cells:

- Cells for offspring are taken from the free list *before* the parent
  picks its own destination.  Each claim pops the cell from the list.
- A free cell of the next buffer is only claimable if the current
  snapshot does not still hold a live occupant there that has not
  moved yet.  Such an occupant will re-place itself there when it
  acts.
- A food cell is only entered if the next buffer does not already hold
  a different live organism there.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from sealife.world.weather import Condition

if TYPE_CHECKING:
    from numpy.random import Generator

    from sealife.simulation.context import TickContext
    from sealife.species.descriptors import SpeciesDescriptor
    from sealife.species.organism import Animal, Organism, Plant
    from sealife.world.field import Field
    from sealife.world.location import Location


class DietStrategy(ABC):
    """Capability interface implemented by every diet.

    Class attributes:
        is_producer: Stationary species that other diets may graze.
        hunts: Food level decays each tick and the animal starves at 0.
        needs_mate: Breeding requires an adjacent opposite-gender partner.
    """

    is_producer: ClassVar[bool] = False
    hunts: ClassVar[bool] = False
    needs_mate: ClassVar[bool] = False

    def accepts(self, prey: SpeciesDescriptor) -> bool:
        """Return True if this diet feeds on ``prey``."""
        return False

    def food_gain(self, eater: Animal, prey: Organism) -> int:
        """Return the food level ``eater`` reaches after eating ``prey``."""
        return prey.species.food_value

    @abstractmethod
    def act(
        self,
        organism: Organism,
        current: Field,
        next_field: Field,
        ctx: TickContext,
    ) -> None:
        """Run one tick of behaviour for ``organism``."""

    # -- Shared steps --

    def _find_food(
        self,
        animal: Animal,
        current: Field,
        next_field: Field,
    ) -> Location | None:
        """Eat the first edible neighbour and return its cell.

        Neighbours are scanned in shuffled order.  The prey is killed and
        the eater's food level set by ``food_gain``.

        Returns:
            The prey's cell, or None if nothing edible was reachable.
        """
        if animal.location is None:
            return None
        for loc in current.get_adjacent_locations(animal.location):
            prey = current.get_organism_at(loc)
            if prey is None or not prey.is_edible_by(self):
                continue
            occupant = next_field.get_organism_at(loc)
            if occupant is not None and occupant is not prey and occupant.alive:
                continue
            prey.set_dead()
            animal.food_level = self.food_gain(animal, prey)
            return loc
        return None


def claimable(current: Field, locations: list[Location]) -> list[Location]:
    """Drop cells still held by a live organism that has not acted yet.

    Args:
        current: The snapshot being read this tick.
        locations: Free cells of the next buffer, in shuffled order.

    Returns:
        The cells that may be claimed, order preserved.
    """
    result: list[Location] = []
    for loc in locations:
        occupant = current.get_organism_at(loc)
        if occupant is None or not occupant.alive or occupant.location != loc:
            result.append(loc)
    return result


def give_birth(
    animal: Animal,
    current: Field,
    next_field: Field,
    free: list[Location],
    rng: Generator,
) -> int:
    """Place a litter into free cells, consuming them from ``free``.

    Args:
        animal: The parent.
        current: Snapshot searched for a mate.
        next_field: Buffer receiving the newborns.
        free: Claimable cells; births pop from the front.
        rng: Seeded random generator.

    Returns:
        Number of newborns actually placed.
    """
    births = animal.breed(current, rng)
    placed = 0
    while placed < births and free:
        loc = free.pop(0)
        next_field.place_organism(animal.spawn_young(loc, rng), loc)
        placed += 1
    return placed


def relocate(organism: Organism, next_field: Field, location: Location) -> None:
    """Move ``organism`` to ``location`` in the next buffer."""
    organism.location = location
    next_field.place_organism(organism, location)


@dataclass(frozen=True)
class Piscivore(DietStrategy):
    """Hunts the listed fish species.

    Attributes:
        prey: Names of the species this diet eats.
    """

    prey: frozenset[str] = field(default_factory=frozenset)

    hunts: ClassVar[bool] = True
    needs_mate: ClassVar[bool] = True

    def accepts(self, prey: SpeciesDescriptor) -> bool:
        """Return True for live fish of a listed prey species."""
        return prey.name in self.prey

    def food_gain(self, eater: Animal, prey: Organism) -> int:
        """A kill restores the hunter's own fixed food value."""
        return eater.species.food_value

    def act(
        self,
        animal: Animal,
        current: Field,
        next_field: Field,
        ctx: TickContext,
    ) -> None:
        """Breed, then hunt or swim to a free cell; die if boxed in."""
        animal.increment_age()
        animal.increment_hunger()
        if not animal.alive or animal.location is None:
            return

        location = animal.location
        free = claimable(current, next_field.get_free_adjacent_locations(location))
        if free and animal.species.can_breed_at(ctx.time_of_day):
            give_birth(animal, current, next_field, free, ctx.rng)

        target = None
        if ctx.weather is not Condition.FOGGY:
            target = self._find_food(animal, current, next_field)
        if target is None and free:
            target = free.pop(0)

        if target is None:
            # Overcrowding
            animal.set_dead()
            return
        relocate(animal, next_field, target)


@dataclass(frozen=True)
class Herbivore(DietStrategy):
    """Grazes on any producer species and breeds without a mate."""

    def accepts(self, prey: SpeciesDescriptor) -> bool:
        """Return True for any photosynthetic species."""
        return prey.is_producer

    def act(
        self,
        animal: Animal,
        current: Field,
        next_field: Field,
        ctx: TickContext,
    ) -> None:
        """Graze if possible, otherwise breed and wander within its windows.

        An herbivore that finds food moves onto the eaten plant's cell.
        Otherwise it breeds (if its breeding window is open) and then
        moves to a remaining free cell (if its movement window is open),
        or stays where it is.  With no food and no free cell at all it
        dies of overcrowding.
        """
        animal.increment_age()
        if not animal.alive or animal.location is None:
            return

        location = animal.location
        hour = ctx.time_of_day
        free = claimable(current, next_field.get_free_adjacent_locations(location))

        food = self._find_food(animal, current, next_field)
        if food is not None:
            relocate(animal, next_field, food)
            return

        if not free:
            # Overcrowding
            animal.set_dead()
            return

        if animal.species.can_breed_at(hour):
            give_birth(animal, current, next_field, free, ctx.rng)
        if free and animal.species.can_move_at(hour):
            relocate(animal, next_field, free.pop(0))
        else:
            relocate(animal, next_field, location)


@dataclass(frozen=True)
class PelagicNonPredator(DietStrategy):
    """Never feeds; roams and breeds with a mate inside its windows."""

    needs_mate: ClassVar[bool] = True

    def act(
        self,
        animal: Animal,
        current: Field,
        next_field: Field,
        ctx: TickContext,
    ) -> None:
        """Move (and possibly breed) while its window is open, else hold still.

        With no claimable cell at all it dies of overcrowding.  If its
        litter takes the last free cells it stays where it is.
        """
        animal.increment_age()
        if not animal.alive or animal.location is None:
            return

        location = animal.location
        hour = ctx.time_of_day
        if not animal.species.can_move_at(hour):
            relocate(animal, next_field, location)
            return

        free = claimable(current, next_field.get_free_adjacent_locations(location))
        if not free:
            # Overcrowding
            animal.set_dead()
            return
        if animal.species.can_breed_at(hour):
            give_birth(animal, current, next_field, free, ctx.rng)
        relocate(animal, next_field, free.pop(0) if free else location)


@dataclass(frozen=True)
class Photosynthetic(DietStrategy):
    """Stationary producer: grows in place and is re-placed each tick."""

    is_producer: ClassVar[bool] = True

    def act(
        self,
        plant: Plant,
        current: Field,
        next_field: Field,
        ctx: TickContext,
    ) -> None:
        """Grow one stage and persist at the same cell."""
        plant.grow()
        if plant.alive and plant.location is not None:
            next_field.place_organism(plant, plant.location)
