"""Plant growth — the field-wide spread of new algae and seaweed.

Plants do not breed individually.  Once per tick, after every organism
has acted, new plants are seeded into free cells of the next buffer,
alternating between the producer species, up to a fixed number per
tick.
"""

from __future__ import annotations

from itertools import cycle
from typing import TYPE_CHECKING

from sealife.species.organism import Plant

if TYPE_CHECKING:
    from collections.abc import Sequence

    from numpy.random import Generator

    from sealife.species.descriptors import SpeciesDescriptor
    from sealife.world.field import Field


def grow_plants(
    field: Field,
    producers: Sequence[SpeciesDescriptor],
    rng: Generator,
    *,
    growth_rate: int,
) -> list[Plant]:
    """Seed up to ``growth_rate`` new plants into free cells.

    Free cells are shuffled so growth is spread across the field rather
    than filling it from the top-left corner.  Species alternate in the
    order given (Algae, Seaweed, Algae, ...).

    Args:
        field: The next buffer, after all organisms have acted.
        producers: Plant species to alternate between.
        rng: Seeded random generator.
        growth_rate: Maximum number of plants created this tick.

    Returns:
        The newly placed plants.
    """
    if not producers or growth_rate <= 0:
        return []

    free = field.get_free_locations()
    rng.shuffle(free)

    planted: list[Plant] = []
    for location, species in zip(free[:growth_rate], cycle(producers)):
        plant = Plant(species=species, location=location)
        field.place_organism(plant, location)
        planted.append(plant)
    return planted
