"""Infection — per-tick disease pass over the current snapshot.

Runs before any organism acts.  Two independent steps:

1. Every living, uninfected animal may catch the disease spontaneously.
2. Every animal that was already infected when the tick began may pass
   it to each uninfected neighbour.

Infection is tracked and spread but has no effect on behaviour.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from numpy.random import Generator

    from sealife.species.organism import Animal
    from sealife.world.field import Field


def spontaneous_infection(
    field: Field,
    rng: Generator,
    probability: float,
) -> int:
    """Infect each living animal independently with ``probability``.

    Args:
        field: Snapshot whose organisms are examined.
        rng: Seeded random generator.
        probability: Chance per animal per tick.

    Returns:
        Number of newly infected animals.
    """
    infected = 0
    for org in field.organisms:
        if org.alive and org.infectable and not org.infected:
            if rng.random() < probability:
                org.infected = True
                infected += 1
    return infected


def spread_from(
    field: Field,
    carriers: list[Animal],
    rng: Generator,
    probability: float,
) -> int:
    """Let each carrier infect uninfected neighbours.

    Args:
        field: Snapshot used for adjacency.
        carriers: Animals doing the spreading.
        rng: Seeded random generator.
        probability: Chance per neighbour per carrier.

    Returns:
        Number of newly infected animals.
    """
    infected = 0
    for carrier in carriers:
        if not carrier.alive or carrier.location is None:
            continue
        for loc in field.get_adjacent_locations(carrier.location):
            other = field.get_organism_at(loc)
            if other is None or not other.alive or not other.infectable:
                continue
            if other.infected:
                continue
            if rng.random() < probability:
                other.infected = True
                infected += 1
    return infected


def update_infection(
    field: Field,
    rng: Generator,
    *,
    infection_probability: float,
    spread_probability: float,
) -> int:
    """Run one tick of spontaneous infection followed by spread.

    Carriers are the animals infected *before* this tick, so new cases
    do not spread until the following tick.

    Args:
        field: The current snapshot.
        rng: Seeded random generator.
        infection_probability: Spontaneous infection chance per animal.
        spread_probability: Transmission chance per infected neighbour.

    Returns:
        Total number of new infections this tick.
    """
    carriers = [
        org
        for org in field.organisms
        if org.alive and org.infectable and org.infected
    ]
    new_cases = spontaneous_infection(field, rng, infection_probability)
    new_cases += spread_from(field, carriers, rng, spread_probability)
    return new_cases
