"""Field — one buffer of the double-buffered occupancy grid.

A Field owns a ``depth x width`` arena of cells, each holding at most
one organism, plus the ordered list of organisms placed into it.  The
simulator keeps two Fields: the *current* snapshot that organisms read
during a tick and the *next* buffer they write into.  After the tick
the two are swapped by reference and the stale one is cleared for
reuse.

Adjacency queries are shuffled on every call with the injected RNG.
Movement, feeding and mating all take the first suitable entry, so
this shuffle is the tie-breaker between competing organisms and must
come from the simulation's seeded generator for runs to be
reproducible.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from sealife.species.descriptors import REQUIRED_SPECIES
from sealife.world.location import Location

if TYPE_CHECKING:
    from numpy.random import Generator

    from sealife.species.organism import Organism

# Moore neighbourhood, centre excluded
_OFFSETS = [
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
]


@dataclass
class Field:
    """A rectangular grid of cells holding organisms.

    Attributes:
        depth: Number of rows.
        width: Number of columns.
        rng: Seeded random generator used for adjacency shuffles.
        cells: 2D arena of occupants indexed as ``cells[row][col]``.
    """

    depth: int
    width: int
    rng: Generator
    cells: list[list[Organism | None]] = field(init=False, repr=False)
    _organisms: list[Organism] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Allocate an empty arena."""
        self.cells = [[None] * self.width for _ in range(self.depth)]
        self._organisms = []

    @property
    def organisms(self) -> list[Organism]:
        """Organisms placed this tick, in placement order."""
        return self._organisms

    def in_bounds(self, location: Location) -> bool:
        """Return True if ``location`` lies inside the grid."""
        return 0 <= location.row < self.depth and 0 <= location.col < self.width

    def place_organism(self, organism: Organism, location: Location) -> None:
        """Place an organism at the given location.

        Any organism already at the location is evicted from this
        buffer.  Must be called even for organisms that do not move,
        otherwise they are absent from the resulting snapshot.

        Args:
            organism: The organism to be placed.
            location: Where to place it.

        Raises:
            IndexError: If the location is out of bounds.
        """
        other = self.get_organism_at(location)
        if other is not None:
            self._organisms.remove(other)
        self.cells[location.row][location.col] = organism
        self._organisms.append(organism)

    def get_organism_at(self, location: Location) -> Organism | None:
        """Return the organism at ``location``, or None if the cell is empty.

        Raises:
            IndexError: If the location is out of bounds.
        """
        if not self.in_bounds(location):
            msg = (
                f"({location.row}, {location.col}) out of bounds "
                f"for {self.depth}x{self.width}"
            )
            raise IndexError(msg)
        return self.cells[location.row][location.col]

    def is_free(self, location: Location) -> bool:
        """Return True if the cell is empty or holds a dead organism."""
        occupant = self.get_organism_at(location)
        return occupant is None or not occupant.alive

    def get_adjacent_locations(self, location: Location) -> list[Location]:
        """Return the in-bounds neighbours of ``location`` in random order.

        Args:
            location: The centre cell (excluded from the result).

        Returns:
            Up to 8 neighbouring locations, shuffled.
        """
        result: list[Location] = []
        for drow, dcol in _OFFSETS:
            neighbour = location.offset(drow, dcol)
            if self.in_bounds(neighbour):
                result.append(neighbour)
        self.rng.shuffle(result)
        return result

    def get_free_adjacent_locations(self, location: Location) -> list[Location]:
        """Return shuffled neighbours that are empty or hold a dead organism."""
        return [
            loc for loc in self.get_adjacent_locations(location) if self.is_free(loc)
        ]

    def get_free_locations(self) -> list[Location]:
        """Return every empty or dead-occupied cell in row-major order."""
        free: list[Location] = []
        for row in range(self.depth):
            for col in range(self.width):
                occupant = self.cells[row][col]
                if occupant is None or not occupant.alive:
                    free.append(Location(row, col))
        return free

    def field_stats(self) -> dict[str, int]:
        """Count living organisms per species.

        Required animal species are always present in the result, with
        a count of zero once extinct.

        Returns:
            Mapping of species name to living count.
        """
        counts: Counter[str] = Counter(
            org.species.name for org in self._organisms if org.alive
        )
        stats = {name: counts.get(name, 0) for name in REQUIRED_SPECIES}
        for name in sorted(counts):
            stats.setdefault(name, counts[name])
        return stats

    def is_viable(self) -> bool:
        """Return True if every required species has a living member."""
        missing = set(REQUIRED_SPECIES)
        for org in self._organisms:
            if org.alive:
                missing.discard(org.species.name)
                if not missing:
                    return True
        return not missing

    def clear(self) -> None:
        """Empty the arena and forget all organisms."""
        for row in self.cells:
            for col in range(self.width):
                row[col] = None
        self._organisms.clear()
