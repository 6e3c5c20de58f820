"""Location — an immutable coordinate in the field grid.

Locations carry no state of their own.  Occupancy lives in ``Field``
buffers, so the same Location value can be used to index any snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Location:
    """A single cell coordinate.

    Attributes:
        row: Row index (0 = top).
        col: Column index (0 = left).
    """

    row: int
    col: int

    def offset(self, drow: int, dcol: int) -> Location:
        """Return the location shifted by ``(drow, dcol)``."""
        return Location(self.row + drow, self.col + dcol)
