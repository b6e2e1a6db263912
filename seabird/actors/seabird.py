"""Seabird — the player's actor.

The seabird sits on its nest until the player picks a fish, then flies
the resolved arrow path one cell at a time.  While it is in transit it
holds a lock that blocks a second flight and any arrow rotation; the lock
is released only once it has landed back on the nest.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from seabird.world.cell import Cell

if TYPE_CHECKING:
    from seabird.world.grid import Grid, Position

logger = logging.getLogger(__name__)


@dataclass
class Seabird:
    """Position and in-transit lock for the seabird.

    Attributes:
        nest: Home coordinate; the bird starts and lands here.
        x: Current column.
        y: Current row.
        in_transit: True from take-off until landing.
    """

    nest: Position
    x: int = field(init=False)
    y: int = field(init=False)
    in_transit: bool = False

    def __post_init__(self) -> None:
        self.x, self.y = self.nest

    @property
    def position(self) -> Position:
        return self.x, self.y

    @property
    def at_nest(self) -> bool:
        return self.position == self.nest

    def rotate_arrow(self, grid: Grid, x: int, y: int) -> bool:
        """Turn the arrow at ``(x, y)`` to the next compass direction.

        Returns:
            False (with no change) while in transit, off the board, or on
            a cell that is not an arrow; True otherwise.
        """
        if self.in_transit or not grid.in_bounds(x, y):
            return False
        cell = grid.get(x, y)
        if not cell.is_arrow or cell.direction is None:
            return False
        grid.set(x, y, Cell.arrow(cell.direction.rotated()))
        return True

    def fly(self, path: list[Position]) -> Iterator[Position]:
        """Take off and return a step-by-step traversal of ``path``.

        The lock is taken immediately.  Each ``next()`` moves the bird onto
        the next cell and yields its new position; the caller paces the
        steps and calls :meth:`land` once the traversal is exhausted.

        Raises:
            RuntimeError: If the bird is already in transit.
        """
        if self.in_transit:
            msg = "seabird is already in transit"
            raise RuntimeError(msg)
        self.in_transit = True
        logger.debug("Seabird taking off along %d cells", len(path))
        return self._traverse(list(path))

    def return_to_nest(self) -> None:
        self.x, self.y = self.nest

    def land(self) -> None:
        """Return to the nest (if not already there) and release the lock."""
        self.return_to_nest()
        self.in_transit = False

    def _traverse(self, path: list[Position]) -> Iterator[Position]:
        for x, y in path:
            self.x, self.y = x, y
            yield x, y
