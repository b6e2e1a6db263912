"""Path resolution — following arrow chains from the seabird to a fish.

A path trace starts on a cell and repeatedly applies the arrow stored
there until it lands on the target fish, leaves the board, hits a cell
that is neither an arrow nor the target, or revisits a cell.  Nothing is
random here: the route is fully determined by the arrows on the board at
the moment of the call, so only the player's rotations change it.

Two exit strategies from the nest are supported:

- **Nest-aware** (``NEST_AWARE``): a fish touching the nest is reached
  directly.  Otherwise every arrow around the nest is tried in compass
  order, each with its own visited set, and the first chain that reaches
  the fish wins.
- **Simple** (``SIMPLE``): the first arrow around the nest in compass
  order is committed to; there is no backtracking over other neighbours.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from seabird.world.cell import ARROW_ORDER

if TYPE_CHECKING:
    from seabird.world.grid import Grid, Position

logger = logging.getLogger(__name__)


class ResolverVariant(Enum):
    """How a trace leaves the nest."""

    NEST_AWARE = "nest_aware"
    SIMPLE = "simple"


@dataclass
class PathResolver:
    """Traces deterministic arrow paths over a grid.

    Attributes:
        grid: The board to read (never written).
        variant: Nest exit strategy.
    """

    grid: Grid
    variant: ResolverVariant = ResolverVariant.NEST_AWARE

    def find_path(self, start: Position, target: Position) -> list[Position] | None:
        """Return the cells visited on the way from ``start`` to ``target``.

        The starting nest cell is not part of the returned path; any other
        starting cell is.  The last element is always ``target``.

        Args:
            start: Current seabird position.
            target: Cell the player selected; must hold a fish.

        Returns:
            The ordered list of cells, or None if no chain reaches the
            target.
        """
        tx, ty = target
        if not self.grid.in_bounds(tx, ty) or not self.grid.get(tx, ty).is_fish:
            return None

        if start != self.grid.nest:
            return self.trace(start, target)

        if self.variant is ResolverVariant.SIMPLE:
            neighbours = self.adjacent_arrow_cells(start)
            if not neighbours:
                return None
            return self.trace(neighbours[0], target, visited={start})

        if _chebyshev(start, target) <= 1:
            return [target]
        for neighbour in self.adjacent_arrow_cells(start):
            path = self.trace(neighbour, target, visited={start})
            if path is not None:
                return path
        logger.debug("No arrow chain from the nest reaches %s", target)
        return None

    def adjacent_arrow_cells(self, origin: Position) -> list[Position]:
        """Return the arrow cells around ``origin`` in compass order."""
        ox, oy = origin
        result: list[Position] = []
        for direction in ARROW_ORDER:
            nx, ny = ox + direction.dx, oy + direction.dy
            if self.grid.in_bounds(nx, ny) and self.grid.get(nx, ny).is_arrow:
                result.append((nx, ny))
        return result

    def trace(
        self,
        start: Position,
        target: Position,
        visited: set[Position] | None = None,
    ) -> list[Position] | None:
        """Follow arrows from ``start`` until the target or a failure.

        The walk is also capped at the grid area as a hard step ceiling.

        Args:
            start: First cell of the chain.
            target: Cell that ends the chain successfully.
            visited: Cells already used by this attempt; extended in place.

        Returns:
            The chain including ``start`` and ``target``, or None on a dead
            end, an exit off the board, or a cycle.
        """
        seen = set() if visited is None else visited
        path: list[Position] = []
        x, y = start
        for _ in range(self.grid.width * self.grid.height):
            if (x, y) in seen:
                return None
            seen.add((x, y))
            path.append((x, y))
            if (x, y) == target:
                return path

            cell = self.grid.get(x, y)
            if not cell.is_arrow or cell.direction is None:
                return None
            nx, ny = x + cell.direction.dx, y + cell.direction.dy
            if not self.grid.in_bounds(nx, ny):
                return None
            x, y = nx, ny
        return None


def _chebyshev(a: Position, b: Position) -> int:
    return max(abs(a[0] - b[0]), abs(a[1] - b[1]))
