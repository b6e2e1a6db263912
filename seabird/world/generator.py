"""Content generation — seeding and re-rolling the grid's arrows and fish.

Every operation here is total over the grid: it either rewrites a cell
with a fresh fish or arrow or leaves it alone, so the board is never left
half-generated.  A minimum fish count is re-applied after every bulk pass
so the player always has something to route toward.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from seabird.world.cell import ARROW_ORDER, Cell

if TYPE_CHECKING:
    from numpy.random import Generator

    from seabird.world.grid import Grid

logger = logging.getLogger(__name__)


@dataclass
class ContentGenerator:
    """Populates and regenerates randomised grid content.

    Attributes:
        grid: The board to write into.
        rng: Seeded random generator shared with the session.
        fish_density: Fraction of content cells that become fish.
        min_fish: Fish floor re-applied after every bulk pass.
    """

    grid: Grid
    rng: Generator
    fish_density: float = 0.1
    min_fish: int = 5

    def generate(self) -> None:
        """Fill every empty content cell with fish or arrows.

        The empty cells are shuffled, the first ``floor(n * density)``
        become fish and the rest get a uniformly random arrow.
        """
        empty = [
            (x, y)
            for x, y in self.grid.content_positions()
            if self.grid.get(x, y).is_empty
        ]
        order = self.rng.permutation(len(empty))
        fish_count = int(len(empty) * self.fish_density)
        for rank, index in enumerate(order):
            x, y = empty[int(index)]
            if rank < fish_count:
                self.grid.set(x, y, Cell.FISH)
            else:
                self.grid.set(x, y, self._random_arrow())
        self.ensure_minimum_fish()

    def ensure_minimum_fish(self) -> int:
        """Top the board up to ``min_fish`` fish.

        Converts randomly chosen empty or arrow cells into fish.  On a
        board with too few content cells the floor is capped by what is
        available.

        Returns:
            Number of fish added.
        """
        missing = self.min_fish - self.grid.fish_count()
        if missing <= 0:
            return 0

        candidates = [
            (x, y)
            for x, y in self.grid.content_positions()
            if not self.grid.get(x, y).is_fish
        ]
        order = self.rng.permutation(len(candidates))
        added = 0
        for index in order[:missing]:
            x, y = candidates[int(index)]
            self.grid.set(x, y, Cell.FISH)
            added += 1
        logger.debug("Fish floor topped up with %d fish", added)
        return added

    def regenerate_all(self) -> None:
        """Re-roll every content cell independently, then re-apply the floor."""
        for x, y in self.grid.content_positions():
            self.grid.set(x, y, self._roll_cell())
        self.ensure_minimum_fish()
        logger.debug("Grid regenerated (%d fish)", self.grid.fish_count())

    def replace_single_cell(self, x: int, y: int) -> None:
        """Re-roll one harvested cell so the fish supply never drains.

        The nest and port are never touched.
        """
        if self.grid.is_special(x, y):
            return
        self.grid.set(x, y, self._roll_cell())
        self.ensure_fish_available()

    def ensure_fish_available(self) -> bool:
        """Regenerate the whole board if no fish remain anywhere.

        Returns:
            True if a regeneration pass was needed.
        """
        if self.grid.fish_count() > 0:
            return False
        logger.debug("No fish left on the grid; regenerating")
        self.regenerate_all()
        return True

    # -- Private helpers --

    def _roll_cell(self) -> Cell:
        """Coin flip: fish with probability ``fish_density``, else an arrow."""
        if self.rng.random() < self.fish_density:
            return Cell.FISH
        return self._random_arrow()

    def _random_arrow(self) -> Cell:
        return Cell.arrow(ARROW_ORDER[int(self.rng.integers(len(ARROW_ORDER)))])
