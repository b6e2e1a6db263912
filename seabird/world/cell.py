"""Cell — a single tile in the foraging grid.

Each cell holds exactly one tagged value: empty water, an arrow pointing
in one of eight compass directions, a fish, the nest, or the port house.
Cells are immutable; the grid swaps whole values rather than editing
them in place.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar


class Direction(Enum):
    """Compass directions an arrow can point, in rotation order.

    The member order is the fixed cyclic order used for arrow rotation
    and for scanning the cells around the nest.  ``y`` grows downward,
    so north is ``dy = -1``.
    """

    N = ("↑", 0, -1)
    NE = ("↗", 1, -1)
    E = ("→", 1, 0)
    SE = ("↘", 1, 1)
    S = ("↓", 0, 1)
    SW = ("↙", -1, 1)
    W = ("←", -1, 0)
    NW = ("↖", -1, -1)

    @property
    def glyph(self) -> str:
        """Arrow character used when the grid is drawn."""
        return self.value[0]

    @property
    def dx(self) -> int:
        return self.value[1]

    @property
    def dy(self) -> int:
        return self.value[2]

    def rotated(self) -> Direction:
        """Return the next direction clockwise (NW wraps to N)."""
        order = ARROW_ORDER
        return order[(order.index(self) + 1) % len(order)]


ARROW_ORDER: tuple[Direction, ...] = tuple(Direction)


class CellKind(Enum):
    """What a tile currently holds."""

    EMPTY = "empty"
    ARROW = "arrow"
    FISH = "fish"
    NEST = "nest"
    PORT = "port"


@dataclass(frozen=True)
class Cell:
    """A single tile value.

    Attributes:
        kind: Which kind of content the tile holds.
        direction: Arrow direction; only set when ``kind`` is ARROW.
    """

    kind: CellKind
    direction: Direction | None = None

    EMPTY: ClassVar[Cell]
    FISH: ClassVar[Cell]
    NEST: ClassVar[Cell]
    PORT: ClassVar[Cell]

    @classmethod
    def arrow(cls, direction: Direction) -> Cell:
        """Build an arrow cell pointing in ``direction``."""
        return cls(kind=CellKind.ARROW, direction=direction)

    @property
    def is_arrow(self) -> bool:
        return self.kind is CellKind.ARROW

    @property
    def is_fish(self) -> bool:
        return self.kind is CellKind.FISH

    @property
    def is_empty(self) -> bool:
        return self.kind is CellKind.EMPTY

    @property
    def is_special(self) -> bool:
        """True for the nest and port, which random content never touches."""
        return self.kind in (CellKind.NEST, CellKind.PORT)


Cell.EMPTY = Cell(CellKind.EMPTY)
Cell.FISH = Cell(CellKind.FISH)
Cell.NEST = Cell(CellKind.NEST)
Cell.PORT = Cell(CellKind.PORT)
