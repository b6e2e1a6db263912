"""Grid — the shared foraging board.

The Grid owns every tile value in a single 2D buffer and is the one
mutable resource read and written by the content generator, the path
resolver, the seabird and the boats.  Actors only ever hold coordinates
into it, never copies of cell state.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from seabird.world.cell import Cell

Position = tuple[int, int]


@dataclass
class Grid:
    """A fixed-size rectangular board of tagged cells.

    The nest is always present; the port house is optional so the
    boat-less layout can share the same board.  Both are placed once at
    construction and are excluded from any randomised content.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        nest: ``(x, y)`` of the seabird's nest.
        port: ``(x, y)`` of the port house, or None when boats are off.
        cells: 2D list of Cell values indexed as ``cells[y][x]``.
    """

    width: int
    height: int
    nest: Position
    port: Position | None = None
    cells: list[list[Cell]] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Fill the board with empty water and place the nest and port."""
        self.cells = [[Cell.EMPTY for _ in range(self.width)] for _ in range(self.height)]
        self.set(*self.nest, Cell.NEST)
        if self.port is not None:
            self.set(*self.port, Cell.PORT)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> Cell:
        """Return the cell value at ``(x, y)``.

        Raises:
            IndexError: If coordinates are out of bounds.
        """
        if not self.in_bounds(x, y):
            msg = f"({x}, {y}) out of bounds for {self.width}x{self.height}"
            raise IndexError(msg)
        return self.cells[y][x]

    def set(self, x: int, y: int, value: Cell) -> None:
        """Store ``value`` at ``(x, y)``.

        Only bounds are checked; callers keep the nest and port intact.

        Raises:
            IndexError: If coordinates are out of bounds.
        """
        if not self.in_bounds(x, y):
            msg = f"({x}, {y}) out of bounds for {self.width}x{self.height}"
            raise IndexError(msg)
        self.cells[y][x] = value

    def is_special(self, x: int, y: int) -> bool:
        """True if ``(x, y)`` is the nest or port coordinate."""
        return (x, y) == self.nest or (x, y) == self.port

    def positions(self) -> Iterator[Position]:
        """Yield every coordinate in scan order (row by row, left to right)."""
        for y in range(self.height):
            for x in range(self.width):
                yield x, y

    def content_positions(self) -> list[Position]:
        """Return every coordinate that may hold randomised content."""
        return [(x, y) for x, y in self.positions() if not self.is_special(x, y)]

    def fish_positions(self) -> list[Position]:
        """Return the coordinates of every fish, in scan order."""
        return [(x, y) for x, y in self.positions() if self.cells[y][x].is_fish]

    def fish_count(self) -> int:
        return sum(1 for row in self.cells for cell in row if cell.is_fish)

    def rows(self) -> tuple[tuple[Cell, ...], ...]:
        """Return an immutable copy of the board for rendering."""
        return tuple(tuple(row) for row in self.cells)
