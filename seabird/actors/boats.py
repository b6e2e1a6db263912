"""Boats — autonomous fishing traffic competing with the seabird.

Boats leave the port on a fixed spawn schedule whenever there is room on
the water and at least one fish on the grid.  Each boat then runs on its
own movement timer:

- **Pursuit**: head for the nearest fish (Manhattan distance, first found
  in scan order on ties), one step per tick along the axis with the
  larger remaining delta (x on ties).
- **Harvest**: on reaching the target, take the fish if it is still
  there and re-roll the cell; if the seabird got there first, simply
  pick a new target.
- **Return**: once full (or when no fish remain) steer back to the port,
  x first then y, and dock, which removes the boat and its timer.

Boats never talk to each other or to the seabird.  The only shared state
is the grid, and stale targets are resolved by re-checking the cell on
arrival rather than by locking.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from seabird.simulation.config import GameConfig
    from seabird.simulation.scheduler import Scheduler
    from seabird.world.generator import ContentGenerator
    from seabird.world.grid import Grid, Position

logger = logging.getLogger(__name__)

SPAWN_TIMER = "spawner"
BOAT_TIMER_PREFIX = "boat:"


@dataclass
class Boat:
    """A single fishing boat.

    Attributes:
        boat_id: Sequential identifier within the fleet.
        x: Current column.
        y: Current row.
        target: Fish cell being pursued, or None.
        fish_held: Fish caught so far (0..capacity).
        returning: True once the boat is heading back to port.
    """

    boat_id: int
    x: int
    y: int
    target: Position | None = None
    fish_held: int = 0
    returning: bool = False

    @property
    def position(self) -> Position:
        return self.x, self.y

    @property
    def timer_key(self) -> str:
        """Scheduler owner key for this boat's movement timer."""
        return f"{BOAT_TIMER_PREFIX}{self.boat_id}"


@dataclass
class BoatFleet:
    """Spawns, moves and retires boats on the shared grid.

    Attributes:
        grid: The shared board.
        generator: Used to re-roll harvested cells and recover from an
            empty board.
        scheduler: Timer registry for the spawner and every boat.
        config: Boat limits and timings.
        boats: Boats currently on the water.
    """

    grid: Grid
    generator: ContentGenerator
    scheduler: Scheduler
    config: GameConfig
    boats: list[Boat] = field(default_factory=list)
    _ids: itertools.count = field(
        default_factory=lambda: itertools.count(1),
        repr=False,
    )

    @property
    def enabled(self) -> bool:
        return self.grid.port is not None and self.config.max_boats > 0

    def start(self) -> None:
        """Begin periodic spawn attempts (no-op without a port or boats)."""
        if not self.enabled:
            return
        self.scheduler.every(
            SPAWN_TIMER,
            self.config.boat_spawn_interval_ms,
            self._spawn_tick,
        )

    def stop(self) -> None:
        """Cancel the spawner and every boat's movement timer."""
        self.scheduler.cancel(SPAWN_TIMER)
        self.scheduler.cancel_prefix(BOAT_TIMER_PREFIX)

    def spawn(self) -> Boat | None:
        """Launch a boat from the port if there is room and fish to chase.

        An empty board is regenerated but the spawn is skipped this round.

        Returns:
            The new boat, or None if nothing was launched.
        """
        if self.grid.port is None or len(self.boats) >= self.config.max_boats:
            return None
        if self.grid.fish_count() == 0:
            self.generator.ensure_fish_available()
            return None

        px, py = self.grid.port
        boat = Boat(boat_id=next(self._ids), x=px, y=py)
        self.assign_target(boat)
        if boat.target is None:
            return None

        self.boats.append(boat)
        self.scheduler.every(
            boat.timer_key,
            self.config.boat_speed_ms,
            lambda: self.step(boat),
        )
        logger.debug("Boat %d launched toward %s", boat.boat_id, boat.target)
        return boat

    def assign_target(self, boat: Boat) -> Position | None:
        """Point ``boat`` at the nearest fish.

        Distance is Manhattan; ties go to the first fish in scan order.
        An empty board is regenerated before giving up.

        Returns:
            The new target, or None if there are no fish at all.
        """
        fish = self.grid.fish_positions()
        if not fish:
            self.generator.ensure_fish_available()
            fish = self.grid.fish_positions()

        best: Position | None = None
        best_distance = 0
        for fx, fy in fish:
            distance = abs(boat.x - fx) + abs(boat.y - fy)
            if best is None or distance < best_distance:
                best, best_distance = (fx, fy), distance
        boat.target = best
        return best

    def step(self, boat: Boat) -> None:
        """Advance ``boat`` by one tick."""
        if boat.returning:
            self._step_home(boat)
        else:
            self._step_pursuit(boat)
        boat.x = max(0, min(self.grid.width - 1, boat.x))
        boat.y = max(0, min(self.grid.height - 1, boat.y))

    def remove(self, boat: Boat) -> None:
        """Take ``boat`` off the water and cancel its timer."""
        self.scheduler.cancel(boat.timer_key)
        if boat in self.boats:
            self.boats.remove(boat)
        logger.debug("Boat %d docked with %d fish", boat.boat_id, boat.fish_held)

    # -- Private behaviour methods --

    def _spawn_tick(self) -> None:
        if len(self.boats) < self.config.max_boats:
            self.spawn()

    def _step_pursuit(self, boat: Boat) -> None:
        target = boat.target or self.assign_target(boat)
        if target is None:
            boat.returning = True
            return

        tx, ty = target
        dx, dy = tx - boat.x, ty - boat.y
        if dx == 0 and dy == 0:
            self._harvest(boat)
        elif abs(dx) >= abs(dy):
            boat.x += 1 if dx > 0 else -1
        else:
            boat.y += 1 if dy > 0 else -1

    def _harvest(self, boat: Boat) -> None:
        """Take the fish under ``boat`` if it is still there, then re-target."""
        if self.grid.get(boat.x, boat.y).is_fish:
            self.generator.replace_single_cell(boat.x, boat.y)
            boat.fish_held += 1
            logger.debug("Boat %d harvested fish at %s", boat.boat_id, boat.position)
            if boat.fish_held >= self.config.boat_capacity:
                boat.target = None
                boat.returning = True
                return
        if self.assign_target(boat) is None:
            boat.returning = True

    def _step_home(self, boat: Boat) -> None:
        if self.grid.port is None:
            self.remove(boat)
            return
        px, py = self.grid.port
        dx, dy = px - boat.x, py - boat.y
        if dx == 0 and dy == 0:
            self.remove(boat)
        elif dx != 0:
            boat.x += 1 if dx > 0 else -1
        else:
            boat.y += 1 if dy > 0 else -1
