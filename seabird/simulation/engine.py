"""GameSession — the explicit session object that owns all game state.

A session builds every component from one configuration and wires them
together around a single grid and a single scheduler:

1. Content generator seeds the grid.
2. Path resolver reads the grid from the seabird's position.
3. The seabird flies resolved paths on the ``"flight"`` timer, then
   clears the fish, regenerates the grid and reports the delivery.
4. The boat fleet spawns and moves boats on its own timers.
5. The phase machine runs the countdowns and ends the session.

Nothing here waits on real time.  The caller moves the logical clock
with :meth:`GameSession.advance` (a presentation adapter does this from
its frame clock), and every timer callback runs to completion.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

import numpy as np
from numpy.random import Generator

from seabird.actors.boats import Boat, BoatFleet
from seabird.actors.seabird import Seabird
from seabird.routing.resolver import PathResolver
from seabird.simulation.config import GameConfig
from seabird.simulation.events import EventBus, GameEvent
from seabird.simulation.phases import Outcome, Phase, PhaseMachine
from seabird.simulation.scheduler import Scheduler
from seabird.simulation.snapshot import SessionSnapshot, build_snapshot
from seabird.world.cell import Cell
from seabird.world.generator import ContentGenerator
from seabird.world.grid import Grid, Position

logger = logging.getLogger(__name__)

FLIGHT_TIMER = "flight"

NO_PATH_MESSAGE = "No valid path to fish!"
CATCH_MESSAGE = "Fish collected!"


@dataclass
class GameSession:
    """One play-through, from an empty nest to a raised or starved chick.

    Attributes:
        config: Loaded game configuration.
        events: Notification bus; subscriptions survive restarts.
        scheduler: Logical clock and timer registry.
        rng: Seeded random generator for all content rolls.
        grid: The shared board.
        generator: Fills and re-rolls grid content.
        resolver: Arrow path tracer.
        seabird: The player's actor.
        fleet: Boat traffic.
        phases: Foraging / incubation / chick-care state machine.
        flight_path: Cells of the route being flown, empty on the nest.
    """

    config: GameConfig
    events: EventBus = field(default_factory=EventBus)
    scheduler: Scheduler = field(init=False)
    rng: Generator = field(init=False)
    grid: Grid = field(init=False)
    generator: ContentGenerator = field(init=False)
    resolver: PathResolver = field(init=False)
    seabird: Seabird = field(init=False)
    fleet: BoatFleet = field(init=False)
    phases: PhaseMachine = field(init=False)
    flight_path: tuple[Position, ...] = field(init=False, default=())
    _flight: Iterator[Position] | None = field(init=False, default=None, repr=False)
    _flight_target: Position | None = field(init=False, default=None, repr=False)

    def __post_init__(self) -> None:
        """Build every component from config and start boat traffic."""
        self._build()

    # -- State queries --

    @property
    def running(self) -> bool:
        return not self.phases.ended

    @property
    def in_transit(self) -> bool:
        return self.seabird.in_transit

    @property
    def phase(self) -> Phase:
        return self.phases.phase

    @property
    def outcome(self) -> Outcome | None:
        return self.phases.outcome

    @property
    def fish_collected(self) -> int:
        return self.phases.fish_collected

    @property
    def feedings_completed(self) -> int:
        return self.phases.feedings_completed

    @property
    def timer_value(self) -> int:
        return self.phases.timer_value

    @property
    def boats(self) -> list[Boat]:
        return self.fleet.boats

    # -- Player actions --

    def rotate_arrow(self, x: int, y: int) -> bool:
        """Rotate the arrow at ``(x, y)``.

        Returns:
            False without touching the grid if the session has ended, the
            seabird is in transit, or the cell holds no arrow.
        """
        if not self.running:
            return False
        return self.seabird.rotate_arrow(self.grid, x, y)

    def find_path(self, x: int, y: int) -> list[Position] | None:
        """Trace the arrow path from the seabird to the fish at ``(x, y)``."""
        return self.resolver.find_path(self.seabird.position, (x, y))

    def move_to_fish(self, x: int, y: int) -> bool:
        """Send the seabird after the fish at ``(x, y)``.

        A second request while the bird is in transit is rejected, not
        queued.  An unreachable fish emits ``PATH_INVALID`` and changes
        nothing.  With ``flight_step_ms == 0`` the whole flight completes
        before this call returns; otherwise it advances one cell per
        flight tick.

        Returns:
            True if the seabird took off.
        """
        if not self.running or self.seabird.in_transit:
            logger.debug("Move to (%d, %d) rejected", x, y)
            return False

        path = self.find_path(x, y)
        if path is None:
            logger.debug("No path to (%d, %d)", x, y)
            self.events.emit(GameEvent.PATH_INVALID, NO_PATH_MESSAGE)
            return False

        self._flight = self.seabird.fly(path)
        self._flight_target = (x, y)
        self.flight_path = tuple(path)
        if self.config.flight_step_ms == 0:
            while self._flight is not None:
                self._flight_step()
        else:
            self.scheduler.every(
                FLIGHT_TIMER,
                self.config.flight_step_ms,
                self._flight_step,
            )
        return True

    # -- Time --

    def advance(self, ms: int) -> None:
        """Move the logical clock forward, firing every due timer."""
        self.scheduler.advance(ms)

    def run(self, duration_ms: int, step_ms: int = 100) -> None:
        """Advance in ``step_ms`` slices for ``duration_ms`` or until the end.

        Args:
            duration_ms: Total logical time to simulate.
            step_ms: Size of each slice.
        """
        elapsed = 0
        while elapsed < duration_ms and self.running:
            chunk = min(step_ms, duration_ms - elapsed)
            self.advance(chunk)
            elapsed += chunk

    def restart(self) -> None:
        """Cancel every timer, then rebuild the session from scratch."""
        self.scheduler.cancel_all()
        self._build()
        logger.info("Session restarted")

    def snapshot(self) -> SessionSnapshot:
        """Return a read-only view of the board and status for rendering."""
        return build_snapshot(self)

    # -- Private helpers --

    def _build(self) -> None:
        cfg = self.config
        self.scheduler = Scheduler()
        self.rng = np.random.default_rng(cfg.seed)
        self.grid = Grid(
            width=cfg.grid_width,
            height=cfg.grid_height,
            nest=cfg.nest,
            port=cfg.port,
        )
        self.generator = ContentGenerator(
            grid=self.grid,
            rng=self.rng,
            fish_density=cfg.fish_density,
            min_fish=cfg.min_fish,
        )
        self.generator.generate()
        self.resolver = PathResolver(grid=self.grid, variant=cfg.resolver_variant)
        self.seabird = Seabird(nest=cfg.nest)
        self.phases = PhaseMachine(
            config=cfg,
            scheduler=self.scheduler,
            events=self.events,
        )
        self.fleet = BoatFleet(
            grid=self.grid,
            generator=self.generator,
            scheduler=self.scheduler,
            config=cfg,
        )
        self._flight = None
        self._flight_target = None
        self.flight_path = ()
        self.fleet.start()
        logger.info(
            "Session started: %dx%d grid, %d fish, %d boats max",
            cfg.grid_width,
            cfg.grid_height,
            self.grid.fish_count(),
            cfg.max_boats if self.fleet.enabled else 0,
        )

    def _flight_step(self) -> None:
        """Move the seabird one cell, landing once the path is used up."""
        if self._flight is None:
            return
        try:
            next(self._flight)
        except StopIteration:
            self._land()

    def _land(self) -> None:
        """Collect the target fish, fly home and report the delivery."""
        self.scheduler.cancel(FLIGHT_TIMER)
        self._flight = None
        target, self._flight_target = self._flight_target, None
        if target is not None:
            self.grid.set(*target, Cell.EMPTY)
        self.events.emit(GameEvent.FISH_CAUGHT, CATCH_MESSAGE)
        self.seabird.return_to_nest()
        self.generator.regenerate_all()
        self.seabird.land()
        self.flight_path = ()
        self.phases.record_delivery()
