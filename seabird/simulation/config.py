"""Config — load game parameters from YAML files.

All tunable values (grid size, nest and port placement, phase targets,
timer lengths, boat traffic, content density) live in YAML and are
parsed into a typed dataclass here, so a session can be reshaped without
touching code.  The defaults reproduce the boat-traffic layout; the
``config/simple.yaml`` preset reproduces the boat-less one.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path

import yaml

from seabird.routing.resolver import ResolverVariant
from seabird.world.grid import Position


@dataclass(frozen=True)
class GameConfig:
    """Session configuration.

    Attributes:
        seed: RNG seed for deterministic replay (None = fresh entropy).
        grid_width: Number of grid columns.
        grid_height: Number of grid rows.
        nest: ``(x, y)`` of the seabird's nest.
        port: ``(x, y)`` of the port house, or None for no boats at all.
        fish_density: Probability that a content cell becomes a fish.
        min_fish_floor: Lower bound on the fish floor.
        fish_needed_foraging: Deliveries needed to lay the egg.
        fish_needed_per_feeding: Deliveries per chick feeding.
        feedings_to_win: Completed feedings that win the game.
        incubation_time: Incubation countdown in seconds.
        feeding_time: Countdown per feeding in seconds.
        countdown_interval_ms: Real length of one countdown second.
        max_boats: Maximum boats on the water at once.
        boat_capacity: Fish a boat holds before heading home.
        boat_speed_ms: Milliseconds between boat steps.
        boat_spawn_interval_ms: Milliseconds between spawn attempts.
        flight_step_ms: Milliseconds between seabird steps (0 = instant).
        resolver: Nest exit strategy, ``"nest_aware"`` or ``"simple"``.
    """

    seed: int | None = None
    grid_width: int = 8
    grid_height: int = 4
    nest: Position = (7, 0)
    port: Position | None = (0, 0)

    # Content
    fish_density: float = 0.1
    min_fish_floor: int = 5

    # Phases
    fish_needed_foraging: int = 3
    fish_needed_per_feeding: int = 1
    feedings_to_win: int = 3
    incubation_time: int = 5
    feeding_time: int = 10
    countdown_interval_ms: int = 1000

    # Boats
    max_boats: int = 3
    boat_capacity: int = 3
    boat_speed_ms: int = 1000
    boat_spawn_interval_ms: int = 3000

    # Seabird
    flight_step_ms: int = 300
    resolver: str = ResolverVariant.NEST_AWARE.value

    def __post_init__(self) -> None:
        """Reject layouts and timings the simulation cannot run.

        Raises:
            ValueError: On any invalid setting.
        """
        # YAML and callers may pass [x, y] lists; the grid compares tuples
        object.__setattr__(self, "nest", _position(self.nest))
        if self.port is not None:
            object.__setattr__(self, "port", _position(self.port))

        if self.grid_width <= 0 or self.grid_height <= 0:
            msg = f"grid must be at least 1x1, got {self.grid_width}x{self.grid_height}"
            raise ValueError(msg)
        if not self._in_grid(self.nest):
            msg = f"nest {self.nest} is outside the grid"
            raise ValueError(msg)
        if self.port is not None:
            if not self._in_grid(self.port):
                msg = f"port {self.port} is outside the grid"
                raise ValueError(msg)
            if self.port == self.nest:
                msg = "nest and port cannot share a cell"
                raise ValueError(msg)
        if not 0.0 <= self.fish_density <= 1.0:
            msg = f"fish_density must be within [0, 1], got {self.fish_density}"
            raise ValueError(msg)
        try:
            ResolverVariant(self.resolver)
        except ValueError:
            msg = f"unknown resolver {self.resolver!r}"
            raise ValueError(msg) from None
        intervals = {
            "countdown_interval_ms": self.countdown_interval_ms,
            "boat_speed_ms": self.boat_speed_ms,
            "boat_spawn_interval_ms": self.boat_spawn_interval_ms,
        }
        for name, value in intervals.items():
            if value <= 0:
                msg = f"{name} must be positive, got {value}"
                raise ValueError(msg)
        counts = {
            "fish_needed_foraging": self.fish_needed_foraging,
            "fish_needed_per_feeding": self.fish_needed_per_feeding,
            "feedings_to_win": self.feedings_to_win,
            "incubation_time": self.incubation_time,
            "feeding_time": self.feeding_time,
            "boat_capacity": self.boat_capacity,
        }
        for name, value in counts.items():
            if value < 1:
                msg = f"{name} must be at least 1, got {value}"
                raise ValueError(msg)
        if self.max_boats < 0:
            msg = f"max_boats cannot be negative, got {self.max_boats}"
            raise ValueError(msg)
        if self.flight_step_ms < 0:
            msg = f"flight_step_ms cannot be negative, got {self.flight_step_ms}"
            raise ValueError(msg)

    @property
    def min_fish(self) -> int:
        """Fish floor kept on the board after every generation pass."""
        return max(self.min_fish_floor, self.fish_needed_foraging + 2)

    @property
    def resolver_variant(self) -> ResolverVariant:
        return ResolverVariant(self.resolver)

    def with_port_distance(self, distance: int) -> GameConfig:
        """Place the port ``distance`` tiles west of the nest on the top row.

        The column is clamped at 0 and the distance at 1, so the port
        never lands on the nest.
        """
        x = max(0, self.nest[0] - max(1, distance))
        return replace(self, port=(x, 0))

    def with_boats(self, count: int) -> GameConfig:
        """Return a copy allowing at most ``count`` boats (0 disables them)."""
        return replace(self, max_boats=max(0, count))

    @classmethod
    def from_yaml(cls, path: str | Path) -> GameConfig:
        """Load configuration from a YAML file.

        Missing keys fall back to the dataclass defaults.  ``port: null``
        removes the port (and with it all boat traffic).

        Args:
            path: Path to the YAML config file.

        Returns:
            A populated GameConfig instance.

        Raises:
            FileNotFoundError: If the config file does not exist.
            ValueError: If a value fails validation.
        """
        path = Path(path)
        with path.open("r") as f:
            data = yaml.safe_load(f) or {}

        return cls(
            seed=data.get("seed", cls.seed),
            grid_width=data.get("grid_width", cls.grid_width),
            grid_height=data.get("grid_height", cls.grid_height),
            nest=data.get("nest", cls.nest),
            port=data.get("port", cls.port),
            fish_density=data.get("fish_density", cls.fish_density),
            min_fish_floor=data.get("min_fish_floor", cls.min_fish_floor),
            fish_needed_foraging=data.get(
                "fish_needed_foraging",
                cls.fish_needed_foraging,
            ),
            fish_needed_per_feeding=data.get(
                "fish_needed_per_feeding",
                cls.fish_needed_per_feeding,
            ),
            feedings_to_win=data.get("feedings_to_win", cls.feedings_to_win),
            incubation_time=data.get("incubation_time", cls.incubation_time),
            feeding_time=data.get("feeding_time", cls.feeding_time),
            countdown_interval_ms=data.get(
                "countdown_interval_ms",
                cls.countdown_interval_ms,
            ),
            max_boats=data.get("max_boats", cls.max_boats),
            boat_capacity=data.get("boat_capacity", cls.boat_capacity),
            boat_speed_ms=data.get("boat_speed_ms", cls.boat_speed_ms),
            boat_spawn_interval_ms=data.get(
                "boat_spawn_interval_ms",
                cls.boat_spawn_interval_ms,
            ),
            flight_step_ms=data.get("flight_step_ms", cls.flight_step_ms),
            resolver=data.get("resolver", cls.resolver),
        )

    def _in_grid(self, pos: Position) -> bool:
        x, y = pos
        return 0 <= x < self.grid_width and 0 <= y < self.grid_height


def _position(value: list[int] | tuple[int, int]) -> Position:
    """Convert a YAML ``[x, y]`` list into a coordinate tuple."""
    x, y = value
    return int(x), int(y)
