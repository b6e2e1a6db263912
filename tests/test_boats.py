"""Tests for seabird.actors.boats — spawning, pursuit, harvest and return."""

import pytest
from numpy.random import Generator

from seabird.actors.boats import SPAWN_TIMER, Boat, BoatFleet
from seabird.simulation.config import GameConfig
from seabird.simulation.scheduler import Scheduler
from seabird.world.cell import Cell
from seabird.world.generator import ContentGenerator
from seabird.world.grid import Grid


@pytest.fixture
def barren(grid: Grid, rng: Generator) -> ContentGenerator:
    """A generator that only ever rolls arrows, so fish are placed by hand."""
    return ContentGenerator(grid=grid, rng=rng, fish_density=0.0, min_fish=0)


@pytest.fixture
def fleet(
    grid: Grid,
    barren: ContentGenerator,
    scheduler: Scheduler,
    default_config: GameConfig,
) -> BoatFleet:
    return BoatFleet(
        grid=grid,
        generator=barren,
        scheduler=scheduler,
        config=default_config,
    )


def _launch(fleet: BoatFleet, x: int, y: int) -> Boat:
    boat = fleet.spawn()
    assert boat is not None
    boat.x, boat.y = x, y
    return boat


class TestSpawn:
    """Tests for launching boats from the port."""

    def test_spawn_at_port(
        self,
        fleet: BoatFleet,
        grid: Grid,
        scheduler: Scheduler,
    ) -> None:
        grid.set(3, 2, Cell.FISH)
        boat = fleet.spawn()
        assert boat is not None
        assert boat.position == (0, 0)
        assert boat.target == (3, 2)
        assert fleet.boats == [boat]
        assert scheduler.is_active(boat.timer_key)

    def test_sequential_ids(self, fleet: BoatFleet, grid: Grid) -> None:
        grid.set(3, 2, Cell.FISH)
        first = fleet.spawn()
        second = fleet.spawn()
        assert first is not None and second is not None
        assert (first.boat_id, second.boat_id) == (1, 2)
        assert second.timer_key == "boat:2"

    def test_respects_max_boats(self, fleet: BoatFleet, grid: Grid) -> None:
        grid.set(3, 2, Cell.FISH)
        for _ in range(3):
            assert fleet.spawn() is not None
        assert fleet.spawn() is None
        assert len(fleet.boats) == 3

    def test_no_port_no_boats(
        self,
        rng: Generator,
        scheduler: Scheduler,
        default_config: GameConfig,
    ) -> None:
        board = Grid(width=8, height=4, nest=(7, 0))
        gen = ContentGenerator(grid=board, rng=rng)
        fleet = BoatFleet(
            grid=board,
            generator=gen,
            scheduler=scheduler,
            config=default_config,
        )
        board.set(3, 2, Cell.FISH)
        assert not fleet.enabled
        assert fleet.spawn() is None
        fleet.start()
        assert not scheduler.is_active(SPAWN_TIMER)

    def test_empty_board_regenerates_and_skips(
        self,
        grid: Grid,
        generator: ContentGenerator,
        scheduler: Scheduler,
        default_config: GameConfig,
    ) -> None:
        fleet = BoatFleet(
            grid=grid,
            generator=generator,
            scheduler=scheduler,
            config=default_config,
        )
        assert fleet.spawn() is None
        assert fleet.boats == []
        assert grid.fish_count() >= 5

    def test_spawner_timer(
        self,
        fleet: BoatFleet,
        grid: Grid,
        scheduler: Scheduler,
    ) -> None:
        grid.set(3, 2, Cell.FISH)
        fleet.start()
        scheduler.advance(2999)
        assert fleet.boats == []
        scheduler.advance(1)
        assert len(fleet.boats) == 1
        scheduler.advance(1000)
        assert fleet.boats[0].position == (1, 0)

    def test_stop_cancels_all_boat_timers(
        self,
        fleet: BoatFleet,
        grid: Grid,
        scheduler: Scheduler,
    ) -> None:
        grid.set(3, 2, Cell.FISH)
        fleet.start()
        fleet.spawn()
        fleet.spawn()
        fleet.stop()
        assert scheduler.owners == []


class TestPursuit:
    """Tests for target selection and movement."""

    def test_nearest_fish_by_manhattan(self, fleet: BoatFleet, grid: Grid) -> None:
        grid.set(3, 0, Cell.FISH)
        grid.set(0, 2, Cell.FISH)
        boat = Boat(boat_id=9, x=0, y=0)
        assert fleet.assign_target(boat) == (0, 2)

    def test_tie_goes_to_first_in_scan_order(
        self,
        fleet: BoatFleet,
        grid: Grid,
    ) -> None:
        grid.set(0, 2, Cell.FISH)
        grid.set(2, 0, Cell.FISH)
        boat = Boat(boat_id=9, x=0, y=0)
        assert fleet.assign_target(boat) == (2, 0)

    def test_larger_axis_first(self, fleet: BoatFleet, grid: Grid) -> None:
        grid.set(1, 3, Cell.FISH)
        boat = _launch(fleet, 0, 0)
        assert boat.target == (1, 3)
        fleet.step(boat)
        assert boat.position == (0, 1)

    def test_x_axis_on_ties(self, fleet: BoatFleet, grid: Grid) -> None:
        grid.set(2, 2, Cell.FISH)
        boat = _launch(fleet, 0, 0)
        fleet.step(boat)
        assert boat.position == (1, 0)
        fleet.step(boat)
        assert boat.position == (1, 1)

    def test_pursuit_clamped_to_bounds(self, fleet: BoatFleet, grid: Grid) -> None:
        grid.set(3, 2, Cell.FISH)
        boat = _launch(fleet, 11, 6)
        fleet.step(boat)
        assert grid.in_bounds(boat.x, boat.y)
        assert boat.position == (7, 3)

    def test_return_clamped_to_bounds(self, fleet: BoatFleet, grid: Grid) -> None:
        grid.set(3, 2, Cell.FISH)
        boat = _launch(fleet, -3, 9)
        boat.returning = True
        fleet.step(boat)
        assert grid.in_bounds(boat.x, boat.y)
        assert boat.position == (0, 3)

    def test_one_cell_per_step(self, fleet: BoatFleet, grid: Grid) -> None:
        grid.set(5, 3, Cell.FISH)
        boat = _launch(fleet, 0, 0)
        previous = boat.position
        for _ in range(8):
            fleet.step(boat)
            moved = abs(boat.x - previous[0]) + abs(boat.y - previous[1])
            assert moved == 1
            previous = boat.position
        assert boat.position == (5, 3)


class TestHarvest:
    """Tests for catching fish and heading home."""

    def test_harvest_rerolls_and_retargets(
        self,
        fleet: BoatFleet,
        grid: Grid,
    ) -> None:
        grid.set(3, 2, Cell.FISH)
        grid.set(5, 3, Cell.FISH)
        boat = _launch(fleet, 3, 2)
        assert boat.target == (3, 2)
        fleet.step(boat)
        assert boat.fish_held == 1
        assert grid.get(3, 2).is_arrow
        assert boat.target == (5, 3)
        assert not boat.returning

    def test_full_boat_returns(
        self,
        grid: Grid,
        barren: ContentGenerator,
        scheduler: Scheduler,
    ) -> None:
        fleet = BoatFleet(
            grid=grid,
            generator=barren,
            scheduler=scheduler,
            config=GameConfig(seed=7, boat_capacity=1),
        )
        grid.set(3, 2, Cell.FISH)
        grid.set(5, 3, Cell.FISH)
        boat = _launch(fleet, 3, 2)
        fleet.step(boat)
        assert boat.fish_held == 1
        assert boat.returning
        assert boat.target is None

    def test_fish_taken_by_seabird(self, fleet: BoatFleet, grid: Grid) -> None:
        grid.set(3, 2, Cell.FISH)
        boat = _launch(fleet, 3, 2)
        # the seabird harvests the cell first
        grid.set(3, 2, Cell.EMPTY)
        fleet.step(boat)
        assert boat.fish_held == 0
        assert boat.target is None
        assert boat.returning

    def test_fish_taken_retargets_when_others_remain(
        self,
        fleet: BoatFleet,
        grid: Grid,
    ) -> None:
        grid.set(3, 2, Cell.FISH)
        grid.set(6, 3, Cell.FISH)
        boat = _launch(fleet, 3, 2)
        grid.set(3, 2, Cell.EMPTY)
        fleet.step(boat)
        assert boat.fish_held == 0
        assert boat.target == (6, 3)

    def test_return_moves_x_first_and_docks(
        self,
        fleet: BoatFleet,
        grid: Grid,
        scheduler: Scheduler,
    ) -> None:
        grid.set(3, 2, Cell.FISH)
        boat = _launch(fleet, 2, 2)
        boat.returning = True
        visited = []
        for _ in range(4):
            fleet.step(boat)
            visited.append(boat.position)
        assert visited == [(1, 2), (0, 2), (0, 1), (0, 0)]
        fleet.step(boat)
        assert fleet.boats == []
        assert not scheduler.is_active(boat.timer_key)
