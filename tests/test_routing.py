"""Tests for seabird.routing.resolver — arrow path tracing."""

import numpy as np
import pytest

from seabird.routing.resolver import PathResolver, ResolverVariant
from seabird.world.cell import Cell, Direction
from seabird.world.generator import ContentGenerator
from seabird.world.grid import Grid

NEST = (7, 0)


def _arrow(board: Grid, x: int, y: int, direction: Direction) -> None:
    board.set(x, y, Cell.arrow(direction))


@pytest.fixture
def nest_aware(grid: Grid) -> PathResolver:
    return PathResolver(grid=grid, variant=ResolverVariant.NEST_AWARE)


@pytest.fixture
def simple(grid: Grid) -> PathResolver:
    return PathResolver(grid=grid, variant=ResolverVariant.SIMPLE)


class TestPreconditions:
    """Targets must hold a fish."""

    def test_non_fish_target(self, nest_aware: PathResolver) -> None:
        assert nest_aware.find_path(NEST, (3, 1)) is None

    def test_out_of_bounds_target(self, nest_aware: PathResolver) -> None:
        assert nest_aware.find_path(NEST, (9, 9)) is None

    def test_target_already_occupied(self, grid: Grid, nest_aware: PathResolver) -> None:
        grid.set(4, 2, Cell.FISH)
        assert nest_aware.find_path((4, 2), (4, 2)) == [(4, 2)]


class TestNestAware:
    """Variant that tries every arrow around the nest."""

    def test_adjacent_fish_shortcut(self, grid: Grid, nest_aware: PathResolver) -> None:
        grid.set(6, 1, Cell.FISH)
        assert nest_aware.find_path(NEST, (6, 1)) == [(6, 1)]

    def test_simple_chain(self, grid: Grid, nest_aware: PathResolver) -> None:
        _arrow(grid, 6, 0, Direction.W)
        _arrow(grid, 5, 0, Direction.SW)
        grid.set(4, 1, Cell.FISH)
        assert nest_aware.find_path(NEST, (4, 1)) == [(6, 0), (5, 0), (4, 1)]

    def test_backtracks_over_neighbours(
        self,
        grid: Grid,
        nest_aware: PathResolver,
    ) -> None:
        # S neighbour leads nowhere; W neighbour reaches the fish
        _arrow(grid, 7, 1, Direction.S)
        _arrow(grid, 6, 0, Direction.W)
        _arrow(grid, 5, 0, Direction.W)
        grid.set(4, 0, Cell.FISH)
        assert nest_aware.find_path(NEST, (4, 0)) == [(6, 0), (5, 0), (4, 0)]

    def test_compass_order_breaks_ties(
        self,
        grid: Grid,
        nest_aware: PathResolver,
    ) -> None:
        _arrow(grid, 7, 1, Direction.SW)
        _arrow(grid, 6, 2, Direction.W)
        _arrow(grid, 6, 0, Direction.SW)
        _arrow(grid, 5, 1, Direction.S)
        grid.set(5, 2, Cell.FISH)
        assert nest_aware.find_path(NEST, (5, 2)) == [(7, 1), (6, 2), (5, 2)]

    def test_chain_back_into_nest_rejected(
        self,
        grid: Grid,
        nest_aware: PathResolver,
    ) -> None:
        _arrow(grid, 6, 0, Direction.E)
        grid.set(2, 3, Cell.FISH)
        assert nest_aware.find_path(NEST, (2, 3)) is None

    def test_off_board_rejected(self, grid: Grid, nest_aware: PathResolver) -> None:
        _arrow(grid, 6, 0, Direction.N)
        grid.set(2, 3, Cell.FISH)
        assert nest_aware.find_path(NEST, (2, 3)) is None

    def test_dead_end_rejected(self, grid: Grid, nest_aware: PathResolver) -> None:
        _arrow(grid, 6, 0, Direction.W)
        grid.set(2, 3, Cell.FISH)
        # (5, 0) is empty water
        assert nest_aware.find_path(NEST, (2, 3)) is None


class TestSimple:
    """Variant that commits to the first arrow off the nest."""

    def test_commits_to_first_neighbour(self, grid: Grid, simple: PathResolver) -> None:
        _arrow(grid, 7, 1, Direction.S)
        _arrow(grid, 6, 0, Direction.W)
        _arrow(grid, 5, 0, Direction.W)
        grid.set(4, 0, Cell.FISH)
        assert simple.find_path(NEST, (4, 0)) is None

    def test_follows_first_neighbour(self, grid: Grid, simple: PathResolver) -> None:
        _arrow(grid, 6, 0, Direction.W)
        _arrow(grid, 5, 0, Direction.W)
        grid.set(4, 0, Cell.FISH)
        assert simple.find_path(NEST, (4, 0)) == [(6, 0), (5, 0), (4, 0)]

    def test_no_arrow_around_nest(self, grid: Grid, simple: PathResolver) -> None:
        grid.set(6, 1, Cell.FISH)
        assert simple.find_path(NEST, (6, 1)) is None


class TestTracing:
    """Properties shared by both variants."""

    def test_trace_from_mid_board(self, grid: Grid, nest_aware: PathResolver) -> None:
        _arrow(grid, 3, 2, Direction.E)
        grid.set(4, 2, Cell.FISH)
        assert nest_aware.find_path((3, 2), (4, 2)) == [(3, 2), (4, 2)]

    @pytest.mark.parametrize("variant", list(ResolverVariant))
    def test_cycle_rejected(self, grid: Grid, variant: ResolverVariant) -> None:
        _arrow(grid, 6, 0, Direction.W)
        _arrow(grid, 5, 0, Direction.S)
        _arrow(grid, 5, 1, Direction.E)
        _arrow(grid, 6, 1, Direction.N)
        grid.set(1, 3, Cell.FISH)
        resolver = PathResolver(grid=grid, variant=variant)
        assert resolver.find_path(NEST, (1, 3)) is None

    def test_cycle_rejected_within_step_ceiling(self, grid: Grid) -> None:
        _arrow(grid, 2, 2, Direction.E)
        _arrow(grid, 3, 2, Direction.W)
        grid.set(1, 3, Cell.FISH)
        resolver = PathResolver(grid=grid)
        assert resolver.trace((2, 2), (1, 3)) is None

    @pytest.mark.parametrize("seed", range(10))
    def test_deterministic(self, seed: int) -> None:
        board = Grid(width=8, height=4, nest=NEST, port=(0, 0))
        ContentGenerator(
            grid=board,
            rng=np.random.default_rng(seed),
            fish_density=0.25,
            min_fish=5,
        ).generate()
        resolver = PathResolver(grid=board)
        for fish in board.fish_positions():
            first = resolver.find_path(NEST, fish)
            assert resolver.find_path(NEST, fish) == first
            if first is not None:
                assert first[-1] == fish
                assert len(first) <= board.width * board.height

    def test_adjacent_arrow_cells_in_compass_order(
        self,
        grid: Grid,
        nest_aware: PathResolver,
    ) -> None:
        for x, y in [(6, 0), (6, 1), (7, 1)]:
            _arrow(grid, x, y, Direction.N)
        assert nest_aware.adjacent_arrow_cells(NEST) == [(7, 1), (6, 1), (6, 0)]
