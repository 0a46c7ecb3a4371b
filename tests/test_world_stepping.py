"""
World Stepping Validation

Tests the double-buffered stepping engine against known Game of Life
behaviors (still lifes, oscillators, the glider) and checks generation
counting, buffer reuse and the immutable stepping path.
"""

import os

import numpy as np
import psutil
import pytest

from torus_life.core.grid import Cell, Grid
from torus_life.core.rules import LifeRule, standard_rule, terminal_neighbors, torus_neighbors
from torus_life.core.world import World
from torus_life.patterns import get_pattern, place_pattern, random_grid

O = Cell.LIVE
X = Cell.DEAD


def make_pipe_world() -> World:
    return World(Grid(4, 4, [
        X, X, X, O,
        X, X, X, O,
        X, X, X, O,
        X, X, X, X,
    ]))


def make_glider_world() -> World:
    return World(Grid(6, 5, [
        X, X, X, X, X, X,
        X, X, X, O, X, X,
        X, O, X, O, X, X,
        X, X, O, O, X, X,
        X, X, X, X, X, X,
    ]))


PIPE_AFTER_ONE_STEP = Grid(4, 4, [
    X, X, X, X,
    O, X, O, O,
    X, X, X, X,
    X, X, X, X,
])


class TestWorldCreation:
    """Test world construction and accessors."""

    def test_new_world_defaults(self):
        grid = Grid.create_dead(10, 10)
        world = World(grid)

        assert world.generation == 0
        assert world.grid is grid
        assert world.width == 10
        assert world.height == 10
        assert world.rule is standard_rule
        assert world.neighbor_counter is torus_neighbors

    def test_custom_strategies(self):
        rule = LifeRule.from_rulestring("B36/S23")
        world = World(Grid.create_dead(3, 3), rule, terminal_neighbors)
        assert world.rule is rule
        assert world.neighbor_counter is terminal_neighbors

    def test_repr(self):
        world = make_pipe_world()
        assert repr(world) == "World(generation=0, 4x4, alive=3)"


class TestWorldStepping:
    """Test known transitions of the standard rules."""

    def test_step_pipe_world_mutably(self):
        world = make_pipe_world()
        world.step_mut()
        assert world.grid == PIPE_AFTER_ONE_STEP

    def test_step_pipe_world_immutably(self):
        world = make_pipe_world()
        stepped = world.step()
        assert stepped.grid == PIPE_AFTER_ONE_STEP

    def test_glider_after_two_steps(self):
        world = make_glider_world()

        world.step_mut()
        world.step_mut()

        assert world.grid == Grid(6, 5, [
            X, X, X, X, X, X,
            X, X, X, O, X, X,
            X, X, X, X, O, X,
            X, X, O, O, O, X,
            X, X, X, X, X, X,
        ])

    def test_lonely_world_dies(self):
        world = World(Grid(3, 3, [
            X, X, X,
            X, O, X,
            X, X, X,
        ]))

        world.step_mut()
        world.step_mut()

        assert world.grid == Grid.create_dead(3, 3)

    def test_block_stable_still_life(self):
        """2x2 block remains unchanged across generations."""
        grid = Grid.create_dead(6, 6)
        place_pattern(grid, get_pattern('block'), (2, 2))
        expected = grid.copy()

        world = World(grid)
        for generation in range(20):
            world.step_mut()
            assert world.grid == expected, f"Block unstable at generation {generation}"

    def test_blinker_oscillates_period_2(self):
        grid = Grid.create_dead(5, 5)
        place_pattern(grid, get_pattern('blinker'), (1, 2))
        horizontal = grid.copy()

        world = World(grid)
        world.step_mut()
        vertical = world.grid.copy()

        assert vertical != horizontal
        assert vertical.count_live() == 3
        assert [vertical.cell_at(2, y) for y in range(1, 4)] == [O, O, O]

        world.step_mut()
        assert world.grid == horizontal

    def test_glider_returns_after_wrapping_torus(self):
        """On an 8x8 torus a glider shifts one cell diagonally per 4 generations."""
        grid = Grid.create_dead(8, 8)
        place_pattern(grid, get_pattern('glider'), (0, 0))
        start = grid.copy()

        world = World(grid)
        world.step_many(32)

        assert world.generation == 32
        assert world.grid == start

    def test_terminal_topology_loses_glider_at_edge(self):
        grid = Grid.create_dead(6, 6)
        place_pattern(grid, get_pattern('glider'), (3, 3))

        torus = World(grid.copy())
        bounded = World(grid.copy(), neighbor_counter=terminal_neighbors)
        torus.step_many(12)
        bounded.step_many(12)

        assert torus.count_live() == 5
        assert bounded.grid != torus.grid

    def test_custom_rule_is_used(self):
        world = World(Grid.create_dead(3, 3), lambda cell, neighbors: O)
        world.step_mut()
        assert world.count_live() == 9


class TestGenerationCounting:
    """Generation increases by exactly one per step."""

    def test_increment_generation(self):
        world = make_glider_world()
        assert world.generation == 0

        stepped = world.step()
        assert stepped.generation == 1
        assert world.generation == 0

        world.step_mut()
        assert world.generation == 1

    @pytest.mark.parametrize("mutate", [True, False])
    def test_monotonic(self, mutate):
        world = make_glider_world()
        for expected in range(1, 11):
            world = world.step_many(1, mutate=mutate)
            assert world.generation == expected

    def test_swapping_strategies_keeps_state(self):
        world = make_pipe_world()
        world.step_mut()
        before = world.grid.copy()

        world.rule = LifeRule.from_rulestring("B36/S23")
        world.neighbor_counter = terminal_neighbors

        assert world.generation == 1
        assert world.grid == before


class TestDoubleBuffering:
    """Test scratch buffer reuse in step_mut and isolation in step."""

    def test_step_mut_swaps_two_buffers(self):
        world = make_glider_world()
        first = world.grid

        world.step_mut()
        second = world.grid
        assert second is not first

        for _ in range(5):
            world.step_mut()
            assert world.grid is first
            world.step_mut()
            assert world.grid is second

    def test_dimensions_constant(self):
        world = make_glider_world()
        for _ in range(10):
            world.step_mut()
            assert (world.width, world.height) == (6, 5)

    def test_step_leaves_original_untouched(self):
        world = make_glider_world()
        before = world.grid.copy()

        stepped = world.step()

        assert world.grid == before
        assert stepped.grid is not world.grid
        stepped.grid.fill(O)
        assert world.grid == before

    def test_step_result_can_step_mutably(self):
        stepped = make_pipe_world().step()
        stepped.step_mut()
        assert stepped.generation == 2

    @pytest.mark.parametrize("seed", [1, 7, 42])
    def test_mutable_and_immutable_paths_agree(self, seed):
        grid = random_grid(12, 9, density=0.35, seed=seed)
        mutable = World(grid.copy())
        immutable = World(grid.copy())

        for _ in range(15):
            mutable.step_mut()
            immutable = immutable.step()
            assert mutable.grid == immutable.grid
            assert mutable.generation == immutable.generation

    def test_resized_grid_is_invariant_violation(self):
        world = make_glider_world()
        world.step_mut()
        world.grid.shrink((3, 3), (0, 0))

        with pytest.raises(RuntimeError, match="does not match"):
            world.step_mut()

    def test_memory_stays_flat(self):
        """Repeated in-place steps must not grow resident memory."""
        world = World(random_grid(32, 32, density=0.3, seed=3))
        world.step_mut()

        process = psutil.Process(os.getpid())
        memory_before = process.memory_info().rss / 1024 / 1024  # MB

        world.step_many(200)

        memory_after = process.memory_info().rss / 1024 / 1024
        assert memory_after - memory_before < 5.0, \
            f"Memory grew {memory_after - memory_before:.1f}MB over 200 steps"


class TestWorldEditing:
    """Test stamping patterns into a running world."""

    def test_write_cells_into_live_grid(self):
        world = World(Grid.create_dead(5, 5))
        world.write_cells(get_pattern('glider'), (1, 1))

        assert world.count_live() == 5
        assert world.grid.cell_at(2, 1) is O

    def test_write_cells_overflow(self):
        world = World(Grid.create_dead(5, 5))
        with pytest.raises(IndexError):
            world.write_cells(get_pattern('glider'), (3, 3))
        assert world.count_live() == 0

    def test_iteration_delegates_to_grid(self):
        world = make_pipe_world()
        assert list(world.iter_rows()) == list(world.grid.iter_rows())
        assert list(world.iter_cells()) == list(world.grid.iter_cells())
        assert np.array_equal(world.grid.to_array()[:, 3], [True, True, True, False])
