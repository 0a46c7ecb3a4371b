"""Game of Life stepping engine.

A World binds a grid to a generation counter, a transition rule and a
neighbor counting strategy. ``step_mut`` advances in place using a second,
lazily allocated buffer: each pass reads only the current grid, writes only
the scratch grid, then the two swap roles. After the first call no further
grids are allocated. ``step`` leaves the world untouched and returns a new one.

A World exclusively owns its grid. ``step_mut`` must not be called
concurrently on the same instance.
"""

from typing import Iterator, List, Optional, Tuple
import logging

from .grid import Cell, Coord, Grid
from .rules import NeighborCounter, RuleFn, standard_rule, torus_neighbors

logger = logging.getLogger(__name__)


class World:
    """A grid plus generation counter, rule and neighbor counter."""

    def __init__(self, grid: Grid,
                 rule: RuleFn = standard_rule,
                 neighbor_counter: NeighborCounter = torus_neighbors):
        """Initialize a world at generation 0.

        Args:
            grid: Initial state; the world takes ownership of it
            rule: Transition rule (standard Conway rules by default)
            neighbor_counter: Neighbor counting strategy (torus by default)
        """
        self._generation = 0
        self._current = grid
        self._previous: Optional[Grid] = None
        self._rule = rule
        self._neighbor_counter = neighbor_counter

        logger.debug(f"Created {grid.width}x{grid.height} world with "
                     f"{getattr(neighbor_counter, '__name__', neighbor_counter)} neighbors")

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def width(self) -> int:
        return self._current.width

    @property
    def height(self) -> int:
        return self._current.height

    @property
    def grid(self) -> Grid:
        """The live buffer. Replaced by the scratch buffer on every ``step_mut``."""
        return self._current

    @property
    def rule(self) -> RuleFn:
        return self._rule

    @rule.setter
    def rule(self, rule: RuleFn) -> None:
        self._rule = rule

    @property
    def neighbor_counter(self) -> NeighborCounter:
        return self._neighbor_counter

    @neighbor_counter.setter
    def neighbor_counter(self, neighbor_counter: NeighborCounter) -> None:
        self._neighbor_counter = neighbor_counter

    def _advance_into(self, source: Grid, target: Grid) -> None:
        """Write the next generation of ``source`` into ``target``."""
        rule = self._rule
        count_neighbors = self._neighbor_counter
        set_cell = target.set_cell
        for x, y, cell in source.iter_cells():
            set_cell(x, y, rule(cell, count_neighbors(source, x, y)))

    def step_mut(self) -> None:
        """Advance one generation in place, reusing the scratch buffer.

        Raises:
            RuntimeError: If the scratch buffer no longer matches the grid
                dimensions (the grid was resized behind the world's back)
        """
        current = self._current
        if self._previous is None:
            self._previous = Grid.create_dead(current.width, current.height)
            logger.debug(f"Allocated {current.width}x{current.height} scratch buffer")

        scratch = self._previous
        if scratch.width != current.width or scratch.height != current.height:
            raise RuntimeError(f"Scratch buffer {scratch.width}x{scratch.height} does not "
                               f"match grid {current.width}x{current.height}")

        self._advance_into(current, scratch)

        self._current, self._previous = scratch, current
        self._generation += 1

    def step(self) -> 'World':
        """Return a new world one generation ahead; this world is unchanged."""
        current = self._current
        next_grid = Grid.create_dead(current.width, current.height)
        self._advance_into(current, next_grid)

        world = World(next_grid, self._rule, self._neighbor_counter)
        world._generation = self._generation + 1
        return world

    def step_many(self, steps: int, mutate: bool = True) -> 'World':
        """Advance several generations.

        Args:
            steps: Number of generations
            mutate: Step in place (True) or chain immutable steps (False)

        Returns:
            The world holding the result: ``self`` when mutating
        """
        world = self
        for _ in range(steps):
            if mutate:
                world.step_mut()
            else:
                world = world.step()
        return world

    def write_cells(self, source: Grid, offset: Coord = (0, 0)) -> None:
        """Stamp ``source`` onto the live grid at ``offset``."""
        self._current.write_cells(source, offset)

    def iter_rows(self) -> Iterator[List[Cell]]:
        return self._current.iter_rows()

    def iter_cells(self) -> Iterator[Tuple[int, int, Cell]]:
        return self._current.iter_cells()

    def count_live(self) -> int:
        return self._current.count_live()

    def __repr__(self) -> str:
        return (f"World(generation={self._generation}, {self.width}x{self.height}, "
                f"alive={self.count_live()})")
