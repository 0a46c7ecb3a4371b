"""Read-only rectangular windows over a grid."""

import numpy as np
from typing import Iterator, List

from .grid import Cell, Coord, Grid


def _as_2d(grid: Grid) -> np.ndarray:
    return grid.cells().reshape(grid.height, grid.width)


class GridView:
    """Non-copying view of the cells inside ``[start, end)`` of a grid.

    The view reads through to the grid on every iteration, so the grid
    must not be mutated or shrunk while the view is in use.

    Two views are equal when they have the same shape and the same cells;
    a view also compares equal to a grid of the same shape and content.
    """

    def __init__(self, grid: Grid, start: Coord, end: Coord):
        """Create a view.

        Args:
            grid: Grid to look into
            start: Inclusive top-left (x, y)
            end: Exclusive bottom-right (x, y)

        Raises:
            ValueError: If the rectangle is inverted or extends past the grid
        """
        (start_x, start_y), (end_x, end_y) = start, end
        if not (0 <= start_x <= end_x <= grid.width and 0 <= start_y <= end_y <= grid.height):
            raise ValueError(f"View {start}..{end} exceeds {grid.width}x{grid.height} grid")

        self._grid = grid
        self.start = (start_x, start_y)
        self.end = (end_x, end_y)

    @property
    def width(self) -> int:
        return self.end[0] - self.start[0]

    @property
    def height(self) -> int:
        return self.end[1] - self.start[1]

    def cells(self) -> Iterator[Cell]:
        """Yield the cells inside the rectangle, row by row."""
        (start_x, start_y), (end_x, end_y) = self.start, self.end
        buffer = self._grid.cells()
        grid_width = self._grid.width
        for y in range(start_y, end_y):
            row_start = y * grid_width
            for alive in buffer[row_start + start_x:row_start + end_x]:
                yield Cell.LIVE if alive else Cell.DEAD

    def _window(self) -> np.ndarray:
        """Read-only (height, width) slice of the grid buffer, not a copy."""
        (start_x, start_y), (end_x, end_y) = self.start, self.end
        return _as_2d(self._grid)[start_y:end_y, start_x:end_x]

    def iter_rows(self) -> Iterator[List[Cell]]:
        """Yield each row of the view as a list of cells."""
        for row in self._window():
            yield [Cell.LIVE if alive else Cell.DEAD for alive in row]

    def to_array(self) -> np.ndarray:
        """Get the viewed cells as a (height, width) numpy boolean array copy."""
        return self._window().copy()

    def __eq__(self, other: object) -> bool:
        if isinstance(other, GridView):
            other_cells = other._window()
        elif isinstance(other, Grid):
            other_cells = _as_2d(other)
        else:
            return NotImplemented
        return ((self.width, self.height) == (other.width, other.height) and
                np.array_equal(self._window(), other_cells))

    __hash__ = None

    def __str__(self) -> str:
        return '\n'.join(''.join(str(cell) for cell in row) for row in self.iter_rows())

    def __repr__(self) -> str:
        return f"GridView: {self.start}..{self.end}\n{self}"
