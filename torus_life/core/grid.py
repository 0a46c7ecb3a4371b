"""Core grid state management for the Game of Life.

The grid owns a flat, row-major numpy boolean buffer (index ``y * width + x``)
plus its dimensions. It knows nothing about simulation rules: neighbor
counting and wrap-around live in :mod:`torus_life.core.rules`, stepping in
:mod:`torus_life.core.world`.

Coordinate access is strictly bounds-checked. Wrapping, where wanted, is the
caller's job.
"""

import numpy as np
from enum import Enum
from typing import Callable, Iterable, Iterator, List, Optional, Sequence, Tuple, Union
import logging

from ..errors import InconsistentWidthError, InvalidCharacterError

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]

LIVE_CHAR = 'O'
DEAD_CHAR = '.'


class Cell(Enum):
    """State of a single cell."""
    DEAD = False
    LIVE = True

    @classmethod
    def from_bool(cls, alive) -> 'Cell':
        return cls.LIVE if alive else cls.DEAD

    @classmethod
    def from_char(cls, char: str, line_number: Optional[int] = None) -> 'Cell':
        """Map a plaintext character ('O' or '.') to a cell.

        Raises:
            InvalidCharacterError: For any other character
        """
        if char == LIVE_CHAR:
            return cls.LIVE
        if char == DEAD_CHAR:
            return cls.DEAD
        raise InvalidCharacterError(char, line_number)

    def is_live(self) -> bool:
        return self is Cell.LIVE

    def is_dead(self) -> bool:
        return self is Cell.DEAD

    def __str__(self) -> str:
        return LIVE_CHAR if self.value else DEAD_CHAR


def parse_row(line: str, line_number: Optional[int] = None) -> List[Cell]:
    """Parse one body line into cells, ignoring whitespace."""
    return [Cell.from_char(c, line_number) for c in line if not c.isspace()]


def _as_buffer(cells) -> np.ndarray:
    """Convert cells (numpy bool array or iterable of Cell) to a flat bool buffer."""
    if isinstance(cells, np.ndarray):
        if cells.dtype != bool:
            raise ValueError("Cell array must be boolean")
        return cells.ravel().copy()
    return np.array([Cell(c).value for c in cells], dtype=bool)


class Grid:
    """Fixed-size rectangular grid of cells.

    Attributes:
        width: Grid width in cells
        height: Grid height in cells
    """

    def __init__(self, width: int, height: int,
                 cells: Optional[Union[np.ndarray, Iterable[Cell]]] = None):
        """Initialize grid with given dimensions.

        Args:
            width: Grid width (cells)
            height: Grid height (cells)
            cells: Row-major cells, exactly ``width * height`` of them.
                All cells are dead when omitted.

        Raises:
            ValueError: If dimensions are negative or the cell count doesn't match
        """
        if width < 0 or height < 0:
            raise ValueError(f"Grid dimensions must be non-negative, got {width}x{height}")

        self._width = width
        self._height = height

        if cells is None:
            self._cells = np.zeros(width * height, dtype=bool)
        else:
            buffer = _as_buffer(cells)
            if buffer.size != width * height:
                raise ValueError(f"Invalid height and width: {width}x{height} grid "
                                 f"needs {width * height} cells, got {buffer.size}")
            self._cells = buffer

    @classmethod
    def from_fn(cls, width: int, height: int, f: Callable[[int, int], Cell]) -> 'Grid':
        """Build a grid by calling ``f(x, y)`` once per coordinate, x varying fastest."""
        count = width * height
        cells = [f(i % width, i // width) for i in range(count)]
        return cls(width, height, cells)

    @classmethod
    def create_dead(cls, width: int, height: int) -> 'Grid':
        """Create a grid with every cell dead."""
        return cls(width, height)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Cell]]) -> 'Grid':
        """Create a grid from equal-length rows of cells."""
        height = len(rows)
        width = len(rows[0]) if rows else 0
        for row in rows:
            if len(row) != width:
                raise ValueError(f"All rows must have width {width}, found {len(row)}")
        return cls(width, height, [cell for row in rows for cell in row])

    @classmethod
    def parse(cls, text: str) -> 'Grid':
        """Parse a body of 'O'/'.' rows.

        Whitespace is ignored and blank lines are skipped. The first
        non-blank line fixes the width.

        Raises:
            InvalidCharacterError: On any other non-whitespace character
            InconsistentWidthError: If a row's width differs from the first row
        """
        rows: List[List[Cell]] = []
        for line_number, line in enumerate(text.splitlines(), start=1):
            row = parse_row(line, line_number)
            if not row:
                continue
            if rows and len(row) != len(rows[0]):
                raise InconsistentWidthError(len(rows[0]), len(row), line_number)
            rows.append(row)
        return cls.from_rows(rows)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def size(self) -> int:
        """Number of cells in the grid."""
        return self._width * self._height

    def cells(self) -> np.ndarray:
        """Read-only view of the flat row-major buffer."""
        view = self._cells.view()
        view.flags.writeable = False
        return view

    def to_array(self) -> np.ndarray:
        """Get grid as a (height, width) numpy boolean array copy."""
        return self._cells.reshape(self._height, self._width).copy()

    def _index(self, x: int, y: int) -> int:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"Coordinates ({x}, {y}) out of range for "
                             f"{self._width}x{self._height} grid")
        return y * self._width + x

    def cell_at(self, x: int, y: int) -> Cell:
        """Get cell at coordinates.

        Raises:
            IndexError: If coordinates are out of range (no wrapping)
        """
        return Cell.LIVE if self._cells[self._index(x, y)] else Cell.DEAD

    def is_live(self, x: int, y: int) -> bool:
        """Boolean shortcut for ``cell_at(x, y) is Cell.LIVE``."""
        return bool(self._cells[self._index(x, y)])

    def set_cell(self, x: int, y: int, cell: Cell) -> None:
        """Overwrite the cell at coordinates.

        Raises:
            IndexError: If coordinates are out of range
        """
        self._cells[self._index(x, y)] = cell.value

    def fill(self, cell: Cell) -> None:
        """Set every cell to the same state."""
        self._cells.fill(cell.value)

    def count_live(self) -> int:
        """Count total number of live cells."""
        return int(np.count_nonzero(self._cells))

    def copy(self) -> 'Grid':
        """Create a deep copy of the grid."""
        return Grid(self._width, self._height, self._cells)

    def shrink(self, size: Coord, offset: Coord = (0, 0)) -> None:
        """Shrink the grid in place to the rectangle at ``offset`` of ``size``.

        Kept cells retain their relative positions, everything else is
        discarded.

        Raises:
            ValueError: If ``offset + size`` exceeds the current dimensions
        """
        new_w, new_h = size
        off_x, off_y = offset

        if min(new_w, new_h, off_x, off_y) < 0:
            raise ValueError("Size and offset must be non-negative")
        if self._width < new_w + off_x or self._height < new_h + off_y:
            raise ValueError("new size plus offset must be at most current size")

        kept = self._cells.reshape(self._height, self._width)[off_y:off_y + new_h,
                                                              off_x:off_x + new_w]
        logger.debug(f"Shrinking {self._width}x{self._height} grid to "
                     f"{new_w}x{new_h} at ({off_x}, {off_y})")
        self._cells = np.ascontiguousarray(kept).ravel()
        self._width = new_w
        self._height = new_h

    def write_cells(self, source: 'Grid', offset: Coord = (0, 0)) -> None:
        """Overwrite cells starting at ``offset`` with the contents of ``source``.

        The whole footprint is checked before anything is written, so a
        failed call leaves this grid untouched.

        Raises:
            IndexError: If any part of ``source`` would land outside this grid
        """
        off_x, off_y = offset
        src_w, src_h = source.width, source.height

        if (off_x < 0 or off_y < 0 or
                off_x + src_w > self._width or off_y + src_h > self._height):
            raise IndexError(f"Writing {src_w}x{src_h} cells at ({off_x}, {off_y}) "
                             f"is out of range for {self._width}x{self._height} grid")

        target = self._cells.reshape(self._height, self._width)
        target[off_y:off_y + src_h, off_x:off_x + src_w] = \
            source._cells.reshape(src_h, src_w)

    def range(self, start: Coord, end: Coord) -> 'GridView':
        """Return a read-only view over the half-open rectangle ``[start, end)``."""
        from .gridview import GridView
        return GridView(self, start, end)

    def iter_rows(self) -> Iterator[List[Cell]]:
        """Yield each row as a list of cells, top to bottom."""
        for y in range(self._height):
            start = y * self._width
            yield [Cell.LIVE if v else Cell.DEAD
                   for v in self._cells[start:start + self._width]]

    def iter_cells(self) -> Iterator[Tuple[int, int, Cell]]:
        """Yield ``(x, y, cell)`` in row-major order."""
        width = self._width
        for index, alive in enumerate(self._cells):
            yield index % width, index // width, Cell.LIVE if alive else Cell.DEAD

    def debug_string(self) -> str:
        """Rendering prefixed with a ``WxH grid:`` header line."""
        return f"{self._width}x{self._height} grid:\n{self}"

    def __getitem__(self, key: Coord) -> Cell:
        """Access cell using grid[x, y] syntax."""
        x, y = key
        return self.cell_at(x, y)

    def __setitem__(self, key: Coord, value: Cell) -> None:
        """Set cell using grid[x, y] = cell syntax."""
        x, y = key
        self.set_cell(x, y, value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (self._width == other._width and
                self._height == other._height and
                np.array_equal(self._cells, other._cells))

    __hash__ = None

    def __str__(self) -> str:
        """Plaintext body: 'O' live, '.' dead, rows joined by newlines."""
        return '\n'.join(''.join(str(cell) for cell in row) for row in self.iter_rows())

    def __repr__(self) -> str:
        return self.debug_string()
