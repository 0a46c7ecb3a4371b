"""Padding extension for plaintext pattern files.

``!Padding: top[,right[,bottom[,left]]]`` surrounds the parsed pattern with
dead cells, using CSS shorthand expansion:

    1 value  -> (t, t, t, t)
    2 values -> (t, r, t, r)
    3 values -> (t, r, b, r)
    4 values -> (t, r, b, l)
"""

from dataclasses import dataclass

from ..core.grid import Grid
from ..errors import PaddingError


@dataclass(frozen=True)
class Padding:
    """Dead-cell margins in the order top, right, bottom, left."""
    top: int = 0
    right: int = 0
    bottom: int = 0
    left: int = 0

    def __post_init__(self):
        if min(self.top, self.right, self.bottom, self.left) < 0:
            raise ValueError("Padding values must be non-negative")

    @classmethod
    def parse(cls, expression: str) -> 'Padding':
        """Parse a css-style ``top[,right[,bottom[,left]]]`` expression.

        Whitespace around each value is ignored.

        Raises:
            PaddingError: On an empty expression, more than four values or a
                value that is not a non-negative integer
        """
        parts = [part.strip() for part in expression.split(',')]
        if len(parts) > 4:
            raise PaddingError(expression, f"too many parts ({len(parts)}, at most 4)")

        values = []
        for part in parts:
            if not (part.isascii() and part.isdigit()):
                raise PaddingError(expression, f"part {part!r} is not a valid padding")
            values.append(int(part))

        top = values[0]
        right = values[1] if len(values) > 1 else top
        bottom = values[2] if len(values) > 2 else top
        left = values[3] if len(values) > 3 else right
        return cls(top, right, bottom, left)

    @property
    def is_empty(self) -> bool:
        return self.top == self.right == self.bottom == self.left == 0

    def apply(self, grid: Grid) -> Grid:
        """Return a new grid with ``grid`` surrounded by dead margins."""
        padded = Grid.create_dead(grid.width + self.left + self.right,
                                  grid.height + self.top + self.bottom)
        padded.write_cells(grid, (self.left, self.top))
        return padded

    def __str__(self) -> str:
        return f"{self.top},{self.right},{self.bottom},{self.left}"
