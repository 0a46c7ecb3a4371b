"""Named seed patterns and random grids.

Patterns are stored as plaintext bodies and parsed on demand, so every call
to :func:`get_pattern` returns an independent grid.
"""

import numpy as np
from typing import Dict, List, Optional, Tuple

from .core.grid import Coord, Grid

PATTERNS: Dict[str, str] = {
    # Still lifes
    'block': """
        OO
        OO
    """,
    'beehive': """
        .OO.
        O..O
        .OO.
    """,
    # Oscillators
    'blinker': """
        OOO
    """,
    'toad': """
        .OOO
        OOO.
    """,
    'beacon': """
        OO..
        OO..
        ..OO
        ..OO
    """,
    # Spaceships (moves one cell down-right every 4 generations)
    'glider': """
        .O.
        ..O
        OOO
    """,
    # Methuselahs
    'r-pentomino': """
        .OO
        OO.
        .O.
    """,
}


def available_patterns() -> List[str]:
    """Names accepted by :func:`get_pattern`, sorted."""
    return sorted(PATTERNS)


def get_pattern(name: str) -> Grid:
    """Get a fresh grid holding the named pattern.

    Raises:
        KeyError: If the name is unknown
    """
    try:
        body = PATTERNS[name]
    except KeyError:
        raise KeyError(f"Unknown pattern {name!r}, expected one of: "
                       f"{', '.join(available_patterns())}") from None
    return Grid.parse(body)


def rotate_pattern(pattern: Grid, clockwise_rotations: int = 1) -> Grid:
    """Rotate a pattern clockwise by the given number of quarter turns."""
    rotated = np.rot90(pattern.to_array(), k=-(clockwise_rotations % 4))
    height, width = rotated.shape
    return Grid(width, height, np.ascontiguousarray(rotated))


def centered_offset(grid: Grid, pattern: Grid) -> Coord:
    """Offset that centers ``pattern`` inside ``grid``.

    Raises:
        ValueError: If the pattern is larger than the grid
    """
    if pattern.width > grid.width or pattern.height > grid.height:
        raise ValueError(f"{pattern.width}x{pattern.height} pattern does not fit "
                         f"{grid.width}x{grid.height} grid")
    return (grid.width - pattern.width) // 2, (grid.height - pattern.height) // 2


def place_pattern(grid: Grid, pattern: Grid, offset: Optional[Coord] = None) -> Coord:
    """Stamp ``pattern`` onto ``grid``, centered unless an offset is given.

    Returns:
        The offset used
    """
    if offset is None:
        offset = centered_offset(grid, pattern)
    grid.write_cells(pattern, offset)
    return offset


def random_grid(width: int, height: int, density: float = 0.5,
                seed: Optional[int] = None) -> Grid:
    """Create a grid whose cells are live with probability ``density``.

    Args:
        width: Grid width (cells)
        height: Grid height (cells)
        density: Probability of a cell being live (0.0 to 1.0)
        seed: Seed for reproducible grids

    Raises:
        ValueError: If density is outside [0, 1]
    """
    if not 0.0 <= density <= 1.0:
        raise ValueError(f"Density must be between 0.0 and 1.0, got {density}")
    rng = np.random.default_rng(seed)
    return Grid(width, height, rng.random(width * height) < density)


def center_of_mass(grid: Grid) -> Tuple[float, float]:
    """Calculate center of mass of live cells.

    Returns:
        (x, y) coordinates of live cell centroid, (0.0, 0.0) for an empty grid
    """
    live_rows, live_cols = np.nonzero(grid.to_array())
    if len(live_rows) == 0:
        return (0.0, 0.0)
    return (float(np.mean(live_cols)), float(np.mean(live_rows)))
