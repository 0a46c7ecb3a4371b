"""
Neighbor counting strategies and transition rules.

A transition rule maps ``(cell, live_neighbors)`` to the next cell state.
A neighbor counter maps ``(grid, x, y)`` to the number of live cells in the
Moore neighborhood. Both are plain callables so a World can swap them at
runtime; they are pure and called once per cell per step.
"""

import re
from dataclasses import dataclass
from typing import Callable, Dict, FrozenSet, Tuple

from .grid import Cell, Grid

RuleFn = Callable[[Cell, int], Cell]
NeighborCounter = Callable[[Grid, int, int], int]

# Standard Conway rules
SURVIVAL_SET: FrozenSet[int] = frozenset({2, 3})  # Live cells survive with 2-3 neighbors
BIRTH_SET: FrozenSet[int] = frozenset({3})        # Dead cells born with exactly 3 neighbors

_OFFSETS: Tuple[Tuple[int, int], ...] = tuple(
    (dx, dy) for dy in (-1, 0, 1) for dx in (-1, 0, 1) if (dx, dy) != (0, 0)
)


def wrap_index(current: int, delta: int, size: int) -> int:
    """Wrap ``current + delta`` onto ``[0, size)``."""
    return (current + delta) % size


def torus_neighbors(grid: Grid, x: int, y: int) -> int:
    """Count live neighbors of (x, y), wrapping around every edge.

    Args:
        grid: Grid containing the cell
        x: Cell x-coordinate
        y: Cell y-coordinate

    Returns:
        Number of live neighbors (0-8)
    """
    width, height = grid.width, grid.height
    count = 0
    for dx, dy in _OFFSETS:
        if grid.is_live((x + dx) % width, (y + dy) % height):
            count += 1
    return count


def terminal_neighbors(grid: Grid, x: int, y: int) -> int:
    """Count live neighbors of (x, y), treating cells beyond the edge as dead."""
    width, height = grid.width, grid.height
    count = 0
    for dx, dy in _OFFSETS:
        nx, ny = x + dx, y + dy
        if 0 <= nx < width and 0 <= ny < height and grid.is_live(nx, ny):
            count += 1
    return count


NEIGHBOR_COUNTERS: Dict[str, NeighborCounter] = {
    'torus': torus_neighbors,
    'terminal': terminal_neighbors,
}


def standard_rule(cell: Cell, live_neighbors: int) -> Cell:
    """Apply Conway's rules to determine next cell state.

    Args:
        cell: Current cell state
        live_neighbors: Number of live neighbors (0-8)

    Returns:
        Next cell state
    """
    if cell is Cell.LIVE:
        # Survival rule
        return Cell.LIVE if live_neighbors in SURVIVAL_SET else Cell.DEAD
    # Birth rule
    return Cell.LIVE if live_neighbors in BIRTH_SET else Cell.DEAD


_RULESTRING = re.compile(r'^\s*(?:B([0-8]*)/S([0-8]*)|S([0-8]*)/B([0-8]*))\s*$', re.IGNORECASE)


def _digits(text: str) -> FrozenSet[int]:
    return frozenset(int(c) for c in text)


@dataclass(frozen=True)
class LifeRule:
    """Birth/survival rule over the Moore neighborhood.

    Instances are callable with the same signature as :func:`standard_rule`,
    so they can be handed to a World directly.
    """

    survival: FrozenSet[int] = SURVIVAL_SET
    birth: FrozenSet[int] = BIRTH_SET

    def __post_init__(self):
        object.__setattr__(self, 'survival', frozenset(self.survival))
        object.__setattr__(self, 'birth', frozenset(self.birth))
        for count in self.survival | self.birth:
            if not 0 <= count <= 8:
                raise ValueError(f"Neighbor counts must be in 0..8, got {count}")

    @classmethod
    def standard(cls) -> 'LifeRule':
        """Create standard Conway rules (B3/S23)."""
        return cls(SURVIVAL_SET, BIRTH_SET)

    @classmethod
    def from_rulestring(cls, rulestring: str) -> 'LifeRule':
        """Parse a ``B3/S23`` style rulestring (``S23/B3`` order also accepted).

        Raises:
            ValueError: If the rulestring is malformed
        """
        match = _RULESTRING.match(rulestring)
        if match is None:
            raise ValueError(f"Invalid rulestring {rulestring!r}, expected e.g. 'B3/S23'")
        if match.group(1) is not None:
            birth, survival = match.group(1), match.group(2)
        else:
            survival, birth = match.group(3), match.group(4)
        return cls(_digits(survival), _digits(birth))

    @property
    def rulestring(self) -> str:
        birth = ''.join(str(n) for n in sorted(self.birth))
        survival = ''.join(str(n) for n in sorted(self.survival))
        return f"B{birth}/S{survival}"

    def __call__(self, cell: Cell, live_neighbors: int) -> Cell:
        if cell is Cell.LIVE:
            return Cell.LIVE if live_neighbors in self.survival else Cell.DEAD
        return Cell.LIVE if live_neighbors in self.birth else Cell.DEAD

    def __str__(self) -> str:
        return self.rulestring


def rule_table(rule: RuleFn) -> Dict[Tuple[Cell, int], Cell]:
    """Get the complete outcome table of a rule.

    Returns:
        Dictionary mapping (current_cell, neighbor_count) to next cell for
        both cell states and every neighbor count 0-8
    """
    return {(cell, neighbors): rule(cell, neighbors)
            for cell in Cell
            for neighbors in range(9)}
