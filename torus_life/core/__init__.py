"""
Simulation core: grid storage, views, strategies and the stepping engine.
"""

from .grid import Cell, Coord, Grid
from .gridview import GridView
from .rules import (
    BIRTH_SET, NEIGHBOR_COUNTERS, SURVIVAL_SET, LifeRule, NeighborCounter, RuleFn,
    rule_table, standard_rule, terminal_neighbors, torus_neighbors, wrap_index
)
from .world import World

__all__ = [
    'Cell', 'Coord', 'Grid', 'GridView', 'World',
    'RuleFn', 'NeighborCounter', 'LifeRule', 'standard_rule', 'rule_table',
    'SURVIVAL_SET', 'BIRTH_SET',
    'NEIGHBOR_COUNTERS', 'torus_neighbors', 'terminal_neighbors', 'wrap_index',
]
