"""
torus-life: Conway's Game of Life on a wrap-around grid.

Grid storage, pluggable neighbor counting and transition rules, a
double-buffered stepping engine, read-only grid views and the plaintext
pattern file format.
"""

from .core import (
    Cell, Grid, GridView, LifeRule, World,
    rule_table, standard_rule, terminal_neighbors, torus_neighbors, wrap_index
)
from .errors import (
    InconsistentWidthError, InvalidCharacterError, PaddingError,
    PlaintextError, PlaintextIOError
)
from .formats import Padding, PlainText, parse_plaintext, read_plaintext, write_plaintext

__version__ = "0.1.0"

__all__ = [
    'Cell', 'Grid', 'GridView', 'World', 'LifeRule',
    'standard_rule', 'rule_table', 'torus_neighbors', 'terminal_neighbors', 'wrap_index',
    'Padding', 'PlainText', 'parse_plaintext', 'read_plaintext', 'write_plaintext',
    'PlaintextError', 'PlaintextIOError', 'InvalidCharacterError',
    'InconsistentWidthError', 'PaddingError',
]
