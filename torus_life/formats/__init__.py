"""
Pattern file formats.
"""

from .padding import Padding
from .plaintext import PlainText, parse_plaintext, read_plaintext, save_plaintext, write_plaintext

__all__ = [
    'Padding',
    'PlainText',
    'parse_plaintext',
    'read_plaintext',
    'save_plaintext',
    'write_plaintext',
]
