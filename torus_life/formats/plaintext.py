"""Reader and writer for the plaintext Game of Life file format.

A file is an optional header of ``!`` lines followed by a body of equal-width
rows of ``O`` (live) and ``.`` (dead)::

    !Name: Glider
    !Padding: 1,2
    ! The smallest spaceship.
    .O.
    ..O
    OOO

``!Name:`` sets the pattern name, ``!Padding:`` requests dead margins around
the body (see :mod:`torus_life.formats.padding`), any other ``!`` line is a
comment. Blank lines are skipped and whitespace around body rows is ignored.
"""

import io
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Union

from ..core.grid import Cell, Grid
from ..errors import InconsistentWidthError, PlaintextIOError
from .padding import Padding

logger = logging.getLogger(__name__)

NAME_PREFIX = 'Name:'
PADDING_PREFIX = 'Padding:'


@dataclass
class PlainText:
    """Contents of a plaintext pattern file.

    ``grid`` already has ``padding`` applied.
    """
    name: str = ''
    comment: str = ''
    grid: Grid = field(default_factory=lambda: Grid.create_dead(0, 0))
    padding: Padding = field(default_factory=Padding)

    @classmethod
    def from_str(cls, text: str) -> 'PlainText':
        return parse_plaintext(io.StringIO(text))

    def to_str(self) -> str:
        return write_plaintext(self)


def parse_plaintext(lines: Iterable[str]) -> PlainText:
    """Parse the plaintext format from any iterable of lines.

    Args:
        lines: File object, ``io.StringIO`` or list of strings

    Returns:
        Parsed document with padding applied to its grid

    Raises:
        PlaintextIOError: If reading the lines fails
        InvalidCharacterError: If a body row holds anything but 'O', '.' or whitespace
        InconsistentWidthError: If body rows differ in width
        PaddingError: If a ``!Padding:`` expression is malformed
    """
    name: Optional[str] = None
    comments: List[str] = []
    padding = Padding()
    rows: List[List[Cell]] = []
    in_body = False

    try:
        for line_number, raw in enumerate(lines, start=1):
            line = raw.strip()
            if not line:
                continue

            if not in_body and line.startswith('!'):
                header = line[1:]
                if header.startswith(NAME_PREFIX) and name is None:
                    name = header[len(NAME_PREFIX):].strip()
                elif header.startswith(PADDING_PREFIX):
                    padding = Padding.parse(header[len(PADDING_PREFIX):])
                else:
                    comments.append(header.strip())
                continue

            in_body = True
            # Surrounding whitespace is already stripped; anything inside is invalid
            row = [Cell.from_char(char, line_number) for char in line]
            if rows and len(row) != len(rows[0]):
                raise InconsistentWidthError(len(rows[0]), len(row), line_number)
            rows.append(row)
    except (OSError, UnicodeDecodeError) as exc:
        raise PlaintextIOError(f"Unable to read plaintext input: {exc}") from exc

    grid = Grid.from_rows(rows)
    if not padding.is_empty:
        grid = padding.apply(grid)

    logger.debug(f"Parsed plaintext pattern {name!r}: {grid.width}x{grid.height}, "
                 f"padding {padding}")

    return PlainText(name=name or '',
                     comment='\n'.join(comments).strip('\n'),
                     grid=grid,
                     padding=padding)


def read_plaintext(path: Union[str, Path]) -> PlainText:
    """Read and parse a plaintext pattern file.

    Raises:
        PlaintextIOError: If the file cannot be opened or decoded
        PlaintextError: Any other parse failure (see :func:`parse_plaintext`)
    """
    path = Path(path)
    try:
        with path.open('r', encoding='utf-8') as handle:
            return parse_plaintext(handle)
    except OSError as exc:
        raise PlaintextIOError(f"Unable to read {path}: {exc}") from exc


def write_plaintext(source: Union[PlainText, Grid],
                    name: Optional[str] = None,
                    comment: Optional[str] = None) -> str:
    """Serialize a document or grid to plaintext.

    Padding is never written: a document's grid already contains it.

    Args:
        source: Document or bare grid
        name: Overrides the document's name
        comment: Overrides the document's comment

    Returns:
        Text ending with a newline

    Raises:
        ValueError: If exactly one grid dimension is zero. Such a grid has no
            plaintext form: it would be read back as a 0x0 grid.
    """
    if isinstance(source, PlainText):
        grid = source.grid
        name = source.name if name is None else name
        comment = source.comment if comment is None else comment
    else:
        grid = source

    if (grid.width == 0) != (grid.height == 0):
        raise ValueError(f"Cannot write a {grid.width}x{grid.height} grid as plaintext")

    lines = []
    if name:
        lines.append(f"!{NAME_PREFIX} {name}")
    if comment:
        # The space keeps comment text from being read back as a directive
        lines.extend(f"! {text}" if text else '!' for text in comment.split('\n'))
    if grid.height:
        lines.append(str(grid))
    return '\n'.join(lines) + '\n'


def save_plaintext(path: Union[str, Path], source: Union[PlainText, Grid],
                   name: Optional[str] = None, comment: Optional[str] = None) -> None:
    """Write a document or grid to ``path`` in plaintext format."""
    Path(path).write_text(write_plaintext(source, name, comment), encoding='utf-8')
    logger.debug(f"Saved plaintext pattern to {path}")
