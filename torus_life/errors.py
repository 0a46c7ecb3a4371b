"""Error types raised while reading Game of Life pattern text.

Malformed input is a recoverable condition, so every parse failure is
reported through a subclass of :class:`PlaintextError`. Callers such as
the command line driver catch the base class and print a diagnostic;
the subclasses let tests and tools tell the failure modes apart.

Programming errors (bad coordinates, mismatched buffer lengths) are not
covered here and surface as ``IndexError`` / ``ValueError``.
"""

from typing import Optional


class PlaintextError(ValueError):
    """Base class for all plaintext parsing errors."""


class PlaintextIOError(PlaintextError):
    """Input could not be read or decoded."""


class InvalidCharacterError(PlaintextError):
    """A body line contained something other than 'O', '.' or whitespace."""

    def __init__(self, char: str, line_number: Optional[int] = None):
        self.char = char
        self.line_number = line_number
        location = f" on line {line_number}" if line_number is not None else ""
        super().__init__(f"found character {char!r}{location}, expected 'O' or '.'")


class InconsistentWidthError(PlaintextError):
    """A body line did not match the width fixed by the first row."""

    def __init__(self, expected: int, found: int, line_number: Optional[int] = None):
        self.expected = expected
        self.found = found
        self.line_number = line_number
        location = f" on line {line_number}" if line_number is not None else ""
        super().__init__(f"expected width {expected}, found {found}{location}")


class PaddingError(PlaintextError):
    """A ``!Padding:`` expression could not be parsed."""

    def __init__(self, expression: str, reason: str):
        self.expression = expression
        self.reason = reason
        super().__init__(f"invalid padding expression {expression!r}: {reason}")
