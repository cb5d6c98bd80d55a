"""Exceptions raised by strip-ansi."""

from __future__ import annotations


class StripError(Exception):
    """Stripping produced, or was given, something that is not valid text."""

    pass


class FilterError(Exception):
    """A line could not be processed and the error policy is ``abort``.

    Attributes:
        line_number: 1-based number of the offending input line.
    """

    def __init__(self, line_number: int, message: str):
        super().__init__(f"line {line_number}: {message}")
        self.line_number = line_number
