# nametag/errors.py

from __future__ import annotations

from typing import Optional


class CorpusError(Exception):
    """Base class for failures while reading a training corpus."""


class MalformedLineError(CorpusError, ValueError):
    """
    A line of the corpus could not be decoded: unmatched or nested
    markers, or marker syntax that is not recognized.
    """

    def __init__(self, reason: str, line: str, line_number: Optional[int] = None):
        self.reason = reason
        self.line = line
        self.line_number = line_number
        # args mirror the constructor so the error survives pickling
        super().__init__(reason, line, line_number)

    def __str__(self) -> str:
        where = f"line {self.line_number}: " if self.line_number is not None else ""
        return f"{where}{self.reason}: {self.line!r}"

    def at_line(self, line_number: int) -> "MalformedLineError":
        return MalformedLineError(self.reason, self.line, line_number)


class SampleStreamError(CorpusError, IOError):
    """The underlying line source failed to produce the next line."""
