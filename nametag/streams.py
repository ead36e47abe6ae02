# nametag/streams.py

from __future__ import annotations

import logging
import os
from typing import IO, Iterable, Iterator, Optional, Union

from nametag.config import CorpusConfig
from nametag.decode import decode_line
from nametag.errors import MalformedLineError, SampleStreamError
from nametag.models import Sample

logger = logging.getLogger(__name__)

LineSource = Union[str, "os.PathLike[str]", IO[str], Iterable[str]]


class LineStream:
    """
    Single-pass source of text lines.

    Accepts a path (opened with `encoding`), an open text file or any
    iterable of strings. Lines come back without their line terminator.
    The stream owns whatever it opened or was given and releases it on close().
    """

    def __init__(self, source: LineSource, encoding: str = "utf-8"):
        if isinstance(source, (str, os.PathLike)):
            try:
                self._file: Optional[IO[str]] = open(source, "r", encoding=encoding)
            except OSError as e:
                raise SampleStreamError(f"Cannot open {source}: {e}") from e
            self._lines: Optional[Iterator[str]] = iter(self._file)
        else:
            self._file = source if hasattr(source, "close") else None
            self._lines = iter(source)
        self.line_number = 0

    def read(self) -> Optional[str]:
        """Return the next line, or None once the source is exhausted."""
        if self._lines is None:
            return None
        try:
            line = next(self._lines)
        except StopIteration:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise SampleStreamError(
                f"Failed reading input after {self.line_number} delivered lines: {e}"
            ) from e

        self.line_number += 1
        return line.rstrip("\r\n")

    @property
    def closed(self) -> bool:
        return self._lines is None

    def close(self) -> None:
        if self._lines is None:
            return
        self._lines = None
        if self._file is not None:
            f, self._file = self._file, None
            f.close()

    def __iter__(self) -> Iterator[str]:
        while True:
            line = self.read()
            if line is None:
                return
            yield line

    def __enter__(self) -> "LineStream":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


class SampleStream:
    """
    Decodes a line source into Samples, one per line.

    A blank line produces a control sample (reset_adaptive_state=True) and
    consumes only that line. Any other line goes through decode_line; a
    malformed line fails the stream with the line number attached.
    """

    def __init__(self, lines: LineStream | Iterable[str]):
        if not isinstance(lines, LineStream):
            lines = LineStream(lines)
        self._lines = lines

    def read(self) -> Optional[Sample]:
        line = self._lines.read()
        if line is None:
            return None

        if not line.strip():
            logger.debug("Blank line %d, emitting reset sample", self._lines.line_number)
            return Sample.control()

        try:
            return decode_line(line)
        except MalformedLineError as e:
            raise e.at_line(self._lines.line_number) from e

    def close(self) -> None:
        self._lines.close()

    def __iter__(self) -> Iterator[Sample]:
        while True:
            sample = self.read()
            if sample is None:
                return
            yield sample

    def __enter__(self) -> "SampleStream":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


def open_sample_stream(path: str, config: CorpusConfig | None = None) -> SampleStream:
    """
    Open a tagged corpus file as a SampleStream. The caller must close it.
    """
    config = config or CorpusConfig()
    logger.info("Opening corpus %s (%s)", path, config.encoding)
    return SampleStream(LineStream(path, encoding=config.encoding))
