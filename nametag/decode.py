# nametag/decode.py

from __future__ import annotations

from enum import Enum
from typing import List, Optional, Tuple

import regex as re

from nametag.errors import MalformedLineError
from nametag.models import END_MARKER, Sample, Span


START_RE = re.compile(r"<START(?::([^:>\s]+))?>")
# anything that looks like a marker must parse as one
MARKER_PREFIX_RE = re.compile(r"<(?:START|END)(?=[:>]|$)")


class TokenKind(Enum):
    plain = 0
    start = 1
    end = 2


def classify(token: str) -> Tuple[TokenKind, Optional[str]]:
    """
    Classify one whitespace separated token of a tagged line.

    Returns the kind and, for a typed start marker, the type name.
    Raises ValueError on marker-like tokens with unrecognized syntax,
    e.g. `<START:>` or `<END:person>`.
    """
    if not MARKER_PREFIX_RE.match(token):
        return TokenKind.plain, None

    if token == END_MARKER:
        return TokenKind.end, None

    m = START_RE.fullmatch(token)
    if m is None:
        raise ValueError(f"Unrecognized marker {token!r}")
    return TokenKind.start, m.group(1)


def decode_line(line: str) -> Sample:
    """
    Decode one line of whitespace tokenized text with inline
    <START>, <START:type> and <END> markers.

    - Markers are not tokens, span indices count plain tokens only.
    - Only one entity may be open at a time.
    - Spans come back in the order their end markers appear.

    Raises MalformedLineError on any unmatched, nested or unrecognized marker.
    """
    tokens: List[str] = []
    spans: List[Span] = []
    open_markers: List[Tuple[int, Optional[str]]] = []

    for raw in line.split():
        try:
            kind, name_type = classify(raw)
        except ValueError as e:
            raise MalformedLineError(str(e), line) from e

        if kind is TokenKind.plain:
            tokens.append(raw)
        elif kind is TokenKind.start:
            if open_markers:
                raise MalformedLineError(
                    f"Nested start marker {raw!r} at token {len(tokens)}", line
                )
            open_markers.append((len(tokens), name_type))
        else:
            if not open_markers:
                raise MalformedLineError(
                    f"End marker without start marker at token {len(tokens)}", line
                )
            begin, name_type = open_markers.pop()
            spans.append(Span(begin, len(tokens), name_type))

    if open_markers:
        raise MalformedLineError(
            f"Start marker at token {open_markers[-1][0]} is never closed", line
        )

    try:
        return Sample(tokens=tuple(tokens), spans=tuple(spans))
    except ValueError as e:
        # e.g. two empty entities at the same position
        raise MalformedLineError(str(e), line) from e


def encode_sample(sample: Sample) -> str:
    """Render a sample in the bracket-tag line format."""
    return str(sample)
