# nametag/models.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union

import regex as re

START_MARKER = "<START>"
TYPED_START_MARKER = "<START:{}>"
END_MARKER = "<END>"
# entity types must survive a trip through the tagged line format
TYPE_NAME_RE = re.compile(r"[^:>\s]+")


@dataclass(frozen=True)
class Span:
    """
    Half-open interval [start, end) over token indices or character offsets,
    optionally labeled with an entity type.

    Spans sort by start, then end. The type takes part in equality but not
    in ordering.
    """

    start: int
    end: int
    type: Optional[str] = None

    def __post_init__(self):
        if self.start < 0:
            raise ValueError(f"Invalid span [{self.start}, {self.end}): negative start")
        if self.start > self.end:
            raise ValueError(f"Invalid span [{self.start}, {self.end})")

    def _key(self) -> Tuple[int, int]:
        return self.start, self.end

    def __lt__(self, other: "Span") -> bool:
        if not isinstance(other, Span):
            return NotImplemented
        return self._key() < other._key()

    def __le__(self, other: "Span") -> bool:
        if not isinstance(other, Span):
            return NotImplemented
        return self._key() <= other._key()

    def __gt__(self, other: "Span") -> bool:
        if not isinstance(other, Span):
            return NotImplemented
        return self._key() > other._key()

    def __ge__(self, other: "Span") -> bool:
        if not isinstance(other, Span):
            return NotImplemented
        return self._key() >= other._key()

    def length(self) -> int:
        return self.end - self.start

    def contains(self, other: Union["Span", int]) -> bool:
        """
        True if `other` lies entirely within this span. An int is treated
        as a single index.
        """
        if isinstance(other, int):
            return self.start <= other < self.end
        return self.start <= other.start and other.end <= self.end

    def intersects(self, other: "Span") -> bool:
        return (
            self.contains(other)
            or other.contains(self)
            or self.start <= other.start < self.end
            or other.start <= self.start < other.end
        )

    def crosses(self, other: "Span") -> bool:
        """True if the spans intersect but neither contains the other."""
        return (
            not self.contains(other)
            and not other.contains(self)
            and (
                self.start <= other.start < self.end
                or other.start <= self.start < other.end
            )
        )

    def overlaps(self, other: "Span") -> bool:
        return not (self.end <= other.start or other.end <= self.start)

    def shift(self, offset: int) -> "Span":
        """Return the span moved `offset` positions to the left."""
        return Span(self.start - offset, self.end - offset, self.type)

    def covered_text(self, text: str) -> str:
        if self.end > len(text):
            raise ValueError(f"Span {self} exceeds text of length {len(text)}")
        return text[self.start:self.end]

    def __str__(self) -> str:
        s = f"[{self.start}..{self.end})"
        if self.type is not None:
            s += f" {self.type}"
        return s


@dataclass(frozen=True)
class Sample:
    """
    One training example decoded from a tagged line: the tokens and the
    entity spans over token indices.

    A sample with reset_adaptive_state=True is a pure control signal telling
    the consumer to drop whatever cross-sentence memory it keeps. It never
    carries tokens or spans.
    """

    tokens: Tuple[str, ...] = ()
    spans: Tuple[Span, ...] = ()
    reset_adaptive_state: bool = False

    def __post_init__(self):
        # accept lists from callers, store tuples
        object.__setattr__(self, "tokens", tuple(self.tokens))
        object.__setattr__(self, "spans", tuple(self.spans))

        if self.reset_adaptive_state and (self.tokens or self.spans):
            raise ValueError("A reset sample must not carry tokens or spans")

        for span in self.spans:
            if span.end > len(self.tokens):
                raise ValueError(
                    f"Span {span} is outside of the {len(self.tokens)} tokens"
                )
            if span.type is not None and not TYPE_NAME_RE.fullmatch(span.type):
                raise ValueError(f"Invalid entity type {span.type!r}")

        if len(set(self.spans)) != len(self.spans):
            raise ValueError("Sample contains duplicate spans")

        # local import, resolve depends on this module
        from .resolve import find_overlap

        pair = find_overlap(self.spans)
        if pair is not None:
            raise ValueError(f"Spans {pair[0]} and {pair[1]} overlap")

    @classmethod
    def control(cls) -> "Sample":
        return cls(reset_adaptive_state=True)

    def covered_tokens(self, span: Span) -> Tuple[str, ...]:
        return self.tokens[span.start:span.end]

    def __str__(self) -> str:
        """Render the sample back into the bracket-tag line format."""
        starts = {}
        ends = {}
        for span in self.spans:
            starts.setdefault(span.start, []).append(span)
            if span.length() > 0:
                ends[span.end] = ends.get(span.end, 0) + 1

        parts = []
        for i in range(len(self.tokens) + 1):
            parts.extend([END_MARKER] * ends.get(i, 0))
            # empty spans first, they close before a longer span opens
            for span in sorted(starts.get(i, []), key=lambda s: s.end):
                if span.type is None:
                    parts.append(START_MARKER)
                else:
                    parts.append(TYPED_START_MARKER.format(span.type))
                if span.length() == 0:
                    parts.append(END_MARKER)
            if i < len(self.tokens):
                parts.append(self.tokens[i])

        return " ".join(parts)


@dataclass(frozen=True)
class TokenSample:
    """
    A sentence and its token boundaries as character offsets relative to
    the start of the sentence, sorted ascending.
    """

    text: str
    spans: Tuple[Span, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "spans", tuple(self.spans))
        for span in self.spans:
            if span.end > len(self.text):
                raise ValueError(
                    f"Span {span} is outside of text of length {len(self.text)}"
                )

    @property
    def tokens(self) -> Sequence[str]:
        return [span.covered_text(self.text) for span in self.spans]
