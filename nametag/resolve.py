# nametag/resolve.py

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from nametag.models import Span


def sort_spans(spans: Iterable[Span]) -> List[Span]:
    """
    Sort spans ascending by start, ties broken by end.
    """
    return sorted(spans, key=lambda s: (s.start, s.end))


def find_overlap(spans: Iterable[Span]) -> Optional[Tuple[Span, Span]]:
    """
    Return the first pair of overlapping spans, or None if the spans are
    disjoint. An empty span only overlaps a span it sits strictly inside of.
    """
    result: Optional[Span] = None
    for span in sort_spans(spans):
        if span.length() == 0:
            if result is not None and result.start < span.start < result.end:
                return result, span
            continue
        if result is not None and result.overlaps(span):
            return result, span
        # keep the span reaching furthest right
        if result is None or span.end > result.end:
            result = span
    return None
