# nametag/project.py

from __future__ import annotations

from typing import Iterable, Iterator, List

from nametag.models import Span, TokenSample
from nametag.resolve import sort_spans


def contained_in(sentence: Span, tokens: Iterable[Span]) -> Iterator[Span]:
    """Yield the token intervals lying entirely within the sentence interval."""
    for token in tokens:
        if sentence.contains(token):
            yield token


def project_token_spans(sentence: Span, token_spans: Iterable[Span]) -> List[Span]:
    """
    Re-express token character intervals relative to the start of the
    sentence, sorted ascending.

    Tokens not contained in the sentence are dropped by the containment
    filter; nothing else is checked. Types are not carried over.
    """
    projected = [
        Span(token.start - sentence.start, token.end - sentence.start)
        for token in contained_in(sentence, token_spans)
    ]
    return sort_spans(projected)


def project_sentence(text: str, sentence: Span, token_spans: Iterable[Span]) -> TokenSample:
    """
    Build the TokenSample of one sentence of `text`, where `sentence` and
    `token_spans` are character offsets into `text`.
    """
    return TokenSample(
        text=sentence.covered_text(text),
        spans=tuple(project_token_spans(sentence, token_spans)),
    )
