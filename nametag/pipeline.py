# nametag/pipeline.py

from __future__ import annotations

from typing import Iterable, List

from .models import Sample, Span, TokenSample
from .project import project_sentence
from .streams import SampleStream


def decode_text(text: str) -> List[Sample]:
    """
    Decode an in-memory corpus, one sample per line.

    Blank lines become reset samples. Fails on the first malformed line
    with MalformedLineError carrying its line number.
    """
    with SampleStream(text.splitlines()) as stream:
        return list(stream)


def project_document(
    text: str,
    sentences: Iterable[Span],
    tokens: Iterable[Span],
) -> List[TokenSample]:
    """
    One TokenSample per sentence, tokens given as character offsets into `text`.
    """
    tokens = list(tokens)
    return [project_sentence(text, sentence, tokens) for sentence in sentences]
