# tests/test_project.py

import pytest

from nametag.models import Span
from nametag.pipeline import project_document
from nametag.project import contained_in, project_sentence, project_token_spans


def test_projection_sorted_and_relative():
    spans = project_token_spans(Span(0, 20), [Span(10, 12), Span(0, 4)])
    assert spans == [Span(0, 4), Span(10, 12)]


def test_projection_relative_to_sentence_start():
    spans = project_token_spans(Span(100, 120), [Span(110, 112), Span(100, 104)])
    assert spans == [Span(0, 4), Span(10, 12)]


def test_partially_contained_token_is_excluded():
    sentence = Span(10, 20)
    tokens = [Span(8, 12), Span(10, 14), Span(18, 22), Span(15, 20)]
    assert list(contained_in(sentence, tokens)) == [Span(10, 14), Span(15, 20)]
    assert project_token_spans(sentence, tokens) == [Span(0, 4), Span(5, 10)]


def test_projection_drops_types():
    spans = project_token_spans(Span(0, 5), [Span(0, 5, "person")])
    assert spans == [Span(0, 5)]


def test_project_sentence_cuts_covered_text():
    text = "Hello world. Bye now."
    sample = project_sentence(
        text,
        Span(13, 21),
        [Span(0, 5), Span(6, 11), Span(13, 16), Span(17, 20), Span(20, 21)],
    )
    assert sample.text == "Bye now."
    assert sample.spans == (Span(0, 3), Span(4, 7), Span(7, 8))
    assert sample.tokens == ["Bye", "now", "."]


def test_project_document_one_sample_per_sentence():
    text = "Hello world. Bye now."
    tokens = [Span(17, 20), Span(0, 5), Span(20, 21), Span(6, 11), Span(11, 12), Span(13, 16)]
    samples = project_document(text, [Span(0, 12), Span(13, 21)], tokens)

    assert [s.tokens for s in samples] == [["Hello", "world", "."], ["Bye", "now", "."]]


def test_sentence_beyond_text_is_rejected():
    with pytest.raises(ValueError):
        project_sentence("short", Span(0, 10), [])
