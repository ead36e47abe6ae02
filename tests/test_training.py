# tests/test_training.py

import logging

import pytest

from nametag.config import TrainerConfig
from nametag.errors import MalformedLineError, SampleStreamError
from nametag.models import Span
from nametag.streams import LineStream, SampleStream
from nametag.training import TokenSampleCollector, feed_samples


def test_collector_hands_samples_to_trainer_once():
    collector = TokenSampleCollector(TrainerConfig(skip_alpha_numerics=True))
    text = "Hello world. Bye now."
    added = collector.add_document(
        text,
        sentences=[Span(0, 12), Span(13, 21)],
        tokens=[Span(0, 5), Span(6, 11), Span(11, 12), Span(13, 16), Span(17, 20), Span(20, 21)],
    )
    assert added == 2
    assert len(collector) == 2

    received = {}

    def trainer(samples, config):
        received["samples"] = samples
        received["config"] = config
        return "model"

    assert collector.train(trainer) == "model"
    assert isinstance(received["samples"], tuple)
    assert received["samples"][1].tokens == ["Bye", "now", "."]
    assert received["config"].skip_alpha_numerics is True

    # the batch now belongs to the trainer
    assert len(collector) == 0
    with pytest.raises(RuntimeError):
        collector.train(trainer)
    with pytest.raises(RuntimeError):
        collector.add_document(text, [], [])


def test_feed_samples_closes_stream():
    closed = []

    class Source(list):
        def close(self):
            closed.append(True)

    seen = []
    count = feed_samples(SampleStream(Source(["a b", "", "c"])), seen.append)

    assert count == 3
    assert [s.reset_adaptive_state for s in seen] == [False, True, False]
    assert closed == [True]


def test_feed_samples_closes_stream_on_error():
    closed = []

    class Source(list):
        def close(self):
            closed.append(True)

    stream = SampleStream(Source(["a", "<START> b"]))
    with pytest.raises(MalformedLineError):
        feed_samples(stream, lambda sample: None)
    assert closed == [True]


def test_feed_samples_closes_stream_when_consumer_fails():
    closed = []

    class Source(list):
        def close(self):
            closed.append(True)

    def consumer(sample):
        raise KeyError("boom")

    with pytest.raises(KeyError):
        feed_samples(SampleStream(Source(["a"])), consumer)
    assert closed == [True]


class _FailingSource:
    def __init__(self, lines, close_error=None):
        self._lines = iter(lines)
        self.close_error = close_error
        self.closed = False

    def __iter__(self):
        return self

    def __next__(self):
        line = next(self._lines)
        if line is None:
            raise OSError("disk gone")
        return line

    def close(self):
        self.closed = True
        if self.close_error is not None:
            raise self.close_error


def test_feed_samples_closes_and_logs_on_read_failure(caplog):
    source = _FailingSource(["a", None])
    seen = []

    with caplog.at_level(logging.ERROR, logger="nametag.training"):
        with pytest.raises(SampleStreamError):
            feed_samples(SampleStream(LineStream(source)), seen.append)

    assert len(seen) == 1
    assert source.closed
    assert "after 1 samples" in caplog.text


def test_close_failure_does_not_hide_read_error():
    source = _FailingSource(["<START> b"], close_error=OSError("close failed"))

    with pytest.raises(MalformedLineError):
        feed_samples(SampleStream(LineStream(source)), lambda sample: None)
    assert source.closed
