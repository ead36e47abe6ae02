# nametag/training.py

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, List, Optional, Sequence

from nametag.config import TrainerConfig
from nametag.errors import CorpusError
from nametag.models import Sample, Span, TokenSample
from nametag.pipeline import project_document
from nametag.streams import SampleStream

logger = logging.getLogger(__name__)

# External trainer: receives every collected sample once, plus its settings.
Trainer = Callable[[Sequence[TokenSample], TrainerConfig], Any]


class TokenSampleCollector:
    """
    Collects one TokenSample per sentence of pre-annotated documents and
    hands the whole batch to a trainer exactly once.
    """

    def __init__(self, config: Optional[TrainerConfig] = None):
        self.config = config or TrainerConfig()
        self._samples: Optional[List[TokenSample]] = []

    def _owned(self) -> List[TokenSample]:
        if self._samples is None:
            raise RuntimeError("Samples were already handed to the trainer")
        return self._samples

    def add_document(
        self,
        text: str,
        sentences: Iterable[Span],
        tokens: Iterable[Span],
    ) -> int:
        """
        Project every sentence of a document. Returns the number of
        samples added.
        """
        samples = self._owned()
        projected = project_document(text, sentences, tokens)
        samples.extend(projected)
        added = len(projected)
        logger.debug("Collected %d sentences, %d in total", added, len(samples))
        return added

    def __len__(self) -> int:
        return len(self._samples or [])

    def train(self, trainer: Trainer) -> Any:
        samples = tuple(self._owned())
        # the trainer owns the batch from here on
        self._samples = None

        logger.info(
            "Training %s model on %d samples (skip_alpha_numerics=%s)",
            self.config.language,
            len(samples),
            self.config.skip_alpha_numerics,
        )
        return trainer(samples, self.config)


def feed_samples(stream: SampleStream, consumer: Callable[[Sample], Any]) -> int:
    """
    Pull every sample out of `stream` into `consumer`. The stream is closed
    when this returns, also if reading or the consumer fails.
    """
    count = 0
    try:
        for sample in stream:
            consumer(sample)
            count += 1
    except CorpusError as e:
        logger.error("Reading samples failed after %d samples: %s", count, e)
        raise
    finally:
        try:
            stream.close()
        except (OSError, CorpusError) as e:
            # must not mask the error that ended the loop
            logger.warning("Closing the sample stream failed: %s", e)

    logger.info("Consumed %d samples", count)
    return count
