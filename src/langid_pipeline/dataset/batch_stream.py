"""Cyclically indexed (features, targets) batches over a dataset."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING

import numpy as np

from langid_pipeline.encoding.features import feature_width, fill_word_features
from langid_pipeline.encoding.letter_encoder import LetterEncoder
from langid_pipeline.errors import ConfigurationError, RangeError

if TYPE_CHECKING:
    from langid_pipeline.dataset.word_dataset import LanguageWordsDataset

logger = logging.getLogger(__name__)

Batch = tuple[np.ndarray, np.ndarray]


class WordBatchStream:
    """Produces training batches for a learner.

    ``batch(k)`` wraps around modulo :attr:`num_batches`, so a training loop can
    ask for more batches than one epoch holds.  Nothing is cached; each call
    assembles fresh matrices from the captured dataset.
    """

    def __init__(
        self,
        dataset: LanguageWordsDataset,
        max_word_length: int,
        encoder: LetterEncoder,
        batch_size: int,
    ) -> None:
        if encoder is None:
            raise ConfigurationError("letter encoder cannot be None")
        if max_word_length <= 0:
            raise ConfigurationError(f"Max word length ({max_word_length}) must be greater than 0")
        if batch_size <= 0:
            raise ConfigurationError(f"Batch size ({batch_size}) must be greater than 0")
        self.dataset = dataset
        self.max_word_length = max_word_length
        self.encoder = encoder
        self.batch_size = batch_size
        self.alphabet_size = encoder.alphabet_size

    @property
    def num_batches(self) -> int:
        return -(-len(self.dataset) // self.batch_size)

    @property
    def num_inputs(self) -> int:
        return feature_width(self.max_word_length, self.alphabet_size)

    @property
    def num_outputs(self) -> int:
        return self.dataset.num_languages

    def __len__(self) -> int:
        return self.num_batches

    def row_range(self, batch_index: int) -> range:
        """Dataset rows covered by *batch_index* after wrap-around."""
        num_batches = self.num_batches
        if num_batches == 0:
            raise RangeError("Cannot draw batches from an empty dataset")
        start = (batch_index % num_batches) * self.batch_size
        end = min(start + self.batch_size, len(self.dataset))
        return range(start, end)

    def batch(self, batch_index: int) -> Batch:
        rows = self.row_range(batch_index)
        features = np.zeros((len(rows), self.num_inputs), dtype=np.float64)
        targets = np.zeros((len(rows), self.num_outputs), dtype=np.float64)
        entries = self.dataset.entries
        for r, i in enumerate(rows):
            entry = entries[i]
            fill_word_features(
                entry.word, self.max_word_length, self.encoder, self.alphabet_size, features[r]
            )
            for label in entry.labels:
                targets[r, label] = 1.0
        logger.debug("Assembled batch %d (rows %d-%d)", batch_index, rows.start, rows.stop)
        return features, targets

    __getitem__ = batch

    def __iter__(self) -> Iterator[Batch]:
        """One epoch, in order."""
        for k in range(self.num_batches):
            yield self.batch(k)
