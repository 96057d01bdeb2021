"""Protocol for the feed-forward learner the classifier drives."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import numpy as np

from langid_pipeline.dataset.batch_stream import WordBatchStream


@runtime_checkable
class Learner(Protocol):
    """What the classifier needs from a trainable model.

    Weights, their initialisation and persistence are the learner's own
    business; the pipeline only supplies inputs and batch streams.
    """

    def feed_forward(self, features: np.ndarray) -> np.ndarray:
        """Per-class scores for a feature vector or a matrix of row vectors."""
        ...

    def train_on_batch_stream(
        self,
        stream: WordBatchStream,
        learning_rate: float,
        regularization: float,
        iterations: int,
    ) -> None:
        """Run *iterations* gradient steps, one per ``stream.batch(i)``."""
        ...

    def cost_function(self, stream: WordBatchStream, regularization: float) -> float:
        """Regularised cost over every batch of *stream*."""
        ...
