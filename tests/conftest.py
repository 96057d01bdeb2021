"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from langid_pipeline.corpus.models import Language
from langid_pipeline.encoding.letter_encoder import LetterEncoder

FIXTURES_DIR = Path(__file__).parent / "fixtures"


class FrequencyLearner:
    """Deterministic stand-in learner: per-language positional letter counts.

    Training adds ``targets.T @ features`` for every batch it is handed, and
    feed-forward scores are the normalised overlap with those counts.
    """

    def __init__(self, num_inputs: int, num_hidden: int, num_outputs: int) -> None:
        self.num_inputs = num_inputs
        self.num_hidden = num_hidden
        self.weights = np.zeros((num_outputs, num_inputs))
        self.batches_seen: list[int] = []

    def feed_forward(self, features: np.ndarray) -> np.ndarray:
        raw = features @ self.weights.T + 1.0
        return raw / raw.sum(axis=-1, keepdims=True)

    def train_on_batch_stream(self, stream, learning_rate, regularization, iterations) -> None:
        for i in range(iterations):
            features, targets = stream.batch(i)
            self.batches_seen.append(i)
            self.weights += learning_rate * (targets.T @ features)

    def cost_function(self, stream, regularization) -> float:
        total = 0.0
        rows = 0
        for features, targets in stream:
            total += float(((self.feed_forward(features) - targets) ** 2).sum())
            rows += features.shape[0]
        return total / max(rows, 1)


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def config_path() -> Path:
    return FIXTURES_DIR / "config_test.yaml"


@pytest.fixture
def english() -> Language:
    return Language.from_words("en", "English", ["the", "cat"])


@pytest.fixture
def spanish() -> Language:
    return Language.from_words("es", "Spanish", ["el", "gato"])


@pytest.fixture
def en_es(english: Language, spanish: Language) -> list[Language]:
    return [english, spanish]


@pytest.fixture
def encoder(en_es: list[Language]) -> LetterEncoder:
    return LetterEncoder.build(en_es)


@pytest.fixture
def learner_factory():
    return FrequencyLearner


@pytest.fixture
def word_file(tmp_path: Path):
    def write(name: str, lines: list[str]) -> Path:
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return write
