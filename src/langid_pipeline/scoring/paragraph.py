"""Paragraph-level language scoring by a running geometric mean.

After the i-th word (0-based) each language's score is updated as::

    score <- score ** (i / (i + 1)) * result ** (1 / (i + 1))

so after n words the score is the geometric mean of the n per-word results,
with every word weighted equally and no history kept.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Mapping, Sequence

import numpy as np

from langid_pipeline.corpus.models import Language
from langid_pipeline.encoding.letter_encoder import LetterEncoder
from langid_pipeline.errors import ConfigurationError

logger = logging.getLogger(__name__)

_WORD_SEPARATORS = re.compile(r"[\s_]+")

WordModel = Callable[[str], Sequence[float] | np.ndarray]


def split_paragraph(text: str) -> list[str]:
    """Split on whitespace and underscores, dropping empty pieces."""
    return [w for w in _WORD_SEPARATORS.split(text) if w]


def update_geometric_mean(scores: np.ndarray, result: np.ndarray, i: int) -> np.ndarray:
    """Fold the results of word *i* into the running scores."""
    with np.errstate(invalid="ignore", divide="ignore"):
        return np.power(scores, i / (i + 1.0)) * np.power(result, 1.0 / (i + 1))


def best_language(scores: Mapping[Language, float], languages: Sequence[Language]) -> Language:
    """Highest-scoring language; ties go to the earliest in *languages*."""
    best = languages[0]
    for language in languages[1:]:
        if scores[language] > scores[best]:
            best = language
    return best


class ParagraphScorer:
    """Scores a sequence of words against a fixed language ordering."""

    def __init__(self, languages: Sequence[Language], encoder: LetterEncoder) -> None:
        if not languages:
            raise ConfigurationError("There must be at least 1 language")
        if encoder is None:
            raise ConfigurationError("letter encoder cannot be None")
        self.languages = tuple(languages)
        self.encoder = encoder

    def clean(self, word: str) -> str:
        return self.encoder.strip_unknown(word)

    def score_vector(self, words: Iterable[str], model: WordModel) -> np.ndarray:
        scores = np.ones(len(self.languages), dtype=np.float64)
        for i, word in enumerate(words):
            result = np.asarray(model(self.clean(word)), dtype=np.float64).ravel()
            if result.shape[0] != len(self.languages):
                raise ConfigurationError(
                    f"Model returned {result.shape[0]} scores for {len(self.languages)} languages"
                )
            scores = update_geometric_mean(scores, result, i)
        return scores

    def score(self, words: Iterable[str], model: WordModel) -> dict[Language, float]:
        """Per-language geometric mean of *model* outputs over *words*.

        *model* receives each word lowercased with unknown characters removed
        and returns one score per language, in this scorer's language order.
        """
        vector = self.score_vector(words, model)
        return {lang: float(s) for lang, s in zip(self.languages, vector)}

    def predict(self, words: Iterable[str], model: WordModel) -> Language:
        return best_language(self.score(words, model), self.languages)
