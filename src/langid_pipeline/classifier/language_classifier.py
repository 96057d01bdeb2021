"""Language classifier: the encoding pipeline bound to a learner."""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Sequence

import numpy as np

from langid_pipeline.classifier.learner import Learner
from langid_pipeline.corpus.models import Language
from langid_pipeline.dataset.batch_stream import Batch, WordBatchStream
from langid_pipeline.dataset.word_dataset import LanguageWordsDataset
from langid_pipeline.encoding.features import encode_word, feature_width
from langid_pipeline.encoding.letter_encoder import LetterEncoder
from langid_pipeline.errors import ConfigurationError
from langid_pipeline.scoring.paragraph import ParagraphScorer, best_language, split_paragraph

logger = logging.getLogger(__name__)

# (num_inputs, num_hidden, num_outputs) -> learner
LearnerFactory = Callable[[int, int, int], Learner]

ACCURACY_SAMPLE = 10000
COST_BATCH_SIZE = 1000


def resolve_max_word_length(
    dataset: LanguageWordsDataset,
    max_word_length: int | None = None,
    coverage: float | None = None,
) -> int:
    """Explicit length, widened to cover *coverage* of the dataset's words if given."""
    length = max_word_length or 0
    if coverage is not None:
        length = max(length, dataset.coverage_max_length(coverage))
    if length <= 0:
        raise ConfigurationError(
            f"Max word length must be greater than 0 (given {max_word_length}, coverage {coverage})"
        )
    return length


class _MonitoredBatchStream(WordBatchStream):
    """Batch stream that calls *hook* with the batch index every *every* batches."""

    def __init__(self, inner: WordBatchStream, every: int, hook: Callable[[int], None]) -> None:
        super().__init__(inner.dataset, inner.max_word_length, inner.encoder, inner.batch_size)
        self.every = every
        self.hook = hook

    def batch(self, batch_index: int) -> Batch:
        if self.every > 0 and batch_index % self.every == 0:
            self.hook(batch_index)
        return super().batch(batch_index)


class LanguageClassifier:
    """Classifies single words and paragraphs into one of a fixed set of languages."""

    def __init__(
        self,
        languages: Sequence[Language],
        encoder: LetterEncoder,
        max_word_length: int,
        learner: Learner,
        dataset: LanguageWordsDataset | None = None,
        rng: random.Random | int | None = None,
    ) -> None:
        languages = tuple(languages)
        if not languages:
            raise ConfigurationError("There must be at least 1 language.")
        if encoder is None:
            raise ConfigurationError("letter encoder cannot be null")
        if encoder.alphabet_size <= 0:
            raise ConfigurationError(
                f"There must be at least 1 letter of input. Given: ({encoder.alphabet_size})"
            )
        if max_word_length <= 0:
            raise ConfigurationError(f"Max word length ({max_word_length}) must be greater than 0")
        if dataset is None:
            dataset = LanguageWordsDataset.from_languages(languages, rng)
        elif dataset.languages != languages:
            raise ConfigurationError(
                "Dataset languages "
                + ", ".join(lang.code for lang in dataset.languages)
                + " do not match classifier languages "
                + ", ".join(lang.code for lang in languages)
            )
        self.languages = languages
        self.encoder = encoder
        self.max_word_length = max_word_length
        self.learner = learner
        self.dataset = dataset
        self._scorer = ParagraphScorer(languages, encoder)

    @classmethod
    def create(
        cls,
        languages: Sequence[Language],
        learner_factory: LearnerFactory,
        max_word_length: int | None = None,
        coverage: float | None = None,
        rng: random.Random | int | None = None,
        dataset: LanguageWordsDataset | None = None,
    ) -> LanguageClassifier:
        """Build encoder, dataset and a freshly sized learner for *languages*."""
        languages = tuple(languages)
        encoder = LetterEncoder.build(languages)
        if dataset is None:
            dataset = LanguageWordsDataset.from_languages(languages, rng)
        length = resolve_max_word_length(dataset, max_word_length, coverage)
        slot = encoder.alphabet_size + 1
        learner = learner_factory(length * slot, slot, len(languages))
        logger.info(
            "Created classifier for %s: %d letters, max word length %d",
            "-".join(lang.code for lang in languages), encoder.alphabet_size, length,
        )
        return cls(languages, encoder, length, learner, dataset=dataset)

    @property
    def alphabet_size(self) -> int:
        return self.encoder.alphabet_size

    @property
    def num_inputs(self) -> int:
        return feature_width(self.max_word_length, self.alphabet_size)

    def encode(self, word: str) -> np.ndarray:
        return encode_word(word, self.max_word_length, self.encoder, self.alphabet_size)

    def raw_scores(self, word: str) -> np.ndarray:
        output = np.asarray(self.learner.feed_forward(self.encode(word)), dtype=np.float64)
        return output.ravel()

    # -- inference -------------------------------------------------------

    def process(self, word: str) -> dict[Language, float]:
        scores = self.raw_scores(word)
        return {lang: float(s) for lang, s in zip(self.languages, scores)}

    def predict_index(self, word: str) -> int:
        return int(np.argmax(self.raw_scores(word)))

    def predict(self, word: str) -> Language:
        return self.languages[self.predict_index(word)]

    def process_paragraph(self, paragraph: str | Sequence[str]) -> dict[Language, float]:
        words = split_paragraph(paragraph) if isinstance(paragraph, str) else paragraph
        return self._scorer.score(words, self.raw_scores)

    def predict_paragraph(self, paragraph: str | Sequence[str]) -> Language:
        return best_language(self.process_paragraph(paragraph), self.languages)

    # -- training and evaluation -----------------------------------------

    def batch_stream(
        self, batch_size: int, dataset: LanguageWordsDataset | None = None
    ) -> WordBatchStream:
        dataset = self.dataset if dataset is None else dataset
        return dataset.build_batch_stream(self.max_word_length, self.encoder, batch_size)

    def accuracy(self, sample_limit: int, dataset: LanguageWordsDataset | None = None) -> float:
        dataset = self.dataset if dataset is None else dataset
        return dataset.accuracy(self.predict_index, sample_limit)

    def cost(self, regularization: float, dataset: LanguageWordsDataset | None = None,
             batch_size: int = COST_BATCH_SIZE) -> float:
        return self.learner.cost_function(self.batch_stream(batch_size, dataset), regularization)

    def train(
        self,
        learning_rate: float,
        regularization: float,
        iterations: int,
        batch_size: int,
        progress_every: int = 0,
        on_progress: Callable[[int], float | None] | None = None,
        dataset: LanguageWordsDataset | None = None,
    ) -> list[float]:
        """Train the learner and return the values recorded by the progress hook.

        With *progress_every* > 0 a hook runs that many times over the run.
        Without *on_progress* the hook records the running accuracy on the
        classifier's own dataset.
        """
        if learning_rate <= 0:
            raise ConfigurationError(f"learning rate ({learning_rate}) must be greater than 0")
        if regularization < 0:
            raise ConfigurationError(
                f"regularization parameter ({regularization}) cannot be less than 0"
            )
        if iterations <= 0:
            raise ConfigurationError(f"number of iterations ({iterations}) must be greater than 0")

        history: list[float] = []

        def record_accuracy(batch_index: int) -> float:
            return self.accuracy(ACCURACY_SAMPLE)

        hook = on_progress or record_accuracy

        def progress(batch_index: int) -> None:
            logger.info("Training... (%.1f%%)", batch_index * 100.0 / iterations)
            value = hook(batch_index)
            if value is not None:
                logger.info("  current value: %f", value)
                history.append(value)

        stream = self.batch_stream(batch_size, dataset)
        if progress_every > 0:
            stream = _MonitoredBatchStream(stream, max(iterations // progress_every, 1), progress)
        self.learner.train_on_batch_stream(stream, learning_rate, regularization, iterations)
        logger.info("Finished %d training iterations", iterations)
        return history

    def __repr__(self) -> str:
        return (
            f"LanguageClassifier(languages=[{', '.join(lang.code for lang in self.languages)}], "
            f"max_word_length={self.max_word_length})"
        )
