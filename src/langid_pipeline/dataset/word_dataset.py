"""De-duplicated, multi-label word/language dataset.

A dataset is built once from a set of languages and afterwards only ever
transformed into new datasets.  Entries are frozen and held in a tuple, so a
derived dataset never shares mutable state with its parent.
"""

from __future__ import annotations

import logging
import random
from collections import Counter
from collections.abc import Callable, Iterable, Iterator, Sequence

from langid_pipeline.corpus.models import Language
from langid_pipeline.dataset.batch_stream import WordBatchStream
from langid_pipeline.dataset.models import WordEntry
from langid_pipeline.encoding.letter_encoder import LetterEncoder
from langid_pipeline.errors import (
    ConfigurationError,
    InvalidArgumentError,
    InvalidLanguageError,
    RangeError,
)

logger = logging.getLogger(__name__)


def as_rng(rng: random.Random | int | None) -> random.Random:
    """Accept a Random instance, a seed, or None (fresh unseeded generator)."""
    if isinstance(rng, random.Random):
        return rng
    return random.Random(rng)


def merge_vocabularies(languages: Sequence[Language]) -> list[WordEntry]:
    """One entry per distinct word, labelled with every language that lists it.

    Languages are processed in order and words keep first-seen order, so the
    result is deterministic for a fixed language sequence.
    """
    labels: dict[str, set[int]] = {}
    for index, language in enumerate(languages):
        for word in language.vocabulary:
            labels.setdefault(word, set()).add(index)
    return [WordEntry(word, frozenset(idx)) for word, idx in labels.items()]


class LanguageWordsDataset:
    """Ordered collection of :class:`WordEntry` rows over a fixed language list."""

    def __init__(self, languages: Sequence[Language], entries: Iterable[WordEntry] = ()) -> None:
        languages = tuple(languages)
        if not languages:
            raise ConfigurationError("A dataset needs at least one language")
        entries = tuple(entries)
        n = len(languages)
        for entry in entries:
            bad = [i for i in entry.labels if not 0 <= i < n]
            if bad:
                raise InvalidLanguageError(
                    f"Word {entry.word!r} has label(s) {bad} outside the {n} configured languages"
                )
        self._languages = languages
        self._entries = entries

    @classmethod
    def from_languages(
        cls, languages: Sequence[Language], rng: random.Random | int | None = None
    ) -> LanguageWordsDataset:
        """Merge the vocabularies of *languages* and shuffle with *rng*."""
        languages = tuple(languages)
        if not languages:
            raise ConfigurationError("A dataset needs at least one language")
        entries = merge_vocabularies(languages)
        as_rng(rng).shuffle(entries)
        shared = sum(1 for e in entries if len(e.labels) > 1)
        logger.info(
            "Built dataset over %s: %d words (%d shared between languages)",
            "-".join(lang.code for lang in languages), len(entries), shared,
        )
        return cls(languages, entries)

    # -- accessors -------------------------------------------------------

    @property
    def languages(self) -> tuple[Language, ...]:
        return self._languages

    @property
    def entries(self) -> tuple[WordEntry, ...]:
        return self._entries

    @property
    def num_languages(self) -> int:
        return len(self._languages)

    def words(self) -> list[str]:
        return [e.word for e in self._entries]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[WordEntry]:
        return iter(self._entries)

    def __getitem__(self, index: int) -> WordEntry:
        return self._entries[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LanguageWordsDataset):
            return NotImplemented
        return self._languages == other._languages and self._entries == other._entries

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        codes = ", ".join(lang.code for lang in self._languages)
        return f"LanguageWordsDataset(words={len(self)}, languages=[{codes}])"

    def has_language(self, language: Language) -> bool:
        return language in self._languages

    def language_index(self, language: Language) -> int:
        try:
            return self._languages.index(language)
        except ValueError:
            raise InvalidLanguageError(
                f"Invalid language ({language.name}) for data set"
            ) from None

    def _derive(self, entries: Iterable[WordEntry]) -> LanguageWordsDataset:
        return LanguageWordsDataset(self._languages, entries)

    # -- transformations -------------------------------------------------

    def filter(self, predicate: Callable[[str], bool]) -> LanguageWordsDataset:
        """Keep entries whose word satisfies *predicate*, preserving order."""
        return self._derive(e for e in self._entries if predicate(e.word))

    def subset(self, offset: int, count: int) -> LanguageWordsDataset:
        """Contiguous slice ``[offset, offset + count)``."""
        if offset < 0 or count < 0 or offset + count > len(self._entries):
            raise RangeError(
                f"Subset [{offset}, {offset + count}) is outside the "
                f"{len(self._entries)} available words"
            )
        return self._derive(self._entries[offset:offset + count])

    def random_subset(self, count: int, rng: random.Random | int | None = None) -> LanguageWordsDataset:
        """Shuffle a copy of all entries and keep the first *count*."""
        if count < 0 or count > len(self._entries):
            raise RangeError(
                f"Cannot take {count} random words from {len(self._entries)} available"
            )
        entries = list(self._entries)
        as_rng(rng).shuffle(entries)
        return self._derive(entries[:count])

    def shuffled(self, rng: random.Random | int | None = None) -> LanguageWordsDataset:
        return self.random_subset(len(self._entries), rng)

    def add_words(self, language: Language, *words: str) -> LanguageWordsDataset:
        """Append *words* labelled with *language*.

        Unlike :meth:`from_languages` this does not merge into existing
        entries; a word already present gains a second, separate entry.
        """
        index = self.language_index(language)
        label = frozenset((index,))
        added = [WordEntry(w, label) for w in words]
        return self._derive(self._entries + tuple(added))

    # -- analysis --------------------------------------------------------

    def length_histogram(self) -> Counter[int]:
        return Counter(len(e.word) for e in self._entries)

    def coverage_max_length(self, fraction: float) -> int:
        """Smallest word length covering at least *fraction* of all entries.

        Returns the longest observed length if rounding keeps the cumulative
        share below *fraction*.
        """
        if not 0.0 < fraction <= 1.0:
            raise RangeError(f"Coverage fraction ({fraction}) must be in (0, 1]")
        if not self._entries:
            return 0
        lengths = self.length_histogram()
        max_length = max(lengths)
        total = len(self._entries)
        cumulative = 0
        for length in range(max_length + 1):
            cumulative += lengths.get(length, 0)
            if cumulative / total >= fraction:
                return length
        return max_length

    def accuracy(self, predict: Callable[[str], int], sample_limit: int) -> float:
        """Share of the first *sample_limit* entries whose prediction is one of their labels."""
        if sample_limit < 1:
            raise InvalidArgumentError(f"Sample limit ({sample_limit}) must be at least 1")
        if not self._entries:
            raise InvalidArgumentError("Cannot measure accuracy on an empty dataset")
        correct = 0
        count = 0
        for entry in self._entries:
            if entry.has_label(predict(entry.word)):
                correct += 1
            count += 1
            if count >= sample_limit:
                break
        return correct / count

    def build_batch_stream(
        self, max_word_length: int, encoder: LetterEncoder, batch_size: int
    ) -> WordBatchStream:
        return WordBatchStream(self, max_word_length, encoder, batch_size)

    # -- serialisation ---------------------------------------------------

    def to_records(self) -> list[dict]:
        return [e.to_dict(self._languages) for e in self._entries]

    @classmethod
    def from_records(
        cls, languages: Sequence[Language], records: Iterable[dict]
    ) -> LanguageWordsDataset:
        languages = tuple(languages)
        return cls(languages, (WordEntry.from_dict(r, languages) for r in records))
