"""Tests for the word/language dataset and its transformations."""

from __future__ import annotations

import random

import pytest

from langid_pipeline.corpus.models import Language
from langid_pipeline.dataset.models import WordEntry
from langid_pipeline.dataset.word_dataset import LanguageWordsDataset, merge_vocabularies
from langid_pipeline.errors import (
    ConfigurationError,
    InvalidArgumentError,
    InvalidLanguageError,
    RangeError,
)


@pytest.fixture
def dataset(en_es: list[Language]) -> LanguageWordsDataset:
    return LanguageWordsDataset.from_languages(en_es, random.Random(42))


@pytest.fixture
def overlapping() -> list[Language]:
    return [
        Language.from_words("en", "English", ["a", "no", "the", "no"]),
        Language.from_words("es", "Spanish", ["a", "no", "el"]),
        Language.from_words("it", "Italian", ["a", "il"]),
    ]


class TestFromLanguages:
    def test_scenario_four_single_label_entries(self, dataset: LanguageWordsDataset):
        assert len(dataset) == 4
        assert sorted(dataset.words()) == ["cat", "el", "gato", "the"]
        assert all(len(e.labels) == 1 for e in dataset)

    def test_labels_point_at_source_language(self, dataset: LanguageWordsDataset):
        labels = {e.word: e.labels for e in dataset}
        assert labels["the"] == {0}
        assert labels["gato"] == {1}

    def test_deterministic_for_seed(self, en_es: list[Language]):
        a = LanguageWordsDataset.from_languages(en_es, random.Random(5))
        b = LanguageWordsDataset.from_languages(en_es, random.Random(5))
        assert a.entries == b.entries
        assert a == b

    def test_int_seed_matches_random(self, en_es: list[Language]):
        a = LanguageWordsDataset.from_languages(en_es, 5)
        b = LanguageWordsDataset.from_languages(en_es, random.Random(5))
        assert a == b

    def test_label_union_for_shared_words(self, overlapping: list[Language]):
        ds = LanguageWordsDataset.from_languages(overlapping, random.Random(1))
        by_word = {}
        for entry in ds:
            assert entry.word not in by_word
            by_word[entry.word] = entry.labels
        assert by_word["a"] == {0, 1, 2}
        assert by_word["no"] == {0, 1}
        assert by_word["il"] == {2}
        assert len(ds) == 5

    def test_merge_keeps_first_seen_order(self, overlapping: list[Language]):
        words = [e.word for e in merge_vocabularies(overlapping)]
        assert words == ["a", "no", "the", "el", "il"]

    def test_requires_languages(self):
        with pytest.raises(ConfigurationError):
            LanguageWordsDataset.from_languages([], random.Random(1))

    def test_rejects_out_of_range_labels(self, en_es: list[Language]):
        with pytest.raises(InvalidLanguageError):
            LanguageWordsDataset(en_es, [WordEntry("x", frozenset({2}))])


class TestTransformations:
    def test_filter_preserves_order(self, dataset: LanguageWordsDataset):
        filtered = dataset.filter(lambda w: len(w) >= 3)
        assert filtered.words() == [w for w in dataset.words() if len(w) >= 3]
        assert len(dataset) == 4

    def test_subset(self, dataset: LanguageWordsDataset):
        sub = dataset.subset(1, 2)
        assert sub.entries == dataset.entries[1:3]
        assert sub.languages == dataset.languages

    def test_subset_out_of_range(self, dataset: LanguageWordsDataset):
        with pytest.raises(RangeError):
            dataset.subset(3, 2)
        with pytest.raises(RangeError):
            dataset.subset(-1, 1)

    def test_subset_to_end(self, dataset: LanguageWordsDataset):
        assert len(dataset.subset(0, 4)) == 4
        assert len(dataset.subset(4, 0)) == 0

    def test_random_subset_reproducible(self, dataset: LanguageWordsDataset):
        a = dataset.random_subset(2, random.Random(99))
        b = dataset.random_subset(2, random.Random(99))
        assert len(a) == 2
        assert a.entries == b.entries

    def test_random_subset_too_large(self, dataset: LanguageWordsDataset):
        with pytest.raises(RangeError):
            dataset.random_subset(5, random.Random(1))

    def test_shuffled_is_permutation(self, dataset: LanguageWordsDataset):
        shuffled = dataset.shuffled(random.Random(3))
        assert sorted(shuffled.words()) == sorted(dataset.words())

    def test_add_words_appends_without_merging(self, dataset: LanguageWordsDataset, spanish: Language):
        added = dataset.add_words(spanish, "gato", "perro")
        assert len(added) == 6
        assert added.words()[-2:] == ["gato", "perro"]
        assert added[-1].labels == {1}
        assert added.words().count("gato") == 2
        assert len(dataset) == 4

    def test_add_words_unknown_language(self, dataset: LanguageWordsDataset):
        french = Language.from_words("fr", "French", ["chat"])
        with pytest.raises(InvalidLanguageError):
            dataset.add_words(french, "chat")

    def test_has_language(self, dataset: LanguageWordsDataset, english: Language):
        assert dataset.has_language(english)
        assert not dataset.has_language(Language("fr", "French"))


class TestCoverage:
    def test_full_coverage_is_longest_word(self, dataset: LanguageWordsDataset):
        # the, cat, el, gato
        assert dataset.coverage_max_length(1.0) == 4

    def test_partial_coverage(self, dataset: LanguageWordsDataset):
        assert dataset.coverage_max_length(0.25) == 2
        assert dataset.coverage_max_length(0.75) == 3
        assert dataset.coverage_max_length(0.76) == 4

    @pytest.mark.parametrize("fraction", [0.0, -0.1, 1.01])
    def test_invalid_fraction(self, dataset: LanguageWordsDataset, fraction: float):
        with pytest.raises(RangeError):
            dataset.coverage_max_length(fraction)

    def test_empty_dataset(self, en_es: list[Language]):
        assert LanguageWordsDataset(en_es).coverage_max_length(0.5) == 0


class TestAccuracy:
    def test_always_right(self, overlapping: list[Language]):
        ds = LanguageWordsDataset.from_languages(overlapping, random.Random(2))
        first = {e.word: min(e.labels) for e in ds}
        assert ds.accuracy(lambda w: first[w], 100) == 1.0

    def test_always_wrong(self, dataset: LanguageWordsDataset):
        assert dataset.accuracy(lambda w: 7, 10) == 0.0

    def test_any_true_label_counts(self, overlapping: list[Language]):
        ds = LanguageWordsDataset.from_languages(overlapping, random.Random(2)).filter(
            lambda w: w in ("a", "no")
        )
        assert ds.accuracy(lambda w: 1, 10) == 1.0

    def test_sample_limit(self, en_es: list[Language]):
        ds = LanguageWordsDataset(
            en_es,
            [WordEntry("the", frozenset({0})), WordEntry("el", frozenset({1}))],
        )
        assert ds.accuracy(lambda w: 0, 1) == 1.0
        assert ds.accuracy(lambda w: 0, 2) == 0.5

    def test_non_positive_limit(self, dataset: LanguageWordsDataset):
        with pytest.raises(InvalidArgumentError):
            dataset.accuracy(lambda w: 0, 0)

    def test_empty_dataset(self, en_es: list[Language]):
        with pytest.raises(InvalidArgumentError):
            LanguageWordsDataset(en_es).accuracy(lambda w: 0, 5)


class TestRecords:
    def test_records_use_language_codes(self, overlapping: list[Language]):
        ds = LanguageWordsDataset.from_languages(overlapping, random.Random(2))
        records = {r["word"]: r["labels"] for r in ds.to_records()}
        assert records["no"] == ["en", "es"]

    def test_from_records_restores_dataset(self, dataset: LanguageWordsDataset):
        restored = LanguageWordsDataset.from_records(dataset.languages, dataset.to_records())
        assert restored == dataset

    def test_unknown_code_in_record(self, en_es: list[Language]):
        with pytest.raises(InvalidLanguageError):
            LanguageWordsDataset.from_records(en_es, [{"word": "chat", "labels": ["fr"]}])


class TestWordEntry:
    def test_has_label(self):
        entry = WordEntry("no", frozenset({0, 1}))
        assert entry.has_label(1)
        assert not entry.has_label(2)
