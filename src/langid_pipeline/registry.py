"""Session registry of named languages, datasets and classifier slots.

Everything stored here is an immutable handle.  Operations that "modify" a
dataset build a new one and replace the stored handle; writers are serialised
by a lock so readers always see a complete value.
"""

from __future__ import annotations

import logging
import random
import threading
from collections.abc import Iterable, Sequence

from langid_pipeline.classifier.language_classifier import LanguageClassifier
from langid_pipeline.config.schema import LanguageSourceDef
from langid_pipeline.corpus.loader import load_from_source
from langid_pipeline.corpus.models import Language
from langid_pipeline.dataset.splitting import split_by_fractions
from langid_pipeline.dataset.word_dataset import LanguageWordsDataset
from langid_pipeline.errors import InvalidArgumentError, InvalidLanguageError, RangeError

logger = logging.getLogger(__name__)


def dataset_name_for(languages: Iterable[Language]) -> str:
    """Default dataset name: the sorted language codes joined with ``-``."""
    return "-".join(sorted(lang.code for lang in languages))


class SessionRegistry:
    def __init__(
        self,
        sources: Iterable[LanguageSourceDef] = (),
        classifier_slots: int = 10,
    ) -> None:
        self._sources = {s.code: s for s in sources}
        self._languages: dict[str, Language] = {}
        self._datasets: dict[str, LanguageWordsDataset] = {}
        self._classifiers: list[LanguageClassifier | None] = [None] * max(classifier_slots, 1)
        self._lock = threading.RLock()

    # -- languages -------------------------------------------------------

    def register_language(self, language: Language) -> None:
        with self._lock:
            self._languages[language.code] = language

    def language(self, code: str) -> Language:
        """Return a loaded language, loading it from its source on first use."""
        with self._lock:
            language = self._languages.get(code)
            if language is not None:
                return language
            source = self._sources.get(code)
            if source is None:
                raise InvalidLanguageError(f"Unrecognized language: {code}")
            language = load_from_source(source)
            self._languages[code] = language
            return language

    def languages(self, codes: Sequence[str], minimum: int = 2) -> list[Language]:
        """Resolve *codes* (duplicates dropped, order kept)."""
        resolved: list[Language] = []
        for code in codes:
            language = self.language(code)
            if language not in resolved:
                resolved.append(language)
        if len(resolved) < minimum:
            raise InvalidArgumentError(f"At least {minimum} languages must be specified")
        return resolved

    def source(self, code: str) -> LanguageSourceDef:
        """The corpus source a language code loads from (last definition wins)."""
        with self._lock:
            try:
                return self._sources[code]
            except KeyError:
                raise InvalidLanguageError(f"No corpus source for language: {code}") from None

    def loaded_languages(self) -> dict[str, Language]:
        with self._lock:
            return dict(self._languages)

    def known_codes(self) -> list[str]:
        with self._lock:
            return sorted(set(self._sources) | set(self._languages))

    # -- datasets --------------------------------------------------------

    def add_dataset(self, languages: Iterable[Language], dataset: LanguageWordsDataset) -> str:
        """Store *dataset* under its default name, suffixing a number on collision."""
        base = dataset_name_for(languages)
        with self._lock:
            name = base
            i = 1
            while name in self._datasets:
                name = f"{base}{i}"
                i += 1
            self.put_dataset(name, dataset)
        return name

    def put_dataset(self, name: str, dataset: LanguageWordsDataset) -> None:
        """Store or replace the handle under *name*."""
        with self._lock:
            self._datasets[name] = dataset

    def dataset(self, name: str) -> LanguageWordsDataset:
        with self._lock:
            try:
                return self._datasets[name]
            except KeyError:
                raise InvalidArgumentError(f"Unknown data set: {name}") from None

    def dataset_names(self) -> list[str]:
        with self._lock:
            return list(self._datasets)

    def split_dataset(
        self,
        src: str,
        destinations: Sequence[str],
        fractions: Sequence[float],
        rng: random.Random | None = None,
    ) -> list[LanguageWordsDataset]:
        """Split dataset *src* into *destinations*; shuffles first when *rng* is given."""
        if len(fractions) != len(destinations):
            raise InvalidArgumentError(
                f"Split fractions ({len(fractions)}) and destinations length "
                f"({len(destinations)}) must match"
            )
        with self._lock:
            source = self.dataset(src)
            if rng is not None:
                source = source.shuffled(rng)
            parts = split_by_fractions(source, fractions)
            for name, part in zip(destinations, parts):
                self.put_dataset(name, part)
        return parts

    def shuffle_dataset(self, name: str, rng: random.Random | int | None = None) -> LanguageWordsDataset:
        with self._lock:
            shuffled = self.dataset(name).shuffled(rng)
            self.put_dataset(name, shuffled)
        return shuffled

    def add_words(self, name: str, code: str, words: Sequence[str]) -> LanguageWordsDataset:
        with self._lock:
            updated = self.dataset(name).add_words(self.language(code), *words)
            self.put_dataset(name, updated)
        logger.info("Added %d word%s to %s", len(words), "" if len(words) == 1 else "s", name)
        return updated

    # -- classifiers -----------------------------------------------------

    @property
    def num_slots(self) -> int:
        return len(self._classifiers)

    def _check_slot(self, slot: int) -> None:
        if not 0 <= slot < len(self._classifiers):
            raise RangeError(
                f"Invalid slot id {slot} (min: 0, max: {len(self._classifiers) - 1})"
            )

    def set_classifier(self, slot: int, classifier: LanguageClassifier | None) -> None:
        self._check_slot(slot)
        with self._lock:
            self._classifiers[slot] = classifier

    def classifier(self, slot: int) -> LanguageClassifier:
        self._check_slot(slot)
        with self._lock:
            classifier = self._classifiers[slot]
        if classifier is None:
            raise InvalidArgumentError(f"No classifier at slot {slot}")
        return classifier

    def classifiers(self) -> list[LanguageClassifier | None]:
        with self._lock:
            return list(self._classifiers)
