"""Data model for a single dataset row."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from langid_pipeline.corpus.models import Language
from langid_pipeline.errors import InvalidLanguageError


@dataclass(frozen=True)
class WordEntry:
    """A word and the indices of every language it belongs to."""

    word: str
    labels: frozenset[int]

    def has_label(self, index: int) -> bool:
        return index in self.labels

    def to_dict(self, languages: Sequence[Language] | None = None) -> dict[str, Any]:
        """Serialise; labels become language codes when *languages* is given."""
        labels: list[Any] = sorted(self.labels)
        if languages is not None:
            labels = [languages[i].code for i in labels]
        return {"word": self.word, "labels": labels}

    @classmethod
    def from_dict(
        cls, d: dict[str, Any], languages: Sequence[Language] | None = None
    ) -> WordEntry:
        labels = d.get("labels", [])
        if languages is not None:
            index_of = {lang.code: i for i, lang in enumerate(languages)}
            unknown = [c for c in labels if isinstance(c, str) and c not in index_of]
            if unknown:
                raise InvalidLanguageError(
                    f"Unknown language code(s) {unknown} for word {d['word']!r}"
                )
            labels = [index_of[c] if isinstance(c, str) else c for c in labels]
        return cls(word=d["word"], labels=frozenset(labels))
