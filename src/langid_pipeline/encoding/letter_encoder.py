"""Character to integer code mapping built from language alphabets."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from langid_pipeline.corpus.models import Language
from langid_pipeline.errors import ConfigurationError

logger = logging.getLogger(__name__)

# Code returned for characters outside the alphabet.
UNKNOWN = -1


def _union_alphabet(languages: Iterable[Language]) -> set[str]:
    letters: set[str] = set()
    for language in languages:
        letters.update(language.alphabet)
    return letters


def count_distinct_letters(languages: Iterable[Language]) -> int:
    """Size of the union of the given languages' alphabets."""
    return len(_union_alphabet(languages))


class LetterEncoder:
    """Maps each letter of a fixed alphabet to a code in ``[0, alphabet_size)``.

    Lookups are case-insensitive.  Anything outside the alphabet (digits,
    punctuation, letters of other scripts) encodes to ``UNKNOWN``.
    """

    def __init__(self, codes: Mapping[str, int]) -> None:
        if not codes:
            raise ConfigurationError("Letter encoder needs at least one letter")
        self._codes = dict(codes)

    @classmethod
    def build(cls, languages: Iterable[Language]) -> LetterEncoder:
        """Build from the union of the languages' alphabets.

        Codes are assigned in sorted character order, so encoders built from
        the same languages always agree.
        """
        languages = list(languages)
        if not languages:
            raise ConfigurationError("At least one language is required to build an encoder")
        letters = _union_alphabet(languages)
        if not letters:
            raise ConfigurationError(
                "Languages " + ", ".join(lang.code for lang in languages) + " have an empty alphabet"
            )
        encoder = cls({letter: i for i, letter in enumerate(sorted(letters))})
        logger.debug("Built letter encoder with %d letters", encoder.alphabet_size)
        return encoder

    @property
    def alphabet_size(self) -> int:
        return len(self._codes)

    @property
    def letters(self) -> list[str]:
        """Letters ordered by code."""
        return sorted(self._codes, key=self._codes.__getitem__)

    def encode(self, char: str) -> int:
        code = self._codes.get(char)
        if code is None:
            code = self._codes.get(char.lower(), UNKNOWN)
        return code

    __call__ = encode

    def is_known(self, char: str) -> bool:
        return self.encode(char) != UNKNOWN

    def strip_unknown(self, word: str) -> str:
        """Lowercase *word* and drop every character the encoder does not know."""
        return "".join(c for c in word.lower() if self.is_known(c))

    def __contains__(self, char: str) -> bool:
        return self.is_known(char)

    def __len__(self) -> int:
        return self.alphabet_size

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LetterEncoder):
            return NotImplemented
        return self._codes == other._codes

    def __repr__(self) -> str:
        return f"LetterEncoder(letters={''.join(self.letters)!r})"
