"""Data model for a loaded language corpus."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, eq=False)
class Language:
    """A language identity together with its alphabet and vocabulary.

    Two languages are equal when their codes are equal, so a Language can be
    used as a dictionary key no matter how its corpus was loaded.
    """

    code: str
    name: str
    alphabet: frozenset[str] = field(default_factory=frozenset)
    vocabulary: tuple[str, ...] = ()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Language):
            return NotImplemented
        return self.code == other.code

    def __hash__(self) -> int:
        return hash(self.code)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return (
            f"Language(code={self.code!r}, name={self.name!r}, "
            f"letters={len(self.alphabet)}, words={len(self.vocabulary)})"
        )

    @property
    def num_letters(self) -> int:
        return len(self.alphabet)

    @classmethod
    def from_words(
        cls,
        code: str,
        name: str,
        words: list[str] | tuple[str, ...],
        alphabet: str | None = None,
    ) -> Language:
        """Build a language from an in-memory word list.

        Words are lowercased; the alphabet is inferred from the words unless
        given explicitly.
        """
        vocabulary = tuple(w.lower() for w in words)
        if alphabet is not None:
            letters = frozenset(alphabet.lower())
        else:
            letters = frozenset(c for w in vocabulary for c in w)
        return cls(code=code, name=name, alphabet=letters, vocabulary=vocabulary)
