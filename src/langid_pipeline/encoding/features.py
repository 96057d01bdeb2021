"""Positional one-hot word features and multi-hot language targets."""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np

from langid_pipeline.encoding.letter_encoder import LetterEncoder

PADDING = " "


def feature_width(max_word_length: int, alphabet_size: int) -> int:
    """Number of feature columns: one slot of ``alphabet_size + 1`` per letter position."""
    return max_word_length * (alphabet_size + 1)


def fill_word_features(
    word: str,
    max_word_length: int,
    encoder: LetterEncoder,
    alphabet_size: int,
    out: np.ndarray,
) -> None:
    """Set the one-hot bits for *word* into the 1-D array *out* (assumed zeroed).

    Words longer than *max_word_length* are truncated and shorter ones are
    padded with spaces.  Positions whose character has no code in
    ``[0, alphabet_size]`` stay all-zero.
    """
    slot = alphabet_size + 1
    word = word[:max_word_length]
    n = len(word)
    for i in range(max_word_length):
        code = encoder.encode(word[i] if i < n else PADDING)
        if 0 <= code <= alphabet_size:
            out[i * slot + code] = 1.0


def encode_word(
    word: str,
    max_word_length: int,
    encoder: LetterEncoder,
    alphabet_size: int | None = None,
) -> np.ndarray:
    """Encode a word as a vector of length ``max_word_length * (alphabet_size + 1)``."""
    if alphabet_size is None:
        alphabet_size = encoder.alphabet_size
    features = np.zeros(feature_width(max_word_length, alphabet_size), dtype=np.float64)
    fill_word_features(word, max_word_length, encoder, alphabet_size, features)
    return features


def encode_labels(language_labels: Iterable[int], num_languages: int) -> np.ndarray:
    """Multi-hot target: 1.0 at every labelled language index."""
    target = np.zeros(num_languages, dtype=np.float64)
    for index in language_labels:
        target[index] = 1.0
    return target
