"""Split a dataset into contiguous parts by relative fractions."""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence

from langid_pipeline.dataset.word_dataset import LanguageWordsDataset
from langid_pipeline.errors import InvalidArgumentError

logger = logging.getLogger(__name__)

TRAIN_CV_TEST = (0.6, 0.2, 0.2)


def split_sizes(fractions: Sequence[float], total: int) -> list[int]:
    """Part sizes for *total* words; the last part absorbs rounding."""
    if not fractions:
        raise InvalidArgumentError("At least one split fraction is required")
    if any(f < 0 for f in fractions):
        raise InvalidArgumentError(f"Split fractions {list(fractions)} must not be negative")
    fraction_sum = sum(fractions)
    if fraction_sum <= 0:
        raise InvalidArgumentError(f"Split fractions {list(fractions)} must sum to more than 0")
    sizes = [int(f / fraction_sum * total) for f in fractions[:-1]]
    sizes.append(total - sum(sizes))
    return sizes


def split_by_fractions(
    dataset: LanguageWordsDataset, fractions: Sequence[float]
) -> list[LanguageWordsDataset]:
    """Cut *dataset* into consecutive parts sized by *fractions* (normalised by their sum)."""
    parts: list[LanguageWordsDataset] = []
    offset = 0
    for size in split_sizes(fractions, len(dataset)):
        parts.append(dataset.subset(offset, size))
        offset += size
    logger.info(
        "Split %d words into %s", len(dataset), ", ".join(str(len(p)) for p in parts)
    )
    return parts


def train_cv_test_split(
    dataset: LanguageWordsDataset,
    rng: random.Random | int | None = None,
    fractions: Sequence[float] = TRAIN_CV_TEST,
) -> list[LanguageWordsDataset]:
    """Shuffle, then split into training / cross-validation / test parts."""
    if len(fractions) != 3:
        raise InvalidArgumentError(
            f"Expected 3 fractions (train, cv, test), got {len(fractions)}"
        )
    return split_by_fractions(dataset.shuffled(rng), fractions)
