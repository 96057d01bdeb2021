"""Reconstructible description of a classifier's data side.

A manifest records where each language's corpus lives, the dataset seed and the
max word length.  Reloading the corpora and rebuilding with the same seed gives
back the same dataset, entry for entry, so word lists never need to be saved.
"""

from __future__ import annotations

import logging
import random
from pathlib import Path

import orjson
from pydantic import BaseModel, Field

from langid_pipeline.config.schema import LanguageSourceDef
from langid_pipeline.corpus.loader import load_languages
from langid_pipeline.corpus.models import Language
from langid_pipeline.dataset.word_dataset import LanguageWordsDataset
from langid_pipeline.encoding.letter_encoder import LetterEncoder
from langid_pipeline.errors import ConfigurationError

logger = logging.getLogger(__name__)

MANIFEST_VERSION = 1


class ClassifierManifest(BaseModel):
    languages: list[LanguageSourceDef] = Field(min_length=1)
    seed: int
    max_word_length: int = Field(gt=0)
    format_version: int = MANIFEST_VERSION


def save_manifest(manifest: ClassifierManifest, path: Path | str) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(
        orjson.dumps(manifest.model_dump(mode="json"), option=orjson.OPT_INDENT_2)
    )
    logger.info("Manifest saved to %s", path)
    return path


def load_manifest(path: Path | str) -> ClassifierManifest:
    manifest = ClassifierManifest.model_validate(orjson.loads(Path(path).read_bytes()))
    if manifest.format_version != MANIFEST_VERSION:
        raise ConfigurationError(
            f"Unsupported manifest version {manifest.format_version} in {path}"
        )
    return manifest


def rebuild(manifest: ClassifierManifest) -> tuple[list[Language], LetterEncoder, LanguageWordsDataset]:
    """Reload the corpora and recompute encoder and dataset."""
    languages = load_languages(manifest.languages)
    encoder = LetterEncoder.build(languages)
    dataset = LanguageWordsDataset.from_languages(languages, random.Random(manifest.seed))
    return languages, encoder, dataset


def rebuild_dataset(manifest: ClassifierManifest) -> LanguageWordsDataset:
    return rebuild(manifest)[2]
