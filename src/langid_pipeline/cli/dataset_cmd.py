"""CLI handlers for the build-dataset and split-dataset subcommands."""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from pathlib import Path

import orjson

from langid_pipeline.classifier.language_classifier import resolve_max_word_length
from langid_pipeline.classifier.manifest import ClassifierManifest, save_manifest
from langid_pipeline.config.loader import load_config
from langid_pipeline.config.schema import PipelineConfig
from langid_pipeline.corpus.models import Language
from langid_pipeline.dataset.word_dataset import LanguageWordsDataset
from langid_pipeline.errors import ConfigurationError
from langid_pipeline.registry import SessionRegistry
from langid_pipeline.utils.logging_setup import setup_logging

logger = logging.getLogger(__name__)


def write_dataset_jsonl(dataset: LanguageWordsDataset, path: Path) -> int:
    path.parent.mkdir(parents=True, exist_ok=True)
    count = 0
    with path.open("wb") as fh:
        for record in dataset.to_records():
            fh.write(orjson.dumps(record) + b"\n")
            count += 1
    return count


def read_dataset_jsonl(path: Path, languages: Sequence[Language]) -> LanguageWordsDataset:
    with path.open("rb") as fh:
        records = [orjson.loads(line) for line in fh if line.strip()]
    return LanguageWordsDataset.from_records(languages, records)


def _build(cfg: PipelineConfig, seed: int | None = None) -> tuple[SessionRegistry, str, int]:
    if not cfg.languages:
        raise ConfigurationError("No languages configured")
    seed = cfg.dataset.seed if seed is None else seed
    registry = SessionRegistry(cfg.languages, cfg.classifier_slots)
    languages = registry.languages([s.code for s in cfg.languages], minimum=1)
    dataset = LanguageWordsDataset.from_languages(languages, random.Random(seed))
    name = registry.add_dataset(languages, dataset)
    return registry, name, seed


def run_build_dataset(config_path: str, output: str | None, seed: int | None = None) -> None:
    cfg = load_config(config_path)
    setup_logging(cfg.log_level, cfg.trace_batches)

    registry, name, seed = _build(cfg, seed)
    dataset = registry.dataset(name)
    out_path = Path(output) if output else cfg.staging_dir / "datasets" / f"{name}.jsonl"
    count = write_dataset_jsonl(dataset, out_path)
    logger.info("Wrote %d words to %s", count, out_path)

    coverage = cfg.dataset.coverage
    if coverage is None and not cfg.dataset.max_word_length:
        coverage = 1.0
    max_len = resolve_max_word_length(dataset, cfg.dataset.max_word_length, coverage)
    logger.info("Max word length: %d (coverage %s)", max_len, coverage)
    manifest = ClassifierManifest(
        languages=[registry.source(lang.code) for lang in dataset.languages],
        seed=seed,
        max_word_length=max_len,
    )
    save_manifest(manifest, out_path.with_suffix(".manifest.json"))


def run_split_dataset(config_path: str, output_dir: str | None) -> None:
    cfg = load_config(config_path)
    setup_logging(cfg.log_level, cfg.trace_batches)

    registry, name, seed = _build(cfg)
    split_dir = Path(output_dir) if output_dir else cfg.staging_dir / "splits"
    rng = random.Random(seed) if cfg.split.shuffle else None
    destinations = [f"{name}-{n}" for n in cfg.split.names]
    registry.split_dataset(name, destinations, cfg.split.fractions, rng=rng)

    for split_name, dest in zip(cfg.split.names, destinations):
        out_path = split_dir / f"{split_name}.jsonl"
        count = write_dataset_jsonl(registry.dataset(dest), out_path)
        logger.info("  %s: wrote %d words to %s", split_name, count, out_path)
