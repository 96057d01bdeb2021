"""CLI handler for the show-languages subcommand."""

from __future__ import annotations

import logging

import typer

from langid_pipeline.config.loader import load_config
from langid_pipeline.registry import SessionRegistry
from langid_pipeline.utils.logging_setup import setup_logging

logger = logging.getLogger(__name__)


def run_show_languages(config_path: str) -> None:
    cfg = load_config(config_path)
    setup_logging(cfg.log_level, cfg.trace_batches)
    registry = SessionRegistry(cfg.languages, cfg.classifier_slots)

    if not cfg.languages:
        logger.warning("No languages configured in %s", config_path)
        return
    for code in registry.known_codes():
        language = registry.language(code)
        letters = "".join(sorted(language.alphabet))
        typer.echo(
            f"{code}) {language.name}, Letters: ({language.num_letters}){letters}, "
            f"Words: {len(language.vocabulary)}"
        )
