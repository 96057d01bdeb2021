"""Logging configuration shared by the CLI commands."""

from __future__ import annotations

import logging
import sys

from langid_pipeline.errors import ConfigurationError

LOG_FORMAT = "%(asctime)s [%(levelname)-7s] %(name)s: %(message)s"

# Logs one line per assembled batch; a training run asks for thousands.
BATCH_LOGGER = "langid_pipeline.dataset.batch_stream"


def parse_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ConfigurationError(f"Unknown log level: {level!r}")
    return numeric


def setup_logging(level: str | int = "INFO", trace_batches: bool = False) -> None:
    """Configure the root logger.

    Per-batch debug lines stay muted unless *trace_batches* is set.
    """
    numeric = parse_level(level)
    logging.basicConfig(
        level=numeric,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,
    )
    batch_level = numeric if trace_batches else max(numeric, logging.INFO)
    logging.getLogger(BATCH_LOGGER).setLevel(batch_level)
