"""Tests for CLI logging configuration."""

from __future__ import annotations

import logging

import pytest

from langid_pipeline.errors import ConfigurationError
from langid_pipeline.utils.logging_setup import BATCH_LOGGER, parse_level, setup_logging


@pytest.fixture(autouse=True)
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    batch_level = logging.getLogger(BATCH_LOGGER).level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger(BATCH_LOGGER).setLevel(batch_level)


class TestParseLevel:
    def test_names_case_insensitive(self):
        assert parse_level("debug") == logging.DEBUG
        assert parse_level("WARNING") == logging.WARNING

    def test_int_passes_through(self):
        assert parse_level(15) == 15

    def test_unknown_name(self):
        with pytest.raises(ConfigurationError, match="chatty"):
            parse_level("chatty")


class TestSetupLogging:
    def test_root_level(self):
        setup_logging("WARNING")
        assert logging.getLogger().level == logging.WARNING

    def test_batch_lines_muted_at_debug(self):
        setup_logging("DEBUG")
        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger(BATCH_LOGGER).level == logging.INFO

    def test_batch_lines_traced_on_request(self):
        setup_logging("DEBUG", trace_batches=True)
        assert logging.getLogger(BATCH_LOGGER).level == logging.DEBUG

    def test_batch_logger_follows_quieter_root(self):
        setup_logging("ERROR")
        assert logging.getLogger(BATCH_LOGGER).level == logging.ERROR
