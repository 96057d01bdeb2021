"""Exception hierarchy for the language identification pipeline."""

from __future__ import annotations


class LangIdError(Exception):
    """Base class for all pipeline errors."""


class ConfigurationError(LangIdError):
    """Raised for invalid construction parameters (no languages, bad widths, missing encoder)."""


class InvalidLanguageError(LangIdError):
    """Raised when an operation references a language outside the configured set."""


class RangeError(LangIdError, ValueError):
    """Raised when slice bounds, counts or fractions fall outside what is available."""


class CorpusLoadError(LangIdError):
    """Raised when a vocabulary resource cannot be read."""


class InvalidArgumentError(LangIdError, ValueError):
    """Raised for non-positive sample limits and mismatched split arguments."""
