"""Word-list corpus loader.

A corpus is a newline-delimited text file.  Only the first whitespace-delimited
token of each line is used, so frequency lists of the form ``word count`` load
as plain vocabularies.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from langid_pipeline.config.schema import LanguageSourceDef
from langid_pipeline.corpus.models import Language
from langid_pipeline.errors import CorpusLoadError

logger = logging.getLogger(__name__)


def iter_words(lines: Iterable[str]) -> Iterator[str]:
    """Yield the lowercased first token of every non-blank line."""
    for line in lines:
        tokens = line.split()
        if not tokens:
            continue
        yield tokens[0].lower()


def load_language(
    code: str,
    name: str,
    path: Path | str,
    alphabet: str | None = None,
    encoding: str = "utf-8",
) -> Language:
    """Read a word list and return an immutable Language."""
    path = Path(path)
    try:
        with path.open("r", encoding=encoding) as fh:
            words = list(iter_words(fh))
    except (OSError, UnicodeDecodeError) as exc:
        raise CorpusLoadError(f"Cannot read corpus for {code!r} from {path}: {exc}") from exc

    language = Language.from_words(code, name, words, alphabet=alphabet)
    logger.info(
        "Loaded %s (%s): %d words, %d letters",
        name, code, len(language.vocabulary), language.num_letters,
    )
    return language


def load_from_source(source: LanguageSourceDef) -> Language:
    return load_language(
        source.code,
        source.name,
        source.path,
        alphabet=source.alphabet,
        encoding=source.encoding,
    )


def load_languages(sources: Iterable[LanguageSourceDef]) -> list[Language]:
    """Load every configured language, keeping configuration order."""
    return [load_from_source(s) for s in sources]
