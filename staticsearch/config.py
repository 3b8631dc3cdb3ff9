from __future__ import annotations

import os
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .indexer import DocumentRecord

# process-level defaults (read once at import)
INDEX_FILE = Path(os.getenv("STATICSEARCH_INDEX", "search-index.json"))
DEFAULT_MAX_QUERY_TOKENS = 32


class ConfigurationError(ValueError):
    """Raised while constructing a Searcher from a bad index or options."""


def max_query_tokens_from_env() -> int:
    """Read `STATICSEARCH_MAX_TOKENS`, falling back to the built-in default."""
    raw = os.getenv("STATICSEARCH_MAX_TOKENS")
    if raw is None or not raw.strip():
        return DEFAULT_MAX_QUERY_TOKENS
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(
            f"STATICSEARCH_MAX_TOKENS must be an integer, got {raw!r}"
        ) from e


@dataclass(frozen=True)
class SearchOptions:
    """
    Construction-time options for a Searcher.

    title_format / url_format / date_format:
        None (identity), a template string with a `{title}` / `{url}` /
        `{date}` placeholder, or a callable taking the raw value.

    exclude:
        None, a predicate taking a DocumentRecord, or an iterable of urls
        (document ids are accepted too).

    max_query_tokens:
        Queries are truncated to this many tokens. None reads
        STATICSEARCH_MAX_TOKENS when the Searcher is built.
    """

    title_format: Any = None
    url_format: Any = None
    date_format: Any = None
    exclude: Callable[[DocumentRecord], bool] | Iterable[str] | None = None
    max_query_tokens: int | None = None


class Excluder:
    """Decides whether a resolved document must be dropped from results."""

    def __init__(
        self,
        predicate: Callable[[DocumentRecord], bool] | None = None,
        keys: Iterable[str] = (),
    ) -> None:
        self.predicate = predicate
        self.keys = frozenset(keys)

    @classmethod
    def from_option(cls, value: Any) -> Excluder:
        if value is None:
            return cls()
        if callable(value):
            return cls(predicate=value)
        if isinstance(value, (str, bytes)):
            raise ConfigurationError("exclude must be an iterable of urls, not a single string")
        try:
            keys = [str(v) for v in value]
        except TypeError as e:
            raise ConfigurationError(
                f"exclude must be a callable or an iterable of urls, got {type(value).__name__}"
            ) from e
        return cls(keys=keys)

    def __bool__(self) -> bool:
        return self.predicate is not None or bool(self.keys)

    def excludes(self, doc_id: str, record: DocumentRecord) -> bool:
        if record.url in self.keys or doc_id in self.keys:
            return True
        return self.predicate is not None and bool(self.predicate(record))
