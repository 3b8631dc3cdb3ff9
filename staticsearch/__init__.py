"""Query-time search over a precomputed blog search index."""

from .config import ConfigurationError, SearchOptions
from .indexer import DocumentRecord, IndexWriter, Posting, SearchIndex
from .searcher import DisplayResult, Searcher

__all__ = [
    "ConfigurationError",
    "DisplayResult",
    "DocumentRecord",
    "IndexWriter",
    "Posting",
    "SearchIndex",
    "SearchOptions",
    "Searcher",
]
