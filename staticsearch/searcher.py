from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .analyzer import Analyzer
from .config import ConfigurationError, Excluder, SearchOptions, max_query_tokens_from_env
from .formatter import make_formatter
from .indexer import DocumentRecord, SearchIndex
from .stemmer import IdentityStemmer, Stemmer

# term -> [(doc_id, weight), ...]; one entry per term slot
MatchRecord = dict[str, list[tuple[str, int]]]

PREFIX_SLOT = "*"


@dataclass(frozen=True)
class ParsedQuery:
    exact: tuple[str, ...]
    prefix: str | None = None
    stemmed_prefix: str | None = None

    @property
    def slot_count(self) -> int:
        return len(self.exact) + (1 if self.prefix else 0)


@dataclass(frozen=True)
class RankedResult:
    doc_id: str
    weight: int


@dataclass(frozen=True)
class DisplayResult:
    title: Any
    url: Any
    date: Any

    def to_dict(self) -> dict[str, Any]:
        return {"title": self.title, "url": self.url, "date": self.date}


# =========================
# Query decomposition
# =========================
class QueryParser:
    """
    Splits a query into exact terms and a trailing prefix candidate.

    The last token is held back from stop-word removal and stemming so a
    half-typed word can still match; the rest are filtered, stemmed and
    de-duplicated (order kept).
    """

    def __init__(self, analyzer: Analyzer, stemmer: Stemmer, max_tokens: int) -> None:
        self.analyzer = analyzer
        self.stemmer = stemmer
        self.max_tokens = max_tokens

    def parse(self, q: str) -> ParsedQuery:
        tokens = self.analyzer.tokenize(q)[: self.max_tokens]
        if not tokens:
            return ParsedQuery(exact=())
        *rest, last = tokens
        exact = [self.stemmer.stem(t) for t in self.analyzer.filter_stopwords(rest)]
        return ParsedQuery(
            exact=tuple(dict.fromkeys(exact)),
            prefix=last,
            stemmed_prefix=self.stemmer.stem(last),
        )


# =========================
# Prefix expansion
# =========================
class PrefixExpander:
    def __init__(self, index: SearchIndex) -> None:
        self.index = index

    def expand(self, prefix: str, stemmed: str | None = None) -> list[str]:
        """Indexed terms sharing the first letter and starting with `prefix` or `stemmed`."""
        if not prefix:
            return []
        stemmed = stemmed or prefix
        first = prefix[0]
        return [
            term
            for term in self.index.iter_terms()
            if term[:1] == first and (term.startswith(prefix) or term.startswith(stemmed))
        ]


# =========================
# Matching (miss-tolerant)
# =========================
class Matcher:
    def __init__(self, index: SearchIndex, expander: PrefixExpander) -> None:
        self.index = index
        self.expander = expander

    def match(self, query: ParsedQuery) -> MatchRecord:
        """Collect postings per term slot; exact terms missing from the index are left out."""
        record: MatchRecord = {}
        for term in query.exact:
            posting = self.index.get_posting(term)
            if posting:
                record[term] = [(p.doc_id, p.weight) for p in posting]

        if query.prefix:
            merged: list[tuple[str, int]] = []
            for term in self.expander.expand(query.prefix, query.stemmed_prefix):
                merged.extend((p.doc_id, p.weight) for p in self.index.words[term])
            if merged:
                record[PREFIX_SLOT] = merged
        return record

    @staticmethod
    def candidates(record: MatchRecord, slot_count: int) -> list[str]:
        """Docs referenced by at least `slot_count - 1` distinct slots, in first-seen order."""
        if slot_count == 0:
            return []
        hits: dict[str, set[str]] = {}
        for slot, postings in record.items():
            for doc_id, _ in postings:
                hits.setdefault(doc_id, set()).add(slot)
        return [d for d, slots in hits.items() if len(slots) >= slot_count - 1]


# =========================
# Ranking
# =========================
class Ranker:
    @staticmethod
    def rank(record: MatchRecord, candidates: list[str]) -> list[RankedResult]:
        """Sum slot weights per candidate; highest first, ties keep first-seen order."""
        totals = dict.fromkeys(candidates, 0)
        for postings in record.values():
            for doc_id, weight in postings:
                if doc_id in totals:
                    totals[doc_id] += weight
        ranked = [RankedResult(d, w) for d, w in totals.items()]
        ranked.sort(key=lambda r: r.weight, reverse=True)
        return ranked


# =========================
# Searcher
# =========================
class Searcher:
    """Prefix-aware, miss-tolerant ranked search over a read-only SearchIndex."""

    def __init__(
        self,
        index: SearchIndex | Mapping[str, Any] | None,
        options: SearchOptions | None = None,
        *,
        stemmer: Stemmer | None = None,
        analyzer: Analyzer | None = None,
    ) -> None:
        if not index:
            raise ConfigurationError("Please provide a search index")
        if not isinstance(index, SearchIndex):
            try:
                index = SearchIndex.from_dict(index)
            except (AttributeError, TypeError, ValueError) as e:
                raise ConfigurationError(f"Malformed search index: {e}") from e
        if index.is_empty():
            raise ConfigurationError("Please provide a search index")

        options = options or SearchOptions()
        max_tokens = options.max_query_tokens
        if max_tokens is None:
            max_tokens = max_query_tokens_from_env()
        if max_tokens < 1:
            raise ConfigurationError(f"max_query_tokens must be positive, got {max_tokens}")

        self.index = index
        self.analyzer = analyzer or Analyzer()
        self.stemmer = stemmer or IdentityStemmer()
        self.parser = QueryParser(self.analyzer, self.stemmer, max_tokens)
        self.matcher = Matcher(index, PrefixExpander(index))
        self.excluder = Excluder.from_option(options.exclude)
        self.title_format = make_formatter("title", options.title_format)
        self.url_format = make_formatter("url", options.url_format)
        self.date_format = make_formatter("date", options.date_format)

    def search_ranked(self, q: str) -> list[tuple[str, int]]:
        """Return (doc_id, weight) pairs, best first, after exclusion."""
        return [(doc_id, weight) for doc_id, weight, _ in self._resolve(q)]

    def search(self, q: str) -> list[DisplayResult]:
        return [self._format(rec) for _, _, rec in self._resolve(q)]

    def _resolve(self, q: str) -> list[tuple[str, int, DocumentRecord]]:
        query = self.parser.parse(q)
        record = self.matcher.match(query)
        candidates = self.matcher.candidates(record, query.slot_count)
        out: list[tuple[str, int, DocumentRecord]] = []
        for r in Ranker.rank(record, candidates):
            doc = self.index.get_doc(r.doc_id)
            # dangling posting
            if doc is None:
                continue
            if self.excluder and self.excluder.excludes(r.doc_id, doc):
                continue
            out.append((r.doc_id, r.weight, doc))
        return out

    def _format(self, doc: DocumentRecord) -> DisplayResult:
        return DisplayResult(
            title=self.title_format(doc.title),
            url=self.url_format(doc.url),
            date=self.date_format(doc.date),
        )
