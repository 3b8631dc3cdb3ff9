from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from .analyzer import Analyzer
from .stemmer import IdentityStemmer, Stemmer


@dataclass(frozen=True)
class Posting:
    """One hit for a term: a document id and its term frequency."""

    doc_id: str
    weight: int = 1

    @classmethod
    def parse(cls, raw: Any) -> Posting:
        """Accept a bare document id or a `[doc_id, weight]` pair."""
        if isinstance(raw, Posting):
            return raw
        if isinstance(raw, (list, tuple)):
            if len(raw) != 2:
                raise ValueError(f"Posting pair must have 2 items, got {raw!r}")
            doc_id, weight = raw
            weight = int(weight)
            if weight < 0:
                raise ValueError(f"Posting weight must be non-negative, got {weight}")
            return cls(str(doc_id), weight)
        return cls(str(raw))


@dataclass(frozen=True)
class DocumentRecord:
    title: str
    url: str
    date: str

    @classmethod
    def parse(cls, raw: Any) -> DocumentRecord:
        if isinstance(raw, DocumentRecord):
            return raw
        return cls(
            title=str(raw.get("t", "")),
            url=str(raw.get("u", "")),
            date=str(raw.get("d", "")),
        )


@dataclass(frozen=True)
class SearchIndex:
    """
    Read-only inverted index snapshot.

    words:
        term -> tuple of Posting (in builder order)

    docs:
        doc_id -> DocumentRecord

    Postings may reference ids absent from `docs`; lookups return None for
    those and the searcher skips them.
    """

    words: Mapping[str, tuple[Posting, ...]]
    docs: Mapping[str, DocumentRecord]

    def __post_init__(self) -> None:
        # read-only views over private copies
        words = {t: tuple(ps) for t, ps in self.words.items()}
        object.__setattr__(self, "words", MappingProxyType(words))
        object.__setattr__(self, "docs", MappingProxyType(dict(self.docs)))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SearchIndex:
        """Build from the `{"words": ..., "docs": ...}` wire shape."""
        words = {
            str(term): tuple(Posting.parse(p) for p in postings)
            for term, postings in data.get("words", {}).items()
        }
        docs = {
            str(doc_id): DocumentRecord.parse(rec)
            for doc_id, rec in data.get("docs", {}).items()
        }
        return cls(words=words, docs=docs)

    def to_dict(self) -> dict[str, Any]:
        return {
            "words": {
                term: [[p.doc_id, p.weight] for p in postings]
                for term, postings in self.words.items()
            },
            "docs": {
                doc_id: {"t": rec.title, "u": rec.url, "d": rec.date}
                for doc_id, rec in self.docs.items()
            },
        }

    def get_posting(self, term: str) -> tuple[Posting, ...] | None:
        return self.words.get(term)

    def get_doc(self, doc_id: str) -> DocumentRecord | None:
        return self.docs.get(doc_id)

    def iter_terms(self) -> Iterator[str]:
        return iter(self.words)

    def vocabulary_size(self) -> int:
        return len(self.words)

    def is_empty(self) -> bool:
        return not self.words and not self.docs


class IndexWriter:
    """
    Mutable builder; call `commit()` to freeze into a SearchIndex.

    Each document's text is tokenized with stop words removed, stemmed,
    and counted; the count becomes the posting weight. Document ids are
    assigned sequentially in insertion order.
    """

    def __init__(self, analyzer: Analyzer, stemmer: Stemmer | None = None) -> None:
        self.analyzer = analyzer
        self.stemmer = stemmer or IdentityStemmer()
        self._words: dict[str, list[Posting]] = {}
        self._docs: dict[str, DocumentRecord] = {}
        self._urls: set[str] = set()

    def add(self, url: str, title: str, date: str, text: str) -> str:
        """Add a single document and return its assigned id."""
        if not url:
            raise ValueError("url must be non-empty")
        if url in self._urls:
            raise ValueError(f"Duplicate url: {url!r}")

        doc_id = str(len(self._docs))
        counts = Counter(self._terms(text))
        for term, tf in counts.items():
            self._words.setdefault(term, []).append(Posting(doc_id, tf))

        self._docs[doc_id] = DocumentRecord(title=title, url=url, date=date)
        self._urls.add(url)
        return doc_id

    def _terms(self, text: str) -> Iterable[str]:
        for tok in self.analyzer.iter_tokens(text, keep_stopwords=False):
            yield self.stemmer.stem(tok)

    def commit(self) -> SearchIndex:
        return SearchIndex(
            words={t: tuple(ps) for t, ps in sorted(self._words.items())},
            docs=dict(self._docs),
        )
