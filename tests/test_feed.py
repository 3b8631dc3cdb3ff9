from __future__ import annotations

from datetime import datetime, timezone

from staticsearch.feed import render_feed
from staticsearch.searcher import DisplayResult


def test_feed_lists_results_with_opensearch_counts() -> None:
    results = [
        DisplayResult("A & B", "/a/", "2020-01-01"),
        DisplayResult("C", "/c/", "2020-01-02"),
    ]
    xml = render_feed(
        'cats "dogs"',
        results,
        title="blog search",
        search_url="https://example.com/search",
        link_prefix="https://example.com/blog",
        updated=datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
    )
    assert xml.startswith('<?xml version="1.0" encoding="UTF-8"?>')
    assert "<title>blog search: cats &quot;dogs&quot;</title>" in xml
    assert "<opensearch:totalResults>2</opensearch:totalResults>" in xml
    assert 'searchTerms="cats &quot;dogs&quot;"' in xml
    assert '<link href="https://example.com/search?cats+%22dogs%22"/>' in xml
    assert "<updated>2024-01-02T03:04:05+00:00</updated>" in xml
    assert "<title>A &amp; B</title>" in xml
    assert '<link href="https://example.com/blog/c/"/>' in xml
    assert xml.count("<entry>") == 2
    assert xml.rstrip().endswith("</feed>")


def test_empty_feed() -> None:
    xml = render_feed("nothing", [])
    assert "<opensearch:totalResults>0</opensearch:totalResults>" in xml
    assert "<entry>" not in xml
