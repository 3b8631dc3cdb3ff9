from __future__ import annotations

import pytest

from staticsearch.config import ConfigurationError, SearchOptions
from staticsearch.formatter import Callback, Identity, Template, make_formatter
from staticsearch.searcher import Searcher


def test_make_formatter_variants() -> None:
    assert isinstance(make_formatter("title", None), Identity)
    assert isinstance(make_formatter("title", ""), Identity)
    assert isinstance(make_formatter("title", "<b>{title}</b>"), Template)
    assert isinstance(make_formatter("title", str.upper), Callback)


def test_template_substitutes_named_placeholder() -> None:
    fmt = make_formatter("url", "https://example.com/blog{url}")
    assert fmt("/posts/1/") == "https://example.com/blog/posts/1/"


def test_template_with_other_placeholder_is_rejected() -> None:
    with pytest.raises(ConfigurationError):
        make_formatter("title", "{name} - blog")
    with pytest.raises(ConfigurationError):
        make_formatter("title", "{0}")
    with pytest.raises(ConfigurationError):
        make_formatter("title", "{title")


def test_unknown_shape_is_rejected() -> None:
    with pytest.raises(ConfigurationError):
        make_formatter("date", 12)
    with pytest.raises(ConfigurationError):
        Searcher(
            {"words": {"a": [1]}, "docs": {1: {"t": "", "u": "/", "d": ""}}},
            SearchOptions(date_format=["%Y"]),
        )


def test_fields_are_formatted_independently() -> None:
    s = Searcher(
        {"words": {"cat": [1]}, "docs": {1: {"t": "Cats - von Explaino", "u": "/c", "d": "2020-01-01T10:00:00"}}},
        SearchOptions(
            title_format=lambda t: t.removesuffix(" - von Explaino"),
            url_format="https://vonexplaino.com/blog/posts{url}",
            date_format=lambda d: d[:10],
        ),
    )
    [r] = s.search("cat")
    assert r.to_dict() == {
        "title": "Cats",
        "url": "https://vonexplaino.com/blog/posts/c",
        "date": "2020-01-01",
    }


def test_callback_errors_propagate() -> None:
    def boom(value: str) -> str:
        raise KeyError(value)

    s = Searcher(
        {"words": {"cat": [1]}, "docs": {1: {"t": "T", "u": "/c", "d": ""}}},
        SearchOptions(title_format=boom),
    )
    with pytest.raises(KeyError):
        s.search("cat")
