from __future__ import annotations

import pytest

from staticsearch.analyzer import STOP_WORDS, Analyzer


@pytest.fixture(scope="module")
def az() -> Analyzer:
    return Analyzer()


def test_empty_and_whitespace(az: Analyzer) -> None:
    assert az.tokenize("") == []
    assert az.tokenize("   \t\n  ") == []


def test_unicode_accents_and_hyphens(az: Analyzer) -> None:
    assert az.tokenize("Café déjà-vu") == ["cafe", "deja", "vu"]


def test_uppercase_accents_fold(az: Analyzer) -> None:
    assert az.tokenize("École ÇA Mémoires") == ["ecole", "ca", "memoires"]


def test_ligature_and_combining_marks(az: Analyzer) -> None:
    assert az.remove_accents("Cafe\u0301") == "Cafe"
    assert az.tokenize("cœur") == ["cour"]


def test_unmapped_letters_are_separators(az: Analyzer) -> None:
    assert az.tokenize("smørrebrød") == ["sm", "rrebr", "d"]


def test_lowercase_and_punct(az: Analyzer) -> None:
    assert az.tokenize("HEY you! Try snake_case, v2.") == [
        "hey",
        "you",
        "try",
        "snake_case",
        "v2",
    ]


def test_stopword_filter_preserves_order(az: Analyzer) -> None:
    assert az.filter_stopwords(["the", "cat", "sat"]) == ["cat", "sat"]
    assert az.filter_stopwords(["cat", "and", "the", "dog"]) == ["cat", "dog"]


def test_tokenize_without_stopwords(az: Analyzer) -> None:
    text = "The quick brown fox jumps over the lazy dog"
    assert "the" not in az.tokenize(text, keep_stopwords=False)
    assert "over" not in az.tokenize(text, keep_stopwords=False)
    assert "the" in az.tokenize(text)


def test_stop_word_set_is_closed() -> None:
    assert "ours" in STOP_WORDS
    assert "ours " not in STOP_WORDS
    assert "cat" not in STOP_WORDS
    assert len(STOP_WORDS) > 150


def test_custom_stop_words() -> None:
    az = Analyzer(stop_words={"cat"})
    assert az.filter_stopwords(["the", "cat"]) == ["the"]


def test_is_stopword_drives_filtering() -> None:
    class NoFilter(Analyzer):
        def is_stopword(self, token: str) -> bool:
            return False

    az = NoFilter()
    assert az.filter_stopwords(["the", "cat"]) == ["the", "cat"]
    assert az.tokenize("the cat", keep_stopwords=False) == ["the", "cat"]
    assert Analyzer().is_stopword("the")
    assert not Analyzer().is_stopword("cat")
