from __future__ import annotations

import pytest

from staticsearch.stemmer import FunctionStemmer, IdentityStemmer, PorterStemmer, get_stemmer


def test_identity_returns_token_unchanged() -> None:
    assert IdentityStemmer().stem("running") == "running"


def test_porter_reduces_english_variants() -> None:
    st = PorterStemmer()
    assert st.stem("running") == "run"
    assert st.stem("cats") == "cat"
    assert st.stem("memoires") == "memoir"


def test_function_stemmer_wraps_callable() -> None:
    st = FunctionStemmer(lambda s: s.rstrip("s"))
    assert st.stem("dogs") == "dog"


def test_get_stemmer_by_name() -> None:
    assert isinstance(get_stemmer("porter"), PorterStemmer)
    assert isinstance(get_stemmer("identity"), IdentityStemmer)
    with pytest.raises(ValueError):
        get_stemmer("lancaster")
