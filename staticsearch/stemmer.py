from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from nltk.stem import PorterStemmer as _NltkPorter


class Stemmer(Protocol):
    """Reduces a token to its root form."""

    def stem(self, token: str) -> str:  # pragma: no cover - interface definition
        ...


class IdentityStemmer:
    def stem(self, token: str) -> str:
        return token


class PorterStemmer:
    """English Porter stemmer backed by NLTK (no corpus download needed)."""

    def __init__(self) -> None:
        self._impl = _NltkPorter()

    def stem(self, token: str) -> str:
        return self._impl.stem(token)


class FunctionStemmer:
    """Adapts a plain `str -> str` callable to the Stemmer interface."""

    def __init__(self, fn: Callable[[str], str]) -> None:
        self._fn = fn

    def stem(self, token: str) -> str:
        return self._fn(token)


def get_stemmer(name: str) -> Stemmer:
    if name == "porter":
        return PorterStemmer()
    if name == "identity":
        return IdentityStemmer()
    raise ValueError(f"Unknown stemmer: {name!r}")
