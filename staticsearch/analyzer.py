from __future__ import annotations

import re
from collections.abc import Iterable, Iterator

# Latin-1 letters with diacritics (plus the "œ" ligature) -> base letter.
_ACCENT_MAP: dict[str, str] = {
    "àáâãäåæ": "a",
    "ç": "c",
    "èéêë": "e",
    "ìíîï": "i",
    "ñ": "n",
    "òóôõöœ": "o",
    "ùúûü": "u",
    "ýÿ": "y",
    "ÀÁÂÃÄÅÆ": "A",
    "Ç": "C",
    "ÈÉÊË": "E",
    "ÌÍÎÏ": "I",
    "Ñ": "N",
    "ÒÓÔÕÖŒ": "O",
    "ÙÚÛÜ": "U",
    "Ý": "Y",
}

ACCENTS: dict[int, str | None] = {
    ord(ch): base for chars, base in _ACCENT_MAP.items() for ch in chars
}
# combining diacritical marks are dropped; the base letter before them stays
ACCENTS.update({cp: None for cp in range(0x0300, 0x0370)})

STOP_WORDS: frozenset[str] = frozenset(
    """
    all am an and any are aren't as at be because been before being below
    between both but by can't cannot could couldn't did didn't do does
    doesn't doing don't down for from further had hadn't has hasn't have
    haven't having he he'd he'll he's her here here's hers herself him
    himself his how how's i'd i'll i'm i've if in into is isn't it it's its
    itself let's me more most mustn't my myself no nor not of off on once
    only or other ought our ours ourselves out over own same shan't she
    she'd she'll she's should shouldn't so some such than that that's the
    their theirs them themselves then there there's these they they'd
    they'll they're they've this those through to too under until up very
    was wasn't we we'd we'll we're we've were weren't what what's when
    when's where where's which while who who's whom why why's with won't
    would wouldn't you you'd you'll you're you've your yours yourself
    yourselves
    """.split()
)

_WORD = re.compile(r"\w+", re.ASCII)


class Analyzer:
    """
    Query-side text analysis: accent folding, tokenization, lowercasing
    and stop-word removal.

    Tokens are maximal runs of ASCII word characters after folding, so
    any letter the accent table does not cover acts as a separator.
    """

    def __init__(self, stop_words: Iterable[str] | None = None) -> None:
        self.stop_words = frozenset(stop_words) if stop_words is not None else STOP_WORDS

    @staticmethod
    def remove_accents(text: str) -> str:
        return text.translate(ACCENTS)

    def is_stopword(self, token: str) -> bool:
        return token in self.stop_words

    def iter_tokens(self, text: str, *, keep_stopwords: bool = True) -> Iterator[str]:
        for m in _WORD.finditer(self.remove_accents(text)):
            tok = m.group(0).lower()
            if not keep_stopwords and self.is_stopword(tok):
                continue
            yield tok

    def tokenize(self, text: str, *, keep_stopwords: bool = True) -> list[str]:
        """Normalize `text` into lowercase word tokens, in order."""
        return list(self.iter_tokens(text, keep_stopwords=keep_stopwords))

    def filter_stopwords(self, tokens: Iterable[str]) -> list[str]:
        return [t for t in tokens if not self.is_stopword(t)]
