"""Text normalization for full-text indexing.

Lowercases, splits on word characters and reduces every token to its
English Snowball stem so that "clustering", "clusters" and "clustered"
index as the same term.
"""

from __future__ import annotations

import re
import unicodedata
from functools import lru_cache

import snowballstemmer

MAX_TOKEN_LENGTH = 64

_WORD_RE = re.compile(r"[^\W_]+(?:'[^\W_]+)*")

_stemmer = snowballstemmer.stemmer("english")


def tokenize(text: str | None) -> list[str]:
    """Split text into lowercase word tokens.

    Apostrophes inside a word are removed (``don't`` -> ``dont``);
    tokens longer than ``MAX_TOKEN_LENGTH`` are dropped.
    """
    if not text:
        return []

    normalized = unicodedata.normalize("NFC", text).lower()
    tokens = []
    for match in _WORD_RE.finditer(normalized):
        token = match.group().replace("'", "")
        if len(token) <= MAX_TOKEN_LENGTH:
            tokens.append(token)
    return tokens


@lru_cache(maxsize=65536)
def stem(token: str) -> str:
    """Return the English Snowball stem of a lowercase token."""
    return _stemmer.stemWord(token)


def index_terms(text: str | None) -> list[str]:
    """Tokenize and stem ``text``, preserving token order."""
    return [stem(token) for token in tokenize(text)]
