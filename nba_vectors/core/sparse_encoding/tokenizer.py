"""
Text tokenizer for sparse vectors.

Dependencies: re (stdlib)
System role: First step of vocabulary build and TF-IDF encoding
"""

import re
from collections import Counter

_NON_WORD = re.compile(r"[^\w\s]", re.ASCII)
_MIN_TOKEN_LENGTH = 2


def normalize(text: str) -> list[str]:
    """
    Split text into lowercase word tokens.

    Punctuation becomes whitespace, so "3-pointers" yields "pointers" and
    "L.A." yields nothing. Word characters are ASCII only, so "Dončić" yields
    "don". Tokens of a single character are discarded.

    Args:
        text: Raw record or query text

    Returns:
        list[str]: Tokens in text order (duplicates kept)
    """
    cleaned = _NON_WORD.sub(" ", text.lower())
    return [token for token in cleaned.split() if len(token) >= _MIN_TOKEN_LENGTH]


def term_frequencies(tokens: list[str]) -> dict[str, float]:
    """
    Relative frequency of each distinct token.

    Args:
        tokens: Output of normalize()

    Returns:
        dict[str, float]: term -> count / len(tokens), in first-occurrence order
    """
    if not tokens:
        return {}
    total = len(tokens)
    return {term: count / total for term, count in Counter(tokens).items()}
