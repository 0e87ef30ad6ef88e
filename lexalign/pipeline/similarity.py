"""Token text similarity and casing helpers used by the matchers."""

from rapidfuzz.distance import Levenshtein


def normalized_similarity(a: str, b: str) -> float:
    """
    Levenshtein similarity normalized by the longer string.

    Returns 1.0 for identical strings (including two empty strings) and 0.0
    for strings with nothing in common.
    """
    return Levenshtein.normalized_similarity(a, b)


def uppercase_count(text: str) -> int:
    """Number of uppercase characters in text."""
    return sum(1 for char in text if char.isupper())


def casing_dominates(haystack_text: str, needle_text: str) -> bool:
    """
    Whether a haystack token is at least as capitalized as a needle token.

    A haystack token may carry more capitals than the needle (acronyms,
    title case), never fewer.
    """
    return uppercase_count(haystack_text) >= uppercase_count(needle_text)
