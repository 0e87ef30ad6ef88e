"""
Token sequence matching.

Locates a short token sequence (the needle) inside a longer one (the
haystack) by sliding a needle-sized window over the haystack. Windows are
compared exactly, fuzzily (mean normalized similarity of aligned tokens), or
exactly with a fuzzy fallback. Reported offsets and lengths are in characters
of the original haystack text, taken from the tokens themselves.
"""

from typing import List, Optional, Sequence, Tuple

from lexalign.core.schemas import MatchKind, MatchMode, MatchResult, Token
from lexalign.pipeline.similarity import casing_dominates, normalized_similarity
from lexalign.utils.logger import setup_logger

logger = setup_logger(__name__)

# (token index of the window start, result)
LocatedMatch = Tuple[int, MatchResult]


def _windows(haystack: Sequence[Token], size: int):
    """Yield (index, window) for every contiguous window of the given size."""
    if size == 0:
        return
    for index in range(len(haystack) - size + 1):
        yield index, haystack[index:index + size]


def _span_length(window: Sequence[Token]) -> int:
    return sum(token.len for token in window)


def _exact_pair(a: Token, b: Token, permissive: bool) -> bool:
    if not permissive:
        return a.text == b.text
    return a.text.lower() == b.text.lower() and casing_dominates(a.text, b.text)


def _pair_score(a: Token, b: Token, permissive: bool) -> float:
    if permissive:
        return normalized_similarity(a.text.lower(), b.text.lower())
    return normalized_similarity(a.text, b.text)


def _scan_exact(
    haystack: Sequence[Token],
    needle: Sequence[Token],
    permissive: bool
) -> Optional[LocatedMatch]:
    for index, window in _windows(haystack, len(needle)):
        if all(_exact_pair(a, b, permissive) for a, b in zip(window, needle)):
            return index, MatchResult.exact(window[0].start, _span_length(window))
    return None


def _scan_fuzzy(
    haystack: Sequence[Token],
    needle: Sequence[Token],
    threshold: float,
    permissive: bool
) -> Optional[LocatedMatch]:
    for index, window in _windows(haystack, len(needle)):
        score = sum(
            _pair_score(a, b, permissive) for a, b in zip(window, needle)
        ) / len(needle)

        if score < threshold:
            continue

        if permissive and not all(
            casing_dominates(a.text, b.text) for a, b in zip(window, needle)
        ):
            continue

        return index, MatchResult.fuzzy(window[0].start, _span_length(window), score)
    return None


def find_exact_match(
    haystack: Sequence[Token],
    needle: Sequence[Token],
    permissive: bool = False
) -> Optional[MatchResult]:
    """
    Return the first haystack window whose tokens equal the needle's.

    Args:
        haystack: Tokens to search within
        needle: Tokens to search for
        permissive: Compare lowercased texts and accept haystack tokens with
            at least as many uppercase characters as the needle token

    Returns:
        Exact MatchResult for the leftmost qualifying window, or None
    """
    located = _scan_exact(haystack, needle, permissive)
    return located[1] if located else None


def find_fuzzy_match(
    haystack: Sequence[Token],
    needle: Sequence[Token],
    threshold: float,
    permissive: bool = False
) -> Optional[MatchResult]:
    """
    Return the first haystack window scoring at least threshold.

    A window's score is the arithmetic mean of the normalized similarity of
    each aligned token pair. With permissive, texts are lowercased before
    scoring and every haystack token must be at least as capitalized as its
    needle token.

    Args:
        haystack: Tokens to search within
        needle: Tokens to search for
        threshold: Minimum accepted score (inclusive)
        permissive: Casing tolerance, see find_exact_match

    Returns:
        Fuzzy MatchResult carrying the window score, or None
    """
    located = _scan_fuzzy(haystack, needle, threshold, permissive)
    return located[1] if located else None


def locate_match(
    haystack: Sequence[Token],
    needle: Sequence[Token],
    mode: MatchMode,
    permissive: bool = False
) -> Optional[LocatedMatch]:
    """
    Dispatch on mode and return the first match with its window's token index.

    An empty needle, or a needle longer than the haystack, never matches.
    BOTH prefers an exact match and only then tries fuzzy matching.
    """
    if not needle or len(needle) > len(haystack):
        return None

    if mode.kind == MatchKind.EXACT:
        return _scan_exact(haystack, needle, permissive)

    if mode.kind == MatchKind.FUZZY:
        return _scan_fuzzy(haystack, needle, mode.threshold, permissive)

    return (
        _scan_exact(haystack, needle, permissive)
        or _scan_fuzzy(haystack, needle, mode.threshold, permissive)
    )


def find_match(
    haystack: Sequence[Token],
    needle: Sequence[Token],
    mode: MatchMode,
    permissive: bool = False
) -> Optional[MatchResult]:
    """
    Match two token sequences based on mode and return the first match.

    Args:
        haystack: Tokens to search within
        needle: Tokens to search for
        mode: MatchMode to use (EXACT, FUZZY or BOTH)
        permissive: If haystack tokens are more uppercased than needle
            tokens, they still match

    Returns:
        MatchResult if a match is found, None otherwise
    """
    located = locate_match(haystack, needle, mode, permissive)
    return located[1] if located else None


def find_all_matches(
    haystack: Sequence[Token],
    needle: Sequence[Token],
    mode: MatchMode,
    permissive: bool = False
) -> List[MatchResult]:
    """
    Match two token sequences based on mode and return every match.

    After each hit the search resumes one token past the start of the matched
    window, so later matches may overlap earlier ones but never start at the
    same token. The search stops at the first miss, since each search already
    covers the whole remaining suffix.

    Args:
        haystack: Tokens to search within
        needle: Tokens to search for
        mode: MatchMode to use
        permissive: Casing tolerance, see find_match

    Returns:
        Matches in increasing offset order, empty if none were found
    """
    if not needle or len(needle) > len(haystack):
        return []

    results: List[MatchResult] = []
    cursor = 0

    while cursor < len(haystack):
        located = locate_match(haystack[cursor:], needle, mode, permissive)
        if located is None:
            break

        index, result = located
        results.append(result)
        cursor += index + 1

    logger.debug(
        f"Found {len(results)} matches (mode={mode.kind.value}, "
        f"needle_tokens={len(needle)}, haystack_tokens={len(haystack)})"
    )

    return results
