"""Canonical data models and schemas for the LexAlign matching engine."""

from enum import Enum
from typing import List, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator


# ============================================================================
# Enumerations
# ============================================================================

class Algorithm(str, Enum):
    """Language algorithm used to tokenize a text."""
    NONE = "none"

    # Snowball stemmers
    ARABIC = "arabic"
    ARMENIAN = "armenian"
    BASQUE = "basque"
    CATALAN = "catalan"
    DANISH = "danish"
    DUTCH = "dutch"
    DUTCH_PORTER = "dutch_porter"
    ENGLISH = "english"
    ESPERANTO = "esperanto"
    ESTONIAN = "estonian"
    FINNISH = "finnish"
    FRENCH = "french"
    GERMAN = "german"
    GREEK = "greek"
    HINDI = "hindi"
    HUNGARIAN = "hungarian"
    INDONESIAN = "indonesian"
    IRISH = "irish"
    ITALIAN = "italian"
    LITHUANIAN = "lithuanian"
    LOVINS = "lovins"
    NEPALI = "nepali"
    NORWEGIAN = "norwegian"
    PORTER = "porter"
    PORTUGUESE = "portuguese"
    ROMANIAN = "romanian"
    RUSSIAN = "russian"
    SERBIAN = "serbian"
    SPANISH = "spanish"
    SWEDISH = "swedish"
    TAMIL = "tamil"
    TURKISH = "turkish"
    YIDDISH = "yiddish"

    # Dictionary-based segmentation
    JAPANESE = "japanese"
    CHINESE = "chinese"
    KOREAN = "korean"

    # Statistical word-boundary segmentation
    THAI = "thai"
    BURMESE = "burmese"
    LAO = "lao"
    KHMER = "khmer"

    @property
    def is_cjk(self) -> bool:
        return self in (Algorithm.JAPANESE, Algorithm.CHINESE, Algorithm.KOREAN)

    @property
    def is_southeast_asian(self) -> bool:
        return self in (Algorithm.THAI, Algorithm.BURMESE, Algorithm.LAO, Algorithm.KHMER)

    @property
    def is_snowball(self) -> bool:
        return self is not Algorithm.NONE and not self.is_cjk and not self.is_southeast_asian


class MatchKind(str, Enum):
    """How tokens are compared by the dispatcher."""
    EXACT = "exact"
    FUZZY = "fuzzy"
    BOTH = "both"


class MatchType(str, Enum):
    """Which matcher produced a result."""
    EXACT = "exact"
    FUZZY = "fuzzy"


# Compact tags used by MatchMode.to_tuple / from_tuple
_MODE_TAGS = {MatchKind.EXACT: 0, MatchKind.FUZZY: 1, MatchKind.BOTH: 2}
_TAG_MODES = {tag: kind for kind, tag in _MODE_TAGS.items()}


def _decode_mode(value: Sequence[Union[int, float]]) -> dict:
    if len(value) != 2:
        raise ValueError(f"expected a pair [tag, threshold], got {len(value)} items")

    tag, threshold = value
    if not isinstance(tag, int) or tag not in _TAG_MODES:
        raise ValueError(f"invalid MatchMode tag: {tag}")
    if not isinstance(threshold, (int, float)):
        raise ValueError(f"invalid MatchMode threshold: {threshold!r}")

    kind = _TAG_MODES[tag]
    return {"kind": kind, "threshold": 0.0 if kind == MatchKind.EXACT else float(threshold)}


# ============================================================================
# Tokens
# ============================================================================

class Token(BaseModel):
    """
    A normalized unit of text with its position in the original input.

    Attributes:
        text: Normalized surface form (case, punctuation, stemming applied)
        start: 0-based character offset of the first character in the original input
        len: Character length of the original span the token was derived from

    Two tokens are equal when their texts are equal; a token also compares
    equal to a plain string holding the same text.
    """
    model_config = ConfigDict(frozen=True)

    text: str = Field(..., description="Normalized token text")
    start: int = Field(..., ge=0, description="Character offset in original input")
    len: int = Field(..., ge=0, description="Character length in original input")

    @property
    def end(self) -> int:
        """Character offset one past the token's original span."""
        return self.start + self.len

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Token):
            return self.text == other.text
        if isinstance(other, str):
            return self.text == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.text)


# ============================================================================
# Match mode and results
# ============================================================================

class MatchMode(BaseModel):
    """
    Matching mode for the dispatcher.

    EXACT compares token texts; FUZZY scores windows by mean normalized
    similarity; BOTH tries EXACT first and falls back to FUZZY. The threshold
    is expected in [0, 1] but is not validated: above 1.0 fuzzy matching never
    succeeds, at or below 0.0 it always does. Thresholds around 0.75-0.85 suit
    most inputs; use higher values for short needles.

    Besides an object, the compact [tag, threshold] form (0 = EXACT,
    1 = FUZZY, 2 = BOTH) is accepted wherever a mode is validated.
    """
    model_config = ConfigDict(frozen=True)

    kind: MatchKind = Field(default=MatchKind.EXACT, description="Matching strategy")
    threshold: float = Field(default=0.0, description="Fuzzy acceptance threshold")

    @model_validator(mode="before")
    @classmethod
    def accept_compact_form(cls, data):
        """Decode [tag, threshold] lists and tuples."""
        if isinstance(data, (list, tuple)):
            return _decode_mode(data)
        return data

    @classmethod
    def exact(cls) -> "MatchMode":
        return cls(kind=MatchKind.EXACT)

    @classmethod
    def fuzzy(cls, threshold: float) -> "MatchMode":
        return cls(kind=MatchKind.FUZZY, threshold=threshold)

    @classmethod
    def both(cls, threshold: float) -> "MatchMode":
        return cls(kind=MatchKind.BOTH, threshold=threshold)

    def to_tuple(self) -> Tuple[int, float]:
        """Compact [tag, threshold] form; EXACT carries a 0.0 threshold."""
        threshold = 0.0 if self.kind == MatchKind.EXACT else self.threshold
        return (_MODE_TAGS[self.kind], threshold)

    @classmethod
    def from_tuple(cls, value: Sequence[Union[int, float]]) -> "MatchMode":
        """
        Decode the compact [tag, threshold] form.

        Raises:
            ValueError: On wrong arity or an unknown tag
        """
        return cls(**_decode_mode(value))


class MatchResult(BaseModel):
    """
    A located match.

    Attributes:
        kind: EXACT or FUZZY
        offset: Character offset of the first matched haystack token
        length: Sum of the matched haystack tokens' character lengths
        score: Mean similarity score (FUZZY only)
    """
    model_config = ConfigDict(frozen=True)

    kind: MatchType = Field(..., description="Matcher that produced this result")
    offset: int = Field(..., ge=0, description="Character offset in haystack input")
    length: int = Field(..., ge=0, description="Character length covered in haystack input")
    score: Optional[float] = Field(default=None, description="Similarity score for fuzzy matches")

    @classmethod
    def exact(cls, offset: int, length: int) -> "MatchResult":
        return cls(kind=MatchType.EXACT, offset=offset, length=length)

    @classmethod
    def fuzzy(cls, offset: int, length: int, score: float) -> "MatchResult":
        return cls(kind=MatchType.FUZZY, offset=offset, length=length, score=score)

    @property
    def is_exact(self) -> bool:
        return self.kind == MatchType.EXACT

    @property
    def end(self) -> int:
        return self.offset + self.length

    def as_tuple(self) -> Union[Tuple[int, int], Tuple[int, int, float]]:
        """(offset, length) for exact matches, (offset, length, score) for fuzzy ones."""
        if self.kind == MatchType.EXACT:
            return (self.offset, self.length)
        return (self.offset, self.length, self.score)

    @classmethod
    def from_tuple(cls, value: Sequence[Union[int, float]]) -> "MatchResult":
        """
        Decode the compact tuple form; the arity selects the variant.

        Raises:
            ValueError: If the tuple does not have 2 or 3 items
        """
        if len(value) == 2:
            return cls.exact(int(value[0]), int(value[1]))
        if len(value) == 3:
            return cls.fuzzy(int(value[0]), int(value[1]), float(value[2]))
        raise ValueError(f"expected a tuple of length 2 or 3, got {len(value)}")


# ============================================================================
# API Request/Response Models
# ============================================================================

class TokenizeRequest(BaseModel):
    """Request to tokenize a text."""
    text: str = Field(..., description="Text to tokenize")
    algorithm: Algorithm = Field(..., description="Language algorithm")
    case_sensitive: bool = Field(default=False, description="Keep original casing (stemmed languages only)")


class TokenizeResponse(BaseModel):
    """Tokens produced for a text."""
    algorithm: Algorithm = Field(..., description="Language algorithm used")
    tokens: List[Token] = Field(default_factory=list, description="Tokens in input order")


class MatchRequest(BaseModel):
    """Request to locate a needle text inside a haystack text."""
    haystack: str = Field(..., description="Text to search within")
    needle: str = Field(..., description="Text to search for")
    algorithm: Algorithm = Field(..., description="Language algorithm for both texts")
    case_sensitive: bool = Field(default=False, description="Keep original casing")
    mode: MatchMode = Field(default_factory=MatchMode.exact, description="Matching mode")
    permissive: bool = Field(default=False, description="Allow more-capitalized haystack tokens")
    all_matches: bool = Field(default=False, description="Return every match instead of the first")


class MatchResponse(BaseModel):
    """Matches found for a MatchRequest."""
    matches: List[MatchResult] = Field(default_factory=list, description="Matches in haystack order")


class AlignRequest(BaseModel):
    """Request to align a term and its translation against a source text and its translation."""
    term: str = Field(..., min_length=1, description="Term in the source language")
    term_translation: str = Field(..., min_length=1, description="Term in the translation language")
    source_text: str = Field(..., description="Source text")
    source_translation: str = Field(..., description="Translated source text")
    source_algorithm: Algorithm = Field(..., description="Algorithm for term and source text")
    translation_algorithm: Algorithm = Field(..., description="Algorithm for translations")
    source_case_sensitive: bool = Field(default=False, description="Case mode for source side")
    translation_case_sensitive: bool = Field(default=False, description="Case mode for translation side")
    mode: MatchMode = Field(default_factory=MatchMode.exact, description="Matching mode")
    permissive: bool = Field(default=False, description="Allow more-capitalized haystack tokens")
    all_matches: bool = Field(default=False, description="Return every match instead of the first")


class AlignmentResult(BaseModel):
    """Result of aligning a term pair against a text pair."""
    source_matches: List[MatchResult] = Field(default_factory=list, description="Term matches in source text")
    translation_matches: List[MatchResult] = Field(default_factory=list, description="Translation matches")

    @computed_field
    @property
    def matched(self) -> bool:
        """True when both the term and its translation were located."""
        return bool(self.source_matches) and bool(self.translation_matches)


class AlgorithmInfo(BaseModel):
    """Availability of a tokenizer for an algorithm."""
    algorithm: Algorithm = Field(..., description="Language algorithm")
    available: bool = Field(..., description="Whether a tokenizer is usable right now")
    backend: Optional[str] = Field(default=None, description="Backend name if available")


class ErrorResponse(BaseModel):
    """Error response model."""
    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Error message")
    detail: Optional[str] = Field(default=None, description="Additional details")
