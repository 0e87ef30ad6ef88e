"""Tests for core data schemas."""

import pytest
from pydantic import ValidationError

from lexalign.core.schemas import (
    Algorithm,
    AlignRequest,
    AlignmentResult,
    MatchKind,
    MatchMode,
    MatchRequest,
    MatchResult,
    MatchType,
    Token
)


class TestToken:
    """Test Token model."""

    def test_create_token(self):
        """Test creating a valid Token."""
        token = Token(text="someon", start=7, len=7)

        assert token.text == "someon"
        assert token.start == 7
        assert token.end == 14

    def test_equality_ignores_positions(self):
        """Test that tokens with equal texts are equal wherever they occur."""
        assert Token(text="run", start=0, len=3) == Token(text="run", start=40, len=7)
        assert Token(text="run", start=0, len=3) != Token(text="ran", start=0, len=3)

    def test_equality_with_plain_string(self):
        """Test that a token compares equal to a string with the same text."""
        token = Token(text="rizz", start=23, len=4)

        assert token == "rizz"
        assert token != "Rizz"

    def test_hash_follows_text(self):
        """Test that equal tokens hash equally."""
        tokens = {Token(text="a", start=0, len=1), Token(text="a", start=2, len=1)}

        assert len(tokens) == 1

    def test_token_is_frozen(self):
        """Test that tokens cannot be mutated."""
        token = Token(text="word", start=0, len=4)

        with pytest.raises(ValidationError):
            token.text = "other"

    def test_negative_start_rejected(self):
        """Test that negative offsets raise validation error."""
        with pytest.raises(ValidationError):
            Token(text="word", start=-1, len=4)


class TestMatchMode:
    """Test MatchMode model."""

    def test_constructors(self):
        """Test the exact, fuzzy and both constructors."""
        assert MatchMode.exact().kind == MatchKind.EXACT
        assert MatchMode.fuzzy(0.8) == MatchMode(kind=MatchKind.FUZZY, threshold=0.8)
        assert MatchMode.both(0.75).threshold == 0.75

    def test_threshold_not_validated(self):
        """Test that out-of-range thresholds are accepted as given."""
        assert MatchMode.fuzzy(1.5).threshold == 1.5
        assert MatchMode.fuzzy(-0.5).threshold == -0.5

    def test_to_tuple(self):
        """Test the compact [tag, threshold] form."""
        assert MatchMode.exact().to_tuple() == (0, 0.0)
        assert MatchMode.fuzzy(0.8).to_tuple() == (1, 0.8)
        assert MatchMode.both(0.6).to_tuple() == (2, 0.6)

    def test_from_tuple(self):
        """Test decoding the compact form."""
        assert MatchMode.from_tuple([0, 0.9]) == MatchMode.exact()
        assert MatchMode.from_tuple([1, 0.8]) == MatchMode.fuzzy(0.8)
        assert MatchMode.from_tuple((2, 1)) == MatchMode.both(1.0)

    def test_from_tuple_invalid_tag(self):
        """Test that an unknown tag is rejected."""
        with pytest.raises(ValueError, match="invalid MatchMode tag"):
            MatchMode.from_tuple([3, 0.5])

    def test_from_tuple_wrong_arity(self):
        """Test that anything but a pair is rejected."""
        with pytest.raises(ValueError):
            MatchMode.from_tuple([1])
        with pytest.raises(ValueError):
            MatchMode.from_tuple([1, 0.5, 0.5])

    def test_compact_form_validated(self):
        """Test that [tag, threshold] validates like the object form."""
        assert MatchMode.model_validate([1, 0.8]) == MatchMode.fuzzy(0.8)
        assert MatchMode.model_validate((0, 0.5)) == MatchMode.exact()
        assert MatchMode.model_validate({"kind": "both", "threshold": 0.7}) == MatchMode.both(0.7)

    def test_compact_form_rejects_bad_values(self):
        """Test that malformed compact forms raise validation error."""
        for value in ([7, 0.5], [1], ["fuzzy", 0.5], [1, None]):
            with pytest.raises(ValidationError):
                MatchMode.model_validate(value)

    def test_compact_form_in_request_body(self):
        """Test that request models accept the compact mode form."""
        request = MatchRequest(haystack="a b", needle="a", algorithm="english", mode=[2, 0.6])

        assert request.mode == MatchMode.both(0.6)

    def test_mode_in_request_body(self):
        """Test that request models parse modes and default to exact."""
        request = MatchRequest(
            haystack="a b",
            needle="a",
            algorithm="english",
            mode={"kind": "fuzzy", "threshold": 0.7}
        )

        assert request.mode == MatchMode.fuzzy(0.7)
        assert MatchRequest(haystack="a", needle="a", algorithm="english").mode == MatchMode.exact()


class TestMatchResult:
    """Test MatchResult model."""

    def test_exact_result(self):
        """Test an exact result and its compact form."""
        result = MatchResult.exact(33, 12)

        assert result.is_exact
        assert result.end == 45
        assert result.score is None
        assert result.as_tuple() == (33, 12)

    def test_fuzzy_result(self):
        """Test a fuzzy result and its compact form."""
        result = MatchResult.fuzzy(4, 8, 0.9)

        assert not result.is_exact
        assert result.kind == MatchType.FUZZY
        assert result.as_tuple() == (4, 8, 0.9)

    def test_from_tuple_selects_variant_by_arity(self):
        """Test that 2 items decode as exact and 3 items as fuzzy."""
        assert MatchResult.from_tuple([5, 3]) == MatchResult.exact(5, 3)
        assert MatchResult.from_tuple([5, 3, 0.5]) == MatchResult.fuzzy(5, 3, 0.5)

    def test_from_tuple_wrong_arity(self):
        """Test that other tuple lengths are rejected."""
        with pytest.raises(ValueError):
            MatchResult.from_tuple([5])
        with pytest.raises(ValueError):
            MatchResult.from_tuple([5, 3, 0.5, 1])


class TestAlgorithm:
    """Test Algorithm enumeration."""

    def test_family_predicates(self):
        """Test that every algorithm belongs to exactly one family."""
        for algorithm in Algorithm:
            families = [algorithm.is_snowball, algorithm.is_cjk, algorithm.is_southeast_asian]
            expected = 0 if algorithm is Algorithm.NONE else 1
            assert sum(families) == expected

    def test_examples(self):
        """Test a few known algorithms."""
        assert Algorithm.ENGLISH.is_snowball
        assert Algorithm.CHINESE.is_cjk
        assert Algorithm.THAI.is_southeast_asian
        assert Algorithm("dutch_porter") is Algorithm.DUTCH_PORTER


class TestAlignment:
    """Test alignment request and result models."""

    def test_matched_requires_both_sides(self):
        """Test that matched is true only when both sides have matches."""
        one = [MatchResult.exact(0, 4)]

        assert AlignmentResult(source_matches=one, translation_matches=one).matched
        assert not AlignmentResult(source_matches=one).matched
        assert not AlignmentResult(translation_matches=one).matched

    def test_matched_is_serialized(self):
        """Test that the computed matched flag appears in dumps."""
        data = AlignmentResult().model_dump()

        assert data["matched"] is False
        assert data["source_matches"] == []

    def test_empty_term_rejected(self):
        """Test that an empty term raises validation error."""
        with pytest.raises(ValidationError):
            AlignRequest(
                term="",
                term_translation="terme",
                source_text="text",
                source_translation="texte",
                source_algorithm=Algorithm.ENGLISH,
                translation_algorithm=Algorithm.FRENCH
            )
