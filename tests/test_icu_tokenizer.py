"""Tests for the ICU tokenizer backend (skipped when PyICU is not installed)."""

import pytest

pytest.importorskip("icu")

from lexalign.core.schemas import Algorithm  # noqa: E402
from lexalign.pipeline.interfaces import NoTokenizerError  # noqa: E402
from lexalign.pipeline.tokenizers.icu_tokenizer import IcuTokenizer, utf16_offsets  # noqa: E402


@pytest.fixture(scope="module")
def tokenizer():
    return IcuTokenizer()


def test_utf16_offsets():
    """Test mapping UTF-16 units to characters around an astral character."""
    assert utf16_offsets("a😀b") == {0: 0, 1: 1, 3: 2, 4: 3}


@pytest.mark.parametrize("algorithm,text", [
    (Algorithm.JAPANESE, "日本語のテキストを分割します"),
    (Algorithm.THAI, "สวัสดีครับ ยินดีต้อนรับ"),
    (Algorithm.KOREAN, "한국어 문장을 나눕니다"),
])
def test_tokens_cover_original_text(tokenizer, algorithm, text):
    """Test that tokens are ordered surfaces of the original text."""
    tokens = tokenizer.tokenize(text, algorithm)

    assert len(tokens) > 1
    for token in tokens:
        assert text[token.start:token.end] == token.text
        assert token.text.strip()
    for previous, current in zip(tokens, tokens[1:]):
        assert previous.end <= current.start


def test_offsets_after_astral_character(tokenizer):
    """Test that offsets are characters even after a surrogate pair."""
    text = "😀 日本"

    tokens = tokenizer.tokenize(text, Algorithm.JAPANESE)

    assert tokens[-1].end == len(text)


def test_unsupported_algorithm(tokenizer):
    """Test that stemmed languages are rejected."""
    with pytest.raises(NoTokenizerError):
        tokenizer.tokenize("text", Algorithm.ENGLISH)
