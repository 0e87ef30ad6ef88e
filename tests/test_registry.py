"""Tests for the tokenizer backend registry."""

from typing import List

import pytest

from lexalign.config import BackendChoice, Settings
from lexalign.core.schemas import Algorithm, Token
from lexalign.pipeline import registry as registry_module
from lexalign.pipeline.interfaces import ITokenizer, NoTokenizerError
from lexalign.pipeline.registry import BACKEND_FACTORIES, TokenizerRegistry


class WhitespaceTokenizer(ITokenizer):
    """Splits on single spaces; stands in for a segmenter in tests."""

    name = "whitespace"

    def __init__(self, algorithms):
        self.algorithms = set(algorithms)

    def supports(self, algorithm: Algorithm) -> bool:
        return algorithm in self.algorithms

    def tokenize(self, text: str, algorithm: Algorithm, case_sensitive: bool = False) -> List[Token]:
        tokens = []
        offset = 0
        for word in text.split(" "):
            if word:
                tokens.append(Token(text=word, start=offset, len=len(word)))
            offset += len(word) + 1
        return tokens


class TestBackendSelection:
    """Test mapping algorithms to configured backends."""

    def test_default_choices(self):
        """Test the backend names chosen by default settings."""
        registry = TokenizerRegistry(Settings())

        assert registry.backend_name(Algorithm.ENGLISH) == "snowball"
        assert registry.backend_name(Algorithm.CHINESE) == "jieba"
        assert registry.backend_name(Algorithm.JAPANESE) == "icu"
        assert registry.backend_name(Algorithm.THAI) == "icu"
        assert registry.backend_name(Algorithm.NONE) is None

    def test_none_algorithm_has_no_tokenizer(self):
        """Test that Algorithm.NONE always raises NoTokenizerError."""
        registry = TokenizerRegistry(Settings())

        with pytest.raises(NoTokenizerError) as exc_info:
            registry.tokenize("text", Algorithm.NONE)

        assert exc_info.value.algorithm is Algorithm.NONE
        assert "'none'" in str(exc_info.value)

    def test_disabled_snowball(self):
        """Test that disabling snowball removes every stemmed language."""
        registry = TokenizerRegistry(Settings(snowball_enabled=False))

        assert not registry.is_available(Algorithm.ENGLISH)
        with pytest.raises(NoTokenizerError):
            registry.tokenize("text", Algorithm.ENGLISH)

    def test_family_set_to_none(self):
        """Test that a family configured with 'none' has no tokenizer."""
        registry = TokenizerRegistry(Settings(chinese_tokenizer=BackendChoice.NONE))

        with pytest.raises(NoTokenizerError):
            registry.tokenize("机器学习", Algorithm.CHINESE)

    def test_backend_not_supporting_algorithm(self):
        """Test that choosing jieba for Japanese yields no tokenizer."""
        registry = TokenizerRegistry(Settings(japanese_tokenizer="jieba"))

        with pytest.raises(NoTokenizerError):
            registry.get_backend(Algorithm.JAPANESE)


class TestBackendLoading:
    """Test lazy loading and registration of backends."""

    def test_snowball_loaded_once(self):
        """Test that the same backend instance serves every stemmed language."""
        registry = TokenizerRegistry(Settings())

        english = registry.get_backend(Algorithm.ENGLISH)
        french = registry.get_backend(Algorithm.FRENCH)

        assert english is french
        assert english.name == "snowball"

    def test_registered_backend_is_used(self):
        """Test that an injected backend serves its family."""
        registry = TokenizerRegistry(Settings())
        registry.register("icu", WhitespaceTokenizer([Algorithm.THAI]))

        tokens = registry.tokenize("สวัสดี ครับ", Algorithm.THAI)

        assert [t.text for t in tokens] == ["สวัสดี", "ครับ"]
        assert registry.is_available(Algorithm.THAI)
        assert not registry.is_available(Algorithm.KHMER)

    def test_missing_library_reports_unavailable(self, monkeypatch):
        """Test that a backend whose module is not installed is unavailable."""
        _, factory = BACKEND_FACTORIES["snowball"]
        monkeypatch.setitem(BACKEND_FACTORIES, "snowball", ("not_a_real_module_xyz", factory))
        registry = TokenizerRegistry(Settings())

        assert not registry.is_available(Algorithm.ENGLISH)
        with pytest.raises(NoTokenizerError):
            registry.tokenize("text", Algorithm.ENGLISH)

    def test_backend_failing_to_load_reports_unavailable(self, monkeypatch):
        """Test that a backend whose library fails to load is unavailable, and stays so."""
        calls = []

        def broken_factory(config):
            calls.append(config)
            raise ImportError("libicui18n.so.73: cannot open shared object file")

        monkeypatch.setitem(BACKEND_FACTORIES, "icu", ("snowballstemmer", broken_factory))
        registry = TokenizerRegistry(Settings())

        assert registry.is_available(Algorithm.THAI) is False
        with pytest.raises(NoTokenizerError):
            registry.tokenize("สวัสดี", Algorithm.THAI)
        assert len(calls) == 1

        # Other families are unaffected
        infos = {info.algorithm: info for info in registry.describe()}
        assert infos[Algorithm.ENGLISH].available
        assert not infos[Algorithm.JAPANESE].available

    def test_describe_lists_every_algorithm(self):
        """Test that describe() reports one entry per algorithm."""
        registry = TokenizerRegistry(Settings())

        infos = registry.describe()
        by_algorithm = {info.algorithm: info for info in infos}

        assert len(infos) == len(Algorithm)
        assert by_algorithm[Algorithm.ENGLISH].available
        assert by_algorithm[Algorithm.ENGLISH].backend == "snowball"
        assert not by_algorithm[Algorithm.NONE].available
        assert by_algorithm[Algorithm.NONE].backend is None

    def test_available_algorithms(self):
        """Test that available algorithms include stemmed languages but not NONE."""
        available = TokenizerRegistry(Settings()).available_algorithms()

        assert Algorithm.ENGLISH in available
        assert Algorithm.CHINESE in available
        assert Algorithm.NONE not in available


def test_module_level_tokenize():
    """Test the shared-registry tokenize helper."""
    tokens = registry_module.tokenize("that's someone who can rizz", Algorithm.ENGLISH)

    assert [t.text for t in tokens] == ["that", "someon", "who", "can", "rizz"]
