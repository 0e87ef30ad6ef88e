"""
Snowball stemming tokenizer.

Splits text into Unicode words and stems each one with the Snowball
algorithm of the requested language. Offsets refer to the original text;
only the token text is normalized and stemmed.
"""

import threading
from typing import Dict, List, Tuple

import regex
import snowballstemmer

from lexalign.core.schemas import Algorithm, Token
from lexalign.pipeline.interfaces import ITokenizer, NoTokenizerError, TokenizerError
from lexalign.utils.logger import setup_logger
from lexalign.utils.text_normalizer import normalizer

logger = setup_logger(__name__)


# Unicode default word boundaries (UAX #29)
WORD_BOUNDARY = regex.compile(r"(?w)\b")

# Snowball stemmer name for every stemmed algorithm
SNOWBALL_NAMES: Dict[Algorithm, str] = {
    Algorithm.ARABIC: "arabic",
    Algorithm.ARMENIAN: "armenian",
    Algorithm.BASQUE: "basque",
    Algorithm.CATALAN: "catalan",
    Algorithm.DANISH: "danish",
    Algorithm.DUTCH: "dutch",
    Algorithm.DUTCH_PORTER: "dutch_porter",
    Algorithm.ENGLISH: "english",
    Algorithm.ESPERANTO: "esperanto",
    Algorithm.ESTONIAN: "estonian",
    Algorithm.FINNISH: "finnish",
    Algorithm.FRENCH: "french",
    Algorithm.GERMAN: "german",
    Algorithm.GREEK: "greek",
    Algorithm.HINDI: "hindi",
    Algorithm.HUNGARIAN: "hungarian",
    Algorithm.INDONESIAN: "indonesian",
    Algorithm.IRISH: "irish",
    Algorithm.ITALIAN: "italian",
    Algorithm.LITHUANIAN: "lithuanian",
    Algorithm.LOVINS: "lovins",
    Algorithm.NEPALI: "nepali",
    Algorithm.NORWEGIAN: "norwegian",
    Algorithm.PORTER: "porter",
    Algorithm.PORTUGUESE: "portuguese",
    Algorithm.ROMANIAN: "romanian",
    Algorithm.RUSSIAN: "russian",
    Algorithm.SERBIAN: "serbian",
    Algorithm.SPANISH: "spanish",
    Algorithm.SWEDISH: "swedish",
    Algorithm.TAMIL: "tamil",
    Algorithm.TURKISH: "turkish",
    Algorithm.YIDDISH: "yiddish",
}


def split_words(text: str) -> List[Tuple[int, str]]:
    """
    Split text into (start, word) pairs with character offsets.

    Segments follow Unicode default word boundaries, so inner apostrophes,
    decimal points and abbreviation dots stay inside a word ("that's",
    "3.14", "e.g"). Segments without any letter or digit (spaces,
    punctuation, a lone underscore) are skipped.
    """
    boundaries = sorted({0, len(text)} | {m.start() for m in WORD_BOUNDARY.finditer(text)})

    words = []
    for start, end in zip(boundaries, boundaries[1:]):
        word = text[start:end]
        if any(char.isalnum() for char in word):
            words.append((start, word))
    return words


class SnowballTokenizer(ITokenizer):
    """
    Word tokenizer with Snowball stemming.

    Stemmer objects keep per-call state, so each one is created on first use
    and then only used under its own lock.
    """

    name = "snowball"

    def __init__(self):
        """Initialize with the stemmer names the installed library ships."""
        self._available = set(snowballstemmer.algorithms())
        self._stemmers: Dict[Algorithm, object] = {}
        self._locks: Dict[Algorithm, threading.Lock] = {}
        self._guard = threading.Lock()

        logger.info(f"Snowball tokenizer ready ({len(self._available)} stemmers available)")

    def supports(self, algorithm: Algorithm) -> bool:
        name = SNOWBALL_NAMES.get(algorithm)
        return name is not None and name in self._available

    def _stemmer_for(self, algorithm: Algorithm):
        with self._guard:
            if algorithm not in self._stemmers:
                self._stemmers[algorithm] = snowballstemmer.stemmer(SNOWBALL_NAMES[algorithm])
                self._locks[algorithm] = threading.Lock()
            return self._stemmers[algorithm], self._locks[algorithm]

    def tokenize(
        self,
        text: str,
        algorithm: Algorithm,
        case_sensitive: bool = False
    ) -> List[Token]:
        """
        Tokenize and stem text.

        Args:
            text: Original input text
            algorithm: Snowball language algorithm
            case_sensitive: Stem words as written instead of lowercased

        Returns:
            List of stemmed Token objects

        Raises:
            NoTokenizerError: If no stemmer exists for the algorithm
            TokenizerError: If stemming fails
        """
        if not self.supports(algorithm):
            raise NoTokenizerError(algorithm)

        words = split_words(text)
        if not words:
            return []

        normalized = []
        for _, word in words:
            word = normalizer.normalize_word(word)
            normalized.append(word if case_sensitive else word.lower())

        stemmer, lock = self._stemmer_for(algorithm)
        try:
            with lock:
                stems = stemmer.stemWords(normalized)
        except Exception as e:
            logger.error(f"Stemming failed for {algorithm.value}: {str(e)}", exc_info=True)
            raise TokenizerError(f"Failed to stem text: {str(e)}")

        return [
            Token(text=stem, start=start, len=len(word))
            for (start, word), stem in zip(words, stems)
        ]
