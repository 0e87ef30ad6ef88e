"""
ICU word-break tokenizer.

Uses ICU's dictionary and statistical word-boundary models for scripts that
do not separate words with spaces (Japanese, Chinese, Thai, Burmese, Lao,
Khmer) and for Korean.
"""

from typing import Dict, List

import icu

from lexalign.core.schemas import Algorithm, Token
from lexalign.pipeline.interfaces import ITokenizer, NoTokenizerError, TokenizerError
from lexalign.utils.logger import setup_logger

logger = setup_logger(__name__)


ICU_LOCALES: Dict[Algorithm, str] = {
    Algorithm.JAPANESE: "ja",
    Algorithm.CHINESE: "zh",
    Algorithm.KOREAN: "ko",
    Algorithm.THAI: "th",
    Algorithm.BURMESE: "my",
    Algorithm.LAO: "lo",
    Algorithm.KHMER: "km",
}


def utf16_offsets(text: str) -> Dict[int, int]:
    """Map UTF-16 code unit offsets (as reported by ICU) to character offsets."""
    mapping = {}
    unit = 0
    for index, char in enumerate(text):
        mapping[unit] = index
        unit += 2 if ord(char) > 0xFFFF else 1
    mapping[unit] = len(text)
    return mapping


class IcuTokenizer(ITokenizer):
    """
    Word tokenizer backed by ICU break iterators.

    A break iterator is stateful, so one is created per call from the
    algorithm's locale. Segments made only of whitespace are dropped; texts
    are kept as written.
    """

    name = "icu"

    def __init__(self):
        """Initialize ICU tokenizer."""
        self._locales = {
            algorithm: icu.Locale(code) for algorithm, code in ICU_LOCALES.items()
        }
        logger.info(f"ICU tokenizer ready (ICU {icu.ICU_VERSION})")

    def supports(self, algorithm: Algorithm) -> bool:
        return algorithm in self._locales

    def tokenize(
        self,
        text: str,
        algorithm: Algorithm,
        case_sensitive: bool = False
    ) -> List[Token]:
        """
        Split text at ICU word boundaries.

        Args:
            text: Original input text
            algorithm: Segmented-script algorithm
            case_sensitive: Ignored, surfaces are never lowercased

        Returns:
            List of Token objects

        Raises:
            NoTokenizerError: If no ICU locale is configured for the algorithm
            TokenizerError: If segmentation fails
        """
        if not self.supports(algorithm):
            raise NoTokenizerError(algorithm)

        if not text:
            return []

        try:
            iterator = icu.BreakIterator.createWordInstance(self._locales[algorithm])
            iterator.setText(text)
            boundaries = [iterator.first()] + list(iterator)
        except icu.ICUError as e:
            logger.error(f"ICU segmentation failed: {str(e)}", exc_info=True)
            raise TokenizerError(f"Failed to segment text: {str(e)}")

        offsets = utf16_offsets(text)
        tokens = []
        for begin, end in zip(boundaries, boundaries[1:]):
            start, stop = offsets[begin], offsets[end]
            surface = text[start:stop]
            if surface.strip():
                tokens.append(Token(text=surface, start=start, len=stop - start))

        return tokens
