"""Dictionary-based Chinese word segmentation with jieba."""

import threading
from typing import List

import jieba

from lexalign.core.schemas import Algorithm, Token
from lexalign.pipeline.interfaces import ITokenizer, NoTokenizerError, TokenizerError
from lexalign.utils.logger import setup_logger

logger = setup_logger(__name__)


class JiebaTokenizer(ITokenizer):
    """
    Chinese tokenizer backed by a jieba dictionary.

    The dictionary is loaded once, on first use, and the segmenter is shared
    read-only afterwards. Token texts are the surfaces as written; casing is
    left untouched.
    """

    name = "jieba"

    def __init__(self, use_hmm: bool = True):
        """
        Initialize jieba tokenizer.

        Args:
            use_hmm: Use the HMM model to segment out-of-dictionary words
        """
        self.use_hmm = use_hmm
        self._segmenter = jieba.Tokenizer()
        self._init_lock = threading.Lock()
        self._initialized = False

    def supports(self, algorithm: Algorithm) -> bool:
        return algorithm == Algorithm.CHINESE

    def _ensure_initialized(self) -> None:
        with self._init_lock:
            if not self._initialized:
                self._segmenter.initialize()
                self._initialized = True
                logger.info("jieba dictionary loaded")

    def tokenize(
        self,
        text: str,
        algorithm: Algorithm,
        case_sensitive: bool = False
    ) -> List[Token]:
        """
        Segment Chinese text into words.

        Whitespace-only segments are dropped; punctuation segments are kept.

        Args:
            text: Original input text
            algorithm: Must be Algorithm.CHINESE
            case_sensitive: Ignored, surfaces are never lowercased

        Returns:
            List of Token objects

        Raises:
            NoTokenizerError: If algorithm is not Chinese
            TokenizerError: If segmentation fails
        """
        if not self.supports(algorithm):
            raise NoTokenizerError(algorithm)

        if not text:
            return []

        try:
            self._ensure_initialized()
            segments = list(self._segmenter.tokenize(text, mode="default", HMM=self.use_hmm))
        except Exception as e:
            logger.error(f"jieba segmentation failed: {str(e)}", exc_info=True)
            raise TokenizerError(f"Failed to segment text: {str(e)}")

        return [
            Token(text=word, start=start, len=end - start)
            for word, start, end in segments
            if word.strip()
        ]
