"""
Alignment service for locating terms in source texts and their translations.

Tokenizes each text with the backend configured for its language, then runs
the token matcher. Tokenization errors propagate unchanged: the matcher is
never invoked without a valid token sequence.
"""

from typing import List, Optional

from lexalign.config import settings
from lexalign.core.schemas import (
    AlignRequest, AlignmentResult, Algorithm, MatchMode, MatchRequest, MatchResponse,
    MatchResult, Token, TokenizeRequest, TokenizeResponse
)
from lexalign.pipeline.matcher import find_all_matches, find_match
from lexalign.pipeline.registry import TokenizerRegistry, get_registry
from lexalign.utils.exceptions import TextTooLongError
from lexalign.utils.logger import log_match_event, setup_logger

logger = setup_logger(__name__)


class AlignmentService:
    """
    Service tying tokenizer backends to the matching engine.

    Stateless apart from the shared tokenizer registry, so one instance can
    serve concurrent requests.
    """

    def __init__(self, registry: TokenizerRegistry, max_text_length: int = settings.max_text_length):
        """
        Initialize alignment service.

        Args:
            registry: Tokenizer registry used for every text
            max_text_length: Longest accepted input, in characters
        """
        self.registry = registry
        self.max_text_length = max_text_length

    def _check_length(self, **texts: str) -> None:
        for field, text in texts.items():
            if len(text) > self.max_text_length:
                raise TextTooLongError(
                    f"Field '{field}' exceeds maximum length of {self.max_text_length} characters",
                    detail=f"length={len(text)}"
                )

    def _tokenize(self, text: str, algorithm: Algorithm, case_sensitive: bool) -> List[Token]:
        return self.registry.tokenize(text, algorithm, case_sensitive)

    @staticmethod
    def _run(
        haystack: List[Token],
        needle: List[Token],
        mode: MatchMode,
        permissive: bool,
        all_matches: bool
    ) -> List[MatchResult]:
        if all_matches:
            return find_all_matches(haystack, needle, mode, permissive)
        match = find_match(haystack, needle, mode, permissive)
        return [match] if match else []

    def tokenize(self, request: TokenizeRequest) -> TokenizeResponse:
        """
        Tokenize a single text.

        Raises:
            TextTooLongError: If the text exceeds the configured maximum
            NoTokenizerError: If no tokenizer is available for the algorithm
        """
        self._check_length(text=request.text)
        tokens = self._tokenize(request.text, request.algorithm, request.case_sensitive)

        log_match_event(logger, "tokenize", algorithm=request.algorithm.value, tokens=len(tokens))

        return TokenizeResponse(algorithm=request.algorithm, tokens=tokens)

    def match(self, request: MatchRequest) -> MatchResponse:
        """
        Locate a needle text inside a haystack text of the same language.

        Raises:
            TextTooLongError: If either text exceeds the configured maximum
            NoTokenizerError: If no tokenizer is available for the algorithm
        """
        self._check_length(haystack=request.haystack, needle=request.needle)

        haystack = self._tokenize(request.haystack, request.algorithm, request.case_sensitive)
        needle = self._tokenize(request.needle, request.algorithm, request.case_sensitive)

        matches = self._run(
            haystack, needle, request.mode, request.permissive, request.all_matches
        )

        log_match_event(
            logger, "match",
            algorithm=request.algorithm.value,
            mode=request.mode.kind.value,
            matches=len(matches)
        )

        return MatchResponse(matches=matches)

    def align(self, request: AlignRequest) -> AlignmentResult:
        """
        Align a term and its translation against a source text and its translation.

        Process:
        1. Tokenize term and source text with the source algorithm
        2. Tokenize term translation and source translation with the
           translation algorithm
        3. Match each term against its text with the same mode

        Args:
            request: AlignRequest with both text pairs

        Returns:
            AlignmentResult with matches for both sides

        Raises:
            TextTooLongError: If any text exceeds the configured maximum
            NoTokenizerError: If either algorithm has no tokenizer
        """
        self._check_length(
            term=request.term,
            term_translation=request.term_translation,
            source_text=request.source_text,
            source_translation=request.source_translation
        )

        term_tokens = self._tokenize(
            request.term, request.source_algorithm, request.source_case_sensitive
        )
        source_tokens = self._tokenize(
            request.source_text, request.source_algorithm, request.source_case_sensitive
        )
        term_translation_tokens = self._tokenize(
            request.term_translation, request.translation_algorithm, request.translation_case_sensitive
        )
        translation_tokens = self._tokenize(
            request.source_translation, request.translation_algorithm, request.translation_case_sensitive
        )

        result = AlignmentResult(
            source_matches=self._run(
                source_tokens, term_tokens,
                request.mode, request.permissive, request.all_matches
            ),
            translation_matches=self._run(
                translation_tokens, term_translation_tokens,
                request.mode, request.permissive, request.all_matches
            )
        )

        log_match_event(
            logger, "align",
            source=request.source_algorithm.value,
            translation=request.translation_algorithm.value,
            mode=request.mode.kind.value,
            source_matches=len(result.source_matches),
            translation_matches=len(result.translation_matches)
        )

        return result


# Global alignment service instance (built on the shared registry)
_alignment_service: Optional[AlignmentService] = None


def get_alignment_service() -> AlignmentService:
    """
    Get or create the alignment service instance.

    Returns:
        AlignmentService using the shared tokenizer registry
    """
    global _alignment_service
    if _alignment_service is None:
        _alignment_service = AlignmentService(get_registry())
    return _alignment_service
