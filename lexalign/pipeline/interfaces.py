"""
Pipeline interface definitions.

This module defines the tokenizer backend interface consumed by the
registry, and the exceptions raised at the tokenization boundary.
"""

from abc import ABC, abstractmethod
from typing import List

from lexalign.core.schemas import Algorithm, Token


class ITokenizer(ABC):
    """Interface for a language-family tokenizer backend."""

    #: Backend name reported by the registry and the API
    name: str = ""

    @abstractmethod
    def supports(self, algorithm: Algorithm) -> bool:
        """
        Whether this backend can tokenize text for an algorithm.

        Args:
            algorithm: Language algorithm

        Returns:
            True if tokenize() accepts the algorithm
        """
        pass

    @abstractmethod
    def tokenize(
        self,
        text: str,
        algorithm: Algorithm,
        case_sensitive: bool = False
    ) -> List[Token]:
        """
        Split text into tokens.

        Tokens must not overlap, must be ordered by ascending start, and
        start/len must be measured in characters of the original text.

        Args:
            text: Original input text
            algorithm: Language algorithm
            case_sensitive: Keep original casing where the backend lowercases

        Returns:
            List of Token objects in input order

        Raises:
            TokenizerError: If the backend fails
        """
        pass


# Exception classes for pipeline errors

class PipelineError(Exception):
    """Base exception for pipeline errors."""
    pass


class TokenizerError(PipelineError):
    """Raised when a tokenizer backend fails."""
    pass


class NoTokenizerError(TokenizerError):
    """Raised when no tokenizer is available for an algorithm."""

    def __init__(self, algorithm: Algorithm):
        self.algorithm = algorithm
        super().__init__(
            f"No tokenizer found for algorithm {algorithm.value!r}, you might want to "
            "install or enable the backend for the desired language."
        )
