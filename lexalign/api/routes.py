"""API route handlers for LexAlign."""

from typing import List

from fastapi import APIRouter, HTTPException, status

from lexalign.config import settings
from lexalign.core.schemas import (
    AlgorithmInfo,
    AlignRequest,
    AlignmentResult,
    MatchRequest,
    MatchResponse,
    TokenizeRequest,
    TokenizeResponse
)
from lexalign.pipeline.interfaces import NoTokenizerError, TokenizerError
from lexalign.pipeline.registry import get_registry
from lexalign.services.alignment_service import get_alignment_service
from lexalign.utils.logger import setup_logger

logger = setup_logger(__name__)

# Create router
router = APIRouter(prefix=settings.api_v1_prefix, tags=["matching"])

# Handlers are plain functions: tokenization and matching are CPU-bound and
# run in FastAPI's threadpool, off the event loop.


def _tokenizer_http_error(exc: TokenizerError) -> HTTPException:
    """Translate a tokenization failure into an HTTP error."""
    if isinstance(exc, NoTokenizerError):
        logger.warning(f"No tokenizer for algorithm {exc.algorithm.value}")
        return HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc)
        )

    logger.error(f"Tokenizer error: {str(exc)}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed to tokenize text: {str(exc)}"
    )


# ============================================================================
# API Endpoints
# ============================================================================

@router.get(
    "/algorithms",
    response_model=List[AlgorithmInfo],
    summary="List tokenizer availability"
)
def list_algorithms() -> List[AlgorithmInfo]:
    """
    List every language algorithm with its tokenizer availability.

    Returns:
        List of AlgorithmInfo, one per algorithm
    """
    return get_registry().describe()


@router.post(
    "/tokenize",
    response_model=TokenizeResponse,
    summary="Tokenize a text"
)
def tokenize_text(request: TokenizeRequest) -> TokenizeResponse:
    """
    Tokenize a text with the backend configured for its algorithm.

    Args:
        request: TokenizeRequest with text, algorithm and case mode

    Returns:
        TokenizeResponse with tokens in input order

    Raises:
        HTTPException 422: No tokenizer available for the algorithm
        HTTPException 500: Tokenizer failure
    """
    try:
        return get_alignment_service().tokenize(request)
    except TokenizerError as e:
        raise _tokenizer_http_error(e)


@router.post(
    "/match",
    response_model=MatchResponse,
    summary="Locate a needle text in a haystack text"
)
def match_text(request: MatchRequest) -> MatchResponse:
    """
    Tokenize both texts and return the first match, or every match.

    Args:
        request: MatchRequest with texts, algorithm, mode and permissiveness

    Returns:
        MatchResponse with matches in haystack order (empty if none)

    Raises:
        HTTPException 422: No tokenizer available for the algorithm
        HTTPException 500: Tokenizer failure
    """
    try:
        return get_alignment_service().match(request)
    except TokenizerError as e:
        raise _tokenizer_http_error(e)


@router.post(
    "/align",
    response_model=AlignmentResult,
    summary="Align a term and its translation"
)
def align_term(request: AlignRequest) -> AlignmentResult:
    """
    Locate a term in a source text and its translation in the translated text.

    Args:
        request: AlignRequest with both text pairs and their algorithms

    Returns:
        AlignmentResult with matches for both sides

    Raises:
        HTTPException 422: No tokenizer available for either algorithm
        HTTPException 500: Tokenizer failure
    """
    try:
        return get_alignment_service().align(request)
    except TokenizerError as e:
        raise _tokenizer_http_error(e)


@router.get(
    "/health",
    summary="Health check"
)
def health_check():
    """
    Health check endpoint.

    Returns:
        Status information
    """
    return {
        "status": "healthy",
        "version": settings.app_version,
        "algorithms_available": len(get_registry().available_algorithms())
    }
