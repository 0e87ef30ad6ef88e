"""
Tokenizer backend registry.

Maps each language algorithm to the tokenizer backend configured for its
language family. Backends are built lazily, once, and shared afterwards.
A backend whose library is not installed is reported as unavailable, and
tokenizing with it raises NoTokenizerError.
"""

import importlib.util
import threading
from typing import Callable, Dict, List, Optional, Tuple

from lexalign.config import BackendChoice, Settings, settings
from lexalign.core.schemas import Algorithm, AlgorithmInfo, Token
from lexalign.pipeline.interfaces import ITokenizer, NoTokenizerError
from lexalign.utils.logger import setup_logger

logger = setup_logger(__name__)


def _build_snowball(config: Settings) -> ITokenizer:
    from lexalign.pipeline.tokenizers.snowball import SnowballTokenizer
    return SnowballTokenizer()


def _build_jieba(config: Settings) -> ITokenizer:
    from lexalign.pipeline.tokenizers.jieba_tokenizer import JiebaTokenizer
    return JiebaTokenizer(use_hmm=config.jieba_use_hmm)


def _build_icu(config: Settings) -> ITokenizer:
    from lexalign.pipeline.tokenizers.icu_tokenizer import IcuTokenizer
    return IcuTokenizer()


# backend name -> (top-level module the backend needs, factory)
BACKEND_FACTORIES: Dict[str, Tuple[str, Callable[[Settings], ITokenizer]]] = {
    "snowball": ("snowballstemmer", _build_snowball),
    BackendChoice.JIEBA.value: ("jieba", _build_jieba),
    BackendChoice.ICU.value: ("icu", _build_icu),
}


class TokenizerRegistry:
    """
    Runtime registry of tokenizer backends.

    The matching engine never depends on which backends are installed; it
    only receives the tokens this registry produces.
    """

    def __init__(self, config: Optional[Settings] = None):
        """
        Initialize registry.

        Args:
            config: Settings selecting one backend per language family
                (defaults to the global settings)
        """
        self.config = config or settings
        self._backends: Dict[str, Optional[ITokenizer]] = {}
        self._lock = threading.Lock()

    def backend_name(self, algorithm: Algorithm) -> Optional[str]:
        """
        Name of the backend configured for an algorithm's language family.

        Returns:
            Backend name, or None if the family has no backend selected
        """
        if algorithm.is_snowball:
            return "snowball" if self.config.snowball_enabled else None

        choices = {
            Algorithm.CHINESE: self.config.chinese_tokenizer,
            Algorithm.JAPANESE: self.config.japanese_tokenizer,
            Algorithm.KOREAN: self.config.korean_tokenizer,
        }
        if algorithm.is_southeast_asian:
            choice = self.config.southeast_asian_tokenizer
        else:
            choice = choices.get(algorithm, BackendChoice.NONE)

        return None if choice == BackendChoice.NONE else choice.value

    def register(self, name: str, tokenizer: ITokenizer) -> None:
        """
        Install a backend instance under a name, replacing any built one.

        Args:
            name: Backend name as returned by backend_name()
            tokenizer: Backend instance
        """
        with self._lock:
            self._backends[name] = tokenizer
        logger.info(f"Registered tokenizer backend '{name}' ({type(tokenizer).__name__})")

    def _load(self, name: str) -> Optional[ITokenizer]:
        with self._lock:
            if name in self._backends:
                return self._backends[name]

            backend = None
            if name in BACKEND_FACTORIES:
                module, factory = BACKEND_FACTORIES[name]
                if importlib.util.find_spec(module) is None:
                    logger.warning(f"Tokenizer backend '{name}' unavailable: '{module}' is not installed")
                else:
                    # Native extensions can be installed yet fail to load their shared libraries
                    try:
                        backend = factory(self.config)
                        logger.info(f"Loaded tokenizer backend '{name}'")
                    except (ImportError, OSError) as e:
                        logger.warning(f"Tokenizer backend '{name}' unavailable: {str(e)}")
            else:
                logger.warning(f"Unknown tokenizer backend '{name}'")

            self._backends[name] = backend
            return backend

    def get_backend(self, algorithm: Algorithm) -> ITokenizer:
        """
        Backend that will tokenize text for an algorithm.

        Raises:
            NoTokenizerError: If no usable backend supports the algorithm
        """
        name = self.backend_name(algorithm)
        backend = self._load(name) if name else None

        if backend is None or not backend.supports(algorithm):
            raise NoTokenizerError(algorithm)

        return backend

    def is_available(self, algorithm: Algorithm) -> bool:
        try:
            self.get_backend(algorithm)
        except NoTokenizerError:
            return False
        return True

    def tokenize(
        self,
        text: str,
        algorithm: Algorithm,
        case_sensitive: bool = False
    ) -> List[Token]:
        """
        Tokenize text with the backend configured for algorithm.

        Args:
            text: Text to tokenize
            algorithm: Language algorithm
            case_sensitive: Keep original casing (stemmed languages only)

        Returns:
            List of Token objects

        Raises:
            NoTokenizerError: If no tokenizer is available for algorithm
            TokenizerError: If the backend fails
        """
        return self.get_backend(algorithm).tokenize(text, algorithm, case_sensitive)

    def available_algorithms(self) -> List[Algorithm]:
        """Algorithms that currently have a usable tokenizer."""
        return [algorithm for algorithm in Algorithm if self.is_available(algorithm)]

    def describe(self) -> List[AlgorithmInfo]:
        """Availability and backend name for every algorithm."""
        infos = []
        for algorithm in Algorithm:
            available = self.is_available(algorithm)
            infos.append(AlgorithmInfo(
                algorithm=algorithm,
                available=available,
                backend=self.backend_name(algorithm) if available else None
            ))
        return infos


_registry: Optional[TokenizerRegistry] = None
_registry_lock = threading.Lock()


def get_registry() -> TokenizerRegistry:
    """
    Process-wide registry built from the global settings.

    Returns:
        Shared TokenizerRegistry instance
    """
    global _registry
    with _registry_lock:
        if _registry is None:
            _registry = TokenizerRegistry(settings)
        return _registry


def tokenize(text: str, algorithm: Algorithm, case_sensitive: bool = False) -> List[Token]:
    """
    Tokenize text with the shared registry.

    Example:
        >>> tokens = tokenize("that's someone who can rizz", Algorithm.ENGLISH)
        >>> [token.text for token in tokens]
        ['that', 'someon', 'who', 'can', 'rizz']
    """
    return get_registry().tokenize(text, algorithm, case_sensitive)
