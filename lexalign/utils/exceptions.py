"""Custom exception classes."""

from typing import Optional


class LexAlignError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, detail: Optional[str] = None):
        self.message = message
        self.detail = detail
        super().__init__(self.message)


class TextTooLongError(LexAlignError):
    """Raised when an input text exceeds the configured maximum length."""
    pass
