"""Deterministic word normalization applied before stemming."""

import unicodedata


# Hyphens and dashes U+2010..U+2015
_DASHES = {cp: "-" for cp in range(0x2010, 0x2016)}
# Single quotes U+2018..U+201B
_SINGLE_QUOTES = {cp: "'" for cp in range(0x2018, 0x201C)}
# Double quotes U+201C..U+201F
_DOUBLE_QUOTES = {cp: '"' for cp in range(0x201C, 0x2020)}

PUNCTUATION_TABLE = {**_DASHES, **_SINGLE_QUOTES, **_DOUBLE_QUOTES}


class TextNormalizer:
    """
    Normalizes single words for stemming.

    Only the token text is normalized; offsets are always taken from the
    original input, so the normalized form may differ in length.
    """

    @staticmethod
    def normalize_punctuation(text: str) -> str:
        """Fold typographic dashes and quotes to their ASCII forms."""
        return text.translate(PUNCTUATION_TABLE)

    @staticmethod
    def normalize_word(word: str) -> str:
        """
        Normalize a word for stemming.

        Transformations:
        1. Unicode compatibility normalization (NFKC)
        2. Typographic punctuation folding (explicit codepoints)

        Args:
            word: Word exactly as it appears in the input

        Returns:
            Normalized word
        """
        if not word:
            return ""

        word = unicodedata.normalize("NFKC", word)
        return TextNormalizer.normalize_punctuation(word)


# Singleton instance
normalizer = TextNormalizer()
