"""Application configuration management via environment variables."""

from enum import Enum

from pydantic_settings import BaseSettings, SettingsConfigDict


class BackendChoice(str, Enum):
    """Tokenizer backend selectable for a language family."""
    JIEBA = "jieba"
    ICU = "icu"
    NONE = "none"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="LEXALIGN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Application settings
    app_name: str = "LexAlign API"
    app_version: str = "0.1.0"
    debug: bool = False

    # API settings
    api_v1_prefix: str = "/api/v1"
    max_text_length: int = 100_000

    # Tokenizer backend selection, one per language family
    snowball_enabled: bool = True
    chinese_tokenizer: BackendChoice = BackendChoice.JIEBA
    japanese_tokenizer: BackendChoice = BackendChoice.ICU
    korean_tokenizer: BackendChoice = BackendChoice.ICU
    southeast_asian_tokenizer: BackendChoice = BackendChoice.ICU

    # jieba settings
    jieba_use_hmm: bool = True


# Global settings instance
settings = Settings()
