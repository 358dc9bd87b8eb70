"""Centralized configuration for tfidf-search using Pydantic Settings."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tfidf_search.search.analyzers import available_tokenizers


class Settings(BaseSettings):
    """Typed configuration loaded from ``TFIDF_SEARCH_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TFIDF_SEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    index_name: str = Field(default="default", min_length=1, description="Name used in metrics labels and logs")

    tokenizer: str = Field(default="whitespace", description="Registered tokenizer used for documents and queries")
    stopwords: str = Field(
        default="",
        description="Comma-separated stopwords for analyzer-based tokenizers; empty keeps the built-in list",
    )

    max_results: int = Field(default=0, ge=0, description="Default result limit for search (0 = unlimited)")

    # Logging
    log_level: str = Field(default="info", description="Logging level")
    log_json: bool = Field(default=True, description="Emit structured JSON logs")

    @field_validator("tokenizer")
    @classmethod
    def _check_tokenizer(cls, value: str) -> str:
        normalized = value.strip().lower()
        if normalized not in available_tokenizers():
            raise ValueError(f"Unknown tokenizer '{value}'. Available: {available_tokenizers()}")
        return normalized

    def get_stopwords(self) -> list[str] | None:
        """Return the configured stopword list, or None for the built-in default."""
        if not self.stopwords:
            return None
        return [word.strip() for word in self.stopwords.split(",") if word.strip()]

    def get_max_results(self) -> int | None:
        return self.max_results or None
