"""Configuration management for transcript-rag."""

from pathlib import Path

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Every field can be overridden with a ``TRANSCRIPT_RAG_`` prefixed
    environment variable or in a ``.env`` file.
    """

    model_config = SettingsConfigDict(
        env_prefix="TRANSCRIPT_RAG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Ollama
    ollama_base_url: str = "http://127.0.0.1:11434"
    chat_model: str = "llama3.1:8b-instruct-q4_K_M"
    embedding_model: str = "nomic-embed-text"
    request_timeout: float = 120.0

    # Chunking
    chunk_target_words: int = 500
    chunk_overlap_words: int = 50
    summary_chunk_words: int = 1500
    summary_chunk_overlap_words: int = 50

    # Retrieval
    max_retrieval_results: int = 5
    min_similarity_threshold: float = 0.3
    vector_weight: float = 0.7
    lexical_weight: float = 0.3

    # Chat
    max_context_messages: int = 10
    max_context_chars: int = 4000

    # Summarization pacing (seconds)
    ab_inter_variant_delay: float = 1.0
    summary_chunk_delay: float = 0.5

    # Logging
    log_level: str = "INFO"
    log_json: bool = False
    log_file: Path | None = None

    @field_validator("ollama_base_url", mode="after")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        """Normalize the base URL so paths can be appended directly."""
        return value.strip().rstrip("/")

    @field_validator("min_similarity_threshold", "vector_weight", "lexical_weight", mode="after")
    @classmethod
    def check_unit_interval(cls, value: float) -> float:
        if not 0.0 <= value <= 1.0:
            raise ValueError(f"must be between 0 and 1, got {value}")
        return value

    @model_validator(mode="after")
    def check_chunking_and_weights(self) -> "Settings":
        if abs(self.vector_weight + self.lexical_weight - 1.0) > 1e-6:
            raise ValueError("vector_weight and lexical_weight must sum to 1")
        for target, overlap in (
            (self.chunk_target_words, self.chunk_overlap_words),
            (self.summary_chunk_words, self.summary_chunk_overlap_words),
        ):
            if target <= 0 or overlap < 0 or overlap >= target:
                raise ValueError(
                    f"chunk overlap ({overlap}) must be in [0, target) for target {target}"
                )
        return self


def load_settings() -> Settings:
    return Settings()
