"""Embedding exceptions for transcript-rag."""

from .base import TranscriptRAGError


class EmbeddingError(TranscriptRAGError):
    """Failed to build or compare embeddings."""

    error_code = "TR_EMB_001"


class EmbeddingDimensionError(EmbeddingError):
    """Two vectors that must be compared have different lengths."""

    error_code = "TR_EMB_002"
