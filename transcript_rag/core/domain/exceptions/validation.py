"""Validation exceptions for transcript-rag."""

from .base import TranscriptRAGError


class ValidationError(TranscriptRAGError):
    """Input validation failed."""

    error_code = "TR_VAL_001"


class InvalidInputError(ValidationError):
    """Malformed text handed to the pipeline (e.g. empty text to embed)."""

    error_code = "TR_VAL_002"


class EmptyQueryError(ValidationError):
    """Query cannot be empty or whitespace only."""

    error_code = "TR_VAL_003"
