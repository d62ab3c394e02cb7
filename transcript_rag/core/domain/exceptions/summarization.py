"""Summarization exceptions for transcript-rag."""

from .base import TranscriptRAGError


class SummarizationError(TranscriptRAGError):
    """Summary generation failed."""

    error_code = "TR_SUM_001"


class ABGenerationError(SummarizationError):
    """One side of an A/B summary pair could not be generated.

    The pair is not persisted; ``extra_context`` names the document and
    the variant that failed.
    """

    error_code = "TR_SUM_002"
