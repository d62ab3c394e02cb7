"""Lookup exceptions for transcript-rag."""

from .base import TranscriptRAGError


class NotFoundError(TranscriptRAGError):
    """A referenced entity does not exist."""

    error_code = "TR_NF_001"


class DocumentNotFoundError(NotFoundError):
    """No document is stored under the given id."""

    error_code = "TR_NF_002"


class PairNotFoundError(NotFoundError):
    """No A/B summary pair is stored under the given id."""

    error_code = "TR_NF_003"
