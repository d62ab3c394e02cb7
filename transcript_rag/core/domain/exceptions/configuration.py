"""Configuration exceptions for transcript-rag."""

from .base import TranscriptRAGError


class ConfigurationError(TranscriptRAGError):
    """Invalid or inconsistent application settings."""

    error_code = "TR_CFG_001"
