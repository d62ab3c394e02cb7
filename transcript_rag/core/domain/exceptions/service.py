"""Model service exceptions for transcript-rag.

Raised by adapters of the embedding and completion ports when the backing
model server misbehaves.
"""

from .base import TranscriptRAGError


class ModelServiceError(TranscriptRAGError):
    """Base error for the external embedding/completion service."""

    error_code = "TR_SVC_001"


class ServiceUnavailableError(ModelServiceError):
    """The model server cannot be reached or answered with an error status.

    Common causes:
    - Ollama is not running
    - Wrong base URL
    - Requested model is not pulled
    """

    error_code = "TR_SVC_002"


class ServiceTimeoutError(ModelServiceError):
    """The model server did not answer within the configured timeout."""

    error_code = "TR_SVC_003"


class ModelResponseError(ModelServiceError):
    """The model server answered with a payload we cannot use."""

    error_code = "TR_SVC_004"
