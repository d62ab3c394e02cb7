"""Custom exception hierarchy for transcript-rag.

Each exception includes an error code, the captured raise location, an
optional chained cause and JSON serialization for structured logging.
Import from this package directly:

    from transcript_rag.core.domain.exceptions import TranscriptRAGError, ServiceUnavailableError
"""

# Base classes
from .base import RaiseSite, TranscriptRAGError

# Configuration exceptions
from .configuration import ConfigurationError

# Embedding exceptions
from .embedding import EmbeddingDimensionError, EmbeddingError

# Lookup exceptions
from .not_found import DocumentNotFoundError, NotFoundError, PairNotFoundError

# Model service exceptions
from .service import (
    ModelResponseError,
    ModelServiceError,
    ServiceTimeoutError,
    ServiceUnavailableError,
)

# Summarization exceptions
from .summarization import ABGenerationError, SummarizationError

# Validation exceptions
from .validation import EmptyQueryError, InvalidInputError, ValidationError

__all__ = [
    # Base
    "RaiseSite",
    "TranscriptRAGError",
    # Configuration
    "ConfigurationError",
    # Validation
    "ValidationError",
    "InvalidInputError",
    "EmptyQueryError",
    # Model service
    "ModelServiceError",
    "ServiceUnavailableError",
    "ServiceTimeoutError",
    "ModelResponseError",
    # Embedding
    "EmbeddingError",
    "EmbeddingDimensionError",
    # Summarization
    "SummarizationError",
    "ABGenerationError",
    # Lookup
    "NotFoundError",
    "DocumentNotFoundError",
    "PairNotFoundError",
]
