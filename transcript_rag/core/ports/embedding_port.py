"""Embedding Port Interface."""

from abc import ABC, abstractmethod


class EmbeddingPort(ABC):
    """Abstract interface for the embedding model.

    Implementations raise ``InvalidInputError`` for empty text and
    ``ServiceUnavailableError``/``ServiceTimeoutError`` when the backing
    model server fails.
    """

    @abstractmethod
    def embed(self, text: str) -> list[float]:
        """Embed a single text into a fixed-length vector."""
        ...
