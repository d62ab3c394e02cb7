"""Storage adapters."""

from .in_memory_ab_repository import InMemoryABPairRepository
from .in_memory_document_store import InMemoryDocumentStore

__all__ = ["InMemoryABPairRepository", "InMemoryDocumentStore"]
