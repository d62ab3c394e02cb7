"""Document Store Port Interface."""

from abc import ABC, abstractmethod

from ..domain import Document


class DocumentStorePort(ABC):
    """Abstract interface for storing uploaded documents."""

    @abstractmethod
    def add(self, document: Document) -> None:
        """Store a document, replacing any document with the same id."""
        ...

    @abstractmethod
    def get(self, document_id: str) -> Document | None:
        """Return the document or ``None`` when unknown."""
        ...

    @abstractmethod
    def list(self) -> list[Document]:
        """Return all documents in insertion order."""
        ...

    @abstractmethod
    def remove(self, document_id: str) -> bool:
        """Remove a document; returns whether it existed."""
        ...
