"""In-memory document store."""

import threading

from ....core.domain import Document
from ....core.ports import DocumentStorePort


class InMemoryDocumentStore(DocumentStorePort):
    """Keeps documents in a dict for the lifetime of the process."""

    def __init__(self) -> None:
        self._documents: dict[str, Document] = {}
        self._lock = threading.Lock()

    def add(self, document: Document) -> None:
        with self._lock:
            self._documents[document.id] = document

    def get(self, document_id: str) -> Document | None:
        return self._documents.get(document_id)

    def list(self) -> list[Document]:
        with self._lock:
            return list(self._documents.values())

    def remove(self, document_id: str) -> bool:
        with self._lock:
            return self._documents.pop(document_id, None) is not None
