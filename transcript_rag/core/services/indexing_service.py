"""Document lifecycle: upload, index (chunk + embed) and removal."""

import logging
from typing import Any

from ..domain import Document, EmbeddedChunk
from ..domain.exceptions import DocumentNotFoundError, InvalidInputError
from ..ports import DocumentStorePort, LoggerPort
from .chunker import DEFAULT_OVERLAP_WORDS, DEFAULT_TARGET_WORDS, chunk_text, chunking_stats
from .embedding_store import EmbeddingStore, ProgressCallback

logger = logging.getLogger(__name__)


class IndexingService:
    """Owns the documents and keeps their embeddings in step."""

    def __init__(
        self,
        document_store: DocumentStorePort,
        embedding_store: EmbeddingStore,
        target_words: int = DEFAULT_TARGET_WORDS,
        overlap_words: int = DEFAULT_OVERLAP_WORDS,
        log: LoggerPort | None = None,
    ) -> None:
        self.document_store = document_store
        self.embedding_store = embedding_store
        self.target_words = target_words
        self.overlap_words = overlap_words
        self.log = log or logger

    def add_document(
        self,
        title: str,
        text: str,
        filename: str | None = None,
        tags: tuple[str, ...] | list[str] = (),
    ) -> Document:
        if not text or not text.strip():
            raise InvalidInputError("Document text cannot be empty", context={"title": title})
        title = title.strip() or filename or "Untitled"
        document = Document.create(title, text, filename=filename, tags=tags)
        self.document_store.add(document)
        self.log.info(
            f"Added document {document.id} '{document.title}' ({document.metadata.word_count} words)"
        )
        return document

    def get_document(self, document_id: str) -> Document:
        document = self.document_store.get(document_id)
        if document is None:
            raise DocumentNotFoundError(
                f"Document not found: {document_id}", context={"document_id": document_id}
            )
        return document

    def list_documents(self) -> list[Document]:
        return self.document_store.list()

    def index_document(
        self, document_id: str, on_progress: ProgressCallback | None = None
    ) -> list[EmbeddedChunk]:
        """Chunk and embed a stored document, replacing any previous embeddings."""
        document = self.get_document(document_id)
        chunks = chunk_text(document.text, document.id, self.target_words, self.overlap_words)
        stats = chunking_stats(chunks)
        self.log.info(
            f"Chunked {document.id} into {stats['total_chunks']} chunks "
            f"(avg {stats['average_chunk_size']} words)"
        )
        return self.embedding_store.embed_document(document.id, chunks, on_progress)

    def remove_document(self, document_id: str) -> Document:
        document = self.get_document(document_id)
        self.embedding_store.remove_document(document_id)
        self.document_store.remove(document_id)
        self.log.info(f"Removed document {document_id}")
        return document

    def status(self) -> dict[str, Any]:
        documents = self.document_store.list()
        indexed = [d.id for d in documents if self.embedding_store.has_embeddings(d.id)]
        return {
            "documents": len(documents),
            "indexed_documents": len(indexed),
            **{f"embedding_{k}": v for k, v in self.embedding_store.stats().items()},
        }
