"""Document, chunk and search result models for the RAG pipeline."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime


def _now() -> str:
    return datetime.now(UTC).isoformat()


def count_words(text: str) -> int:
    """Number of whitespace-separated tokens in ``text``."""
    return len(text.split())


@dataclass(frozen=True)
class DocumentMetadata:
    """Descriptive data captured when a transcript is uploaded.

    Attributes:
        word_count: Number of whitespace-separated words in the text.
        filename: Original filename, if the text came from a file.
        file_type: File extension or MIME-ish label ("txt", "md", ...).
        date_added: ISO timestamp of the upload.
    """

    word_count: int
    filename: str | None = None
    file_type: str | None = None
    date_added: str = field(default_factory=_now)


@dataclass(frozen=True)
class Document:
    """An uploaded transcript.

    Documents are immutable once created and are referenced by ``id``
    everywhere else in the pipeline.

    Attributes:
        id: Unique identifier.
        title: Display title used when citing sources.
        text: Full transcript text.
        metadata: Word count and upload details.
        tags: Free-form labels.
    """

    id: str
    title: str
    text: str
    metadata: DocumentMetadata
    tags: tuple[str, ...] = ()

    @classmethod
    def create(
        cls,
        title: str,
        text: str,
        *,
        filename: str | None = None,
        tags: tuple[str, ...] | list[str] = (),
        document_id: str | None = None,
    ) -> Document:
        """Build a document, computing its word count from the text."""
        file_type = filename.rsplit(".", 1)[-1].lower() if filename and "." in filename else None
        return cls(
            id=document_id or str(uuid.uuid4()),
            title=title,
            text=text,
            metadata=DocumentMetadata(
                word_count=count_words(text),
                filename=filename,
                file_type=file_type,
            ),
            tags=tuple(tags),
        )


@dataclass(frozen=True)
class Chunk:
    """A bounded contiguous slice of a document's text.

    Attributes:
        id: ``"{document_id}-chunk-{chunk_index}"``.
        document_id: Back-reference to the owning document.
        text: Exact slice of the document text covered by this chunk.
        start_index: Character offset of the first word in the document text.
        end_index: Character offset just past the last word.
        chunk_index: Zero-based position of the chunk in its document.
        word_start: Index of the first word in the document's word list.
        word_end: Index just past the last word.
    """

    id: str
    document_id: str
    text: str
    start_index: int
    end_index: int
    chunk_index: int
    word_start: int = 0
    word_end: int = 0

    @property
    def word_count(self) -> int:
        return self.word_end - self.word_start


@dataclass(frozen=True)
class EmbeddedChunk:
    """A chunk together with its embedding vector."""

    chunk: Chunk
    embedding: list[float]
    embedding_timestamp: str = field(default_factory=_now)

    @property
    def id(self) -> str:
        return self.chunk.id

    @property
    def document_id(self) -> str:
        return self.chunk.document_id

    @property
    def text(self) -> str:
        return self.chunk.text

    @property
    def chunk_index(self) -> int:
        return self.chunk.chunk_index

    @property
    def dimension(self) -> int:
        return len(self.embedding)


@dataclass(frozen=True)
class EmbeddingProgress:
    """Progress report emitted after each chunk is embedded."""

    current: int
    total: int
    chunk_id: str
    percentage: int


@dataclass
class SearchResult:
    """A chunk matched by hybrid search.

    Attributes:
        chunk: The matched chunk.
        similarity: Combined hybrid score in [0, 1], higher is more relevant.
        rank: One-based position in the result list.
        vector_score: Cosine similarity component (clamped to [0, 1]).
        lexical_score: Keyword overlap component in [0, 1].
    """

    chunk: EmbeddedChunk
    similarity: float
    rank: int = 0
    vector_score: float = 0.0
    lexical_score: float = 0.0
