"""In-memory embedding store with hybrid (vector + lexical) search."""

import logging
import re
from collections.abc import Callable, Sequence
from types import MappingProxyType
from typing import Any

import numpy as np

from ..domain import Chunk, EmbeddedChunk, EmbeddingProgress, SearchResult
from ..domain.exceptions import EmbeddingDimensionError, InvalidInputError
from ..ports import EmbeddingPort, LoggerPort

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[EmbeddingProgress], None]

DEFAULT_VECTOR_WEIGHT = 0.7
DEFAULT_LEXICAL_WEIGHT = 0.3
MIN_TERM_LENGTH = 3

_TERM_RE = re.compile(r"\w+")


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine similarity of two equal-length vectors; 0.0 if either is all zeros."""
    va = np.asarray(a, dtype=float)
    vb = np.asarray(b, dtype=float)
    norm = float(np.linalg.norm(va) * np.linalg.norm(vb))
    if norm == 0.0:
        return 0.0
    return float(np.dot(va, vb) / norm)


def query_terms(query: str) -> list[str]:
    """Distinct lower-cased query terms of at least three characters, in order."""
    seen: dict[str, None] = {}
    for term in _TERM_RE.findall(query.lower()):
        if len(term) >= MIN_TERM_LENGTH:
            seen.setdefault(term, None)
    return list(seen)


def lexical_score(terms: list[str], text: str) -> float:
    """Fraction of ``terms`` that occur as whole words in ``text``."""
    if not terms:
        return 0.0
    lowered = text.lower()
    hits = sum(1 for term in terms if re.search(rf"\b{re.escape(term)}\b", lowered))
    return hits / len(terms)


def _percentage(current: int, total: int) -> int:
    return int(current * 100 / total + 0.5)


class EmbeddingStore:
    """Holds one embedding set per document and ranks chunks for queries.

    A document's set is only stored once every chunk has been embedded, so
    readers never observe a partially built document.
    """

    def __init__(
        self,
        embedder: EmbeddingPort,
        vector_weight: float = DEFAULT_VECTOR_WEIGHT,
        lexical_weight: float = DEFAULT_LEXICAL_WEIGHT,
        log: LoggerPort | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            embedder: Embedding model used for chunks and queries.
            vector_weight: Weight of the cosine similarity in the hybrid score.
            lexical_weight: Weight of the keyword overlap in the hybrid score.
            log: Logger to report through; defaults to the module logger.
        """
        if vector_weight < 0 or lexical_weight < 0:
            raise ValueError("Hybrid search weights must not be negative")
        self.embedder = embedder
        self.vector_weight = vector_weight
        self.lexical_weight = lexical_weight
        self.log = log or logger
        self._embeddings: dict[str, list[EmbeddedChunk]] = {}

    def embed_document(
        self,
        document_id: str,
        chunks: list[Chunk],
        on_progress: ProgressCallback | None = None,
    ) -> list[EmbeddedChunk]:
        """Embed every chunk of a document, one call at a time.

        Any failure aborts the run and propagates; the document's previous
        embeddings (if any) are left untouched in that case.

        Raises:
            InvalidInputError: If a chunk belongs to another document.
            EmbeddingDimensionError: If the model returns vectors of different lengths.
        """
        for chunk in chunks:
            if chunk.document_id != document_id:
                raise InvalidInputError(
                    f"Chunk {chunk.id} belongs to document {chunk.document_id}, not {document_id}",
                    context={"document_id": document_id, "chunk_id": chunk.id},
                )

        total = len(chunks)
        self.log.info(f"Embedding {total} chunks for document {document_id}")
        embedded: list[EmbeddedChunk] = []
        dimension: int | None = None

        for current, chunk in enumerate(chunks, start=1):
            vector = [float(v) for v in self.embedder.embed(chunk.text)]
            if dimension is None:
                dimension = len(vector)
            elif len(vector) != dimension:
                raise EmbeddingDimensionError(
                    f"Embedding for {chunk.id} has dimension {len(vector)}, expected {dimension}",
                    context={"document_id": document_id, "chunk_id": chunk.id},
                )
            embedded.append(EmbeddedChunk(chunk=chunk, embedding=vector))

            if on_progress:
                on_progress(
                    EmbeddingProgress(
                        current=current,
                        total=total,
                        chunk_id=chunk.id,
                        percentage=_percentage(current, total),
                    )
                )

        self._embeddings[document_id] = embedded
        self.log.info(f"Stored {len(embedded)} embeddings for document {document_id}")
        return list(embedded)

    def search(self, query: str, corpus: list[EmbeddedChunk], k: int) -> list[SearchResult]:
        """Rank ``corpus`` against ``query`` by hybrid score.

        Returns at most ``k`` results sorted by score descending, ties kept
        in corpus order. No threshold is applied here.
        """
        if not corpus or k <= 0:
            return []

        query_vector = self.embedder.embed(query)
        terms = query_terms(query)

        scored: list[SearchResult] = []
        for item in corpus:
            if len(item.embedding) != len(query_vector):
                raise EmbeddingDimensionError(
                    f"Query embedding has dimension {len(query_vector)}, "
                    f"chunk {item.id} has {len(item.embedding)}",
                    context={"chunk_id": item.id},
                )
            vector = max(0.0, cosine_similarity(query_vector, item.embedding))
            lexical = lexical_score(terms, item.text)
            combined = self.vector_weight * vector + self.lexical_weight * lexical
            scored.append(
                SearchResult(
                    chunk=item,
                    similarity=min(1.0, max(0.0, combined)),
                    vector_score=vector,
                    lexical_score=lexical,
                )
            )

        # sorted() is stable, so equal scores keep corpus order
        ranked = sorted(scored, key=lambda r: r.similarity, reverse=True)[:k]
        for rank, result in enumerate(ranked, start=1):
            result.rank = rank

        self.log.debug(
            f"Hybrid search over {len(corpus)} chunks returned {len(ranked)} results"
        )
        return ranked

    def get_document_embeddings(self, document_id: str) -> list[EmbeddedChunk]:
        return list(self._embeddings.get(document_id, []))

    def get_all_embeddings(self, document_ids: list[str] | None = None) -> list[EmbeddedChunk]:
        """Flatten stored embeddings, optionally restricted to ``document_ids``."""
        snapshot = dict(self._embeddings)
        keys = document_ids if document_ids else list(snapshot)
        corpus: list[EmbeddedChunk] = []
        for key in keys:
            corpus.extend(snapshot.get(key, []))
        return corpus

    def has_embeddings(self, document_id: str | None = None) -> bool:
        if document_id is None:
            return any(self._embeddings.values())
        return bool(self._embeddings.get(document_id))

    def remove_document(self, document_id: str) -> bool:
        removed = self._embeddings.pop(document_id, None)
        if removed is not None:
            self.log.info(f"Removed {len(removed)} embeddings for document {document_id}")
        return removed is not None

    def snapshot(self) -> MappingProxyType[str, tuple[EmbeddedChunk, ...]]:
        """Read-only view of the mapping as it is right now."""
        return MappingProxyType({key: tuple(value) for key, value in self._embeddings.items()})

    def stats(self) -> dict[str, Any]:
        dimensions = {
            chunks[0].dimension for chunks in self._embeddings.values() if chunks
        }
        return {
            "documents": len(self._embeddings),
            "total_chunks": sum(len(chunks) for chunks in self._embeddings.values()),
            "dimensions": sorted(dimensions),
        }
