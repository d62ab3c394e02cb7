"""Build the retrieval context for one chat turn."""

import logging

from ..domain import EmbeddedChunk, RetrievalContext
from ..ports import LoggerPort
from .embedding_store import EmbeddingStore

logger = logging.getLogger(__name__)

MAX_RETRIEVAL_RESULTS = 5
MIN_SIMILARITY_THRESHOLD = 0.3


class RetrievalService:
    """Runs hybrid search and decides whether the results ground an answer."""

    def __init__(
        self,
        store: EmbeddingStore,
        max_results: int = MAX_RETRIEVAL_RESULTS,
        min_similarity: float = MIN_SIMILARITY_THRESHOLD,
        log: LoggerPort | None = None,
    ) -> None:
        self.store = store
        self.max_results = max_results
        self.min_similarity = min_similarity
        self.log = log or logger

    def retrieve(self, query: str, corpus: list[EmbeddedChunk]) -> RetrievalContext:
        """Search ``corpus`` and keep results at or above the similarity threshold.

        ``top_scores`` holds the unfiltered scores of the top results.
        An empty corpus returns an empty context without touching the model.
        """
        if not corpus:
            self.log.info("Retrieval skipped: corpus is empty")
            return RetrievalContext.empty(query)

        results = self.store.search(query, corpus, self.max_results)
        retrieved = [r for r in results if r.similarity >= self.min_similarity]

        self.log.info(
            f"Retrieved {len(retrieved)}/{len(results)} chunks above "
            f"{self.min_similarity:.2f} from {len(corpus)} candidates"
        )
        return RetrievalContext(
            query=query,
            retrieved_chunks=retrieved,
            top_scores=[r.similarity for r in results],
            has_relevant_content=bool(retrieved),
        )
