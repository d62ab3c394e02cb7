"""Unit tests for the retrieval context builder."""

from unittest.mock import MagicMock

import pytest

from transcript_rag.core.domain import Chunk, EmbeddedChunk, SearchResult
from transcript_rag.core.services import RetrievalService, chunk_text
from transcript_rag.core.services.retrieval_service import (
    MAX_RETRIEVAL_RESULTS,
    MIN_SIMILARITY_THRESHOLD,
)

pytestmark = pytest.mark.unit


def result(index: int, similarity: float) -> SearchResult:
    chunk = Chunk(
        id=f"doc-chunk-{index}",
        document_id="doc",
        text=f"text {index}",
        start_index=0,
        end_index=6,
        chunk_index=index,
    )
    return SearchResult(
        chunk=EmbeddedChunk(chunk=chunk, embedding=[1.0]),
        similarity=similarity,
        rank=index + 1,
    )


@pytest.fixture
def stub_store():
    return MagicMock()


class TestRetrieve:
    """Threshold filtering and diagnostics."""

    def test_defaults(self):
        assert MAX_RETRIEVAL_RESULTS == 5
        assert MIN_SIMILARITY_THRESHOLD == 0.3

    def test_keeps_only_results_at_or_above_threshold(self, stub_store):
        stub_store.search.return_value = [result(0, 0.9), result(1, 0.3), result(2, 0.1)]
        service = RetrievalService(stub_store)

        context = service.retrieve("question", [MagicMock()])

        assert [r.similarity for r in context.retrieved_chunks] == [0.9, 0.3]
        assert context.top_scores == [0.9, 0.3, 0.1]
        assert context.has_relevant_content is True
        assert context.query == "question"

    def test_passes_max_results_to_search(self, stub_store):
        stub_store.search.return_value = []
        corpus = [MagicMock()]

        RetrievalService(stub_store, max_results=2).retrieve("q", corpus)

        stub_store.search.assert_called_once_with("q", corpus, 2)

    def test_nothing_relevant(self, stub_store):
        stub_store.search.return_value = [result(0, 0.1), result(1, 0.05)]

        context = RetrievalService(stub_store).retrieve("q", [MagicMock()])

        assert context.retrieved_chunks == []
        assert context.top_scores == [0.1, 0.05]
        assert context.has_relevant_content is False

    def test_empty_corpus_skips_search(self, stub_store, recording_logger):
        context = RetrievalService(stub_store, log=recording_logger).retrieve("q", [])

        stub_store.search.assert_not_called()
        assert context.retrieved_chunks == []
        assert context.top_scores == []
        assert context.has_relevant_content is False
        assert recording_logger.messages("info")

    def test_custom_threshold(self, stub_store):
        stub_store.search.return_value = [result(0, 0.6), result(1, 0.4)]

        context = RetrievalService(stub_store, min_similarity=0.5).retrieve("q", [MagicMock()])

        assert len(context.retrieved_chunks) == 1

    def test_with_real_store(self, embedding_store, sentence_text):
        chunks = chunk_text(sentence_text(300), "doc", target_words=100, overlap_words=10)
        corpus = embedding_store.embed_document("doc", chunks)

        context = RetrievalService(embedding_store).retrieve(chunks[1].text, corpus)

        assert context.retrieved_chunks[0].chunk.id == "doc-chunk-1"
        assert len(context.top_scores) == len(chunks)
