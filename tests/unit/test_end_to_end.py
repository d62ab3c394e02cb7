"""End-to-end pipeline test: upload, index, ask, summarize and vote."""

import pytest

from transcript_rag.adapters.outbound.storage import InMemoryABPairRepository, InMemoryDocumentStore
from transcript_rag.core.domain import ChatContext, ChatOutcome, Winner
from transcript_rag.core.services import (
    ABSummaryService,
    ChatService,
    EmbeddingStore,
    IndexingService,
    RetrievalService,
    SummarizationService,
    default_style_guide,
)

pytestmark = [pytest.mark.unit, pytest.mark.slow]


class TestPipeline:
    """The whole pipeline wired with deterministic fakes."""

    @pytest.fixture
    def pipeline(self, embedder, llm):
        documents = InMemoryDocumentStore()
        store = EmbeddingStore(embedder)
        summarizer = SummarizationService(llm, chunk_delay=0, retry_delay=0)
        return {
            "indexing": IndexingService(documents, store),
            "store": store,
            "chat": ChatService(store, RetrievalService(store), llm, documents),
            "ab": ABSummaryService(summarizer, InMemoryABPairRepository(), inter_variant_delay=0),
        }

    def test_1200_word_transcript(self, pipeline, llm, sentence_text, facts_json):
        indexing = pipeline["indexing"]
        document = indexing.add_document("Long Class", sentence_text(1200))
        progress = []

        embedded = indexing.index_document(document.id, on_progress=progress.append)

        assert [(e.chunk.word_start, e.chunk.word_end) for e in embedded] == [
            (0, 500),
            (450, 950),
            (900, 1200),
        ]
        assert [p.percentage for p in progress] == [33, 67, 100]

        llm.queue("The middle section covers the second theme.")
        response = pipeline["chat"].respond(embedded[1].text, ChatContext(), default_style_guide())

        assert response.outcome is ChatOutcome.GROUNDED
        assert [s.chunk.id for s in response.sources] == [f"{document.id}-chunk-1"]
        assert response.metrics.top_similarity == pytest.approx(1.0)
        assert "[Long Class] (Similarity: 100.0%)" in llm.prompts[-1]

        llm.queue(facts_json, "# Summary A", facts_json, "# Summary B")
        ab = pipeline["ab"]
        pair = ab.generate_pair(document, default_style_guide())
        ab.record_feedback(pair.id, Winner.B, "Friendlier")

        stats = ab.get_ab_testing_stats()
        assert (stats.total_tests, stats.completed_tests, stats.variant_b_wins) == (1, 1, 1)
        assert stats.completion_rate == 100.0

    def test_removal_returns_pipeline_to_no_documents(self, pipeline, sentence_text):
        indexing = pipeline["indexing"]
        document = indexing.add_document("Short", sentence_text(40))
        indexing.index_document(document.id)

        indexing.remove_document(document.id)
        response = pipeline["chat"].respond("anything at all", ChatContext(), default_style_guide())

        assert response.outcome is ChatOutcome.NO_DOCUMENTS
