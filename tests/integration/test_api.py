"""Integration tests for FastAPI endpoints."""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from transcript_rag.adapters.inbound.api import deps
from transcript_rag.adapters.inbound.api.main import app
from transcript_rag.config import Settings
from transcript_rag.core.domain.exceptions import ServiceUnavailableError
from transcript_rag.core.services import (
    ABSummaryService,
    ChatService,
    IndexingService,
    RetrievalService,
    SummarizationService,
)

pytestmark = pytest.mark.integration

TRANSCRIPT = (
    "Welcome to today's class on breathing. We start with box breathing. "
    "Inhale for four counts, hold for four, exhale for four, and hold again."
)


@pytest.fixture
def ollama():
    mock = MagicMock()
    mock.is_available.return_value = True
    return mock


@pytest.fixture
def services(embedding_store, document_store, ab_repository, llm):
    indexing = IndexingService(document_store, embedding_store)
    chat = ChatService(embedding_store, RetrievalService(embedding_store), llm, document_store)
    summarizer = SummarizationService(llm, chunk_delay=0, retry_delay=0)
    ab = ABSummaryService(summarizer, ab_repository, inter_variant_delay=0)
    return {"indexing": indexing, "chat": chat, "ab": ab}


@pytest.fixture
def client(services, embedding_store, ollama):
    """Create test client with in-memory services and fake models."""
    app.dependency_overrides = {
        deps.get_settings: lambda: Settings(_env_file=None),
        deps.get_ollama_client: lambda: ollama,
        deps.get_embedding_store: lambda: embedding_store,
        deps.get_indexing_service: lambda: services["indexing"],
        deps.get_chat_service: lambda: services["chat"],
        deps.get_ab_summary_service: lambda: services["ab"],
    }
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides = {}


def upload(client, text=TRANSCRIPT, title="Breathing Basics") -> dict:
    response = client.post("/documents", json={"title": title, "text": text, "filename": "b.txt"})
    assert response.status_code == 201
    return response.json()


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    def test_health_check(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_readiness_check(self, client):
        upload(client)

        data = client.get("/ready").json()

        assert data["status"] == "ready"
        assert data["ollama"] == "connected"
        assert data["documents"] == 1
        assert data["indexed_documents"] == 0

    def test_readiness_degraded_when_ollama_down(self, client, ollama):
        ollama.is_available.return_value = False
        assert client.get("/ready").json()["status"] == "degraded"


class TestDocumentEndpoints:
    """Upload, index, list and delete."""

    def test_upload_and_index(self, client):
        document = upload(client)
        assert document["word_count"] == 24
        assert document["file_type"] == "txt"
        assert document["indexed"] is False

        response = client.post(f"/documents/{document['id']}/index")

        assert response.status_code == 200
        assert response.json() == {"document_id": document["id"], "chunks": 1, "dimension": 64}
        listed = client.get("/documents").json()
        assert [d["indexed"] for d in listed] == [True]

    def test_upload_blank_text_is_400(self, client):
        response = client.post("/documents", json={"title": "Blank", "text": "   "})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "TR_VAL_002"

    def test_upload_missing_text_is_422(self, client):
        assert client.post("/documents", json={"title": "No text"}).status_code == 422

    def test_index_unknown_document_is_404(self, client):
        response = client.post("/documents/missing/index")

        assert response.status_code == 404
        assert response.json()["error"]["type"] == "DocumentNotFoundError"

    def test_index_with_model_down_is_503(self, client, embedder):
        document = upload(client)
        embedder.fail_on = {TRANSCRIPT}
        embedder.error = ServiceUnavailableError("Cannot reach Ollama")

        response = client.post(f"/documents/{document['id']}/index")

        assert response.status_code == 503
        assert response.json()["error"]["code"] == "TR_SVC_002"

    def test_delete_document(self, client):
        document = upload(client)

        assert client.delete(f"/documents/{document['id']}").status_code == 204
        assert client.get("/documents").json() == []
        assert client.delete(f"/documents/{document['id']}").status_code == 404


class TestChatEndpoint:
    """Grounded chat over the API."""

    def test_no_documents(self, client):
        data = client.post("/chat", json={"query": "What is box breathing?"}).json()

        assert data["outcome"] == "no_documents"
        assert data["has_grounding"] is False
        assert data["sources"] == []

    def test_grounded_answer(self, client, llm):
        document = upload(client)
        client.post(f"/documents/{document['id']}/index")
        llm.queue("Box breathing uses four equal counts.")

        response = client.post(
            "/chat",
            json={
                "query": TRANSCRIPT,
                "messages": [{"role": "user", "content": "Hi"}, {"role": "assistant", "content": "Hello"}],
                "style_guide": {"tone_settings": {"formality": 120}},
            },
        )

        data = response.json()
        assert response.status_code == 200
        assert data["outcome"] == "grounded"
        assert data["answer"] == "Box breathing uses four equal counts."
        assert data["sources"][0]["document_id"] == document["id"]
        assert data["sources"][0]["rank"] == 1
        assert data["metrics"]["retrieval_count"] == 1
        assert "Formality: 100/100" in llm.prompts[-1]
        assert "Human: Hi\nAssistant: Hello" in llm.prompts[-1]

    def test_history_trimmed_to_configured_limit(self, client, llm):
        app.dependency_overrides[deps.get_settings] = lambda: Settings(
            _env_file=None, max_context_chars=20
        )
        document = upload(client)
        client.post(f"/documents/{document['id']}/index")

        response = client.post(
            "/chat",
            json={
                "query": TRANSCRIPT,
                "messages": [
                    {"role": "user", "content": "oldest question"},
                    {"role": "assistant", "content": "latest answer!!"},
                ],
            },
        )

        assert response.status_code == 200
        assert "oldest question" not in llm.prompts[-1]
        assert "Assistant: latest answer!!" in llm.prompts[-1]

    def test_constraints_reported(self, client):
        data = client.post("/chat", json={"query": "Tell me in 3 sentences"}).json()
        assert any("exactly 3 sentences" in line for line in data["constraints"])

    def test_blank_query_is_400(self, client):
        response = client.post("/chat", json={"query": "   "})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "TR_VAL_003"

    def test_empty_query_fails_validation(self, client):
        assert client.post("/chat", json={"query": ""}).status_code == 422


class TestABPairEndpoints:
    """A/B generation, voting and stats."""

    def test_full_voting_flow(self, client, llm, facts_json):
        document = upload(client)
        llm.queue(facts_json, "# Formal", facts_json, "# Casual")

        response = client.post("/ab-pairs", json={"document_id": document["id"]})

        assert response.status_code == 201
        pair = response.json()
        assert pair["summary_a"]["markdown_summary"] == "# Formal"
        assert pair["summary_b"]["markdown_summary"] == "# Casual"
        assert pair["variant_a"]["prompt_strategy"] == "structured_formal"
        assert pair["user_feedback"] is None

        voted = client.post(
            f"/ab-pairs/{pair['id']}/feedback", json={"winner": "B", "reason": "Warmer"}
        ).json()
        assert voted["user_feedback"]["winner"] == "B"

        stats = client.get("/ab-pairs/stats").json()
        assert stats == {
            "total_tests": 1,
            "completed_tests": 1,
            "variant_a_wins": 0,
            "variant_b_wins": 1,
            "completion_rate": 100.0,
        }
        assert [p["id"] for p in client.get("/ab-pairs").json()] == [pair["id"]]
        assert client.get(f"/ab-pairs/{pair['id']}").json()["user_feedback"]["reason"] == "Warmer"

    def test_generation_failure_is_500_and_stores_nothing(self, client, llm, facts_json):
        document = upload(client)
        llm.queue(facts_json, "# Formal", ServiceUnavailableError("Cannot reach Ollama"))

        response = client.post("/ab-pairs", json={"document_id": document["id"]})

        assert response.status_code == 500
        assert response.json()["error"]["type"] == "ABGenerationError"
        assert client.get("/ab-pairs").json() == []

    def test_unknown_document(self, client):
        assert client.post("/ab-pairs", json={"document_id": "missing"}).status_code == 404

    def test_unknown_pair(self, client):
        assert client.get("/ab-pairs/missing").status_code == 404
        response = client.post("/ab-pairs/missing/feedback", json={"winner": "A"})
        assert response.status_code == 404

    def test_invalid_winner_is_422(self, client):
        response = client.post("/ab-pairs/any/feedback", json={"winner": "C"})
        assert response.status_code == 422
