"""FastAPI dependency providers.

Thin wrappers over the composition root so tests can swap services with
``app.dependency_overrides``.
"""

from ....adapters.outbound.llm import OllamaClient
from ....composition import container
from ....config.settings import Settings
from ....core.services import (
    ABSummaryService,
    ChatService,
    EmbeddingStore,
    IndexingService,
)


def get_settings() -> Settings:
    return container.get_settings()


def get_ollama_client() -> OllamaClient:
    return container.get_ollama_client()


def get_embedding_store() -> EmbeddingStore:
    return container.get_embedding_store()


def get_indexing_service() -> IndexingService:
    return container.get_indexing_service()


def get_chat_service() -> ChatService:
    return container.get_chat_service()


def get_ab_summary_service() -> ABSummaryService:
    return container.get_ab_summary_service()
