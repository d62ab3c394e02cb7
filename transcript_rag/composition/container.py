"""Composition root wiring adapters to the core services."""

from __future__ import annotations

import logging
from functools import lru_cache

from ..adapters.outbound.llm import OllamaClient
from ..adapters.outbound.storage import InMemoryABPairRepository, InMemoryDocumentStore
from ..config.settings import Settings, load_settings
from ..core.services import (
    ABSummaryService,
    ChatPromptBuilder,
    ChatService,
    EmbeddingStore,
    IndexingService,
    RetrievalService,
    SummarizationService,
)

logger = logging.getLogger(__name__)


@lru_cache
def get_settings() -> Settings:
    return load_settings()


@lru_cache
def get_ollama_client() -> OllamaClient:
    settings = get_settings()
    logger.info(f"Initializing OllamaClient for {settings.ollama_base_url}...")
    return OllamaClient(
        base_url=settings.ollama_base_url,
        chat_model=settings.chat_model,
        embedding_model=settings.embedding_model,
        timeout=settings.request_timeout,
    )


@lru_cache
def get_document_store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@lru_cache
def get_ab_repository() -> InMemoryABPairRepository:
    return InMemoryABPairRepository()


@lru_cache
def get_embedding_store() -> EmbeddingStore:
    settings = get_settings()
    return EmbeddingStore(
        get_ollama_client(),
        vector_weight=settings.vector_weight,
        lexical_weight=settings.lexical_weight,
    )


@lru_cache
def get_indexing_service() -> IndexingService:
    settings = get_settings()
    return IndexingService(
        get_document_store(),
        get_embedding_store(),
        target_words=settings.chunk_target_words,
        overlap_words=settings.chunk_overlap_words,
    )


@lru_cache
def get_chat_service() -> ChatService:
    logger.info("Initializing ChatService...")
    settings = get_settings()
    retrieval = RetrievalService(
        get_embedding_store(),
        max_results=settings.max_retrieval_results,
        min_similarity=settings.min_similarity_threshold,
    )
    return ChatService(
        get_embedding_store(),
        retrieval,
        get_ollama_client(),
        get_document_store(),
        prompt_builder=ChatPromptBuilder(settings.max_context_messages),
    )


@lru_cache
def get_summarization_service() -> SummarizationService:
    settings = get_settings()
    return SummarizationService(
        get_ollama_client(),
        chunk_words=settings.summary_chunk_words,
        overlap_words=settings.summary_chunk_overlap_words,
        chunk_delay=settings.summary_chunk_delay,
    )


@lru_cache
def get_ab_summary_service() -> ABSummaryService:
    logger.info("Initializing ABSummaryService...")
    return ABSummaryService(
        get_summarization_service(),
        get_ab_repository(),
        inter_variant_delay=get_settings().ab_inter_variant_delay,
    )
