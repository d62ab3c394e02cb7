"""Core services implementing the transcript RAG use cases."""

from .ab_summary_service import ABSummaryService
from .chat_service import ChatService, context_length, trim_context
from .chunker import chunk_text, chunking_stats
from .constraints import detect_constraints, render_constraints
from .embedding_store import EmbeddingStore
from .indexing_service import IndexingService
from .prompt_builder import ChatPromptBuilder
from .response_formatter import format_paragraphs
from .retrieval_service import RetrievalService
from .style_guide import (
    create_conversational_variant,
    create_professional_variant,
    default_style_guide,
    merge_style_guide,
)
from .summarization_service import SummarizationService

__all__ = [
    "ABSummaryService",
    "ChatPromptBuilder",
    "ChatService",
    "EmbeddingStore",
    "IndexingService",
    "RetrievalService",
    "SummarizationService",
    "chunk_text",
    "chunking_stats",
    "context_length",
    "create_conversational_variant",
    "create_professional_variant",
    "default_style_guide",
    "detect_constraints",
    "format_paragraphs",
    "merge_style_guide",
    "render_constraints",
    "trim_context",
]
