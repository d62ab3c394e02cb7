"""Ports (interfaces) between the core services and the outside world."""

from .ab_repository_port import ABPairRepositoryPort
from .document_store_port import DocumentStorePort
from .embedding_port import EmbeddingPort
from .llm_port import LLMPort
from .logger_port import LoggerPort
from .summarizer_port import SummarizerPort, SummaryProgressCallback

__all__ = [
    "ABPairRepositoryPort",
    "DocumentStorePort",
    "EmbeddingPort",
    "LLMPort",
    "LoggerPort",
    "SummarizerPort",
    "SummaryProgressCallback",
]
