"""Grounded chat: retrieve, prompt, complete and format one answer."""

import logging
import time
from dataclasses import replace

from ..domain import (
    ChatContext,
    ChatMessage,
    ChatOutcome,
    ChatResponse,
    FormatConstraint,
    ResponseMetrics,
    RetrievalContext,
    StyleGuide,
)
from ..domain.exceptions import EmptyQueryError
from ..ports import DocumentStorePort, LLMPort, LoggerPort
from .constraints import detect_constraints
from .embedding_store import EmbeddingStore
from .prompt_builder import ChatPromptBuilder
from .response_formatter import format_paragraphs
from .retrieval_service import RetrievalService

logger = logging.getLogger(__name__)

NO_DOCUMENTS_MESSAGE = (
    "I don't have any documents to search through yet. Please upload some documents "
    "and generate embeddings first, then I'll be able to help answer questions about "
    "their content."
)
NO_EMBEDDINGS_MESSAGE = (
    "Your documents haven't been indexed yet. Please generate embeddings for at least "
    "one document, then I'll be able to help answer questions about their content."
)
NO_GROUNDING_MESSAGE = (
    "I don't have enough information in the provided sources to answer that question. "
    "Could you try rephrasing your question or make sure you have uploaded and indexed "
    "relevant documents?"
)
ERROR_MESSAGE = (
    "I encountered an error while trying to answer your question: {error}. "
    "Please try again or check that Ollama is running properly."
)


def context_length(context: ChatContext) -> int:
    """Total characters across the conversation history."""
    return sum(len(message.content) for message in context.messages)


def trim_context(context: ChatContext, max_chars: int | None = None) -> ChatContext:
    """Drop the oldest messages until the history fits in ``max_chars``.

    ``max_chars`` defaults to the context's own ``max_context_length``. The
    most recent message is always kept. Returns a new context.
    """
    if max_chars is None:
        max_chars = context.max_context_length
    messages = list(context.messages)
    total = sum(len(m.content) for m in messages)
    while total > max_chars and len(messages) > 1:
        total -= len(messages.pop(0).content)
    return replace(context, messages=messages)


class ChatService:
    """Answers questions from indexed transcripts.

    Every call ends in one of the ``ChatOutcome`` states. Missing documents,
    missing embeddings and weak retrieval produce explanatory answers;
    failures during retrieval or completion produce an ``ERROR`` answer
    instead of raising.
    """

    def __init__(
        self,
        embedding_store: EmbeddingStore,
        retrieval: RetrievalService,
        llm: LLMPort,
        document_store: DocumentStorePort,
        prompt_builder: ChatPromptBuilder | None = None,
        log: LoggerPort | None = None,
    ) -> None:
        self.embedding_store = embedding_store
        self.retrieval = retrieval
        self.llm = llm
        self.document_store = document_store
        self.prompt_builder = prompt_builder or ChatPromptBuilder()
        self.log = log or logger

    def respond(self, query: str, context: ChatContext, style_guide: StyleGuide) -> ChatResponse:
        """Produce a grounded answer to ``query``.

        Raises:
            EmptyQueryError: If the query is empty or whitespace only.
        """
        if not query or not query.strip():
            raise EmptyQueryError("Query cannot be empty")

        started = time.perf_counter()
        constraints = detect_constraints(query)
        self.log.info(
            f"Processing query ({len(query)} chars, {len(context.messages)} history messages, "
            f"{len(constraints)} format constraints)"
        )

        corpus = self.embedding_store.get_all_embeddings(context.document_ids or None)
        if not corpus:
            if not self.document_store.list():
                self.log.warning("No documents uploaded; nothing to ground on")
                return self._fixed(ChatOutcome.NO_DOCUMENTS, NO_DOCUMENTS_MESSAGE, started, constraints)
            self.log.warning("Documents exist but none are indexed")
            return self._fixed(ChatOutcome.NO_EMBEDDINGS, NO_EMBEDDINGS_MESSAGE, started, constraints)

        retrieval = RetrievalContext.empty(query)
        try:
            retrieval = self.retrieval.retrieve(query, corpus)
            if not retrieval.has_relevant_content:
                self.log.info(f"No chunk cleared the threshold; top scores {retrieval.top_scores}")
                return self._fixed(
                    ChatOutcome.NO_GROUNDING, NO_GROUNDING_MESSAGE, started, constraints, retrieval
                )

            titles = self._titles(retrieval)
            prompt = self.prompt_builder.build(
                query, trim_context(context), retrieval, style_guide, titles, constraints
            )
            raw = self.llm.complete(prompt)
        except Exception as e:
            self.log.error(f"Chat processing failed: {e}", exc_info=True)
            return self._fixed(
                ChatOutcome.ERROR, ERROR_MESSAGE.format(error=e), started, constraints, retrieval
            )

        content = format_paragraphs(raw.strip())
        sources = list(retrieval.retrieved_chunks)
        response = ChatResponse(
            message=ChatMessage.assistant(content, sources),
            sources=sources,
            has_grounding=True,
            outcome=ChatOutcome.GROUNDED,
            metrics=self._metrics(retrieval, content, started),
            constraints=constraints,
        )
        self.log.info(
            f"Grounded response: {len(sources)} sources, top similarity "
            f"{response.metrics.top_similarity:.3f}, {response.metrics.processing_time_ms:.0f}ms"
        )
        return response

    def _titles(self, retrieval: RetrievalContext) -> dict[str, str]:
        titles = {}
        for result in retrieval.retrieved_chunks:
            document_id = result.chunk.document_id
            if document_id not in titles:
                document = self.document_store.get(document_id)
                if document is not None:
                    titles[document_id] = document.title
        return titles

    @staticmethod
    def _metrics(retrieval: RetrievalContext, content: str, started: float) -> ResponseMetrics:
        return ResponseMetrics(
            retrieval_count=len(retrieval.retrieved_chunks),
            top_similarity=retrieval.top_scores[0] if retrieval.top_scores else 0.0,
            response_length=len(content),
            processing_time_ms=(time.perf_counter() - started) * 1000,
        )

    def _fixed(
        self,
        outcome: ChatOutcome,
        content: str,
        started: float,
        constraints: list[FormatConstraint],
        retrieval: RetrievalContext | None = None,
    ) -> ChatResponse:
        retrieval = retrieval or RetrievalContext.empty("")
        return ChatResponse(
            message=ChatMessage.assistant(content),
            sources=[],
            has_grounding=False,
            outcome=outcome,
            metrics=self._metrics(replace(retrieval, retrieved_chunks=[]), content, started),
            constraints=constraints,
        )
