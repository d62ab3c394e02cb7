"""Chat-related models: messages, retrieval context and responses."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .document import Document, SearchResult
    from .format_constraints import FormatConstraint


class MessageRole(Enum):
    """Who authored a chat message."""

    USER = "user"
    ASSISTANT = "assistant"


class ChatOutcome(Enum):
    """Terminal state of one request/response exchange.

    Attributes:
        GROUNDED: Retrieved sources cleared the threshold and the model answered.
        NO_DOCUMENTS: Nothing has been uploaded yet.
        NO_EMBEDDINGS: Documents exist but none has been indexed.
        NO_GROUNDING: Search ran but no chunk cleared the similarity threshold.
        ERROR: Retrieval or completion failed.
    """

    GROUNDED = "grounded"
    NO_DOCUMENTS = "no_documents"
    NO_EMBEDDINGS = "no_embeddings"
    NO_GROUNDING = "no_grounding"
    ERROR = "error"


@dataclass
class ChatMessage:
    """A single message in a conversation."""

    role: MessageRole
    content: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: str = field(default_factory=lambda: datetime.now(UTC).isoformat())
    sources: list[SearchResult] = field(default_factory=list)

    @classmethod
    def user(cls, content: str) -> ChatMessage:
        return cls(role=MessageRole.USER, content=content)

    @classmethod
    def assistant(cls, content: str, sources: list[SearchResult] | None = None) -> ChatMessage:
        return cls(role=MessageRole.ASSISTANT, content=content, sources=list(sources or []))


@dataclass
class ChatContext:
    """Conversation state handed in by the caller for one turn.

    Attributes:
        messages: Prior messages, oldest first.
        document_ids: Restrict retrieval to these documents; empty means all.
        active_document: Document the user is currently looking at, if any.
        selected_document_summary: A previously generated summary the user may refer to.
        max_context_length: Character budget for the conversation history.
    """

    messages: list[ChatMessage] = field(default_factory=list)
    document_ids: list[str] = field(default_factory=list)
    active_document: Document | None = None
    selected_document_summary: str | None = None
    max_context_length: int = 4000


@dataclass
class RetrievalContext:
    """Chunks retrieved for one chat turn.

    Attributes:
        query: The user query the search ran for.
        retrieved_chunks: Results that cleared the similarity threshold.
        top_scores: Unfiltered top scores, descending, for diagnostics.
        has_relevant_content: True iff ``retrieved_chunks`` is non-empty.
    """

    query: str
    retrieved_chunks: list[SearchResult] = field(default_factory=list)
    top_scores: list[float] = field(default_factory=list)
    has_relevant_content: bool = False

    @classmethod
    def empty(cls, query: str) -> RetrievalContext:
        return cls(query=query)


@dataclass
class ResponseMetrics:
    """Diagnostics attached to every chat response."""

    retrieval_count: int = 0
    top_similarity: float = 0.0
    response_length: int = 0
    processing_time_ms: float = 0.0


@dataclass
class ChatResponse:
    """Response produced by the grounded response generator.

    Attributes:
        message: The assistant message to append to the conversation.
        sources: Retrieved chunks cited by the answer.
        has_grounding: Whether the answer is backed by retrieved sources.
        outcome: Which terminal state produced this response.
        metrics: Retrieval and timing diagnostics.
        constraints: Output-format constraints detected in the query.
    """

    message: ChatMessage
    sources: list[SearchResult]
    has_grounding: bool
    outcome: ChatOutcome
    metrics: ResponseMetrics = field(default_factory=ResponseMetrics)
    constraints: list[FormatConstraint] = field(default_factory=list)
