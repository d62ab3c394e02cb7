"""Domain models for transcript-rag.

Models are organized by domain area:

- document: Document, Chunk, EmbeddedChunk and SearchResult for retrieval
- chat: ChatMessage, ChatContext, RetrievalContext and ChatResponse
- format_constraints: output-format requirements detected in queries
- style: StyleGuide, its partial deltas and SummaryVariant
- summary: extracted facts, summarization results and A/B pairs

All models are re-exported here for convenient importing:

    from transcript_rag.core.domain import Chunk, SearchResult, StyleGuide
"""

from .chat import (
    ChatContext,
    ChatMessage,
    ChatOutcome,
    ChatResponse,
    MessageRole,
    ResponseMetrics,
    RetrievalContext,
)
from .document import (
    Chunk,
    Document,
    DocumentMetadata,
    EmbeddedChunk,
    EmbeddingProgress,
    SearchResult,
    count_words,
)
from .format_constraints import (
    BulletList,
    Concise,
    FormatConstraint,
    ParagraphCount,
    SentenceCount,
    WordCount,
)
from .style import (
    ExamplePhrases,
    ExamplePhrasesDelta,
    StyleGuide,
    StyleGuideDelta,
    SummaryVariant,
    ToneDelta,
    ToneSettings,
    clamp_tone,
)
from .summary import (
    ABSummaryPair,
    ABTestingStats,
    ChunkFacts,
    ExtractedFacts,
    ProcessingStats,
    SummarizationResult,
    UserPreference,
    Winner,
)

__all__ = [
    # Document models
    "Document",
    "DocumentMetadata",
    "Chunk",
    "EmbeddedChunk",
    "EmbeddingProgress",
    "SearchResult",
    "count_words",
    # Chat models
    "MessageRole",
    "ChatMessage",
    "ChatContext",
    "ChatOutcome",
    "ChatResponse",
    "ResponseMetrics",
    "RetrievalContext",
    # Format constraints
    "FormatConstraint",
    "SentenceCount",
    "ParagraphCount",
    "WordCount",
    "BulletList",
    "Concise",
    # Style models
    "ToneSettings",
    "ExamplePhrases",
    "StyleGuide",
    "ToneDelta",
    "ExamplePhrasesDelta",
    "StyleGuideDelta",
    "SummaryVariant",
    "clamp_tone",
    # Summary models
    "ExtractedFacts",
    "ChunkFacts",
    "ProcessingStats",
    "SummarizationResult",
    "Winner",
    "UserPreference",
    "ABSummaryPair",
    "ABTestingStats",
]
