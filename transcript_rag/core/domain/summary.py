"""Summarization and A/B testing models."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, fields
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from .document import Document
from .style import SummaryVariant

SCALAR_FACT_FIELDS = ("class_title", "date_or_series", "audience")
LIST_FACT_FIELDS = (
    "learning_objectives",
    "key_takeaways",
    "topics",
    "techniques",
    "action_items",
    "notable_quotes",
    "open_questions",
    "timestamp_refs",
)


def _now() -> str:
    return datetime.now(UTC).isoformat()


@dataclass
class ExtractedFacts:
    """Structured facts pulled out of a transcript."""

    class_title: str | None = None
    date_or_series: str | None = None
    audience: str | None = None
    learning_objectives: list[str] = field(default_factory=list)
    key_takeaways: list[str] = field(default_factory=list)
    topics: list[str] = field(default_factory=list)
    techniques: list[str] = field(default_factory=list)
    action_items: list[str] = field(default_factory=list)
    notable_quotes: list[str] = field(default_factory=list)
    open_questions: list[str] = field(default_factory=list)
    timestamp_refs: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ExtractedFacts:
        """Build facts from a parsed model response, ignoring unknown keys.

        Scalars that are not strings are dropped; list fields accept a single
        string or a list and keep only non-blank string items.
        """
        values: dict[str, Any] = {}
        for name in SCALAR_FACT_FIELDS:
            value = data.get(name)
            if isinstance(value, str) and value.strip():
                values[name] = value.strip()
        for name in LIST_FACT_FIELDS:
            value = data.get(name)
            if isinstance(value, str):
                value = [value]
            if isinstance(value, list):
                values[name] = [str(v).strip() for v in value if isinstance(v, str) and v.strip()]
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def is_empty(self) -> bool:
        return not any(getattr(self, name) for name in SCALAR_FACT_FIELDS + LIST_FACT_FIELDS)


@dataclass
class ChunkFacts:
    """Fact extraction outcome for one chunk."""

    chunk_id: str
    chunk_index: int
    facts: ExtractedFacts
    parse_success: bool
    raw_response: str = ""
    error: str | None = None


@dataclass
class ProcessingStats:
    total_chunks: int
    successful_chunks: int
    failed_chunks: int
    processing_time_ms: float


@dataclass
class SummarizationResult:
    """Output of one summarization pass over a document."""

    document: Document
    chunk_facts: list[ChunkFacts]
    merged_facts: ExtractedFacts
    markdown_summary: str
    processing_stats: ProcessingStats


class Winner(Enum):
    """Which side of an A/B pair the user preferred."""

    A = "A"
    B = "B"


@dataclass(frozen=True)
class UserPreference:
    """One recorded A/B vote."""

    pair_id: str
    winner: Winner
    reason: str | None = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: str = field(default_factory=_now)


@dataclass
class ABSummaryPair:
    """Two differently styled summaries of the same document.

    ``user_feedback`` is the only field changed after creation.
    """

    document_id: str
    document_title: str
    summary_a: SummarizationResult
    summary_b: SummarizationResult
    variant_a: SummaryVariant
    variant_b: SummaryVariant
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: str = field(default_factory=_now)
    user_feedback: UserPreference | None = None


@dataclass(frozen=True)
class ABTestingStats:
    """Aggregate A/B voting statistics."""

    total_tests: int
    completed_tests: int
    variant_a_wins: int
    variant_b_wins: int
    completion_rate: float
