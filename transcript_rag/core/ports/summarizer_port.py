"""Summarizer port used by the A/B summary engine."""

from collections.abc import Callable
from typing import Protocol

from ..domain import Document, StyleGuide, SummarizationResult

SummaryProgressCallback = Callable[[int, int], None]


class SummarizerPort(Protocol):
    """Turns a document into a styled summary (chunks -> facts -> markdown)."""

    def summarize_document(
        self,
        document: Document,
        style_guide: StyleGuide,
        on_progress: SummaryProgressCallback | None = None,
        prompt_strategy: str = "default",
    ) -> SummarizationResult:  # pragma: no cover - protocol
        ...
