"""Two-stage document summarization: per-chunk facts, then a styled summary."""

import json
import logging
import re
import time
from collections.abc import Callable

from ..domain import (
    ChunkFacts,
    Document,
    ExtractedFacts,
    ProcessingStats,
    StyleGuide,
    SummarizationResult,
)
from ..domain.summary import LIST_FACT_FIELDS, SCALAR_FACT_FIELDS
from ..ports import LLMPort, LoggerPort, SummaryProgressCallback
from .chunker import chunk_text
from .prompt_builder import style_variables
from .prompts import FACT_EXTRACTION_PROMPT, SUMMARY_GENERATION_PROMPT, render_template

logger = logging.getLogger(__name__)

# Attempts per chunk before its facts are recorded as failed.
MAX_RETRIES = 2
DEFAULT_SUMMARY_CHUNK_WORDS = 1500
DEFAULT_SUMMARY_OVERLAP_WORDS = 50

_FENCE_OPEN_RE = re.compile(r"```(?:json)?\s*", re.IGNORECASE)
_FENCE_CLOSE_RE = re.compile(r"```\s*$")


def clean_json_response(response: str) -> str:
    """Strip markdown fences and any prose around the outermost JSON object."""
    cleaned = _FENCE_CLOSE_RE.sub("", _FENCE_OPEN_RE.sub("", response)).strip()
    first, last = cleaned.find("{"), cleaned.rfind("}")
    if first != -1 and last > first:
        cleaned = cleaned[first : last + 1]
    return cleaned


def merge_facts(chunk_facts: list[ChunkFacts]) -> ExtractedFacts:
    """Combine facts from successfully parsed chunks.

    The first non-empty scalar wins. List fields are concatenated in chunk
    order and de-duplicated case-insensitively, keeping the first spelling.
    """
    merged = ExtractedFacts()
    parsed = [cf.facts for cf in chunk_facts if cf.parse_success]

    for name in SCALAR_FACT_FIELDS:
        for facts in parsed:
            if value := getattr(facts, name):
                setattr(merged, name, value)
                break

    for name in LIST_FACT_FIELDS:
        seen: dict[str, str] = {}
        for facts in parsed:
            for value in getattr(facts, name):
                if value.strip():
                    seen.setdefault(value.lower(), value)
        setattr(merged, name, list(seen.values()))

    return merged


def build_fallback_summary(document: Document, facts: ExtractedFacts) -> str:
    """Deterministic markdown summary built from facts alone."""
    parts = [f"# {facts.class_title or document.title}\n\n"]
    if facts.date_or_series:
        parts.append(f"**Date/Series:** {facts.date_or_series}\n\n")
    if facts.audience:
        parts.append(f"**Audience:** {facts.audience}\n\n")

    sections = (
        ("Key Takeaways", facts.key_takeaways),
        ("Techniques Covered", facts.techniques),
        ("Topics Discussed", facts.topics),
        ("Learning Objectives", facts.learning_objectives),
        ("Action Items", facts.action_items),
    )
    for heading, items in sections:
        if items:
            parts.append(f"## {heading}\n\n" + "".join(f"- {item}\n" for item in items) + "\n")
    if facts.notable_quotes:
        parts.append(
            "## Notable Quotes\n\n" + "".join(f"> {quote}\n\n" for quote in facts.notable_quotes)
        )
    return "".join(parts).strip()


class SummarizationService:
    """Summarizes a document under a given style guide.

    Unparseable model output for a chunk is recorded on that chunk and does
    not fail the run. ``ModelServiceError`` from the model propagates.
    """

    def __init__(
        self,
        llm: LLMPort,
        chunk_words: int = DEFAULT_SUMMARY_CHUNK_WORDS,
        overlap_words: int = DEFAULT_SUMMARY_OVERLAP_WORDS,
        chunk_delay: float = 0.5,
        retry_delay: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
        log: LoggerPort | None = None,
    ) -> None:
        self.llm = llm
        self.chunk_words = chunk_words
        self.overlap_words = overlap_words
        self.chunk_delay = chunk_delay
        self.retry_delay = retry_delay
        self.sleep = sleep
        self.log = log or logger

    def summarize_document(
        self,
        document: Document,
        style_guide: StyleGuide,
        on_progress: SummaryProgressCallback | None = None,
        prompt_strategy: str = "default",
    ) -> SummarizationResult:
        started = time.perf_counter()
        self.log.info(f"Starting summarization for document: {document.title}")

        chunks = chunk_text(document.text, document.id, self.chunk_words, self.overlap_words)
        self.log.info(f"Document split into {len(chunks)} chunks for fact extraction")

        results: list[ChunkFacts] = []
        for i, chunk in enumerate(chunks):
            if on_progress:
                on_progress(i + 1, len(chunks))
            facts = self.extract_facts(chunk.text, chunk.id, chunk.chunk_index, style_guide)
            results.append(facts)
            self.log.debug(
                f"Chunk {i + 1}/{len(chunks)} parsed={facts.parse_success} for {document.id}"
            )
            if i < len(chunks) - 1 and self.chunk_delay > 0:
                self.sleep(self.chunk_delay)

        merged = merge_facts(results)
        summary = self.generate_summary(document, merged, style_guide, prompt_strategy)
        successful = sum(1 for cf in results if cf.parse_success)

        result = SummarizationResult(
            document=document,
            chunk_facts=results,
            merged_facts=merged,
            markdown_summary=summary,
            processing_stats=ProcessingStats(
                total_chunks=len(chunks),
                successful_chunks=successful,
                failed_chunks=len(chunks) - successful,
                processing_time_ms=(time.perf_counter() - started) * 1000,
            ),
        )
        self.log.info(
            f"Summarization completed for {document.title}: "
            f"{successful}/{len(chunks)} chunks parsed, {len(summary)} chars"
        )
        return result

    def extract_facts(
        self, text: str, chunk_id: str, chunk_index: int, style_guide: StyleGuide
    ) -> ChunkFacts:
        prompt = render_template(
            FACT_EXTRACTION_PROMPT,
            {
                **style_variables(style_guide),
                "chunkIndex": str(chunk_index + 1),
                "chunkText": text,
            },
        )

        last_error = ""
        raw = ""
        for attempt in range(MAX_RETRIES):
            raw = self.llm.complete(prompt)
            try:
                data = json.loads(clean_json_response(raw))
            except json.JSONDecodeError as e:
                last_error = str(e)
                self.log.warning(f"Unparseable facts for {chunk_id} (attempt {attempt + 1}): {e}")
            else:
                if isinstance(data, dict):
                    return ChunkFacts(
                        chunk_id=chunk_id,
                        chunk_index=chunk_index,
                        facts=ExtractedFacts.from_dict(data),
                        parse_success=True,
                        raw_response=raw,
                    )
                last_error = f"Expected a JSON object, got {type(data).__name__}"
                self.log.warning(f"Unusable facts for {chunk_id} (attempt {attempt + 1}): {last_error}")
            if attempt < MAX_RETRIES - 1 and self.retry_delay > 0:
                self.sleep(self.retry_delay)

        return ChunkFacts(
            chunk_id=chunk_id,
            chunk_index=chunk_index,
            facts=ExtractedFacts(),
            parse_success=False,
            raw_response=raw,
            error=last_error,
        )

    def generate_summary(
        self,
        document: Document,
        facts: ExtractedFacts,
        style_guide: StyleGuide,
        prompt_strategy: str = "default",
    ) -> str:
        prompt = render_template(
            SUMMARY_GENERATION_PROMPT,
            {
                **style_variables(style_guide),
                "promptStrategy": prompt_strategy,
                "documentTitle": document.title,
                "extractedFacts": json.dumps(facts.to_dict(), indent=2),
            },
        )
        summary = self.llm.complete(prompt).strip()
        if not summary:
            self.log.warning(f"Empty summary for {document.title}; using fact-based fallback")
            return build_fallback_summary(document, facts)
        return summary
