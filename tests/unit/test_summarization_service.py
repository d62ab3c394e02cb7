"""Unit tests for fact extraction and summary generation."""

import json

import pytest

from transcript_rag.core.domain import ChunkFacts, Document, ExtractedFacts
from transcript_rag.core.domain.exceptions import ServiceUnavailableError
from transcript_rag.core.services import SummarizationService
from transcript_rag.core.services.summarization_service import (
    MAX_RETRIES,
    build_fallback_summary,
    clean_json_response,
    merge_facts,
)

pytestmark = pytest.mark.unit


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def summarizer(llm, sleeps, recording_logger):
    return SummarizationService(llm, sleep=sleeps.append, log=recording_logger)


def chunk_facts(index: int, parse_success: bool = True, **facts) -> ChunkFacts:
    return ChunkFacts(
        chunk_id=f"doc-chunk-{index}",
        chunk_index=index,
        facts=ExtractedFacts(**facts),
        parse_success=parse_success,
    )


class TestCleanJsonResponse:
    """Stripping fences and prose around model JSON."""

    @pytest.mark.parametrize(
        "raw",
        [
            '{"topics": ["a"]}',
            '```json\n{"topics": ["a"]}\n```',
            '```\n{"topics": ["a"]}\n```',
            'Here are the facts:\n{"topics": ["a"]}\nHope this helps!',
        ],
    )
    def test_extracts_object(self, raw):
        assert json.loads(clean_json_response(raw)) == {"topics": ["a"]}

    def test_without_braces_returns_stripped_text(self):
        assert clean_json_response("  no json here ") == "no json here"


class TestMergeFacts:
    def test_first_scalar_wins(self):
        merged = merge_facts(
            [chunk_facts(0, audience="Beginners"), chunk_facts(1, audience="Experts", class_title="T")]
        )

        assert merged.audience == "Beginners"
        assert merged.class_title == "T"

    def test_lists_deduplicated_case_insensitively(self):
        merged = merge_facts(
            [
                chunk_facts(0, topics=["Breath", "Posture"]),
                chunk_facts(1, topics=["breath", "Sleep"]),
            ]
        )

        assert merged.topics == ["Breath", "Posture", "Sleep"]

    def test_failed_chunks_are_ignored(self):
        merged = merge_facts(
            [chunk_facts(0, parse_success=False, topics=["Ghost"]), chunk_facts(1, topics=["Real"])]
        )

        assert merged.topics == ["Real"]


class TestFallbackSummary:
    def test_uses_facts(self, sample_document):
        facts = ExtractedFacts(
            class_title="Morning Breath",
            audience="Beginners",
            key_takeaways=["Slow down"],
            notable_quotes=["Breathe like the tide"],
        )

        summary = build_fallback_summary(sample_document, facts)

        assert summary.startswith("# Morning Breath")
        assert "**Audience:** Beginners" in summary
        assert "## Key Takeaways\n\n- Slow down" in summary
        assert "> Breathe like the tide" in summary
        assert "## Techniques Covered" not in summary

    def test_falls_back_to_document_title(self, sample_document):
        assert build_fallback_summary(sample_document, ExtractedFacts()) == "# Breathing Basics"


class TestExtractFacts:
    """Per-chunk extraction with retries."""

    def test_parses_valid_json(self, summarizer, llm, facts_json, style_guide):
        llm.queue(facts_json)

        result = summarizer.extract_facts("chunk text", "doc-chunk-0", 0, style_guide)

        assert result.parse_success is True
        assert result.facts.techniques == ["Box breathing"]
        assert result.raw_response == facts_json
        assert "(chunk 1)" in llm.prompts[0]
        assert "CHUNK TEXT:\nchunk text" in llm.prompts[0]

    def test_retries_unparseable_output(self, summarizer, llm, facts_json, style_guide, sleeps):
        llm.queue("not json at all", facts_json)

        result = summarizer.extract_facts("chunk text", "doc-chunk-0", 0, style_guide)

        assert result.parse_success is True
        assert len(llm.prompts) == 2
        assert sleeps == [1.0]

    def test_gives_up_after_max_attempts(self, summarizer, llm, style_guide, recording_logger):
        llm.queue("bad", "[1, 2, 3]", "never used")

        result = summarizer.extract_facts("chunk text", "doc-chunk-0", 0, style_guide)

        assert result.parse_success is False
        assert result.facts.is_empty()
        assert result.error
        assert len(llm.prompts) == MAX_RETRIES
        assert len(recording_logger.messages("warning")) == MAX_RETRIES

    def test_service_errors_propagate(self, summarizer, llm, style_guide):
        llm.queue(ServiceUnavailableError("Ollama is not reachable"))

        with pytest.raises(ServiceUnavailableError):
            summarizer.extract_facts("chunk text", "doc-chunk-0", 0, style_guide)


class TestSummarizeDocument:
    """Full two-stage summarization."""

    def test_single_chunk_document(self, summarizer, llm, sample_document, facts_json, style_guide):
        llm.queue(facts_json, "# Breathing Basics\n\n## Mini Synopsis\nBreathe.")
        progress = []

        result = summarizer.summarize_document(
            sample_document, style_guide, on_progress=lambda c, t: progress.append((c, t))
        )

        assert progress == [(1, 1)]
        assert result.document is sample_document
        assert result.markdown_summary.startswith("# Breathing Basics")
        assert result.merged_facts.class_title == "Breathing Basics"
        assert result.processing_stats.total_chunks == 1
        assert result.processing_stats.successful_chunks == 1
        assert result.processing_stats.failed_chunks == 0

    def test_prompt_strategy_and_style_reach_summary_prompt(
        self, summarizer, llm, sample_document, facts_json, style_guide
    ):
        llm.queue(facts_json, "# Summary")

        summarizer.summarize_document(sample_document, style_guide, prompt_strategy="structured_formal")

        summary_prompt = llm.prompts[-1]
        assert "PROMPT STRATEGY: structured_formal" in summary_prompt
        assert "DOCUMENT: Breathing Basics" in summary_prompt
        assert '"techniques": [\n    "Box breathing"\n  ]' in summary_prompt
        assert "Formality: 40/100" in summary_prompt

    def test_multi_chunk_progress_and_pacing(self, llm, facts_json, style_guide, sentence_text, sleeps):
        service = SummarizationService(llm, chunk_words=100, overlap_words=10, sleep=sleeps.append)
        document = Document.create("Long class", sentence_text(250))
        llm.queue(facts_json, facts_json, facts_json, "# Long class")
        progress = []

        result = service.summarize_document(
            document, style_guide, on_progress=lambda c, t: progress.append((c, t))
        )

        assert progress == [(1, 3), (2, 3), (3, 3)]
        assert sleeps == [0.5, 0.5]
        assert result.processing_stats.total_chunks == 3
        assert result.merged_facts.techniques == ["Box breathing"]

    def test_failed_chunk_does_not_fail_run(self, summarizer, llm, sample_document, style_guide):
        llm.queue("nope", "still nope", "# Summary anyway")

        result = summarizer.summarize_document(sample_document, style_guide)

        assert result.processing_stats.failed_chunks == 1
        assert result.markdown_summary == "# Summary anyway"

    def test_blank_summary_uses_fallback(self, summarizer, llm, sample_document, facts_json, style_guide):
        llm.queue(facts_json, "   \n")

        result = summarizer.summarize_document(sample_document, style_guide)

        assert result.markdown_summary.startswith("# Breathing Basics")
        assert "## Techniques Covered\n\n- Box breathing" in result.markdown_summary
