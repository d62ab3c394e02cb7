"""Unit tests for chat prompt construction."""

import pytest

from transcript_rag.core.domain import (
    BulletList,
    ChatContext,
    ChatMessage,
    Chunk,
    EmbeddedChunk,
    RetrievalContext,
    SearchResult,
    StyleGuide,
)
from transcript_rag.core.services import ChatPromptBuilder
from transcript_rag.core.services.prompt_builder import (
    build_example_phrases_section,
    build_summary_section,
    format_history,
    format_sources,
    style_variables,
)
from transcript_rag.core.services.prompts import render_template

pytestmark = pytest.mark.unit


def retrieval_with(*items: tuple[str, str, float]) -> RetrievalContext:
    results = []
    for i, (document_id, text, similarity) in enumerate(items):
        chunk = Chunk(
            id=f"{document_id}-chunk-{i}",
            document_id=document_id,
            text=text,
            start_index=0,
            end_index=len(text),
            chunk_index=i,
        )
        results.append(
            SearchResult(chunk=EmbeddedChunk(chunk=chunk, embedding=[1.0]), similarity=similarity)
        )
    return RetrievalContext(
        query="q",
        retrieved_chunks=results,
        top_scores=[r.similarity for r in results],
        has_relevant_content=bool(results),
    )


class TestRenderTemplate:
    def test_replaces_known_placeholders(self):
        assert render_template("Hi {{name}}!", {"name": "there"}) == "Hi there!"

    def test_leaves_unknown_placeholders(self):
        assert render_template("{{a}} {{b}}", {"a": "1"}) == "1 {{b}}"


class TestStyleSection:
    """Style guide rendering."""

    def test_variables(self, style_guide):
        variables = style_variables(style_guide)

        assert variables["styleInstructions"] == "Write warmly and plainly."
        assert variables["formalityLevel"] == "40"
        assert variables["keywords"] == "notice, gently"

    def test_defaults_for_empty_guide(self):
        variables = style_variables(StyleGuide())

        assert variables["styleInstructions"] == "Use a helpful, professional tone."
        assert variables["keywords"] == "None specified"
        assert variables["examplePhrasesSection"] == ""

    def test_example_phrases_section(self, style_guide):
        section = build_example_phrases_section(style_guide)

        assert section.startswith("EXAMPLE PHRASES:\nPreferred Opening Phrases:\n- Here's the thing")
        assert "Phrases to Avoid:\n- Pursuant to" in section


class TestHistoryAndSources:
    def test_history_keeps_last_messages(self):
        messages = [ChatMessage.user(f"q{i}") if i % 2 == 0 else ChatMessage.assistant(f"a{i}") for i in range(6)]
        context = ChatContext(messages=messages)

        assert format_history(context, max_messages=2) == "Human: q4\nAssistant: a5"

    def test_history_empty(self):
        assert format_history(ChatContext()) == ""

    def test_sources_labelled_with_title_and_similarity(self):
        retrieval = retrieval_with(("d1", "Inhale slowly.", 0.877), ("d2", "Exhale.", 0.5))

        text = format_sources(retrieval, {"d1": "Breathing Basics"})

        assert text == (
            "[Breathing Basics] (Similarity: 87.7%)\nInhale slowly.\n\n"
            "[Document d2] (Similarity: 50.0%)\nExhale."
        )

    def test_summary_section(self):
        assert build_summary_section(None) == ""
        section = build_summary_section("# Summary")
        assert section.startswith("GENERATED SUMMARY:\n# Summary")
        assert "NOTE:" in section


class TestChatPromptBuilder:
    """End-to-end prompt assembly."""

    def test_prompt_contains_all_sections(self, style_guide):
        context = ChatContext(
            messages=[ChatMessage.user("Hello"), ChatMessage.assistant("Hi!")],
            selected_document_summary="A short summary.",
        )
        retrieval = retrieval_with(("d1", "Box breathing steadies the mind.", 0.9))

        prompt = ChatPromptBuilder().build(
            "What is box breathing?", context, retrieval, style_guide, {"d1": "Breathing Basics"}
        )

        assert not prompt.startswith("CRITICAL FORMAT REQUIREMENTS")
        assert "GENERATED SUMMARY:\nA short summary." in prompt
        assert "Formality: 40/100" in prompt
        assert "Human: Hello\nAssistant: Hi!" in prompt
        assert "[Breathing Basics] (Similarity: 90.0%)" in prompt
        assert "HUMAN QUESTION: What is box breathing?" in prompt
        assert prompt.rstrip().endswith("ASSISTANT RESPONSE:")
        assert "{{" not in prompt

    def test_constraints_prefix_prompt(self, style_guide):
        retrieval = retrieval_with(("d1", "text", 0.9))

        prompt = ChatPromptBuilder().build(
            "Explain it in 3 sentences", ChatContext(), retrieval, style_guide, {}
        )

        assert prompt.startswith("CRITICAL FORMAT REQUIREMENTS:\n")
        assert "exactly 3 sentences" in prompt.split("STYLE GUIDE")[0]

    def test_history_limit_applies(self, style_guide):
        messages = [ChatMessage.user(f"message-{i}") for i in range(5)]
        builder = ChatPromptBuilder(max_context_messages=2)

        prompt = builder.build(
            "q", ChatContext(messages=messages), retrieval_with(), style_guide, {}
        )

        assert "message-4" in prompt
        assert "message-2" not in prompt

    def test_uses_given_constraints(self, style_guide):
        prompt = ChatPromptBuilder().build(
            "Explain it in 3 sentences",
            ChatContext(),
            retrieval_with(("d1", "text", 0.9)),
            style_guide,
            {},
            [BulletList()],
        )

        assert prompt.startswith("CRITICAL FORMAT REQUIREMENTS:\n")
        assert "bullet points" in prompt
        assert "exactly 3 sentences" not in prompt

    def test_no_constraints_given_means_none_rendered(self, style_guide):
        prompt = ChatPromptBuilder().build(
            "Explain it in 3 sentences", ChatContext(), retrieval_with(("d1", "t", 0.9)), style_guide, {}, []
        )

        assert not prompt.startswith("CRITICAL FORMAT REQUIREMENTS")
