"""Prompt construction for grounded chat and summarization."""

from __future__ import annotations

from collections.abc import Mapping

from ..domain import (
    ChatContext,
    FormatConstraint,
    MessageRole,
    RetrievalContext,
    StyleGuide,
)
from .constraints import detect_constraints, render_constraints
from .prompts import CHAT_RESPONSE_PROMPT, render_template

MAX_CONTEXT_MESSAGES = 10
DEFAULT_STYLE_INSTRUCTIONS = "Use a helpful, professional tone."


def build_example_phrases_section(style_guide: StyleGuide) -> str:
    phrases = style_guide.example_phrases
    groups = (
        ("Preferred Opening Phrases", phrases.preferred_openings),
        ("Preferred Transition Phrases", phrases.preferred_transitions),
        ("Preferred Conclusion Phrases", phrases.preferred_conclusions),
        ("Phrases to Avoid", phrases.avoid_phrases),
    )
    section = "".join(
        f"{label}:\n- " + "\n- ".join(items) + "\n\n" for label, items in groups if items
    )
    return f"EXAMPLE PHRASES:\n{section}" if section else ""


def style_variables(style_guide: StyleGuide) -> dict[str, str]:
    """Template variables describing a style guide."""
    tone = style_guide.tone_settings
    return {
        "styleInstructions": style_guide.instructions.strip() or DEFAULT_STYLE_INSTRUCTIONS,
        "formalityLevel": str(tone.formality),
        "enthusiasmLevel": str(tone.enthusiasm),
        "technicalityLevel": str(tone.technicality),
        "keywords": ", ".join(style_guide.keywords) or "None specified",
        "examplePhrasesSection": build_example_phrases_section(style_guide),
    }


def build_summary_section(summary: str | None) -> str:
    if not summary:
        return ""
    return (
        f"GENERATED SUMMARY:\n{summary}\n\n"
        'NOTE: When the user refers to "the summary", "the generated summary", or '
        '"this summary", they mean the above GENERATED SUMMARY section.\n\n'
    )


def format_history(context: ChatContext, max_messages: int = MAX_CONTEXT_MESSAGES) -> str:
    recent = context.messages[-max_messages:] if max_messages > 0 else []
    return "\n".join(
        f"{'Human' if m.role is MessageRole.USER else 'Assistant'}: {m.content}" for m in recent
    )


def format_sources(retrieval: RetrievalContext, titles: Mapping[str, str]) -> str:
    """Label each retrieved chunk with its document title and similarity."""
    blocks = []
    for result in retrieval.retrieved_chunks:
        document_id = result.chunk.document_id
        title = titles.get(document_id) or f"Document {document_id}"
        blocks.append(f"[{title}] (Similarity: {result.similarity * 100:.1f}%)\n{result.chunk.text}")
    return "\n\n".join(blocks)


class ChatPromptBuilder:
    """Build the grounded chat prompt from a retrieval context."""

    def __init__(self, max_context_messages: int = MAX_CONTEXT_MESSAGES) -> None:
        self.max_context_messages = max_context_messages

    def build(
        self,
        query: str,
        context: ChatContext,
        retrieval: RetrievalContext,
        style_guide: StyleGuide,
        titles: Mapping[str, str],
        constraints: list[FormatConstraint] | None = None,
    ) -> str:
        """Render the chat prompt; ``constraints`` are detected from ``query`` when omitted."""
        if constraints is None:
            constraints = detect_constraints(query)
        variables = {
            **style_variables(style_guide),
            "summarySection": build_summary_section(context.selected_document_summary),
            "contextMessages": format_history(context, self.max_context_messages),
            "sourceChunks": format_sources(retrieval, titles),
            "userQuery": query,
        }
        prompt = render_constraints(constraints) + render_template(CHAT_RESPONSE_PROMPT, variables)
        return prompt
