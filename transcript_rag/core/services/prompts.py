"""Prompt templates for chat and summarization.

Templates use ``{{name}}`` placeholders filled by :func:`render_template`.
"""

import re
from collections.abc import Mapping

_PLACEHOLDER_RE = re.compile(r"\{\{(\w+)\}\}")


def render_template(template: str, variables: Mapping[str, str]) -> str:
    """Replace ``{{name}}`` placeholders with values from ``variables``.

    Placeholders with no matching key are left as they are.
    """

    def _sub(match: re.Match[str]) -> str:
        name = match.group(1)
        return str(variables[name]) if name in variables else match.group(0)

    return _PLACEHOLDER_RE.sub(_sub, template)


STYLE_SECTION = """STYLE GUIDE:
{{styleInstructions}}

Tone Settings:
- Formality: {{formalityLevel}}/100 (0=casual, 100=formal)
- Enthusiasm: {{enthusiasmLevel}}/100 (0=calm, 100=energetic)
- Technical Level: {{technicalityLevel}}/100 (0=simple, 100=technical)

Keywords to emphasize: {{keywords}}

{{examplePhrasesSection}}"""

CHAT_RESPONSE_PROMPT = (
    """You are a friendly, helpful AI assistant answering questions about lesson, teaching and meditation transcripts. Answer based on the provided source excerpts and any generated summary.

{{summarySection}}"""
    + STYLE_SECTION
    + """CONVERSATION CONTEXT:
{{contextMessages}}

SOURCE EXCERPTS:
{{sourceChunks}}

RULES:
1. Answer based on the provided source excerpts and generated summary
2. When users reference "the summary" or "the generated summary", use the GENERATED SUMMARY section above
3. You can work with the summary (rewrite it, extract from it, compare it to sources)
4. If the sources and summary don't contain relevant information, say "I don't have enough information to answer that question."
5. Reference specific sources when possible using their titles (e.g., "According to [title]...")
6. Be conversational, friendly and helpful
7. Follow the style guide and any format requirements above
8. Start new paragraphs when transitioning between different ideas or topics

HUMAN QUESTION: {{userQuery}}

ASSISTANT RESPONSE:"""
)

FACT_EXTRACTION_PROMPT = (
    """You are extracting structured facts from a teaching transcript chunk. Extract information according to this JSON schema and style guide.

"""
    + STYLE_SECTION
    + """JSON SCHEMA:
{
  "class_title": "string (optional)",
  "date_or_series": "string (optional)",
  "audience": "string (optional)",
  "learning_objectives": ["string array"],
  "key_takeaways": ["string array - REQUIRED"],
  "topics": ["string array - REQUIRED"],
  "techniques": ["string array - REQUIRED"],
  "action_items": ["string array"],
  "notable_quotes": ["string array"],
  "open_questions": ["string array"],
  "timestamp_refs": ["string array"]
}

INSTRUCTIONS:
1. Extract facts ONLY from this chunk (chunk {{chunkIndex}})
2. Return ONLY valid JSON - no explanations or markdown
3. Include key_takeaways, topics, and techniques (required fields)
4. Use empty arrays for fields with no relevant content
5. Apply the style guide to your extracted content
6. NEVER include individual names - use generic terms like "the instructor" or "a student"

CHUNK TEXT:
{{chunkText}}

JSON RESPONSE:"""
)

SUMMARY_GENERATION_PROMPT = (
    """Generate a comprehensive markdown summary from the extracted facts below. This is a lesson, teaching or meditation transcript. Follow the style guide precisely.

"""
    + STYLE_SECTION
    + """PROMPT STRATEGY: {{promptStrategy}}

DOCUMENT: {{documentTitle}}
EXTRACTED FACTS:
{{extractedFacts}}

REQUIRED STRUCTURE (use this exact format):
# {{documentTitle}}

## Mini Synopsis
[EXACTLY 1 SENTENCE capturing the essence and benefits]

## 4-Sentence Synopsis
[Exactly 4 sentences emphasizing WHY and WHAT benefits - in the author's voice]

## Learning Objectives
[What students will learn - bulleted list]

## Key Takeaways
[Main insights and lessons - bulleted list]

## Topics
[Subject areas covered - bulleted list]

## Techniques
[Specific methods, practices, exercises taught - bulleted list]

## Notable Quotes
[Memorable quotes from the lesson - bulleted list]

## Open Questions
[Questions for reflection or further exploration - bulleted list]

INSTRUCTIONS:
1. Follow the exact structure above - ALL sections must be included in this order
2. Use the extracted facts to populate each section
3. Apply the style guide consistently throughout, ESPECIALLY in the synopsis
4. If a section has no content in the extracted facts, write "No specific [section name] identified in this lesson"

MARKDOWN SUMMARY:"""
)
