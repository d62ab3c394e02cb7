"""Reflow model output into short paragraphs."""

import re

_SENTENCE_SPLIT_RE = re.compile(r"(?<=[.!?])\s+")

MAX_SENTENCES_PER_PARAGRAPH = 3

_OPENING_MARKERS = ("first", "initially", "to begin", "let me start")
_TRANSITION_MARKERS = (
    "however",
    "on the other hand",
    "meanwhile",
    "additionally",
    "furthermore",
    "in addition",
    "next",
    "then",
    "finally",
    "in conclusion",
)
_EXAMPLE_MARKERS = ("for example", "specifically", "in particular", "such as")


def _opens_with(sentence: str, markers: tuple[str, ...]) -> bool:
    lowered = sentence.lower()
    return any(re.match(rf"{re.escape(marker)}\b", lowered) for marker in markers)


def is_natural_break(sentence: str, next_sentence: str) -> bool:
    """Whether a paragraph should end between two sentences."""
    if _opens_with(sentence, _OPENING_MARKERS):
        return True
    if _opens_with(next_sentence, _TRANSITION_MARKERS):
        return True
    if sentence.rstrip().endswith("?"):
        return True
    return _opens_with(next_sentence, _EXAMPLE_MARKERS)


def split_sentences(text: str) -> list[str]:
    return [s for s in _SENTENCE_SPLIT_RE.split(text) if s.strip()]


def format_paragraphs(text: str) -> str:
    """Group sentences into paragraphs of at most three, joined by blank lines.

    Text of three sentences or fewer is returned unchanged.
    """
    sentences = split_sentences(text)
    if len(sentences) <= MAX_SENTENCES_PER_PARAGRAPH:
        return text

    paragraphs: list[str] = []
    current: list[str] = []
    for i, sentence in enumerate(sentences):
        current.append(sentence)
        last = i == len(sentences) - 1
        if (
            last
            or len(current) >= MAX_SENTENCES_PER_PARAGRAPH
            or is_natural_break(sentence, sentences[i + 1])
        ):
            paragraphs.append(" ".join(current))
            current = []

    return "\n\n".join(paragraphs)
