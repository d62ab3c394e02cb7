"""Detect output-format requests in a user's query."""

import re

from ..domain import (
    BulletList,
    Concise,
    FormatConstraint,
    ParagraphCount,
    SentenceCount,
    WordCount,
)

_SENTENCES_RE = re.compile(r"(\d+)\s+sentences?", re.IGNORECASE)
_BULLETS_RE = re.compile(r"bullet\s+points?|bulleted?\s+list", re.IGNORECASE)
_PARAGRAPHS_RE = re.compile(r"(\d+)\s+paragraphs?", re.IGNORECASE)
_WORDS_RE = re.compile(r"(\d+)\s+words?", re.IGNORECASE)
_CONCISE_RE = re.compile(r"synopsis|brief|concise|short", re.IGNORECASE)

FORMAT_HEADER = "CRITICAL FORMAT REQUIREMENTS:"


def detect_constraints(query: str) -> list[FormatConstraint]:
    """Return the format constraints requested in ``query``, in a fixed order.

    >>> detect_constraints("Summarize this in 3 sentences")
    [SentenceCount(count=3)]
    """
    constraints: list[FormatConstraint] = []

    if match := _SENTENCES_RE.search(query):
        constraints.append(SentenceCount(int(match.group(1))))
    if _BULLETS_RE.search(query):
        constraints.append(BulletList())
    if match := _PARAGRAPHS_RE.search(query):
        constraints.append(ParagraphCount(int(match.group(1))))
    if match := _WORDS_RE.search(query):
        constraints.append(WordCount(int(match.group(1))))
    if _CONCISE_RE.search(query):
        constraints.append(Concise())

    return constraints


def render_constraints(constraints: list[FormatConstraint]) -> str:
    """Render constraints as the block prepended to a prompt; empty if none."""
    if not constraints:
        return ""
    lines = [line for constraint in constraints for line in constraint.instructions()]
    return f"{FORMAT_HEADER}\n" + "\n".join(lines) + "\n\n"
