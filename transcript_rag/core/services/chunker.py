"""Split transcript text into overlapping, word-bounded chunks."""

import re
from typing import Any

from ..domain import Chunk

_WORD_RE = re.compile(r"\S+")
# A word that closes a sentence, allowing trailing quotes or brackets.
_SENTENCE_END_RE = re.compile(r"[.!?][\"')\]]*$")
_PARAGRAPH_GAP_RE = re.compile(r"\n\s*\n")

DEFAULT_TARGET_WORDS = 500
DEFAULT_OVERLAP_WORDS = 50


def _boundary_flags(text: str, words: list[re.Match[str]]) -> list[bool]:
    """Flag, per word, whether a chunk may end right after it."""
    flags = []
    for i, word in enumerate(words):
        if _SENTENCE_END_RE.search(word.group()):
            flags.append(True)
        elif i + 1 < len(words):
            gap = text[word.end() : words[i + 1].start()]
            flags.append(bool(_PARAGRAPH_GAP_RE.search(gap)))
        else:
            flags.append(True)
    return flags


def chunk_text(
    text: str,
    document_id: str,
    target_words: int = DEFAULT_TARGET_WORDS,
    overlap_words: int = DEFAULT_OVERLAP_WORDS,
) -> list[Chunk]:
    """Split text into overlapping chunks of roughly ``target_words`` words.

    Words are packed greedily. A chunk prefers to end on a sentence or
    paragraph boundary found in the second half of its window and is cut
    hard at ``target_words`` otherwise. Each following chunk starts
    ``overlap_words`` words before the previous one ended.

    Args:
        text: Raw document text.
        document_id: Id of the owning document, used for chunk ids.
        target_words: Maximum words per chunk.
        overlap_words: Words repeated at the start of the next chunk.

    Returns:
        Ordered chunks whose text is an exact slice of ``text``. Empty or
        whitespace-only text yields an empty list.

    Raises:
        ValueError: If the size settings cannot make progress.
    """
    if target_words <= 0:
        raise ValueError(f"target_words must be positive, got {target_words}")
    if overlap_words < 0:
        raise ValueError(f"overlap_words must not be negative, got {overlap_words}")
    if overlap_words >= target_words:
        raise ValueError(
            f"overlap_words ({overlap_words}) must be smaller than target_words ({target_words})"
        )

    words = list(_WORD_RE.finditer(text))
    if not words:
        return []

    boundaries = _boundary_flags(text, words)
    total = len(words)
    chunks: list[Chunk] = []
    start = 0

    while True:
        if total - start <= target_words:
            end = total
        else:
            end = start + target_words
            floor = start + max(target_words // 2, overlap_words)
            for candidate in range(start + target_words, floor, -1):
                if boundaries[candidate - 1]:
                    end = candidate
                    break

        char_start = words[start].start()
        char_end = words[end - 1].end()
        index = len(chunks)
        chunks.append(
            Chunk(
                id=f"{document_id}-chunk-{index}",
                document_id=document_id,
                text=text[char_start:char_end],
                start_index=char_start,
                end_index=char_end,
                chunk_index=index,
                word_start=start,
                word_end=end,
            )
        )

        if end >= total:
            break
        start = end - overlap_words

    return chunks


def chunking_stats(chunks: list[Chunk]) -> dict[str, Any]:
    """Summarize chunk sizes (in words) for diagnostics."""
    if not chunks:
        return {
            "total_chunks": 0,
            "average_chunk_size": 0,
            "min_chunk_size": 0,
            "max_chunk_size": 0,
            "total_characters": 0,
        }
    sizes = [chunk.word_count for chunk in chunks]
    return {
        "total_chunks": len(chunks),
        "average_chunk_size": round(sum(sizes) / len(sizes)),
        "min_chunk_size": min(sizes),
        "max_chunk_size": max(sizes),
        "total_characters": sum(len(chunk.text) for chunk in chunks),
    }
