"""Output-format constraints a user can ask for in a chat query."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


class FormatConstraint(ABC):
    """Base class for a detected output-format requirement."""

    @abstractmethod
    def instructions(self) -> list[str]:
        """Imperative prompt lines enforcing this constraint."""


@dataclass(frozen=True)
class SentenceCount(FormatConstraint):
    """Answer must contain exactly ``count`` sentences."""

    count: int

    def instructions(self) -> list[str]:
        return [
            f"- You MUST write exactly {self.count} sentences. Count each sentence carefully.",
            f"- End each sentence with a period. Do not exceed {self.count} sentences.",
        ]


@dataclass(frozen=True)
class ParagraphCount(FormatConstraint):
    """Answer must contain exactly ``count`` paragraphs."""

    count: int

    def instructions(self) -> list[str]:
        return [f"- Write exactly {self.count} paragraphs separated by blank lines"]


@dataclass(frozen=True)
class WordCount(FormatConstraint):
    """Answer should be about ``count`` words long."""

    count: int

    def instructions(self) -> list[str]:
        return [f"- Write approximately {self.count} words. Be concise and precise."]


@dataclass(frozen=True)
class BulletList(FormatConstraint):
    """Answer must be a bulleted list."""

    def instructions(self) -> list[str]:
        return [
            '- Format as bullet points using "•" symbols',
            "- One main idea per bullet point",
        ]


@dataclass(frozen=True)
class Concise(FormatConstraint):
    """User asked for a brief or short answer."""

    def instructions(self) -> list[str]:
        return ["- Be concise and direct. Avoid unnecessary elaboration."]
