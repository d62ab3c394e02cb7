"""LLM Port Interface."""

from abc import ABC, abstractmethod


class LLMPort(ABC):
    """Abstract interface for the text-completion model.

    Implementations raise ``ServiceUnavailableError`` or
    ``ServiceTimeoutError`` when the backing model server fails.
    """

    @abstractmethod
    def complete(self, prompt: str) -> str:
        """Generate a completion for a single user prompt."""
        ...
