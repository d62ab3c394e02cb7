"""
Pytest configuration and shared fixtures.
"""

import json

import pytest

from transcript_rag.adapters.outbound.storage import InMemoryABPairRepository, InMemoryDocumentStore
from transcript_rag.core.domain import Document, ExamplePhrases, StyleGuide, ToneSettings
from transcript_rag.core.ports import EmbeddingPort, LLMPort
from transcript_rag.core.services import EmbeddingStore


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (API wiring, fakes only)")
    config.addinivalue_line("markers", "slow: Slow tests (large documents)")


class FakeEmbedder(EmbeddingPort):
    """Deterministic embedder: every distinct text gets its own one-hot vector.

    Texts registered with ``set_vector`` return that vector instead.
    """

    def __init__(self, dimension: int = 64):
        self.dimension = dimension
        self.calls: list[str] = []
        self._vectors: dict[str, list[float]] = {}
        self.fail_on: set[str] = set()
        self.error: Exception | None = None

    def set_vector(self, text: str, vector: list[float]) -> None:
        self._vectors[text] = vector

    def embed(self, text: str) -> list[float]:
        self.calls.append(text)
        if text in self.fail_on and self.error is not None:
            raise self.error
        if text not in self._vectors:
            vector = [0.0] * self.dimension
            vector[len(self._vectors) % self.dimension] = 1.0
            self._vectors[text] = vector
        return list(self._vectors[text])


class FakeLLM(LLMPort):
    """Returns queued responses (or a fixed default) and records every prompt."""

    def __init__(self, default: str = "A grounded answer."):
        self.default = default
        self.prompts: list[str] = []
        self.responses: list[str | Exception] = []

    def queue(self, *responses: str | Exception) -> None:
        self.responses.extend(responses)

    def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.responses:
            response = self.responses.pop(0)
            if isinstance(response, Exception):
                raise response
            return response
        return self.default


class RecordingLogger:
    """LoggerPort double that keeps (level, message) pairs."""

    def __init__(self):
        self.records: list[tuple[str, str]] = []

    def debug(self, msg, *args, **kwargs):
        self.records.append(("debug", msg))

    def info(self, msg, *args, **kwargs):
        self.records.append(("info", msg))

    def warning(self, msg, *args, **kwargs):
        self.records.append(("warning", msg))

    def error(self, msg, *args, **kwargs):
        self.records.append(("error", msg))

    def messages(self, level: str) -> list[str]:
        return [m for lvl, m in self.records if lvl == level]


def make_sentence_text(words: int, sentence_length: int = 10) -> str:
    """Text of ``words`` unique tokens grouped into sentences of ``sentence_length``."""
    tokens = [f"term{i:04d}" for i in range(words)]
    sentences = [
        " ".join(tokens[i : i + sentence_length]) + "."
        for i in range(0, words, sentence_length)
    ]
    return " ".join(sentences)


@pytest.fixture
def embedder():
    return FakeEmbedder()


@pytest.fixture
def llm():
    return FakeLLM()


@pytest.fixture
def recording_logger():
    return RecordingLogger()


@pytest.fixture
def embedding_store(embedder):
    return EmbeddingStore(embedder)


@pytest.fixture
def document_store():
    return InMemoryDocumentStore()


@pytest.fixture
def ab_repository():
    return InMemoryABPairRepository()


@pytest.fixture
def style_guide():
    """A populated base style guide."""
    return StyleGuide(
        instructions="Write warmly and plainly.",
        tone_settings=ToneSettings(formality=40, enthusiasm=60, technicality=30),
        keywords=("notice", "gently"),
        example_phrases=ExamplePhrases(
            preferred_openings=("Here's the thing",),
            preferred_transitions=("That said",),
            preferred_conclusions=("So, in the end",),
            avoid_phrases=("Pursuant to",),
        ),
    )


@pytest.fixture
def sample_document():
    text = (
        "Welcome to today's class on breathing. We start with box breathing. "
        "Inhale for four counts, hold for four, exhale for four, and hold again.\n\n"
        "Notice how the body settles. Practice this every morning for five minutes."
    )
    return Document.create("Breathing Basics", text, filename="breathing.txt")


@pytest.fixture
def sentence_text():
    """Factory for synthetic sentence text."""
    return make_sentence_text


@pytest.fixture
def facts_json():
    """A well-formed fact extraction response."""
    return json.dumps(
        {
            "class_title": "Breathing Basics",
            "audience": "Beginners",
            "key_takeaways": ["Slow breathing calms the body"],
            "topics": ["Breath awareness"],
            "techniques": ["Box breathing"],
            "notable_quotes": ["Breathe like the tide"],
        }
    )
