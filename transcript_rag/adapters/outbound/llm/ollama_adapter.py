"""Ollama HTTP client implementing the embedding and LLM ports."""

import logging
from typing import Any

import requests

from ....core.domain.exceptions import (
    InvalidInputError,
    ModelResponseError,
    ServiceTimeoutError,
    ServiceUnavailableError,
)
from ....core.ports import EmbeddingPort, LLMPort

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://127.0.0.1:11434"
DEFAULT_CHAT_MODEL = "llama3.1:8b-instruct-q4_K_M"
DEFAULT_EMBEDDING_MODEL = "nomic-embed-text"
REQUEST_TIMEOUT = 120.0


class OllamaClient(EmbeddingPort, LLMPort):
    """Talks to a local Ollama server.

    Each call is a single request; failures are mapped onto the model
    service exceptions and never retried here.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        chat_model: str = DEFAULT_CHAT_MODEL,
        embedding_model: str = DEFAULT_EMBEDDING_MODEL,
        timeout: float = REQUEST_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.chat_model = chat_model
        self.embedding_model = embedding_model
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": "transcript-rag/1.0"})

    def __enter__(self) -> "OllamaClient":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def close(self) -> None:
        """Close the HTTP session."""
        if self.session:
            self.session.close()

    def _request(self, method: str, path: str, payload: dict[str, Any] | None = None) -> dict:
        url = f"{self.base_url}{path}"
        context = {"url": url}
        try:
            response = self.session.request(method, url, json=payload, timeout=self.timeout)
            response.raise_for_status()
        except requests.Timeout as e:
            raise ServiceTimeoutError(
                f"Ollama did not answer within {self.timeout}s", cause=e, context=context
            ) from e
        except requests.ConnectionError as e:
            raise ServiceUnavailableError(
                f"Cannot reach Ollama at {self.base_url}", cause=e, context=context
            ) from e
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            raise ServiceUnavailableError(
                f"Ollama returned HTTP {status} for {path}",
                cause=e,
                context={**context, "status_code": status},
            ) from e
        except requests.RequestException as e:
            raise ServiceUnavailableError(
                f"Ollama request failed: {e}", cause=e, context=context
            ) from e

        try:
            data = response.json()
        except ValueError as e:
            raise ModelResponseError(
                f"Ollama returned a non-JSON body for {path}", cause=e, context=context
            ) from e
        if not isinstance(data, dict):
            raise ModelResponseError(f"Unexpected Ollama payload for {path}", context=context)
        return data

    def embed(self, text: str) -> list[float]:
        if not text or not text.strip():
            raise InvalidInputError("Cannot embed empty text")

        data = self._request(
            "POST", "/api/embeddings", {"model": self.embedding_model, "prompt": text}
        )
        embedding = data.get("embedding")
        if not isinstance(embedding, list) or not embedding:
            raise ModelResponseError(
                "Ollama response has no embedding", context={"model": self.embedding_model}
            )
        try:
            return [float(v) for v in embedding]
        except (TypeError, ValueError) as e:
            raise ModelResponseError(
                "Ollama embedding contains non-numeric values",
                cause=e,
                context={"model": self.embedding_model},
            ) from e

    def complete(self, prompt: str) -> str:
        if not prompt or not prompt.strip():
            raise InvalidInputError("Cannot complete an empty prompt")

        logger.debug(f"Sending {len(prompt)} char prompt to {self.chat_model}")
        data = self._request(
            "POST",
            "/api/chat",
            {
                "model": self.chat_model,
                "messages": [{"role": "user", "content": prompt}],
                "stream": False,
            },
        )
        message = data.get("message")
        content = message.get("content") if isinstance(message, dict) else None
        if not isinstance(content, str):
            raise ModelResponseError(
                "Ollama response has no message content", context={"model": self.chat_model}
            )
        return content

    def list_models(self) -> list[str]:
        data = self._request("GET", "/api/tags")
        return [m["name"] for m in data.get("models", []) if isinstance(m, dict) and "name" in m]

    def is_available(self) -> bool:
        """Whether the server answers ``/api/tags``."""
        try:
            self.list_models()
        except (ServiceUnavailableError, ServiceTimeoutError, ModelResponseError) as e:
            logger.debug(f"Ollama not available: {e}")
            return False
        return True
