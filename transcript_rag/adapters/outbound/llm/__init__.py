"""LLM adapters."""

from .ollama_adapter import OllamaClient

__all__ = ["OllamaClient"]
