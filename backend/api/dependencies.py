"""Shared dependencies for API routes."""

from services.providers import EmbeddingProvider, TextGenerator
from services.similarity import get_default_embedder


def get_embedder() -> EmbeddingProvider:
    return get_default_embedder()


def get_text_generator() -> TextGenerator:
    from services.gemini_client import GeminiTextGenerator

    return GeminiTextGenerator()
