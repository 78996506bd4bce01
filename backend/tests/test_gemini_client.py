"""Tests for the Gemini-backed providers without network access."""

import pytest

from config import settings
from services import gemini_client
from services.gemini_client import GeminiEmbedder, GeminiTextGenerator
from services.job_fit import EXPLANATION_FALLBACK, generate_explanation
from services.providers import ProviderErrorKind, ProviderUnavailableError
from services.similarity import compute_embedding_similarity


@pytest.fixture
def no_api_key(monkeypatch):
    monkeypatch.setattr(settings, "gemini_api_key", "")
    monkeypatch.setattr(gemini_client, "_client", None)


def test_get_client_without_key(no_api_key):
    assert gemini_client.get_client() is None


@pytest.mark.asyncio
async def test_text_generator_requires_key(no_api_key):
    with pytest.raises(ProviderUnavailableError):
        await GeminiTextGenerator().complete("system", "user")


@pytest.mark.asyncio
async def test_missing_key_falls_back_to_apology(no_api_key):
    result = await generate_explanation(GeminiTextGenerator(), "system", "user")
    assert result.error == ProviderErrorKind.MISSING_CREDENTIALS
    assert result.value == EXPLANATION_FALLBACK


@pytest.mark.asyncio
async def test_missing_key_falls_back_to_neutral_similarity(no_api_key):
    result = await compute_embedding_similarity("Python developer", "Python engineer", GeminiEmbedder())
    assert result.error == ProviderErrorKind.MISSING_CREDENTIALS
    assert result.value == 0.5
