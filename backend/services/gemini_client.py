"""Google Gemini API wrapper: explanation text and embeddings."""

import logging

from google import genai
from google.genai import types

from config import settings
from services.providers import ProviderUnavailableError

logger = logging.getLogger(__name__)

_client: genai.Client | None = None


def get_client() -> genai.Client | None:
    global _client
    if not settings.gemini_api_key:
        logger.warning("No GEMINI_API_KEY set - Gemini features disabled")
        return None
    if _client is None:
        _client = genai.Client(api_key=settings.gemini_api_key)
    return _client


def _require_client() -> genai.Client:
    client = get_client()
    if client is None:
        raise ProviderUnavailableError("GEMINI_API_KEY is not configured")
    return client


async def generate_text(
    system_prompt: str,
    user_prompt: str,
    temperature: float | None = None,
    max_output_tokens: int | None = None,
) -> str:
    """Send a system + user prompt to Gemini and return the stripped text.

    Raises ProviderUnavailableError without credentials; API errors propagate.
    """
    client = _require_client()
    response = await client.aio.models.generate_content(
        model=settings.gemini_model,
        contents=user_prompt,
        config=types.GenerateContentConfig(
            system_instruction=system_prompt,
            temperature=settings.explanation_temperature if temperature is None else temperature,
            max_output_tokens=settings.explanation_max_tokens if max_output_tokens is None else max_output_tokens,
        ),
    )
    return (response.text or "").strip()


async def embed_text(text: str) -> list[float]:
    """Embed one text with the configured Gemini embedding model."""
    client = _require_client()
    response = await client.aio.models.embed_content(
        model=settings.gemini_embedding_model,
        contents=text[: settings.embedding_max_input_chars],
    )
    if not response.embeddings:
        return []
    return list(response.embeddings[0].values or [])


class GeminiTextGenerator:
    """TextGenerator backed by Gemini."""

    def __init__(self, temperature: float | None = None, max_output_tokens: int | None = None):
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        return await generate_text(system_prompt, user_prompt, self.temperature, self.max_output_tokens)


class GeminiEmbedder:
    """EmbeddingProvider backed by Gemini embeddings."""

    async def embed(self, text: str) -> list[float]:
        return await embed_text(text)
