"""Chunked embedding similarity between resume and job description.

Pipeline:
1. Split each text into sentence-aligned chunks under the provider limit
2. Embed every chunk concurrently
3. Cosine similarity across all chunk pairs
4. Blend the best pair with the top-3 mean and stretch with a sigmoid

Any provider failure yields the neutral similarity 0.5.
"""

import asyncio
import logging
import math
import re

import numpy as np
from sklearn.metrics.pairwise import cosine_similarity as sklearn_cosine

from config import settings
from services.providers import (
    EmbeddingProvider,
    ProviderErrorKind,
    ProviderResult,
    ProviderUnavailableError,
)

logger = logging.getLogger(__name__)

NEUTRAL_SIMILARITY = 0.5
MAX_WEIGHT = 0.7
TOP_K_WEIGHT = 0.3
TOP_K = 3
SIGMOID_STEEPNESS = 12.0

# A sentence with its terminal punctuation, or a trailing fragment without any
_SENTENCE_RE = re.compile(r"[^.!?]+(?:[.!?]+|$)")

# Lazy-loaded JobBERT-v2 model (loaded on first use, ~425MB)
# TechWolf/JobBERT-v2: trained on millions of job postings, 1024-dim embeddings
_sbert_model = None


def _get_sbert_model():
    """Load the sentence-transformers model lazily on first call."""
    global _sbert_model
    if _sbert_model is None:
        try:
            from sentence_transformers import SentenceTransformer

            _sbert_model = SentenceTransformer(settings.sbert_model)
            logger.info("Embedding model %s loaded successfully", settings.sbert_model)
        except Exception as e:
            logger.warning("Failed to load embedding model %s: %s", settings.sbert_model, e)
    return _sbert_model


class SentenceTransformerEmbedder:
    """EmbeddingProvider running a local sentence-transformers model."""

    def __init__(self, max_input_chars: int | None = None):
        self.max_input_chars = max_input_chars or settings.embedding_max_input_chars

    async def embed(self, text: str) -> list[float]:
        model = _get_sbert_model()
        if model is None:
            raise ProviderUnavailableError("Embedding model unavailable")
        vector = await asyncio.to_thread(
            model.encode, text[: self.max_input_chars], convert_to_numpy=True
        )
        return vector.tolist()


def get_default_embedder() -> EmbeddingProvider:
    if settings.embedding_backend == "gemini":
        from services.gemini_client import GeminiEmbedder

        return GeminiEmbedder()
    return SentenceTransformerEmbedder()


def split_text_into_chunks(text: str, max_chars: int | None = None) -> list[str]:
    """Group whole sentences into chunks of at most max_chars.

    A single sentence longer than max_chars becomes its own chunk.
    """
    max_chars = max_chars or settings.embedding_chunk_chars
    chunks: list[str] = []
    current = ""
    for sentence in _SENTENCE_RE.findall(text or ""):
        sentence = sentence.strip()
        if not sentence:
            continue
        candidate = f"{current} {sentence}" if current else sentence
        if len(candidate) <= max_chars:
            current = candidate
            continue
        if current:
            chunks.append(current)
        current = sentence
    if current:
        chunks.append(current)
    return chunks


def aggregate_similarity(similarities: np.ndarray) -> float:
    """0.7 * best pair + 0.3 * mean of the top 3 pairs."""
    flat = np.sort(np.asarray(similarities, dtype=float).ravel())[::-1]
    if flat.size == 0:
        return 0.0
    return float(MAX_WEIGHT * flat[0] + TOP_K_WEIGHT * flat[:TOP_K].mean())


def transform_similarity_score(raw: float, steepness: float = SIGMOID_STEEPNESS) -> float:
    """Map cosine similarity in [-1, 1] onto [0, 1] through a centered sigmoid.

    The sigmoid is rescaled so that -1 maps to 0 and 1 maps to 1.
    """
    normalized = (raw + 1) / 2
    transformed = 1 / (1 + math.exp(-steepness * (normalized - 0.5)))
    low = 1 / (1 + math.exp(steepness * 0.5))
    high = 1 / (1 + math.exp(-steepness * 0.5))
    return min(1.0, max(0.0, (transformed - low) / (high - low)))


async def _embed_all(embedder: EmbeddingProvider, chunks: list[str]) -> list[list[float]]:
    return list(await asyncio.gather(*(embedder.embed(chunk) for chunk in chunks)))


async def compute_embedding_similarity(
    text_a: str,
    text_b: str,
    embedder: EmbeddingProvider | None = None,
) -> ProviderResult[float]:
    """Embedding similarity of two texts with an explicit failure channel."""
    chunks_a = split_text_into_chunks(text_a)
    chunks_b = split_text_into_chunks(text_b)
    if not chunks_a or not chunks_b:
        return ProviderResult.failure(ProviderErrorKind.INVALID_INPUT, NEUTRAL_SIMILARITY, "Empty text")

    embedder = embedder or get_default_embedder()
    try:
        vectors_a, vectors_b = await asyncio.gather(
            _embed_all(embedder, chunks_a),
            _embed_all(embedder, chunks_b),
        )
    except ProviderUnavailableError as e:
        logger.warning("Embedding provider unavailable: %s", e)
        return ProviderResult.failure(ProviderErrorKind.MISSING_CREDENTIALS, NEUTRAL_SIMILARITY, str(e))
    except Exception as e:
        logger.warning("Embedding request failed: %s", e)
        return ProviderResult.failure(ProviderErrorKind.PROVIDER_FAILURE, NEUTRAL_SIMILARITY, str(e))

    if any(len(v) == 0 for v in (*vectors_a, *vectors_b)):
        return ProviderResult.failure(ProviderErrorKind.EMPTY_RESPONSE, NEUTRAL_SIMILARITY, "Empty embedding")

    try:
        similarities = sklearn_cosine(np.array(vectors_a, dtype=float), np.array(vectors_b, dtype=float))
    except ValueError as e:
        logger.warning("Embedding vectors could not be compared: %s", e)
        return ProviderResult.failure(ProviderErrorKind.EMPTY_RESPONSE, NEUTRAL_SIMILARITY, str(e))

    raw = aggregate_similarity(similarities)
    return ProviderResult.success(transform_similarity_score(raw))


async def calculate_embedding_similarity(
    text_a: str,
    text_b: str,
    embedder: EmbeddingProvider | None = None,
) -> float:
    """Similarity in [0, 1]; 0.5 whenever the provider cannot answer."""
    result = await compute_embedding_similarity(text_a, text_b, embedder)
    return result.value
