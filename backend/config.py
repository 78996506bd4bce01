import os
from pydantic_settings import BaseSettings


def _parse_cors_origins() -> list[str] | None:
    """Parse CORS_ORIGINS env var as comma-separated string or JSON list."""
    raw = os.environ.get("CORS_ORIGINS")
    if not raw:
        return None
    if raw.startswith("["):
        import json
        return json.loads(raw)
    return [o.strip() for o in raw.split(",") if o.strip()]


class Settings(BaseSettings):
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]
    debug: bool = False
    rate_limit: str = "10/minute"

    # Embedding similarity
    embedding_backend: str = "sbert"  # "sbert" | "gemini"
    sbert_model: str = "TechWolf/JobBERT-v2"
    gemini_embedding_model: str = "text-embedding-004"
    embedding_chunk_chars: int = 7000
    embedding_max_input_chars: int = 8000

    # Final score blend (applied to 0-10 scaled signals)
    similarity_weight: float = 0.35
    component_weight: float = 0.45

    # Explanation generation
    explanation_temperature: float = 0.7
    explanation_max_tokens: int = 400

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "protected_namespaces": ("settings_",)}


_cors_override = _parse_cors_origins()
settings = Settings(**{"cors_origins": _cors_override} if _cors_override else {})
