"""Collaborator boundary: provider protocols and an explicit result channel.

Embedding and text-generation calls never raise into scoring code. Their
outcome is a ProviderResult carrying either the value or an error kind
together with the documented fallback value.
"""

from enum import Enum
from typing import Generic, Protocol, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ProviderErrorKind(str, Enum):
    MISSING_CREDENTIALS = "missing_credentials"
    PROVIDER_FAILURE = "provider_failure"
    EMPTY_RESPONSE = "empty_response"
    INVALID_INPUT = "invalid_input"


class ProviderUnavailableError(Exception):
    """Raised by a provider that is not configured (no key, model failed to load)."""


class ProviderResult(BaseModel, Generic[T]):
    value: T
    error: ProviderErrorKind | None = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "ProviderResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, kind: ProviderErrorKind, fallback: T, detail: str = "") -> "ProviderResult[T]":
        return cls(value=fallback, error=kind, detail=detail)


class EmbeddingProvider(Protocol):
    async def embed(self, text: str) -> list[float]:
        ...


class TextGenerator(Protocol):
    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        ...
