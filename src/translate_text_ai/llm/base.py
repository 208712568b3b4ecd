"""
Provider interface for the translation backend.

A provider wraps one chat-completion client. It is built once from the
settings and shared by every translation request of the run.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, TypedDict


class ChatMessage(TypedDict):
    role: str
    content: str


def build_messages(system_prompt: str, user_prompt: str) -> list[ChatMessage]:
    return [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": user_prompt},
    ]


@dataclass
class LLMResponse:
    """One completion returned by a provider."""

    content: str
    model: str = ""
    input_tokens: int = 0
    output_tokens: int = 0
    latency_ms: float = 0.0
    finish_reason: str | None = None
    # Attempts used, including the successful one
    attempts: int = 1

    @property
    def truncated(self) -> bool:
        """True when the model stopped at the token limit."""
        return self.finish_reason == "length"


class LLMProvider(ABC):
    """Chat-completion backend used by the translator."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name for logging and identification."""
        ...

    @property
    @abstractmethod
    def model(self) -> str:
        """Resolved model name."""
        ...

    @abstractmethod
    async def complete(
        self,
        messages: list[ChatMessage],
        *,
        temperature: float = 0.3,
        max_tokens: int = 4096,
        **kwargs: Any,
    ) -> LLMResponse:
        """
        Run one chat completion.

        Raises whatever the underlying client raises once retries are
        exhausted; callers translate that into their own error type.
        """
        ...

    async def chat(
        self,
        system_prompt: str,
        user_prompt: str,
        **kwargs: Any,
    ) -> LLMResponse:
        """Single-turn request: one system and one user message."""
        return await self.complete(build_messages(system_prompt, user_prompt), **kwargs)

    async def aclose(self) -> None:
        """Release the client's connections. No-op by default."""
