"""
OpenAI-compatible chat completion providers.

OpenRouter and Google's Gemini endpoint both speak the OpenAI chat
completions protocol, so one client implementation serves both.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any

from openai import AsyncOpenAI, OpenAIError

from translate_text_ai.llm.base import ChatMessage, LLMProvider, LLMResponse

logger = logging.getLogger(__name__)


class OpenAICompatibleProvider(LLMProvider):
    """Chat completions over any OpenAI-compatible endpoint, with retries."""

    PROVIDER_NAME = "openai-compatible"
    BASE_URL = "https://api.openai.com/v1"
    MODELS: dict[str, str] = {}

    def __init__(
        self,
        api_key: str,
        model: str = "default",
        base_url: str | None = None,
        timeout: float = 120.0,
        max_retries: int = 3,
    ):
        """
        Initialize the provider.

        Args:
            api_key: API key for the endpoint.
            model: Model key (from MODELS) or full model name.
            base_url: API base URL (defaults to BASE_URL).
            timeout: Request timeout in seconds.
            max_retries: Maximum attempts per request.
        """
        self._model_name = self.MODELS.get(model, model)
        self._max_retries = max_retries

        # Retries are handled here with backoff, not by the SDK
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url or self.BASE_URL,
            timeout=timeout,
            max_retries=0,
        )

    @property
    def name(self) -> str:
        return self.PROVIDER_NAME

    @property
    def model(self) -> str:
        return self._model_name

    async def complete(
        self,
        messages: list[ChatMessage],
        *,
        temperature: float = 0.3,
        max_tokens: int = 4096,
        **kwargs: Any,
    ) -> LLMResponse:
        """Generate a completion, retrying with exponential backoff."""
        start_time = time.perf_counter()
        last_error: Exception | None = None

        for attempt in range(self._max_retries):
            try:
                response = await self._client.chat.completions.create(
                    model=self._model_name,
                    messages=messages,  # type: ignore[arg-type]
                    temperature=temperature,
                    max_tokens=max_tokens,
                    **kwargs,
                )

                latency_ms = (time.perf_counter() - start_time) * 1000
                content = response.choices[0].message.content or ""
                usage = response.usage

                return LLMResponse(
                    content=content.strip(),
                    input_tokens=usage.prompt_tokens if usage else 0,
                    output_tokens=usage.completion_tokens if usage else 0,
                    model=self._model_name,
                    latency_ms=latency_ms,
                    finish_reason=response.choices[0].finish_reason,
                    attempts=attempt + 1,
                )

            except OpenAIError as e:
                last_error = e
                logger.debug(
                    "%s request failed (attempt %d/%d): %s",
                    self.name,
                    attempt + 1,
                    self._max_retries,
                    e,
                )
                if attempt < self._max_retries - 1:
                    await asyncio.sleep(2**attempt)

        raise last_error or RuntimeError(f"{self.name} request failed after retries")

    async def aclose(self) -> None:
        await self._client.close()


class OpenRouterProvider(OpenAICompatibleProvider):
    """
    OpenRouter LLM provider.

    Uses OpenRouter's unified API to access Gemini, Claude, GPT, DeepSeek, etc.
    """

    PROVIDER_NAME = "openrouter"
    BASE_URL = "https://openrouter.ai/api/v1"
    MODELS = {
        "default": "google/gemini-2.5-flash",
        "fast": "google/gemini-2.5-flash-lite",
        "quality": "google/gemini-2.5-pro",
        "claude": "anthropic/claude-sonnet-4.5",
        "deepseek": "deepseek/deepseek-chat",
    }


class GeminiProvider(OpenAICompatibleProvider):
    """Google Gemini through its OpenAI-compatible endpoint."""

    PROVIDER_NAME = "gemini"
    BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"
    MODELS = {
        "default": "gemini-2.5-flash",
        "fast": "gemini-2.5-flash-lite",
        "quality": "gemini-2.5-pro",
    }
