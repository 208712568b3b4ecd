"""
Text translator using LLM providers.

TextTranslator is the remote translation function consumed by the session
controller: ``await translator(text, source, target) -> str``.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from translate_text_ai.exceptions import TranslationFailed
from translate_text_ai.languages import Language, ensure_target_language
from translate_text_ai.llm import LLMProvider
from translate_text_ai.translation.prompts import build_system_prompt, build_user_prompt

logger = logging.getLogger(__name__)

# Signature of the translation function injected into the controller
TranslateFunction = Callable[[str, Language, Language], Awaitable[str]]


@dataclass
class TranslationResult:
    """Result of one translation call."""

    text: str
    model_used: str
    input_tokens: int = 0
    output_tokens: int = 0
    latency_ms: float = 0.0


class TextTranslator:
    """Translates free-form text through an LLM provider."""

    def __init__(
        self,
        provider: LLMProvider,
        *,
        temperature: float = 0.3,
        max_tokens: int = 4096,
    ):
        """
        Initialize the translator.

        Args:
            provider: LLM provider, constructed once at startup.
            temperature: Sampling temperature (low for deterministic output).
            max_tokens: Maximum output tokens.
        """
        self._provider = provider
        self._temperature = temperature
        self._max_tokens = max_tokens

    @property
    def model(self) -> str:
        """Get current model name."""
        return self._provider.model

    @property
    def provider_name(self) -> str:
        """Get provider name."""
        return self._provider.name

    async def translate_with_details(
        self,
        text: str,
        source: Language,
        target: Language,
    ) -> TranslationResult:
        """
        Translate text and return usage details.

        Blank text returns an empty result without contacting the provider.

        Raises:
            TranslationFailed: On any provider or transport error. The cause is
                chained and logged but not included in the message.
        """
        ensure_target_language(target)
        if not text.strip():
            return TranslationResult(text="", model_used=self.model)

        try:
            response = await self._provider.chat(
                build_system_prompt(target),
                build_user_prompt(text, source, target),
                temperature=self._temperature,
                max_tokens=self._max_tokens,
            )
        except Exception as e:
            logger.warning(
                "Translation request to %s (%s) failed: %s: %s",
                self.provider_name,
                self.model,
                type(e).__name__,
                e,
            )
            raise TranslationFailed(
                details={"provider": self.provider_name, "error_type": type(e).__name__}
            ) from e

        if response.truncated:
            logger.warning(
                "Translation hit the %d token limit; output may be incomplete",
                self._max_tokens,
            )
        logger.debug(
            "Translated %d chars %s -> %s in %.0fms",
            len(text),
            source.value,
            target.value,
            response.latency_ms,
        )
        return TranslationResult(
            text=response.content,
            model_used=response.model or self.model,
            input_tokens=response.input_tokens,
            output_tokens=response.output_tokens,
            latency_ms=response.latency_ms,
        )

    async def translate(self, text: str, source: Language, target: Language) -> str:
        """Translate text, returning only the translated string."""
        result = await self.translate_with_details(text, source, target)
        return result.text

    async def __call__(self, text: str, source: Language, target: Language) -> str:
        return await self.translate(text, source, target)

    async def aclose(self) -> None:
        """Close the provider client."""
        await self._provider.aclose()
