"""
LLM provider factory.

Creates the appropriate LLM provider based on configuration.
"""

from __future__ import annotations

from translate_text_ai.config import API_KEY_ENV_VARS, LLMProviderType, TranslationConfig
from translate_text_ai.exceptions import ConfigurationError
from translate_text_ai.llm.base import LLMProvider


def create_llm_provider(
    provider_type: LLMProviderType | str,
    *,
    api_key: str | None = None,
    model: str = "default",
    **kwargs,
) -> LLMProvider:
    """
    Create an LLM provider instance.

    Args:
        provider_type: Type of provider to create (openrouter or gemini).
        api_key: API key for the provider.
        model: Model name or alias.
        **kwargs: Additional provider-specific options (timeout, max_retries).

    Returns:
        LLMProvider instance.

    Raises:
        ConfigurationError: If provider_type is invalid or the API key is missing.

    Examples:
        provider = create_llm_provider(
            "openrouter",
            api_key="sk-or-...",
            model="google/gemini-2.5-flash"
        )
    """
    if isinstance(provider_type, str):
        normalized = provider_type.lower().replace("_", "-")
        try:
            provider_type = LLMProviderType(normalized)
        except ValueError:
            valid = [p.value for p in LLMProviderType]
            raise ConfigurationError(
                f"Invalid provider type: {normalized}. Valid options: {valid}",
                code="invalid_provider",
            ) from None

    if not api_key:
        raise ConfigurationError(
            f"{provider_type.value} provider requires an API key "
            f"(set {API_KEY_ENV_VARS[provider_type]})",
            code="missing_api_key",
            details={"provider": provider_type.value},
        )

    if provider_type == LLMProviderType.OPENROUTER:
        from translate_text_ai.llm.openai_compat import OpenRouterProvider

        return OpenRouterProvider(api_key=api_key, model=model, **kwargs)

    from translate_text_ai.llm.openai_compat import GeminiProvider

    return GeminiProvider(api_key=api_key, model=model, **kwargs)


def create_provider_from_config(config: TranslationConfig) -> LLMProvider:
    """
    Build the provider described by the translation settings.

    Fails fast with ConfigurationError when the credential is missing, so the
    problem surfaces at startup rather than on the first request.
    """
    return create_llm_provider(
        config.provider,
        api_key=config.require_api_key(),
        model=config.model,
        timeout=config.timeout_seconds,
        max_retries=config.max_retries,
    )
