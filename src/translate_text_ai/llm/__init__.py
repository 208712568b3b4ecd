"""
LLM provider abstraction layer.

Supports OpenAI-compatible backends:
- OpenRouter (default): Pay-per-token via OpenRouter API
- Gemini: Google's OpenAI-compatible endpoint
"""

from translate_text_ai.llm.base import LLMProvider, LLMResponse
from translate_text_ai.llm.factory import create_llm_provider, create_provider_from_config

__all__ = [
    "LLMProvider",
    "LLMResponse",
    "create_llm_provider",
    "create_provider_from_config",
]
