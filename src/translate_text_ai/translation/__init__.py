"""
Translation for translate-text-ai.

Provides:
- The LLM-backed translation function
- The session state machine and its controller
"""

from translate_text_ai.translation.session import (
    SessionController,
    SessionStatus,
    TranslationSession,
)
from translate_text_ai.translation.translator import (
    TextTranslator,
    TranslateFunction,
    TranslationResult,
)

__all__ = [
    "SessionController",
    "SessionStatus",
    "TranslationSession",
    "TextTranslator",
    "TranslateFunction",
    "TranslationResult",
]
