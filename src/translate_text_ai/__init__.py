"""
translate-text-ai: AI-powered text translation with PDF export.

This package provides tools for:
- Translating free-form text between languages with an LLM backend
- A session controller that keeps one request in flight at a time
- Exporting translations as paginated, script-independent PDFs
"""

__version__ = "0.1.0"

from translate_text_ai.config import Settings, load_config
from translate_text_ai.exceptions import (
    BusyError,
    ConfigurationError,
    ExportFailed,
    TranslateTextError,
    TranslationFailed,
    ValidationError,
)
from translate_text_ai.export import PDFExporter
from translate_text_ai.languages import Language
from translate_text_ai.translation import (
    SessionController,
    SessionStatus,
    TextTranslator,
    TranslationSession,
)

__all__ = [
    # Config
    "Settings",
    "load_config",
    # Languages
    "Language",
    # Errors
    "TranslateTextError",
    "ConfigurationError",
    "ValidationError",
    "BusyError",
    "TranslationFailed",
    "ExportFailed",
    # Translation
    "SessionController",
    "SessionStatus",
    "TextTranslator",
    "TranslationSession",
    # Export
    "PDFExporter",
]
