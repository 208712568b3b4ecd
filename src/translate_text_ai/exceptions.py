"""
Exception classes for translate-text-ai.

Kept in their own module so the session, translator and export layers can
share them without circular imports.
"""

from __future__ import annotations

from typing import Any


class TranslateTextError(Exception):
    """Base error with an optional machine-readable code and details."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}


class ConfigurationError(TranslateTextError):
    """Missing credential or invalid configuration."""


class ValidationError(TranslateTextError):
    """Invalid user input (bad language, invalid target)."""


class BusyError(TranslateTextError):
    """A translation is already in flight for this session."""

    def __init__(self, message: str = "A translation is already in progress") -> None:
        super().__init__(message, code="busy")


class TranslationFailed(TranslateTextError):
    """The remote translation call failed."""

    USER_MESSAGE = "Translation failed. Please check your connection and try again."

    def __init__(self, message: str = USER_MESSAGE, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, code="translation_failed", details=details)


class ExportFailed(TranslateTextError):
    """Rendering or PDF assembly failed. Retrying is safe."""

    def __init__(self, message: str = "Failed to generate PDF", details: dict[str, Any] | None = None) -> None:
        super().__init__(message, code="export_failed", details=details)


class ClipboardError(TranslateTextError):
    """The system clipboard is unavailable or the access was denied."""
