"""
Language identifiers and display labels.

Identifiers are stable values used for equality checks and configuration;
labels are only for display and prompts.
"""

from __future__ import annotations

from enum import Enum

from translate_text_ai.exceptions import ValidationError


class Language(str, Enum):
    """Supported languages. AUTO_DETECT is a source-only sentinel."""

    AUTO_DETECT = "auto"
    ENGLISH = "en"
    CHINESE_SIMPLIFIED = "zh-Hans"
    CHINESE_TRADITIONAL = "zh-Hant"
    JAPANESE = "ja"
    KOREAN = "ko"
    FRENCH = "fr"
    GERMAN = "de"
    SPANISH = "es"
    ITALIAN = "it"
    PORTUGUESE = "pt"
    RUSSIAN = "ru"
    ARABIC = "ar"

    @property
    def label(self) -> str:
        """Human readable name."""
        return LANGUAGE_LABELS[self]

    @property
    def is_auto(self) -> bool:
        return self is Language.AUTO_DETECT


LANGUAGE_LABELS: dict[Language, str] = {
    Language.AUTO_DETECT: "Auto Detect",
    Language.ENGLISH: "English",
    Language.CHINESE_SIMPLIFIED: "Chinese (Simplified)",
    Language.CHINESE_TRADITIONAL: "Chinese (Traditional)",
    Language.JAPANESE: "Japanese",
    Language.KOREAN: "Korean",
    Language.FRENCH: "French",
    Language.GERMAN: "German",
    Language.SPANISH: "Spanish",
    Language.ITALIAN: "Italian",
    Language.PORTUGUESE: "Portuguese",
    Language.RUSSIAN: "Russian",
    Language.ARABIC: "Arabic",
}

# Target used when swapping away from AUTO_DETECT
DEFAULT_TARGET_LANGUAGE = Language.ENGLISH


def source_languages() -> list[Language]:
    """Languages selectable as a source (includes AUTO_DETECT)."""
    return list(Language)


def target_languages() -> list[Language]:
    """Languages selectable as a target."""
    return [lang for lang in Language if not lang.is_auto]


def parse_language(value: Language | str) -> Language:
    """
    Resolve a language from its identifier, enum name, or display label.

    Matching is case-insensitive, so "en", "ENGLISH" and "English" all
    resolve to Language.ENGLISH.

    Raises:
        ValidationError: If nothing matches.
    """
    if isinstance(value, Language):
        return value

    needle = value.strip().casefold()
    for lang in Language:
        if needle in (lang.value.casefold(), lang.name.casefold(), lang.label.casefold()):
            return lang

    valid = ", ".join(lang.value for lang in Language)
    raise ValidationError(
        f"Unknown language: {value!r}. Valid options: {valid}",
        code="unknown_language",
        details={"value": value},
    )


def ensure_target_language(language: Language) -> Language:
    """Reject AUTO_DETECT as a translation target."""
    if language.is_auto:
        raise ValidationError(
            "Auto Detect cannot be used as a target language",
            code="invalid_target",
            details={"language": language.value},
        )
    return language
