"""
Prompt templates for text translation.
"""

from __future__ import annotations

from translate_text_ai.languages import Language

SYSTEM_PROMPT_TEMPLATE = """You are a professional, world-class translator.
Your task is to accurately translate the provided text into {target}.
Maintain the original tone, nuance, formatting, and style of the source text.
If the input is technical, use appropriate terminology.
Do not include any explanations, just the translated text."""


def build_system_prompt(target: Language) -> str:
    """System instruction for translating into the target language."""
    return SYSTEM_PROMPT_TEMPLATE.format(target=target.label)


def build_user_prompt(text: str, source: Language, target: Language) -> str:
    """User message carrying the text; the source is omitted for auto-detect."""
    if source.is_auto:
        return f"Translate the following text to {target.label}:\n\n{text}"
    return f"Translate the following text from {source.label} to {target.label}:\n\n{text}"
