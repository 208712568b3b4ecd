"""Tests for language identifiers."""

import pytest

from translate_text_ai.exceptions import ValidationError
from translate_text_ai.languages import (
    Language,
    ensure_target_language,
    parse_language,
    source_languages,
    target_languages,
)


@pytest.mark.parametrize(
    "value,expected",
    [
        ("en", Language.ENGLISH),
        ("EN", Language.ENGLISH),
        ("english", Language.ENGLISH),
        ("zh-hans", Language.CHINESE_SIMPLIFIED),
        ("Chinese (Traditional)", Language.CHINESE_TRADITIONAL),
        ("auto", Language.AUTO_DETECT),
        (" ja ", Language.JAPANESE),
        (Language.KOREAN, Language.KOREAN),
    ],
)
def test_parse_language(value, expected):
    assert parse_language(value) is expected


def test_parse_unknown_language():
    with pytest.raises(ValidationError) as exc_info:
        parse_language("klingon")
    assert exc_info.value.code == "unknown_language"


def test_auto_detect_is_source_only():
    assert Language.AUTO_DETECT in source_languages()
    assert Language.AUTO_DETECT not in target_languages()
    assert len(target_languages()) == len(source_languages()) - 1


def test_ensure_target_language():
    assert ensure_target_language(Language.FRENCH) is Language.FRENCH
    with pytest.raises(ValidationError) as exc_info:
        ensure_target_language(Language.AUTO_DETECT)
    assert exc_info.value.code == "invalid_target"


def test_every_language_has_a_label():
    for lang in Language:
        assert lang.label
