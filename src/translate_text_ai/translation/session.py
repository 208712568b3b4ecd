"""
Translation session state and its controller.

TranslationSession is an immutable value; every operation returns a new
one. SessionController holds the current value, owns the request lifecycle
and discards responses that belong to a superseded generation.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING

from translate_text_ai.exceptions import (
    BusyError,
    ClipboardError,
    TranslationFailed,
    ValidationError,
)
from translate_text_ai.languages import (
    DEFAULT_TARGET_LANGUAGE,
    Language,
    ensure_target_language,
    parse_language,
)

if TYPE_CHECKING:
    from translate_text_ai.clipboard import Clipboard
    from translate_text_ai.config import Settings
    from translate_text_ai.translation.translator import TranslateFunction

logger = logging.getLogger(__name__)


class SessionStatus(str, Enum):
    """Lifecycle of the current translation request."""

    IDLE = "idle"
    IN_FLIGHT = "in_flight"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class TranslationSession:
    """Snapshot of the translation state for the current document."""

    source_language: Language = Language.AUTO_DETECT
    target_language: Language = DEFAULT_TARGET_LANGUAGE
    input_text: str = ""
    output_text: str = ""
    status: SessionStatus = SessionStatus.IDLE
    error_message: str | None = None
    # Bumped by clear and swap; responses from older generations are ignored
    generation: int = 0

    def __post_init__(self) -> None:
        ensure_target_language(self.target_language)
        if (self.status is SessionStatus.FAILED) != (self.error_message is not None):
            raise ValueError("error_message must be set exactly when status is FAILED")

    @property
    def has_input(self) -> bool:
        """True when the input contains more than whitespace."""
        return bool(self.input_text.strip())

    @property
    def has_output(self) -> bool:
        """True when the output contains more than whitespace."""
        return bool(self.output_text.strip())

    @property
    def is_in_flight(self) -> bool:
        return self.status is SessionStatus.IN_FLIGHT

    def begin_translation(self) -> TranslationSession:
        return replace(self, status=SessionStatus.IN_FLIGHT, error_message=None)

    def complete(self, output_text: str) -> TranslationSession:
        return replace(
            self,
            output_text=output_text,
            status=SessionStatus.SUCCEEDED,
            error_message=None,
        )

    def fail(self, message: str) -> TranslationSession:
        return replace(self, status=SessionStatus.FAILED, error_message=message)

    def swap_languages(self) -> TranslationSession:
        """
        Exchange languages and texts.

        From AUTO_DETECT the old target becomes the source and the target
        falls back to the default language. An in-flight request is
        superseded, so the status returns to IDLE.
        """
        if self.source_language.is_auto:
            source, target = self.target_language, DEFAULT_TARGET_LANGUAGE
        else:
            source, target = self.target_language, self.source_language

        status = SessionStatus.IDLE if self.is_in_flight else self.status
        return replace(
            self,
            source_language=source,
            target_language=target,
            input_text=self.output_text,
            output_text=self.input_text,
            status=status,
            generation=self.generation + 1,
        )

    def with_source_language(self, language: Language) -> TranslationSession:
        return replace(self, source_language=language)

    def with_target_language(self, language: Language) -> TranslationSession:
        """Raises ValidationError for AUTO_DETECT."""
        return replace(self, target_language=ensure_target_language(language))

    def with_input_text(self, text: str, *, clear_stale_output: bool = False) -> TranslationSession:
        """
        Replace the input text.

        With clear_stale_output, a material edit (the trimmed text changes)
        after a successful translation also drops the old output.
        """
        if (
            clear_stale_output
            and self.status is SessionStatus.SUCCEEDED
            and text.strip() != self.input_text.strip()
        ):
            return replace(self, input_text=text, output_text="", status=SessionStatus.IDLE)
        return replace(self, input_text=text)

    def cleared(self) -> TranslationSession:
        """Empty both texts and the error; languages are kept."""
        return replace(
            self,
            input_text="",
            output_text="",
            status=SessionStatus.IDLE,
            error_message=None,
            generation=self.generation + 1,
        )


class SessionController:
    """
    Drives a TranslationSession through its request lifecycle.

    Only one translation may be in flight; a second request raises BusyError
    instead of being queued. There is no real cancellation of the outbound
    call: clear and swap bump the generation, and a response that comes back
    for an older generation is dropped.
    """

    def __init__(
        self,
        translate_fn: TranslateFunction,
        session: TranslationSession | None = None,
        *,
        clear_output_on_edit: bool = False,
    ):
        """
        Initialize the controller.

        Args:
            translate_fn: Async function (text, source, target) -> translated text.
            session: Initial session (defaults to AUTO_DETECT -> English).
            clear_output_on_edit: Drop a previous result when the input is edited.
        """
        self._translate_fn = translate_fn
        self._session = session or TranslationSession()
        self._clear_output_on_edit = clear_output_on_edit

    @classmethod
    def from_settings(cls, settings: Settings, translate_fn: TranslateFunction) -> SessionController:
        """Create a controller using the configured default languages."""
        session = TranslationSession(
            source_language=settings.translation.default_source_language,
            target_language=settings.translation.default_target_language,
        )
        return cls(
            translate_fn,
            session,
            clear_output_on_edit=settings.translation.clear_output_on_edit,
        )

    @property
    def session(self) -> TranslationSession:
        """Current session value."""
        return self._session

    @property
    def is_busy(self) -> bool:
        return self._session.is_in_flight

    @property
    def can_translate(self) -> bool:
        """Whether the translate action should be enabled."""
        return self._session.has_input and not self._session.is_in_flight

    @property
    def can_retry(self) -> bool:
        return self._session.status is SessionStatus.FAILED and self._session.has_input

    @property
    def can_export(self) -> bool:
        return self._session.has_output

    async def translate(self) -> TranslationSession:
        """
        Translate the current input.

        Blank input is a no-op and never reaches the translation function.
        A failure of the translation function leaves the session FAILED with
        a user-facing message; the cause is only logged.

        Raises:
            BusyError: If a translation is already in flight.
        """
        session = self._session
        if not session.has_input:
            logger.debug("Ignoring translate request for empty input")
            return session
        if session.is_in_flight:
            raise BusyError()

        # Marked in flight before the first await so a concurrent call sees it
        issued = session.begin_translation()
        self._session = issued
        generation = issued.generation
        logger.info(
            "Translating %d chars (%s -> %s)",
            len(issued.input_text),
            issued.source_language.value,
            issued.target_language.value,
        )

        try:
            result = await self._translate_fn(
                issued.input_text,
                issued.source_language,
                issued.target_language,
            )
        except asyncio.CancelledError:
            if not self._is_superseded(generation):
                self._session = replace(self._session, status=SessionStatus.IDLE)
            raise
        except Exception as e:
            if self._is_superseded(generation):
                logger.info("Discarding failure of superseded request (generation %d)", generation)
                return self._session
            if isinstance(e, TranslationFailed):
                logger.warning("Translation failed: %s", e.details or e)
            else:
                logger.warning("Translation failed", exc_info=True)
            self._session = self._session.fail(TranslationFailed.USER_MESSAGE)
            return self._session

        if self._is_superseded(generation):
            logger.info("Discarding late response of superseded request (generation %d)", generation)
            return self._session

        self._session = self._session.complete(result)
        return self._session

    async def retry(self) -> TranslationSession:
        """Re-issue the translation after a failure."""
        if not self.can_retry:
            return self._session
        return await self.translate()

    def _is_superseded(self, generation: int) -> bool:
        return self._session.generation != generation

    def swap_languages(self) -> TranslationSession:
        self._session = self._session.swap_languages()
        return self._session

    def clear(self) -> TranslationSession:
        self._session = self._session.cleared()
        return self._session

    def set_input_text(self, text: str) -> TranslationSession:
        self._session = self._session.with_input_text(
            text, clear_stale_output=self._clear_output_on_edit
        )
        return self._session

    def set_source_language(self, language: Language | str) -> TranslationSession:
        """Select the source language. Unknown values are ignored."""
        try:
            self._session = self._session.with_source_language(parse_language(language))
        except ValidationError as e:
            logger.debug("Ignoring source language change: %s", e)
        return self._session

    def set_target_language(self, language: Language | str) -> TranslationSession:
        """Select the target language. AUTO_DETECT and unknown values are ignored."""
        try:
            self._session = self._session.with_target_language(parse_language(language))
        except ValidationError as e:
            logger.debug("Ignoring target language change: %s", e)
        return self._session

    def paste_from_clipboard(self, clipboard: Clipboard) -> TranslationSession:
        """Replace the input with the clipboard text. Read failures are only logged."""
        try:
            text = clipboard.read_text()
        except ClipboardError as e:
            logger.warning("Failed to read clipboard contents: %s", e)
            return self._session
        return self.set_input_text(text)

    def copy_input(self, clipboard: Clipboard) -> bool:
        return _write_clipboard(clipboard, self._session.input_text)

    def copy_output(self, clipboard: Clipboard) -> bool:
        return _write_clipboard(clipboard, self._session.output_text)


def _write_clipboard(clipboard: Clipboard, text: str) -> bool:
    """Fire-and-forget clipboard write; returns whether it succeeded."""
    if not text:
        return False
    try:
        clipboard.write_text(text)
    except ClipboardError as e:
        logger.warning("Failed to write clipboard contents: %s", e)
        return False
    return True
