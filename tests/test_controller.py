"""
Async tests for SessionController.
Covers the request lifecycle, busy handling and stale response discarding.
"""

from __future__ import annotations

import asyncio
import logging

import pytest

from translate_text_ai.config import Settings, TranslationConfig
from translate_text_ai.exceptions import BusyError, TranslationFailed
from translate_text_ai.languages import Language
from translate_text_ai.translation.session import (
    SessionController,
    SessionStatus,
    TranslationSession,
)


@pytest.fixture
def controller(fake_translator):
    return SessionController(fake_translator)


class TestTranslate:
    @pytest.mark.asyncio
    async def test_bonjour_scenario(self, controller, fake_translator):
        fake_translator.result = "Hello world"
        controller.set_source_language(Language.AUTO_DETECT)
        controller.set_target_language(Language.ENGLISH)
        controller.set_input_text("Bonjour le monde")

        session = await controller.translate()

        assert fake_translator.calls == [
            ("Bonjour le monde", Language.AUTO_DETECT, Language.ENGLISH)
        ]
        assert session.status is SessionStatus.SUCCEEDED
        assert session.output_text == "Hello world"
        assert session.error_message is None
        assert controller.session is session

    @pytest.mark.asyncio
    async def test_in_flight_while_call_outstanding(self, controller, fake_translator):
        fake_translator.observer = lambda: controller.session.status
        controller.set_input_text("hello")

        session = await controller.translate()

        assert fake_translator.status_during_call is SessionStatus.IN_FLIGHT
        assert session.status is SessionStatus.SUCCEEDED

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["", "   ", "\n\t "])
    async def test_blank_input_is_noop(self, controller, fake_translator, text):
        controller.set_input_text(text)
        before = controller.session

        session = await controller.translate()

        assert fake_translator.calls == []
        assert session is before
        assert session.status is SessionStatus.IDLE
        assert not controller.can_translate

    @pytest.mark.asyncio
    async def test_blank_input_keeps_previous_status(self, controller, fake_translator):
        controller.set_input_text("hello")
        await controller.translate()
        controller.set_input_text("  ")

        session = await controller.translate()

        assert len(fake_translator.calls) == 1
        assert session.status is SessionStatus.SUCCEEDED

    @pytest.mark.asyncio
    async def test_two_rapid_calls_second_is_busy(self, controller, fake_translator):
        controller.set_input_text("hello")

        results = await asyncio.gather(
            controller.translate(),
            controller.translate(),
            return_exceptions=True,
        )

        assert len(fake_translator.calls) == 1
        assert isinstance(results[0], TranslationSession)
        assert isinstance(results[1], BusyError)
        assert controller.session.status is SessionStatus.SUCCEEDED

    @pytest.mark.asyncio
    async def test_busy_while_in_flight(self, controller, fake_translator):
        fake_translator.gate = asyncio.Event()
        controller.set_input_text("hello")

        task = asyncio.create_task(controller.translate())
        await fake_translator.started.wait()

        assert controller.is_busy
        assert not controller.can_translate
        with pytest.raises(BusyError):
            await controller.translate()

        fake_translator.gate.set()
        await task
        assert not controller.is_busy


class TestFailure:
    @pytest.mark.asyncio
    async def test_translation_failed(self, controller, fake_translator):
        fake_translator.error = TranslationFailed(details={"error_type": "APITimeoutError"})
        controller.set_input_text("hello")

        session = await controller.translate()

        assert session.status is SessionStatus.FAILED
        assert session.error_message == TranslationFailed.USER_MESSAGE
        assert controller.can_retry

    @pytest.mark.asyncio
    async def test_cause_not_exposed(self, controller, fake_translator):
        fake_translator.error = ConnectionError("tcp reset by 10.0.0.7")
        controller.set_input_text("hello")

        session = await controller.translate()

        assert session.status is SessionStatus.FAILED
        assert "10.0.0.7" not in session.error_message

    @pytest.mark.asyncio
    async def test_retry_after_failure(self, controller, fake_translator):
        fake_translator.error = TranslationFailed()
        controller.set_input_text("hello")
        await controller.translate()

        fake_translator.error = None
        fake_translator.result = "bonjour"
        session = await controller.retry()

        assert len(fake_translator.calls) == 2
        assert session.status is SessionStatus.SUCCEEDED
        assert session.output_text == "bonjour"
        assert session.error_message is None

    @pytest.mark.asyncio
    async def test_retry_without_failure_is_noop(self, controller, fake_translator):
        controller.set_input_text("hello")
        session = await controller.retry()
        assert fake_translator.calls == []
        assert session.status is SessionStatus.IDLE

    @pytest.mark.asyncio
    async def test_cancelled_request_returns_to_idle(self, controller, fake_translator):
        fake_translator.gate = asyncio.Event()
        controller.set_input_text("hello")

        task = asyncio.create_task(controller.translate())
        await fake_translator.started.wait()
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert controller.session.status is SessionStatus.IDLE
        assert controller.can_translate


class TestSupersededResponses:
    @pytest.mark.asyncio
    async def test_response_after_clear_is_discarded(self, controller, fake_translator):
        fake_translator.gate = asyncio.Event()
        fake_translator.result = "late"
        controller.set_input_text("hello")

        task = asyncio.create_task(controller.translate())
        await fake_translator.started.wait()
        cleared = controller.clear()
        fake_translator.gate.set()
        session = await task

        assert session == cleared
        assert controller.session.output_text == ""
        assert controller.session.status is SessionStatus.IDLE

    @pytest.mark.asyncio
    async def test_response_after_swap_is_discarded(self, controller, fake_translator):
        fake_translator.gate = asyncio.Event()
        fake_translator.result = "late"
        controller.set_source_language(Language.FRENCH)
        controller.set_input_text("Bonjour")

        task = asyncio.create_task(controller.translate())
        await fake_translator.started.wait()
        swapped = controller.swap_languages()
        fake_translator.gate.set()
        await task

        assert controller.session == swapped
        assert controller.session.input_text == ""
        assert controller.session.output_text == "Bonjour"

    @pytest.mark.asyncio
    async def test_failure_after_clear_is_discarded(self, controller, fake_translator):
        fake_translator.gate = asyncio.Event()
        fake_translator.error = TranslationFailed()
        controller.set_input_text("hello")

        task = asyncio.create_task(controller.translate())
        await fake_translator.started.wait()
        controller.clear()
        fake_translator.gate.set()
        await task

        assert controller.session.status is SessionStatus.IDLE
        assert controller.session.error_message is None

    @pytest.mark.asyncio
    async def test_fresh_request_wins_over_stale_one(self, controller, fake_translator):
        first_gate = asyncio.Event()
        fake_translator.gate = first_gate
        controller.set_input_text("first")

        stale = asyncio.create_task(controller.translate())
        await fake_translator.started.wait()
        controller.clear()
        controller.set_input_text("second")

        fake_translator.gate = None
        fake_translator.result = "fresh"
        await controller.translate()

        fake_translator.result = "stale"
        first_gate.set()
        await stale

        assert len(fake_translator.calls) == 2
        assert controller.session.input_text == "second"
        assert controller.session.output_text == "fresh"
        assert controller.session.status is SessionStatus.SUCCEEDED


class TestFieldUpdates:
    def test_set_target_auto_detect_is_ignored(self, controller):
        before = controller.session
        session = controller.set_target_language(Language.AUTO_DETECT)
        assert session is before

    def test_set_languages_by_name(self, controller):
        controller.set_source_language("fr")
        session = controller.set_target_language("Japanese")
        assert session.source_language is Language.FRENCH
        assert session.target_language is Language.JAPANESE

    def test_unknown_language_is_ignored(self, controller):
        before = controller.session
        assert controller.set_source_language("klingon") is before

    @pytest.mark.asyncio
    async def test_clear_output_on_edit_policy(self, fake_translator):
        controller = SessionController(fake_translator, clear_output_on_edit=True)
        controller.set_input_text("hello")
        await controller.translate()

        session = controller.set_input_text("goodbye")

        assert session.output_text == ""
        assert session.status is SessionStatus.IDLE

    def test_from_settings_uses_defaults(self, fake_translator):
        settings = Settings(
            translation=TranslationConfig(
                default_source_language=Language.GERMAN,
                default_target_language=Language.FRENCH,
                clear_output_on_edit=True,
            )
        )
        controller = SessionController.from_settings(settings, fake_translator)
        assert controller.session.source_language is Language.GERMAN
        assert controller.session.target_language is Language.FRENCH


class TestClipboard:
    def test_paste_sets_input(self, controller, clipboard):
        clipboard.text = "from clipboard"
        session = controller.paste_from_clipboard(clipboard)
        assert session.input_text == "from clipboard"

    def test_paste_failure_is_logged_not_raised(self, controller, clipboard, caplog):
        clipboard.fail = True
        controller.set_input_text("keep me")
        before = controller.session

        with caplog.at_level(logging.WARNING, logger="translate_text_ai"):
            session = controller.paste_from_clipboard(clipboard)

        assert session is before
        assert "Failed to read clipboard" in caplog.text

    @pytest.mark.asyncio
    async def test_copy_output(self, controller, clipboard, fake_translator):
        fake_translator.result = "Hola"
        controller.set_input_text("Hello")
        await controller.translate()

        assert controller.copy_output(clipboard)
        assert clipboard.text == "Hola"

    def test_copy_empty_output_is_skipped(self, controller, clipboard):
        clipboard.text = "untouched"
        assert not controller.copy_output(clipboard)
        assert clipboard.text == "untouched"

    def test_copy_failure_is_swallowed(self, controller, clipboard):
        controller.set_input_text("hello")
        clipboard.fail = True
        assert not controller.copy_input(clipboard)
