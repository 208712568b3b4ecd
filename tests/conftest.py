"""Shared fixtures for translate-text-ai tests."""

from __future__ import annotations

import asyncio
import logging

import pytest

from translate_text_ai.clipboard import Clipboard
from translate_text_ai.exceptions import ClipboardError
from translate_text_ai.languages import Language


class FakeTranslator:
    """Stand-in for the remote translation function.

    Records every call. When `gate` is set the call blocks until the gate is
    released, which lets tests interleave clear/swap with an in-flight request.
    """

    def __init__(self, result: str = "translated", error: Exception | None = None):
        self.result = result
        self.error = error
        self.calls: list[tuple[str, Language, Language]] = []
        self.gate: asyncio.Event | None = None
        self.started = asyncio.Event()
        self.status_during_call = None
        self.observer = None

    async def __call__(self, text: str, source: Language, target: Language) -> str:
        gate = self.gate
        self.calls.append((text, source, target))
        if self.observer is not None:
            self.status_during_call = self.observer()
        self.started.set()
        # Always suspend once, like a real network call
        await asyncio.sleep(0)
        if gate is not None:
            await gate.wait()
        if self.error is not None:
            raise self.error
        return self.result


class MemoryClipboard(Clipboard):
    """In-memory clipboard; `fail=True` simulates denied access."""

    def __init__(self, text: str = "", fail: bool = False):
        self.text = text
        self.fail = fail

    def read_text(self) -> str:
        if self.fail:
            raise ClipboardError("Permission denied")
        return self.text

    def write_text(self, text: str) -> None:
        if self.fail:
            raise ClipboardError("Permission denied")
        self.text = text


@pytest.fixture
def fake_translator():
    return FakeTranslator()


@pytest.fixture
def clipboard():
    return MemoryClipboard()


@pytest.fixture(autouse=True)
def no_api_keys(monkeypatch):
    """Keep real credentials out of the tests."""
    monkeypatch.delenv("OPENROUTER_API_KEY", raising=False)
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo setup_logging() so caplog keeps working across tests."""
    yield
    logger = logging.getLogger("translate_text_ai")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
