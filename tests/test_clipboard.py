"""Tests for the subprocess-backed clipboard."""

from __future__ import annotations

import subprocess
from unittest.mock import patch

import pytest

from translate_text_ai.clipboard import SystemClipboard
from translate_text_ai.exceptions import ClipboardError


@pytest.fixture
def linux(monkeypatch):
    monkeypatch.setattr("translate_text_ai.clipboard.sys.platform", "linux")


def test_no_tool_available(linux):
    with patch("translate_text_ai.clipboard.shutil.which", return_value=None):
        with pytest.raises(ClipboardError) as exc_info:
            SystemClipboard().read_text()
    assert exc_info.value.code == "clipboard_unavailable"


def test_prefers_first_available_tool(linux):
    available = {"xclip"}
    completed = subprocess.CompletedProcess(args=[], returncode=0, stdout="copied text")

    with patch(
        "translate_text_ai.clipboard.shutil.which",
        side_effect=lambda name: f"/usr/bin/{name}" if name in available else None,
    ), patch("translate_text_ai.clipboard.subprocess.run", return_value=completed) as run:
        clipboard = SystemClipboard()
        assert clipboard.read_text() == "copied text"
        clipboard.write_text("hello")

    paste_call, copy_call = run.call_args_list
    assert paste_call.args[0] == ["xclip", "-selection", "clipboard", "-o"]
    assert copy_call.args[0] == ["xclip", "-selection", "clipboard"]
    assert copy_call.kwargs["input"] == "hello"


def test_command_failure_raises(linux):
    error = subprocess.CalledProcessError(1, ["wl-paste"])
    with patch("translate_text_ai.clipboard.shutil.which", return_value="/usr/bin/tool"), patch(
        "translate_text_ai.clipboard.subprocess.run", side_effect=error
    ):
        with pytest.raises(ClipboardError) as exc_info:
            SystemClipboard().read_text()
    assert exc_info.value.code == "clipboard_failed"
    assert exc_info.value.__cause__ is error
