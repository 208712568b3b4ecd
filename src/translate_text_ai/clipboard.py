"""
System clipboard access.

Uses the platform's command line clipboard tools, so no GUI toolkit is
needed. Every failure is raised as ClipboardError.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import sys
from abc import ABC, abstractmethod

from translate_text_ai.exceptions import ClipboardError

logger = logging.getLogger(__name__)

# (copy command, paste command) candidates, in preference order
_LINUX_TOOLS: list[tuple[list[str], list[str]]] = [
    (["wl-copy"], ["wl-paste", "--no-newline"]),
    (["xclip", "-selection", "clipboard"], ["xclip", "-selection", "clipboard", "-o"]),
    (["xsel", "--clipboard", "--input"], ["xsel", "--clipboard", "--output"]),
]
_MAC_TOOLS = [(["pbcopy"], ["pbpaste"])]
_WINDOWS_TOOLS = [
    (["clip"], ["powershell", "-NoProfile", "-Command", "Get-Clipboard -Raw"]),
]


class Clipboard(ABC):
    """Clipboard collaborator used by the session controller."""

    @abstractmethod
    def read_text(self) -> str:
        """Return the clipboard text. Raises ClipboardError."""
        ...

    @abstractmethod
    def write_text(self, text: str) -> None:
        """Replace the clipboard text. Raises ClipboardError."""
        ...


class SystemClipboard(Clipboard):
    """Clipboard backed by pbcopy/pbpaste, wl-clipboard, xclip, xsel or clip.exe."""

    def __init__(self, timeout: float = 5.0) -> None:
        self._timeout = timeout
        self._commands: tuple[list[str], list[str]] | None = None

    def _resolve_commands(self) -> tuple[list[str], list[str]]:
        if self._commands is not None:
            return self._commands

        if sys.platform == "darwin":
            candidates = _MAC_TOOLS
        elif sys.platform == "win32":
            candidates = _WINDOWS_TOOLS
        else:
            candidates = _LINUX_TOOLS

        for copy_cmd, paste_cmd in candidates:
            if shutil.which(copy_cmd[0]) and shutil.which(paste_cmd[0]):
                self._commands = (copy_cmd, paste_cmd)
                logger.debug("Using clipboard tools: %s / %s", copy_cmd[0], paste_cmd[0])
                return self._commands

        raise ClipboardError(
            f"No clipboard tool found for platform {sys.platform}",
            code="clipboard_unavailable",
        )

    def _run(self, command: list[str], input_text: str | None = None) -> str:
        try:
            completed = subprocess.run(
                command,
                input=input_text,
                capture_output=True,
                text=True,
                encoding="utf-8",
                timeout=self._timeout,
                check=True,
            )
        except (OSError, subprocess.SubprocessError) as e:
            raise ClipboardError(
                f"Clipboard command {command[0]} failed: {e}",
                code="clipboard_failed",
            ) from e
        return completed.stdout

    def read_text(self) -> str:
        _copy_cmd, paste_cmd = self._resolve_commands()
        text = self._run(paste_cmd)
        # PowerShell appends a trailing newline
        if sys.platform == "win32" and text.endswith("\r\n"):
            text = text[:-2]
        return text

    def write_text(self, text: str) -> None:
        copy_cmd, _paste_cmd = self._resolve_commands()
        self._run(copy_cmd, input_text=text)
